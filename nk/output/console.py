"""Console output abstraction.

Services never print directly and never reach for a module-level logger.
They receive a `ConsoleProtocol` value from the command that called them.
Tests pass a `MockConsole` and assert on the recorded lines.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DEBUG = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for progress and diagnostic output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def debug(self, message: str) -> None:
        """Print a diagnostic line, shown only in verbose mode."""
        ...

    def header(self, message: str) -> None: ...

    def newline(self) -> None: ...


class RichConsole:
    """Console implementation using Rich.

    Progress goes to stderr so that `--output -` can stream a document to
    stdout without interleaving status lines.
    """

    def __init__(
        self,
        *,
        verbose: bool = False,
        timestamps: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        # Import Rich lazily
        from rich.console import Console

        self._console = Console(stderr=True, highlight=False)
        self._verbose = verbose
        self._timestamps = timestamps
        self._clock = clock
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DEBUG: "dim",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def _stamp(self, markup: str) -> str:
        if not self._timestamps:
            return markup
        return f"[dim]\\[{self._clock():%H:%M:%S}][/dim] {markup}"

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def success(self, message: str) -> None:
        self._line(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._line(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._line(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._line(Style.INFO, message)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._line(Style.DEBUG, message)

    def header(self, message: str) -> None:
        self._console.print(f"\n[blue bold]{_escape(message)}[/blue bold]")

    def newline(self) -> None:
        self._console.print()

    def _line(self, style: Style, message: str) -> None:
        label = _LABELS[style]
        markup = f"[{self._style_map[style]}]{label}[/] "
        self._console.print(self._stamp(markup) + _escape(message))


# Leading label of each one-line message kind, shared by both consoles.
_LABELS: dict[Style, str] = {
    Style.SUCCESS: "OK",
    Style.ERROR: "error:",
    Style.WARNING: "warning:",
    Style.INFO: "info:",
    Style.DEBUG: "debug:",
}


def _escape(message: str) -> str:
    from rich.markup import escape

    return escape(message)


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console that records output instead of printing it.

    Labelled messages are stored with their label (`"warning: ..."`), so
    tests can assert on the exact line a user would have seen. Debug lines
    are always recorded.
    """

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self._record(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._record(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._record(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._record(Style.INFO, message)

    def debug(self, message: str) -> None:
        self._record(Style.DEBUG, message)

    def header(self, message: str) -> None:
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self.print("")

    def _record(self, style: Style, message: str) -> None:
        self.outputs.append(OutputRecord(f"{_LABELS[style]} {message}", style))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return self.count(Style.ERROR) > 0

    def has_warning(self) -> bool:
        return self.count(Style.WARNING) > 0

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style is style)
