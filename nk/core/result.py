"""Result type for explicit error handling.

Fallible operations return `Ok(value)` or `Err(error)` rather than raising,
so callers decide at the boundary how a failure is reported:

    match next_version(previous, "minor"):
        case Ok(version):
            console.info(f"next: {version}")
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Never


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result."""

    value: T

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the contained value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result."""

    error: E

    def map(self, f: Callable[[Never], object]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
