"""Error presentation.

Maps every error a command can end with to a console message and an exit
code, in one place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nk.core.config import ConfigError
from nk.core.errors import ErrorCode
from nk.output.console import Style
from nk.release.errors import (
    AmbiguousBaseVersion,
    ChangelogIOError,
    DuplicateVersionError,
    InvalidVersionSpec,
    ManifestError,
)
from nk.release.vcs import VcsError

if TYPE_CHECKING:
    from nk.output.console import ConsoleProtocol
    from nk.release.service import ReleaseError

__all__ = ["error_exit_code", "print_error"]


def print_error(error: ReleaseError | ConfigError, console: ConsoleProtocol) -> None:
    match error:
        case (
            VcsError(message=message, hint=hint)
            | InvalidVersionSpec(message=message, hint=hint)
            | AmbiguousBaseVersion(message=message, hint=hint)
            | DuplicateVersionError(message=message, hint=hint)
        ):
            console.error(message)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case ChangelogIOError(message=message, path=path) | ManifestError(message=message, path=path):
            console.error(f"{message} ({path})")
        case ConfigError(message=message):
            console.error(message)


def error_exit_code(error: ReleaseError | ConfigError) -> int:
    match error:
        case VcsError() | ConfigError():
            return int(ErrorCode.ENV_ERROR)
        case InvalidVersionSpec() | AmbiguousBaseVersion() | DuplicateVersionError():
            return int(ErrorCode.USER_ERROR)
        case ChangelogIOError() | ManifestError():
            return int(ErrorCode.IO_ERROR)
