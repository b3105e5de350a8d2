"""Process exit codes.

Every command maps its failure to one of these values so that scripts
wrapping `nk` can tell a bad invocation apart from a broken repository.
The values are part of the CLI contract and never change.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    # invalid version or bump, no base version, duplicate release, bad flags
    USER_ERROR = 1
    # not a git repository, no commits, git failure, invalid nk.toml
    ENV_ERROR = 2
    # changelog, notes or payload file could not be read or written
    IO_ERROR = 5
