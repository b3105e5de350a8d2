"""The version-control interface the release engine reads history through.

`nk.git.Repository` implements it on top of the git CLI; tests use an
in-memory fake. Every call is blocking and may fail with `VcsError`, which
is reported to the user as-is and never retried.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from nk.core.result import Result
from nk.release.model import Commit


@dataclass(frozen=True, slots=True)
class VcsError:
    """Error from a version-control operation.

    Attributes:
        command: The operation that failed (e.g. "log", "tag").
        message: Diagnostic text, shown to the user verbatim.
        returncode: Underlying process exit code, when there was one.
        hint: How to recover, when a failure left the repository half-updated.
    """

    command: str
    message: str
    returncode: int = 1
    hint: str | None = None


class VcsReader(Protocol):
    def list_tags(self) -> Result[tuple[tuple[str, str], ...], VcsError]:
        """All tags as `(name, commit_hash)`, annotated tags peeled to their commit."""
        ...

    def list_commits(
        self, range_start: str | None, range_end: str
    ) -> Result[tuple[Commit, ...], VcsError]:
        """Commits reachable from `range_end` but not from `range_start`, newest first."""
        ...

    def remote_url(self, remote: str = "origin") -> Result[str | None, VcsError]:
        """URL of `remote`, or None if the remote is not configured."""
        ...

    def head(self) -> Result[str, VcsError]:
        """Commit hash of HEAD. Fails when the repository has no commits."""
        ...

    def resolve_ref(self, ref: str) -> Result[str, VcsError]:
        """Commit hash a tag, branch or revision expression points at."""
        ...

    def commit(self, paths: Sequence[Path], message: str) -> Result[str, VcsError]:
        """Stage `paths` and commit them. Returns the new commit hash."""
        ...

    def create_tag(self, name: str, commit_hash: str, message: str) -> Result[None, VcsError]: ...

    def push_tag(self, name: str, remote: str = "origin") -> Result[None, VcsError]: ...
