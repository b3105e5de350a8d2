"""In-memory VCS used by service and CLI tests."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from nk.core.result import Err, Ok, Result
from nk.release.model import Commit
from nk.release.vcs import VcsError

BASE_TS = 1_760_000_000  # 2025-10-09


def make_commit(
    n: int,
    subject: str,
    *,
    author: str = "Ada",
    email: str | None = None,
    body: str = "",
    ts: int | None = None,
) -> Commit:
    return Commit(
        hash=f"{n:040x}",
        author_name=author,
        author_email=email if email is not None else f"{author.lower()}@example.com",
        timestamp=ts if ts is not None else BASE_TS + n * 3600,
        subject=subject,
        body=body,
    )


def _no_tags() -> dict[str, str]:
    return {}


def _no_calls() -> list[tuple[str, ...]]:
    return []


@dataclass
class FakeVcs:
    """History is `commits` oldest first; tags map name -> commit hash."""

    commits: list[Commit]
    tags: dict[str, str] = field(default_factory=_no_tags)
    remote: str | None = "https://github.com/acme/widget.git"
    fail_on: str | None = None
    calls: list[tuple[str, ...]] = field(default_factory=_no_calls)

    def _fail(self, op: str) -> Err[VcsError] | None:
        if self.fail_on == op:
            return Err(VcsError(command=op, message=f"fatal: {op} exploded"))
        return None

    def _index(self, sha: str) -> int:
        for i, c in enumerate(self.commits):
            if c.hash == sha:
                return i
        raise KeyError(sha)

    def list_tags(self) -> Result[tuple[tuple[str, str], ...], VcsError]:
        self.calls.append(("list_tags",))
        return self._fail("list_tags") or Ok(tuple(self.tags.items()))

    def list_commits(self, range_start: str | None, range_end: str) -> Result[tuple[Commit, ...], VcsError]:
        self.calls.append(("list_commits", range_start or "", range_end))
        failed = self._fail("list_commits")
        if failed is not None:
            return failed
        end = self._index(range_end)
        start = self._index(range_start) + 1 if range_start else 0
        return Ok(tuple(reversed(self.commits[start : end + 1])))

    def remote_url(self, remote: str = "origin") -> Result[str | None, VcsError]:
        return self._fail("remote_url") or Ok(self.remote)

    def head(self) -> Result[str, VcsError]:
        failed = self._fail("head")
        if failed is not None:
            return failed
        if not self.commits:
            return Err(VcsError(command="rev-parse HEAD", message="repository has no commits yet"))
        return Ok(self.commits[-1].hash)

    def resolve_ref(self, ref: str) -> Result[str, VcsError]:
        if ref in self.tags:
            return Ok(self.tags[ref])
        for c in self.commits:
            if c.hash == ref or c.hash.startswith(ref):
                return Ok(c.hash)
        return Err(VcsError(command="rev-parse", message=f"unknown revision: {ref}"))

    def commit(self, paths: Sequence[Path], message: str) -> Result[str, VcsError]:
        self.calls.append(("commit", message, *(str(p) for p in paths)))
        failed = self._fail("commit")
        if failed is not None:
            return failed
        new = make_commit(len(self.commits) + 1000, message, author="nk")
        self.commits.append(new)
        return Ok(new.hash)

    def create_tag(self, name: str, commit_hash: str, message: str) -> Result[None, VcsError]:
        self.calls.append(("create_tag", name, commit_hash, message))
        failed = self._fail("create_tag")
        if failed is not None:
            return failed
        self.tags[name] = commit_hash
        return Ok(None)

    def push_tag(self, name: str, remote: str = "origin") -> Result[None, VcsError]:
        self.calls.append(("push_tag", name, remote))
        return self._fail("push_tag") or Ok(None)
