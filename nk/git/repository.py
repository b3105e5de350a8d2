"""Git repository backed by the git command line.

All operations return Result types. Output is requested in machine-readable
formats (NUL-free, unit/record separators) so that commit messages with
arbitrary text parse reliably.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from nk.core.result import Err, Ok, Result
from nk.platform.process import ProcessError
from nk.platform.process import run as run_process
from nk.release.model import Commit
from nk.release.vcs import VcsError

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = "%H%x1f%an%x1f%ae%x1f%at%x1f%s%x1f%b%x1e"
_TAG_FORMAT = "%(refname:strip=2)%09%(objectname)%09%(*objectname)"

__all__ = ["Repository"]


class Repository:
    """A git working tree.

    Attributes:
        path: Directory inside the working tree; git resolves the root itself.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def root(self) -> Result[Path, VcsError]:
        """Top-level directory of the working tree."""
        result = self._run(["rev-parse", "--show-toplevel"])
        match result:
            case Err(e):
                return Err(self._not_a_repo(e))
            case Ok(stdout):
                return Ok(Path(stdout.strip()))

    def head(self) -> Result[str, VcsError]:
        check = self.root()
        if isinstance(check, Err):
            return check

        result = self._run(["rev-parse", "--verify", "--quiet", "HEAD^{commit}"])
        match result:
            case Err(e):
                return Err(
                    VcsError(
                        command="rev-parse HEAD",
                        message="repository has no commits yet",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout.strip())

    def resolve_ref(self, ref: str) -> Result[str, VcsError]:
        result = self._run(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"])
        match result:
            case Err(e):
                return Err(
                    VcsError(
                        command="rev-parse",
                        message=f"unknown revision: {ref}",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout.strip())

    def list_tags(self) -> Result[tuple[tuple[str, str], ...], VcsError]:
        result = self._run(["for-each-ref", f"--format={_TAG_FORMAT}", "refs/tags"])
        match result:
            case Err(e):
                return Err(self._error("for-each-ref", e))
            case Ok(stdout):
                return Ok(self._parse_tags(stdout))

    def list_commits(
        self, range_start: str | None, range_end: str
    ) -> Result[tuple[Commit, ...], VcsError]:
        rev = f"{range_start}..{range_end}" if range_start else range_end
        result = self._run(["log", f"--format={_LOG_FORMAT}", rev, "--"])
        match result:
            case Err(e):
                return Err(self._error("log", e))
            case Ok(stdout):
                return Ok(self._parse_log(stdout))

    def remote_url(self, remote: str = "origin") -> Result[str | None, VcsError]:
        check = self.root()
        if isinstance(check, Err):
            return check

        result = self._run(["remote", "get-url", remote])
        match result:
            case Err(e):
                if "no such remote" in e.stderr.lower() or e.returncode == 2:
                    return Ok(None)
                return Err(self._error("remote get-url", e))
            case Ok(stdout):
                return Ok(stdout.strip() or None)

    def commit(self, paths: Sequence[Path], message: str) -> Result[str, VcsError]:
        specs = [str(p) for p in paths]
        added = self._run(["add", "--", *specs])
        if isinstance(added, Err):
            return Err(self._error("add", added.error))

        committed = self._run(["commit", "--quiet", "-m", message, "--", *specs])
        if isinstance(committed, Err):
            return Err(self._error("commit", committed.error))
        return self.head()

    def create_tag(self, name: str, commit_hash: str, message: str) -> Result[None, VcsError]:
        result = self._run(["tag", "-a", name, "-m", message, commit_hash])
        match result:
            case Err(e):
                return Err(self._error("tag", e))
            case Ok(_):
                return Ok(None)

    def push_tag(self, name: str, remote: str = "origin") -> Result[None, VcsError]:
        result = self._run(["push", remote, f"refs/tags/{name}"])
        match result:
            case Err(e):
                return Err(self._error("push", e))
            case Ok(_):
                return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = _GIT_NETWORK_TIMEOUT_SECONDS if command in {"push", "fetch"} else _GIT_TIMEOUT_SECONDS
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)

    def _error(self, command: str, e: ProcessError) -> VcsError:
        message = e.stderr.strip() or e.stdout.strip() or f"git {command} failed"
        return VcsError(command=command, message=message, returncode=e.returncode)

    def _not_a_repo(self, e: ProcessError) -> VcsError:
        detail = e.stderr.strip()
        message = f"not a git repository: {self.path}"
        if e.returncode == -1 and detail:
            message = detail
        return VcsError(command="rev-parse", message=message, returncode=e.returncode)

    def _parse_tags(self, output: str) -> tuple[tuple[str, str], ...]:
        """Parse for-each-ref output: name, object, peeled object."""
        tags: list[tuple[str, str]] = []
        for line in output.splitlines():
            if not line.strip():
                continue
            parts = line.split("\t")
            if len(parts) < 2:
                continue
            name, obj = parts[0], parts[1]
            peeled = parts[2] if len(parts) > 2 else ""
            # Annotated tags point at a tag object; use the commit it peels to.
            tags.append((name, peeled or obj))
        return tuple(tags)

    def _parse_log(self, output: str) -> tuple[Commit, ...]:
        commits: list[Commit] = []
        for record in output.split(_RECORD_SEP):
            record = record.strip("\n")
            if not record:
                continue
            fields = record.split(_FIELD_SEP)
            if len(fields) < 6:
                continue
            sha, name, email, timestamp, subject, body = fields[:6]
            commits.append(
                Commit(
                    hash=sha.strip(),
                    author_name=name,
                    author_email=email,
                    timestamp=int(timestamp) if timestamp.strip().isdigit() else 0,
                    subject=subject,
                    body=body.strip("\n"),
                )
            )
        return tuple(commits)
