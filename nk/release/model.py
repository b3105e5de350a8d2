"""Immutable data flowing through the release engine.

Everything here is created fresh for one command invocation and thrown away
once the document is rendered or written.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import Enum, StrEnum

from nk.release.semver import SemVer


@dataclass(frozen=True, slots=True)
class Commit:
    """One git commit as read from the VCS.

    Attributes:
        hash: Full commit id.
        timestamp: Author time, seconds since the epoch.
        subject: First line of the message.
        body: Remainder of the message, possibly empty.
    """

    hash: str
    author_name: str
    author_email: str
    timestamp: int
    subject: str
    body: str = ""

    @property
    def short_hash(self) -> str:
        return self.hash[:7]

    @property
    def date(self) -> date:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).date()


class CommitType(StrEnum):
    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"
    REVERT = "revert"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class ParsedCommit:
    """A commit classified by the Conventional Commits grammar.

    `description` is the text after the colon, or the verbatim subject when
    the subject does not follow the grammar. `breaking_note` holds the text
    of a `BREAKING CHANGE:` footer, if the body had one.
    """

    type: CommitType
    scope: str | None
    breaking: bool
    description: str
    source: Commit
    breaking_note: str | None = None

    @property
    def is_conventional(self) -> bool:
        return self.type is not CommitType.UNKNOWN

    @property
    def text(self) -> str:
        """Description with the breaking-change note appended."""
        if self.breaking_note:
            return f"{self.description}: {self.breaking_note}"
        return self.description


class SectionKind(Enum):
    """Fixed, ordered set of document sections."""

    BREAKING = "Breaking Changes"
    FEATURES = "Features"
    FIXES = "Bug Fixes"
    DOCS = "Documentation"
    PERF = "Performance"
    REFACTORS = "Refactors"
    TESTS = "Tests"
    CHORES = "Chores & Other"

    @property
    def title(self) -> str:
        return self.value


SECTION_ORDER: tuple[SectionKind, ...] = tuple(SectionKind)


@dataclass(frozen=True, slots=True)
class Section:
    kind: SectionKind
    entries: tuple[ParsedCommit, ...]

    @property
    def title(self) -> str:
        return self.kind.title


@dataclass(frozen=True, slots=True)
class Contributor:
    """An author identity and how many commits it made in the range."""

    name: str
    email: str
    commit_count: int

    @property
    def identity(self) -> tuple[str, str]:
        return (self.name, self.email)


@dataclass(frozen=True, slots=True)
class Tag:
    """A git tag. `version` is None when the name does not parse as a version."""

    raw_name: str
    version: SemVer | None
    commit_hash: str


class HostKind(Enum):
    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"
    GENERIC = "generic"


@dataclass(frozen=True, slots=True)
class RemoteInfo:
    """A git remote normalised to its web location.

    Attributes:
        host: Hosting provider variant.
        web_url: https URL of the project, without a trailing `.git`.
        owner: Owner or group path (may contain `/` on GitLab).
        name: Repository name.
    """

    host: HostKind
    web_url: str
    owner: str
    name: str


@dataclass(frozen=True, slots=True)
class ReleaseNotesDocument:
    """Everything needed to render release notes for one version.

    The document holds its own immutable copies of commits and tags; it
    never refers back to VCS state.
    """

    version: SemVer
    tag_name: str
    previous_tag: Tag | None
    sections: tuple[Section, ...]
    contributors: tuple[Contributor, ...]
    commits: tuple[Commit, ...]
    compare_link: str | None
    generated_at: datetime
    remote: RemoteInfo | None = None

    @property
    def release_date(self) -> date:
        return self.generated_at.astimezone(UTC).date()

    @property
    def has_breaking_changes(self) -> bool:
        return any(s.kind is SectionKind.BREAKING for s in self.sections)


@dataclass(frozen=True, slots=True)
class ReleasePayload:
    """Body of a hosting-provider "create release" call. Never sent by nk itself."""

    tag_name: str
    title: str
    body: str
    draft: bool
    prerelease: bool

    def to_dict(self) -> dict[str, object]:
        return {
            "tag_name": self.tag_name,
            "title": self.title,
            "body": self.body,
            "draft": self.draft,
            "prerelease": self.prerelease,
        }
