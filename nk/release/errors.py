"""Error types for the release engine.

Each error is a frozen dataclass returned inside `Err`. Commands turn them
into messages and exit codes in one place (`nk.output.errors`).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class InvalidVersionSpec:
    """An explicit version override did not parse as SemVer."""

    spec: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class AmbiguousBaseVersion:
    """A relative bump was requested but there is no previous version."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class DuplicateVersionError:
    """The version is already present in the changelog or as a tag."""

    version: str
    message: str
    hint: str | None = "choose a different version or edit the changelog manually"


@dataclass(frozen=True, slots=True)
class ChangelogIOError:
    path: Path
    message: str


type VersionError = InvalidVersionSpec | AmbiguousBaseVersion


@dataclass(frozen=True, slots=True)
class ManifestError:
    """The version file could not be used to record the new version."""

    path: Path
    message: str
