"""Semantic versions and next-version resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Literal

from nk.core.result import Err, Ok, Result
from nk.release.errors import AmbiguousBaseVersion, InvalidVersionSpec, VersionError

BumpKind = Literal["patch", "minor", "major"]

BUMP_KINDS: tuple[BumpKind, ...] = ("patch", "minor", "major")

# semver.org 2.0.0 grammar, no prefix.
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


def _identifier_key(identifier: str) -> tuple[int, int, str]:
    # Numeric identifiers sort numerically and below alphanumeric ones.
    if identifier.isdigit():
        return (0, int(identifier), "")
    return (1, 0, identifier)


@total_ordering
@dataclass(frozen=True, slots=True, eq=True)
class SemVer:
    """A semantic version.

    Ordering compares major, minor and patch numerically; a release sorts
    above any prerelease of the same triple. Build metadata does not affect
    precedence and is only used as a final tie-break so the order is total.
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    @property
    def core(self) -> SemVer:
        """The version without prerelease or build metadata."""
        return SemVer(self.major, self.minor, self.patch)

    def sort_key(self) -> tuple[object, ...]:
        if self.prerelease is None:
            pre: tuple[object, ...] = (1,)
        else:
            pre = (0, tuple(_identifier_key(p) for p in self.prerelease.split(".")))
        return (self.major, self.minor, self.patch, pre, self.build or "")

    def precedes(self, other: SemVer) -> bool:
        """True if self has lower precedence than other, ignoring build metadata."""
        return self.sort_key()[:4] < other.sort_key()[:4]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def bump(self, kind: BumpKind) -> SemVer:
        match kind:
            case "major":
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")


def parse_semver(text: str) -> SemVer | None:
    """Parse a bare version such as `1.2.3-beta.1+sha.5`. Returns None if invalid."""
    m = _SEMVER_RE.match(text.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(4), m.group(5))


@dataclass(frozen=True, slots=True)
class ExplicitVersion:
    """A user-supplied version that bypasses bump arithmetic."""

    spec: str


type BumpSpec = BumpKind | ExplicitVersion


def parse_bump_spec(text: str) -> BumpSpec:
    """Interpret CLI input as a bump kind, or else as an explicit version.

    Explicit versions are validated later by `next_version`, so any text
    that is not a bump kind is accepted here.
    """
    lowered = text.strip().lower()
    for kind in BUMP_KINDS:
        if lowered == kind:
            return kind
    return ExplicitVersion(text.strip())


def parse_explicit(spec: str) -> Result[SemVer, InvalidVersionSpec]:
    """Validate an explicit version. A leading `v` is tolerated."""
    candidate = spec.strip()
    if candidate[:1] in {"v", "V"}:
        candidate = candidate[1:]
    parsed = parse_semver(candidate)
    if parsed is None:
        return Err(
            InvalidVersionSpec(
                spec=spec,
                message=f"invalid version: {spec!r} (expected X.Y.Z, e.g. 1.4.0 or 2.0.0-rc.1)",
            )
        )
    return Ok(parsed)


def next_version(previous: SemVer | None, bump: BumpSpec) -> Result[SemVer, VersionError]:
    """Compute the version of the next release.

    Relative bumps work on the previous version's major.minor.patch; any
    prerelease or build metadata on it is ignored.

    Returns:
        Ok(SemVer), Err(InvalidVersionSpec) for an unparseable explicit
        version, or Err(AmbiguousBaseVersion) for a relative bump with no
        previous version.
    """
    if isinstance(bump, ExplicitVersion):
        return parse_explicit(bump.spec)

    if previous is None:
        return Err(
            AmbiguousBaseVersion(
                message=f"cannot apply a {bump} bump: no previous release tag was found",
                hint="pass an explicit starting version, e.g. --version 0.1.0",
            )
        )
    return Ok(previous.core.bump(bump))
