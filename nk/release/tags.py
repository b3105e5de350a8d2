"""Release tag resolution.

Tag names are matched against `TAG_PATTERNS` in order; the first pattern
whose captured text parses as SemVer wins. Names matching none of them are
not release tags and are skipped without error.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from nk.core.result import Result
from nk.release.model import Commit, Tag
from nk.release.semver import SemVer, parse_semver
from nk.release.vcs import VcsError, VcsReader

# Precedence matters when a name could be read more than one way.
TAG_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    # 1.2.3, v1.2.3, V1.2.3-beta.1
    ("plain", re.compile(r"^[vV]?(?P<version>\d.*)$")),
    # release-1.2.3, release/v1.2.3, rel-1.2.3, version_1.2.3
    ("release", re.compile(r"^(?:release|rel|version)[-_/]?[vV]?(?P<version>\d.*)$", re.IGNORECASE)),
    # pkg@1.2.3, tool-v1.2.3, app/1.2.3
    ("prefixed", re.compile(r"^[A-Za-z][\w.-]*?[-_/@][vV]?(?P<version>\d.*)$")),
)


def parse_tag_version(raw_name: str) -> SemVer | None:
    for _name, pattern in TAG_PATTERNS:
        m = pattern.match(raw_name)
        if m is None:
            continue
        version = parse_semver(m.group("version"))
        if version is not None:
            return version
    return None


def parse_tag(raw_name: str, commit_hash: str) -> Tag:
    return Tag(raw_name=raw_name, version=parse_tag_version(raw_name), commit_hash=commit_hash)


def parse_tags(refs: Iterable[tuple[str, str]]) -> tuple[Tag, ...]:
    """Build Tags from `(name, commit_hash)` pairs as listed by the VCS."""
    return tuple(parse_tag(name, sha) for name, sha in refs)


def version_tags(tags: Iterable[Tag]) -> list[Tag]:
    """Tags with a parsed version, highest version first.

    Equal versions are ordered by raw name so the result is reproducible.
    """
    return [tag for tag, _ in _ranked(tags)]


def tied_for_latest(tags: Iterable[Tag]) -> list[Tag]:
    """All tags sharing the highest version precedence."""
    ranked = _ranked(tags)
    if not ranked:
        return []
    top = ranked[0][1]
    return [tag for tag, version in ranked if not version.precedes(top)]


def resolve_latest(tags: Iterable[Tag], *, history: Sequence[str] = ()) -> Tag | None:
    """Pick the latest release tag.

    The highest version wins. Tags sharing that version (for example `v1.2.0`
    and `release-1.2.0`) are decided by the recency of their commit in
    `history` (commit hashes, newest first); commits not in `history` rank
    as oldest, and raw name settles whatever remains.

    Returns:
        The latest Tag, or None when no tag parses as a version.
    """
    tied = tied_for_latest(tags)
    if not tied:
        return None
    if len(tied) == 1:
        return tied[0]

    position = {sha: i for i, sha in enumerate(history)}
    missing = len(position)
    return min(tied, key=lambda t: (position.get(t.commit_hash, missing), t.raw_name))


def resolve_range(vcs: VcsReader, latest: Tag | None, head: str) -> Result[tuple[Commit, ...], VcsError]:
    """Commits in `(latest, head]`, newest first.

    With no latest tag the range starts at the first commit of the repository.
    """
    start = latest.commit_hash if latest is not None else None
    result = vcs.list_commits(start, head)
    if start is None:
        return result
    return result.map(lambda commits: tuple(c for c in commits if c.hash != start))


def _ranked(tags: Iterable[Tag]) -> list[tuple[Tag, SemVer]]:
    versioned = [(t, t.version) for t in tags if t.version is not None]
    versioned.sort(key=lambda pair: pair[0].raw_name)
    versioned.sort(key=lambda pair: pair[1].sort_key()[:4], reverse=True)
    return versioned
