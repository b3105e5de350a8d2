"""Grouping parsed commits into document sections."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from nk.release.model import SECTION_ORDER, CommitType, ParsedCommit, Section, SectionKind
from nk.release.semver import BumpKind

_SECTION_FOR_TYPE: dict[CommitType, SectionKind] = {
    CommitType.FEAT: SectionKind.FEATURES,
    CommitType.FIX: SectionKind.FIXES,
    CommitType.DOCS: SectionKind.DOCS,
    CommitType.PERF: SectionKind.PERF,
    CommitType.REFACTOR: SectionKind.REFACTORS,
    CommitType.TEST: SectionKind.TESTS,
}


def section_for(commit_type: CommitType) -> SectionKind:
    """Type-based section. Everything without its own section lands in CHORES."""
    return _SECTION_FOR_TYPE.get(commit_type, SectionKind.CHORES)


def categorize(parsed: Sequence[ParsedCommit]) -> tuple[Section, ...]:
    """Bucket commits by section kind.

    A breaking commit appears under BREAKING and again under its type's
    section. Entries keep the input order; empty sections are left out and
    the rest follow `SECTION_ORDER`.
    """
    buckets: dict[SectionKind, list[ParsedCommit]] = {kind: [] for kind in SECTION_ORDER}
    for pc in parsed:
        if pc.breaking:
            buckets[SectionKind.BREAKING].append(pc)
        buckets[section_for(pc.type)].append(pc)

    return tuple(
        Section(kind=kind, entries=tuple(buckets[kind])) for kind in SECTION_ORDER if buckets[kind]
    )


def suggest_bump(parsed: Iterable[ParsedCommit]) -> BumpKind:
    """Smallest bump that reflects the commits: breaking > feat > anything else."""
    kind: BumpKind = "patch"
    for pc in parsed:
        if pc.breaking:
            return "major"
        if pc.type is CommitType.FEAT:
            kind = "minor"
    return kind
