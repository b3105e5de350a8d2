from __future__ import annotations

from nk.release.categorize import categorize, section_for, suggest_bump
from nk.release.model import CommitType, SectionKind
from nk.release.parser import parse_commits
from nk.test.fakes import make_commit


def test_section_for_types() -> None:
    assert section_for(CommitType.FEAT) is SectionKind.FEATURES
    assert section_for(CommitType.FIX) is SectionKind.FIXES
    assert section_for(CommitType.PERF) is SectionKind.PERF
    assert section_for(CommitType.CI) is SectionKind.CHORES
    assert section_for(CommitType.REVERT) is SectionKind.CHORES
    assert section_for(CommitType.UNKNOWN) is SectionKind.CHORES


def test_sections_follow_fixed_order_and_skip_empty() -> None:
    parsed = parse_commits(
        [
            make_commit(4, "chore: bump deps"),
            make_commit(3, "fix: crash"),
            make_commit(2, "random subject"),
            make_commit(1, "feat: login"),
        ]
    )

    sections = categorize(parsed)

    assert [s.kind for s in sections] == [SectionKind.FEATURES, SectionKind.FIXES, SectionKind.CHORES]
    chores = sections[2]
    assert [e.description for e in chores.entries] == ["bump deps", "random subject"]


def test_breaking_commit_appears_twice() -> None:
    parsed = parse_commits([make_commit(1, "feat(api)!: new auth")])

    sections = categorize(parsed)

    assert [s.kind for s in sections] == [SectionKind.BREAKING, SectionKind.FEATURES]
    assert sections[0].entries == sections[1].entries


def test_every_commit_lands_in_a_type_section() -> None:
    subjects = ["feat: a", "fix: b", "docs: c", "style: d", "test: e", "perf: f", "nope", "build: g"]
    parsed = parse_commits(make_commit(i, s) for i, s in enumerate(subjects))

    sections = categorize(parsed)

    non_breaking = [e for s in sections if s.kind is not SectionKind.BREAKING for e in s.entries]
    assert sorted(p.source.hash for p in non_breaking) == sorted(p.source.hash for p in parsed)


def test_empty_input() -> None:
    assert categorize(()) == ()


def test_suggest_bump() -> None:
    assert suggest_bump(parse_commits([make_commit(1, "fix: a"), make_commit(2, "chore: b")])) == "patch"
    assert suggest_bump(parse_commits([make_commit(1, "fix: a"), make_commit(2, "feat: b")])) == "minor"
    assert (
        suggest_bump(parse_commits([make_commit(1, "feat: a"), make_commit(2, "fix!: b")])) == "major"
    )
    assert suggest_bump(()) == "patch"
