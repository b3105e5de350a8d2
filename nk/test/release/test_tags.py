from __future__ import annotations

from nk.core.result import Err, Ok
from nk.release.model import Tag
from nk.release.semver import SemVer
from nk.release.tags import (
    parse_tag_version,
    parse_tags,
    resolve_latest,
    resolve_range,
    tied_for_latest,
    version_tags,
)
from nk.test.fakes import FakeVcs, make_commit


def test_parse_tag_version_patterns() -> None:
    assert parse_tag_version("v1.2.3") == SemVer(1, 2, 3)
    assert parse_tag_version("1.2.3") == SemVer(1, 2, 3)
    assert parse_tag_version("V2.0.0-rc.1") == SemVer(2, 0, 0, "rc.1")
    assert parse_tag_version("release-1.1.0") == SemVer(1, 1, 0)
    assert parse_tag_version("Release/v1.1.0") == SemVer(1, 1, 0)
    assert parse_tag_version("widget@3.0.1") == SemVer(3, 0, 1)
    assert parse_tag_version("tool-v0.4.0") == SemVer(0, 4, 0)


def test_non_version_tags_are_skipped() -> None:
    tags = parse_tags([("nightly", "a"), ("v1.x", "b"), ("v1.0.0", "c")])

    assert tags[0].version is None
    assert tags[1].version is None
    assert [t.raw_name for t in version_tags(tags)] == ["v1.0.0"]


def test_latest_is_highest_version_across_naming_styles() -> None:
    tags = parse_tags([("v1.2.0", "a"), ("1.3.0", "b"), ("release-1.1.0", "c")])

    latest = resolve_latest(tags)

    assert latest is not None
    assert latest.raw_name == "1.3.0"


def test_release_outranks_prerelease() -> None:
    tags = parse_tags([("v2.0.0-rc.1", "a"), ("v1.9.0", "b")])
    latest = resolve_latest(tags)
    assert latest is not None and latest.raw_name == "v2.0.0-rc.1"

    tags = parse_tags([("v2.0.0-rc.1", "a"), ("v2.0.0", "b")])
    latest = resolve_latest(tags)
    assert latest is not None and latest.raw_name == "v2.0.0"


def test_no_version_tags() -> None:
    assert resolve_latest(parse_tags([("nightly", "a")])) is None
    assert tied_for_latest(()) == []
    assert tied_for_latest(parse_tags([("nightly", "a"), ("latest", "b")])) == []
    assert version_tags(parse_tags([("nightly", "a")])) == []


def test_tie_goes_to_most_recent_commit() -> None:
    tags = parse_tags([("release-1.2.0", "new"), ("v1.2.0", "old")])

    assert tied_for_latest(tags) == [tags[0], tags[1]]
    latest = resolve_latest(tags, history=["new", "mid", "old"])
    assert latest is not None and latest.raw_name == "release-1.2.0"

    latest = resolve_latest(tags, history=["old", "new"])
    assert latest is not None and latest.raw_name == "v1.2.0"


def test_tie_without_history_falls_back_to_name() -> None:
    tags = parse_tags([("v1.2.0", "x"), ("release-1.2.0", "x")])

    latest = resolve_latest(tags)

    assert latest is not None and latest.raw_name == "release-1.2.0"


def test_build_metadata_ties() -> None:
    tags = parse_tags([("v1.0.0+b2", "a"), ("v1.0.0+b1", "b")])
    assert len(tied_for_latest(tags)) == 2


def test_version_tags_order() -> None:
    tags = parse_tags([("v0.9.0", "a"), ("v1.0.0", "b"), ("v1.0.0-rc.1", "c"), ("junk", "d")])
    assert [t.raw_name for t in version_tags(tags)] == ["v1.0.0", "v1.0.0-rc.1", "v0.9.0"]


def test_resolve_range_excludes_the_tagged_commit() -> None:
    commits = [make_commit(i, f"feat: c{i}") for i in range(1, 5)]
    vcs = FakeVcs(commits=commits)
    latest = Tag(raw_name="v1.0.0", version=SemVer(1, 0, 0), commit_hash=commits[1].hash)

    result = resolve_range(vcs, latest, commits[-1].hash)

    assert result == Ok((commits[3], commits[2]))


def test_resolve_range_from_first_commit() -> None:
    commits = [make_commit(i, f"feat: c{i}") for i in range(1, 4)]
    vcs = FakeVcs(commits=commits)

    result = resolve_range(vcs, None, commits[-1].hash)

    assert result == Ok(tuple(reversed(commits)))
    assert vcs.calls == [("list_commits", "", commits[-1].hash)]


def test_resolve_range_propagates_vcs_failure() -> None:
    vcs = FakeVcs(commits=[make_commit(1, "feat: a")], fail_on="list_commits")

    result = resolve_range(vcs, None, make_commit(1, "feat: a").hash)

    assert isinstance(result, Err)
    assert result.error.command == "list_commits"
