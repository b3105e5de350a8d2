from __future__ import annotations

import pytest

from nk.release.links import build_links, commit_url, commits_url, detect_host, issues_url, parse_remote
from nk.release.model import HostKind, RemoteInfo, Tag
from nk.release.semver import SemVer

PREVIOUS = Tag(raw_name="v1.0.0", version=SemVer(1, 0, 0), commit_hash="abc")


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/acme/widget.git",
        "https://github.com/acme/widget",
        "git@github.com:acme/widget.git",
        "ssh://git@github.com/acme/widget.git",
        "https://user@github.com/acme/widget/",
    ],
)
def test_parse_remote_forms(url: str) -> None:
    assert parse_remote(url) == RemoteInfo(
        host=HostKind.GITHUB,
        web_url="https://github.com/acme/widget",
        owner="acme",
        name="widget",
    )


def test_parse_remote_gitlab_subgroup() -> None:
    remote = parse_remote("git@gitlab.com:group/sub/project.git")

    assert remote is not None
    assert remote.host is HostKind.GITLAB
    assert remote.owner == "group/sub"
    assert remote.web_url == "https://gitlab.com/group/sub/project"


@pytest.mark.parametrize("url", [None, "", "/srv/git/widget.git", "not a url", "https://github.com/widget"])
def test_parse_remote_unusable(url: str | None) -> None:
    assert parse_remote(url) is None


def test_detect_host() -> None:
    assert detect_host("gitlab.example.org") is HostKind.GITLAB
    assert detect_host("bitbucket.org") is HostKind.BITBUCKET
    assert detect_host("git.example.org") is HostKind.GENERIC


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://github.com/acme/widget.git", "https://github.com/acme/widget/compare/v1.0.0...v1.1.0"),
        ("git@gitlab.com:acme/widget.git", "https://gitlab.com/acme/widget/-/compare/v1.0.0...v1.1.0"),
        (
            "https://bitbucket.org/acme/widget.git",
            "https://bitbucket.org/acme/widget/branches/compare/v1.1.0%0Dv1.0.0",
        ),
        ("https://git.example.org/acme/widget.git", None),
    ],
)
def test_compare_link(url: str, expected: str | None) -> None:
    assert build_links(url, PREVIOUS, "v1.1.0").compare_link == expected


def test_no_compare_link_for_initial_release_or_missing_remote() -> None:
    assert build_links("https://github.com/acme/widget", None, "v0.1.0").compare_link is None
    assert build_links(None, PREVIOUS, "v1.1.0").compare_link is None


def test_other_urls() -> None:
    github = parse_remote("https://github.com/acme/widget")
    gitlab = parse_remote("https://gitlab.com/acme/widget")
    generic = parse_remote("https://git.example.org/acme/widget")
    assert github is not None and gitlab is not None and generic is not None

    assert commit_url(github, "abc") == "https://github.com/acme/widget/commit/abc"
    assert commit_url(gitlab, "abc") == "https://gitlab.com/acme/widget/-/commit/abc"
    assert commits_url(github, "v0.1.0") == "https://github.com/acme/widget/commits/v0.1.0"
    assert issues_url(gitlab) == "https://gitlab.com/acme/widget/-/issues"
    assert commit_url(generic, "abc") is None
    assert issues_url(generic) is None
