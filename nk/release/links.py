"""Hosting-provider links.

Remotes are normalised into a `RemoteInfo` whose `host` selects the URL
templates. Generic hosts have no compare page, so they get no compare link.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from nk.release.model import HostKind, RemoteInfo, Tag

_HOSTS: tuple[tuple[str, HostKind], ...] = (
    ("github", HostKind.GITHUB),
    ("gitlab", HostKind.GITLAB),
    ("bitbucket", HostKind.BITBUCKET),
)

# git@host:owner/repo(.git)
_SCP_RE = re.compile(r"^[\w.-]+@(?P<host>[\w.-]+):(?P<path>[^\s]+?)(?:\.git)?/?$")
# https://host/owner/repo(.git), ssh://git@host:22/owner/repo(.git)
_URL_RE = re.compile(
    r"^(?:https?|ssh|git)://(?:[^@/\s]+@)?(?P<host>[\w.-]+)(?::\d+)?/(?P<path>[^\s]+?)(?:\.git)?/?$"
)


@dataclass(frozen=True, slots=True)
class ReleaseLinks:
    compare_link: str | None


def detect_host(hostname: str) -> HostKind:
    lowered = hostname.lower()
    for marker, kind in _HOSTS:
        if marker in lowered:
            return kind
    return HostKind.GENERIC


def parse_remote(url: str | None) -> RemoteInfo | None:
    """Normalise a git remote URL. Returns None when it cannot be understood."""
    if not url:
        return None
    text = url.strip()
    m = _SCP_RE.match(text) or _URL_RE.match(text)
    if m is None:
        return None

    host = m.group("host")
    path = m.group("path").strip("/")
    if "/" not in path:
        return None
    owner, name = path.rsplit("/", 1)
    return RemoteInfo(
        host=detect_host(host),
        web_url=f"https://{host}/{path}",
        owner=owner,
        name=name,
    )


def compare_url(remote: RemoteInfo, previous: str, new: str) -> str | None:
    match remote.host:
        case HostKind.GITHUB:
            return f"{remote.web_url}/compare/{previous}...{new}"
        case HostKind.GITLAB:
            return f"{remote.web_url}/-/compare/{previous}...{new}"
        case HostKind.BITBUCKET:
            return f"{remote.web_url}/branches/compare/{new}%0D{previous}"
        case HostKind.GENERIC:
            return None


def commit_url(remote: RemoteInfo, sha: str) -> str | None:
    match remote.host:
        case HostKind.GITHUB:
            return f"{remote.web_url}/commit/{sha}"
        case HostKind.GITLAB:
            return f"{remote.web_url}/-/commit/{sha}"
        case HostKind.BITBUCKET:
            return f"{remote.web_url}/commits/{sha}"
        case HostKind.GENERIC:
            return None


def commits_url(remote: RemoteInfo, ref: str) -> str | None:
    """History page for `ref`, used when there is no previous tag to compare with."""
    match remote.host:
        case HostKind.GITHUB:
            return f"{remote.web_url}/commits/{ref}"
        case HostKind.GITLAB:
            return f"{remote.web_url}/-/commits/{ref}"
        case HostKind.BITBUCKET:
            return f"{remote.web_url}/commits/tag/{ref}"
        case HostKind.GENERIC:
            return None


def issues_url(remote: RemoteInfo) -> str | None:
    match remote.host:
        case HostKind.GITHUB | HostKind.BITBUCKET:
            return f"{remote.web_url}/issues"
        case HostKind.GITLAB:
            return f"{remote.web_url}/-/issues"
        case HostKind.GENERIC:
            return None


def build_links(remote_url: str | None, previous_tag: Tag | None, new_tag: str) -> ReleaseLinks:
    """Compare link between the previous tag and the new one.

    Never fails: unknown hosts, unparseable URLs and initial releases all
    yield `compare_link=None`.
    """
    remote = parse_remote(remote_url)
    if remote is None or previous_tag is None:
        return ReleaseLinks(compare_link=None)
    return ReleaseLinks(compare_link=compare_url(remote, previous_tag.raw_name, new_tag))
