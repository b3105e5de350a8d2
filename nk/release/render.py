"""Markdown rendering of release notes and changelog sections.

Both renderers are pure: the same document always produces the same bytes.
Nothing here reads the clock; dates come from `ReleaseNotesDocument`.
"""

from __future__ import annotations

import re

from nk.release.links import commit_url, commits_url
from nk.release.model import (
    Contributor,
    HostKind,
    ParsedCommit,
    ReleaseNotesDocument,
    Section,
    SectionKind,
)

_NOREPLY_RE = re.compile(r"^(?:\d+\+)?(?P<login>[A-Za-z0-9-]+)@users\.noreply\.github\.com$")

BREAKING_NOTICE = "This release contains breaking changes. Review them before upgrading."
PRERELEASE_NOTICE = (
    "> **Pre-release:** this version is not considered stable. "
    "Use with caution in production environments."
)


def render_release_notes(doc: ReleaseNotesDocument) -> str:
    """Full release notes, as published with a release."""
    lines: list[str] = [f"# Release {doc.tag_name}", ""]

    if doc.previous_tag is not None:
        lines.append(f"## Changes since {doc.previous_tag.raw_name}")
    else:
        lines.append("## Initial release")
    lines.append("")
    lines.extend(_summary_lines(doc))
    lines.append("")

    if doc.version.is_prerelease:
        lines.extend([PRERELEASE_NOTICE, ""])

    lines.extend(_section_lines(doc, level=2))

    if doc.contributors:
        lines.extend(["## Contributors", ""])
        lines.extend(f"- {_contributor_label(c, doc)}" for c in doc.contributors)
        lines.append("")

    full = _full_changelog_link(doc)
    if full is not None:
        lines.extend([f"**Full Changelog**: {full}", ""])

    return "\n".join(lines).rstrip() + "\n"


def render_changelog_section(doc: ReleaseNotesDocument) -> str:
    """A `## [X.Y.Z] - YYYY-MM-DD` section for a persistent changelog."""
    lines: list[str] = [changelog_heading(doc), ""]
    body = _section_lines(doc, level=3)
    if body:
        lines.extend(body)
    else:
        lines.extend(["No notable changes.", ""])
    if doc.compare_link is not None:
        lines.extend([f"[Full Changelog]({doc.compare_link})", ""])
    return "\n".join(lines).rstrip() + "\n"


def changelog_heading(doc: ReleaseNotesDocument) -> str:
    return f"## [{doc.version}] - {doc.release_date.isoformat()}"


def _summary_lines(doc: ReleaseNotesDocument) -> list[str]:
    lines = [
        f"- **Release date:** {doc.release_date.isoformat()}",
        f"- **Total commits:** {len(doc.commits)}",
    ]
    if doc.remote is not None:
        lines.insert(1, f"- **Repository:** {doc.remote.web_url}")
    if doc.commits:
        # commits are newest first
        oldest = doc.commits[-1].date.isoformat()
        newest = doc.commits[0].date.isoformat()
        lines.append(f"- **Commit range:** {oldest} to {newest}")
    return lines


def _section_lines(doc: ReleaseNotesDocument, *, level: int) -> list[str]:
    marker = "#" * level
    lines: list[str] = []
    for section in doc.sections:
        lines.extend([f"{marker} {section.title}", ""])
        if section.kind is SectionKind.BREAKING:
            lines.extend([f"**{BREAKING_NOTICE}**", ""])
        lines.extend(_entry_lines(section, doc))
        lines.append("")
    return lines


def _entry_lines(section: Section, doc: ReleaseNotesDocument) -> list[str]:
    return [f"- {_entry_text(pc, doc)}" for pc in section.entries]


def _entry_text(pc: ParsedCommit, doc: ReleaseNotesDocument) -> str:
    text = pc.text
    if pc.scope:
        text = f"**{pc.scope.strip()}:** {text}"

    short = pc.source.short_hash
    url = commit_url(doc.remote, pc.source.hash) if doc.remote is not None else None
    ref = f"[{short}]({url})" if url else short
    return f"{text} ({ref})"


def _contributor_label(c: Contributor, doc: ReleaseNotesDocument) -> str:
    commits = "1 commit" if c.commit_count == 1 else f"{c.commit_count} commits"
    if doc.remote is not None and doc.remote.host is HostKind.GITHUB:
        m = _NOREPLY_RE.match(c.email)
        if m is not None:
            login = m.group("login")
            return f"{c.name} ([@{login}](https://github.com/{login})) ({commits})"
    return f"{c.name} ({commits})"


def _full_changelog_link(doc: ReleaseNotesDocument) -> str | None:
    if doc.compare_link is not None:
        return doc.compare_link
    if doc.previous_tag is None and doc.remote is not None:
        return commits_url(doc.remote, doc.tag_name)
    return None
