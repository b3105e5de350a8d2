"""Conventional Commits parsing.

`parse_commit` is total: a subject that does not follow
`<type>[(<scope>)][!]: <description>` becomes an UNKNOWN commit whose
description is the subject exactly as written.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from nk.release.model import Commit, CommitType, ParsedCommit

_SUBJECT_RE = re.compile(
    r"^(?P<type>[A-Za-z]+)"
    r"(?:\((?P<scope>[^()\r\n]*)\))?"
    r"(?P<breaking>!)?"
    r":[ \t]*(?P<description>\S.*)$"
)

_LINE_BREAK_RE = re.compile(r"\r?\n")

_BREAKING_FOOTER_RE = re.compile(r"^BREAKING[ -]CHANGE:[ \t]*(?P<note>.*)$")

_KNOWN_TYPES: dict[str, CommitType] = {
    t.value: t for t in CommitType if t is not CommitType.UNKNOWN
}


def parse_commit(commit: Commit) -> ParsedCommit:
    """Classify one commit."""
    # Only LF and CRLF end a line; other Unicode separators stay in the text.
    subject = _LINE_BREAK_RE.split(commit.subject, maxsplit=1)[0]
    note = _breaking_note(commit.body)

    m = _SUBJECT_RE.match(subject)
    commit_type = _KNOWN_TYPES.get(m.group("type").lower()) if m else None
    if m is None or commit_type is None:
        return ParsedCommit(
            type=CommitType.UNKNOWN,
            scope=None,
            breaking=False,
            description=subject,
            source=commit,
        )

    scope = m.group("scope")
    return ParsedCommit(
        type=commit_type,
        scope=scope if scope and scope.strip() else None,
        breaking=m.group("breaking") is not None or note is not None,
        description=m.group("description"),
        source=commit,
        breaking_note=note or None,
    )


def parse_commits(commits: Iterable[Commit]) -> tuple[ParsedCommit, ...]:
    return tuple(parse_commit(c) for c in commits)


def count_unconventional(parsed: Iterable[ParsedCommit]) -> int:
    """Number of commits that fell back to UNKNOWN."""
    return sum(1 for p in parsed if not p.is_conventional)


def _breaking_note(body: str) -> str | None:
    """Return the text of a BREAKING CHANGE footer.

    The note continues over following lines up to the next blank line.
    Returns "" when the footer is present but empty, None when absent.
    """
    lines = _LINE_BREAK_RE.split(body)
    for i, line in enumerate(lines):
        m = _BREAKING_FOOTER_RE.match(line)
        if m is None:
            continue
        parts = [m.group("note").strip()]
        for cont in lines[i + 1 :]:
            if not cont.strip():
                break
            parts.append(cont.strip())
        return " ".join(p for p in parts if p)
    return None
