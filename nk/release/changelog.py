"""Merging a rendered version section into a persistent changelog.

The merger only ever inserts. Existing text is copied through unchanged,
and a version that already has a heading is refused rather than replaced.
"""

from __future__ import annotations

import re

from nk.core.result import Err, Ok, Result
from nk.release.errors import DuplicateVersionError
from nk.release.semver import SemVer

DEFAULT_TITLE = "# Changelog"

_TITLE_RE = re.compile(r"^# (?!#)")
_VERSION_HEADING_RE = re.compile(r"^## (?!#)")


def has_version(text: str, version: SemVer) -> bool:
    """True if `text` has a `## ` heading for `version`.

    Matches `## [1.2.0]`, `## 1.2.0`, `## v1.2.0` and `## [v1.2.0] - date`.
    """
    pattern = re.compile(
        r"^##[ \t]+\[?[vV]?" + re.escape(str(version)) + r"\]?(?:[ \t]|\r?$)",
        re.MULTILINE,
    )
    return pattern.search(text) is not None


def merge(existing: str | None, new_section: str, version: SemVer) -> Result[str, DuplicateVersionError]:
    """Insert `new_section` as the newest version section.

    The section goes after the document title and any preamble, directly
    before the first existing `## ` section. A missing or empty document
    gets a `# Changelog` title first. The section takes the line endings
    of the existing document.

    Returns:
        Ok(merged text), or Err(DuplicateVersionError) if `version` already
        has a heading. The input text is never modified.
    """
    section = new_section.strip("\n") + "\n"

    if existing is None or not existing.strip():
        return Ok(f"{DEFAULT_TITLE}\n\n{section}")

    if has_version(existing, version):
        return Err(
            DuplicateVersionError(
                version=str(version),
                message=f"changelog already has an entry for {version}",
            )
        )

    nl = _newline(existing)
    section = section.replace("\n", nl)
    offset = _insertion_offset(existing)
    before, after = existing[:offset], existing[offset:]

    if not before:
        return Ok(section + nl + after)
    lead = "" if before.endswith(nl * 2) else (nl if before.endswith(nl) else nl * 2)
    trail = nl if after else ""
    return Ok(before + lead + section + trail + after)


def _newline(text: str) -> str:
    """CRLF when the first line break in `text` is CRLF, else LF."""
    i = text.find("\n")
    return "\r\n" if i > 0 and text[i - 1] == "\r" else "\n"


def _insertion_offset(text: str) -> int:
    """Character offset of the first version heading, or end of text.

    When the document has no title and starts directly with content,
    insertion is at the very top.
    """
    offset = 0
    seen_title = False
    for line in text.splitlines(keepends=True):
        if _VERSION_HEADING_RE.match(line):
            return offset
        if _TITLE_RE.match(line):
            seen_title = True
        offset += len(line)
    return offset if seen_title else 0
