"""Package manifest version updates.

The version field is rewritten in place so comments, key order and
formatting of the rest of the file survive. Recognised tables are
`[project]` (PEP 621), `[package]` (Cargo) and `[tool.poetry]`.
"""

from __future__ import annotations

import re

from nk.release.semver import SemVer

_TABLES = frozenset({"project", "package", "tool.poetry"})
_TABLE_RE = re.compile(r"^[ \t]*\[\[?(?P<name>[^\[\]]+)\]\]?[ \t]*(?:#.*)?$")
_VERSION_RE = re.compile(r"^(?P<key>[ \t]*version[ \t]*=[ \t]*)(?P<q>[\"'])(?P<value>[^\"'\r\n]*)(?P=q)")


def set_manifest_version(text: str, version: SemVer) -> str | None:
    """Return `text` with the package version replaced by `version`.

    None when no recognised table declares a literal version string.
    """
    lines = text.splitlines(keepends=True)
    in_table = False
    for i, line in enumerate(lines):
        table = _TABLE_RE.match(line.rstrip("\r\n"))
        if table:
            in_table = table.group("name").strip() in _TABLES
            continue
        if not in_table:
            continue
        m = _VERSION_RE.match(line)
        if m:
            q = m.group("q")
            lines[i] = f"{m.group('key')}{q}{version}{q}" + line[m.end() :]
            return "".join(lines)
    return None
