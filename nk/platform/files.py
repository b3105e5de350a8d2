"""Filesystem helpers.

Text is read and written with newline translation disabled, so a file that
is read, extended and written back keeps its original line endings.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

__all__ = ["atomic_write_text", "read_text_if_exists"]


def read_text_if_exists(path: Path, *, encoding: str = "utf-8") -> str | None:
    """Return the file's text verbatim, or None when it does not exist.

    Raises:
        OSError: The path exists but cannot be read (directory, permissions).
        UnicodeDecodeError: The content is not valid in `encoding`.
    """
    try:
        with path.open("r", encoding=encoding, newline="") as handle:
            return handle.read()
    except FileNotFoundError:
        return None


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Replace `path` with `content` in one step.

    Readers see either the old file or the new one, never a partial write.
    An existing file's permission bits carry over to the replacement.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    mode: int | None = None
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        pass

    fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)
