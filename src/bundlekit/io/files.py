"""Text read/write helpers with atomic persistence."""

from __future__ import annotations

import os
import tempfile
from contextlib import suppress
from pathlib import Path


def read_text(path: Path) -> str:
    """Read a UTF-8 source file, tolerating a leading byte-order mark."""
    return path.read_text(encoding="utf-8-sig")


def file_mtime_ns(path: Path) -> int | None:
    """Return the modification time in nanoseconds, or None when the file is gone."""
    try:
        return path.stat().st_mtime_ns
    except OSError:
        return None


def write_text_atomic(
    *,
    path: Path,
    content: str,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Persist text atomically by writing to a temp file then renaming."""
    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=temp_prefix,
            suffix=temp_suffix,
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(content)
    except Exception:
        if temp_name:
            with suppress(FileNotFoundError):
                Path(temp_name).unlink()
        raise

    assert temp_name is not None
    os.replace(temp_name, path)
