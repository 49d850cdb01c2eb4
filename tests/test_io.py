"""Tests for text IO helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from bundlekit.io import file_mtime_ns, read_text, write_text_atomic


def test_write_text_atomic_replaces_target(tmp_path: Path) -> None:
    out_path = tmp_path / "bundle.css"
    out_path.write_text("old", encoding="utf-8")

    write_text_atomic(path=out_path, content=".a{}\n", temp_prefix=".tmp-", temp_suffix=".part")

    assert out_path.read_text(encoding="utf-8") == ".a{}\n"
    assert [item.name for item in tmp_path.iterdir()] == ["bundle.css"]


def test_write_text_atomic_cleans_temp_file_on_error(tmp_path: Path) -> None:
    out_path = tmp_path / "bundle.css"
    temp_prefix = ".tmp-"
    temp_suffix = ".part"

    with pytest.raises(UnicodeEncodeError):
        write_text_atomic(path=out_path, content="\ud800", temp_prefix=temp_prefix, temp_suffix=temp_suffix)

    leftovers = [
        item for item in tmp_path.iterdir() if item.name.startswith(temp_prefix) and item.name.endswith(temp_suffix)
    ]
    assert not leftovers
    assert not out_path.exists()


def test_read_text_strips_byte_order_mark(tmp_path: Path) -> None:
    source = tmp_path / "a.css"
    source.write_bytes("\ufeff.a{}".encode("utf-8"))

    assert read_text(source) == ".a{}"


def test_file_mtime_ns_of_missing_file_is_none(tmp_path: Path) -> None:
    assert file_mtime_ns(tmp_path / "missing.css") is None
