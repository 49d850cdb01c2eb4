"""Tests for the in-memory result cache."""

from __future__ import annotations

import os
from pathlib import Path

from bundlekit.caching import CacheEntry, ResultCache

from conftest import FakeClock


def _bump_mtime(path: Path) -> None:
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 2_000_000_000))


def test_put_and_get_roundtrip() -> None:
    cache = ResultCache()

    assert cache.put("key", "body{}") is True
    assert cache.get("key") == "body{}"
    assert "key" in cache
    assert len(cache) == 1


def test_empty_results_are_never_cached() -> None:
    cache = ResultCache()

    assert cache.put("empty", "") is False
    assert cache.put("blank", " \n\t") is False
    assert cache.put("none", None) is False
    assert len(cache) == 0


def test_watched_file_change_invalidates_entry(tmp_path: Path) -> None:
    source = tmp_path / "a.css"
    source.write_text(".a{}", encoding="utf-8")
    cache = ResultCache()
    cache.put("key", ".a{}", [source])

    assert cache.get("key") == ".a{}"

    _bump_mtime(source)

    assert cache.get("key") is None
    assert len(cache) == 0


def test_deleted_watched_file_invalidates_entry(tmp_path: Path) -> None:
    source = tmp_path / "a.css"
    source.write_text(".a{}", encoding="utf-8")
    cache = ResultCache()
    cache.put("key", ".a{}", [source])

    source.unlink()

    assert cache.get("key") is None


def test_ttl_expiry_uses_injected_clock() -> None:
    clock = FakeClock()
    cache = ResultCache(clock=clock)
    cache.put("sentinel", "1", ttl=60)

    clock.advance(59)
    assert cache.get("sentinel") == "1"

    clock.advance(1)
    assert cache.get("sentinel") is None


def test_clear_region_only_removes_tagged_entries() -> None:
    cache = ResultCache()
    cache.put("a", "1", region="styles")
    cache.put("b", "2", region="styles")
    cache.put("c", "3", region="scripts")
    cache.put("d", "4")

    assert cache.clear("styles") == 2
    assert cache.get("a") is None
    assert cache.get("c") == "3"
    assert cache.get("d") == "4"
    assert cache.clear() == 2
    assert len(cache) == 0


def test_replacing_entry_moves_it_between_regions() -> None:
    cache = ResultCache()
    cache.put("a", "1", region="old")
    cache.put("a", "2", region="new")

    assert cache.clear("old") == 0
    assert cache.get("a") == "2"


def test_notify_changed_invalidates_watchers(tmp_path: Path) -> None:
    shared = tmp_path / "shared.css"
    shared.write_text("x", encoding="utf-8")
    other = tmp_path / "other.css"
    other.write_text("y", encoding="utf-8")
    cache = ResultCache()
    cache.put("first", "1", [shared])
    cache.put("second", "2", [shared, other])
    cache.put("third", "3", [other])

    assert cache.notify_changed(shared) == 2
    assert cache.get("first") is None
    assert cache.get("second") is None
    assert cache.get("third") == "3"
    assert cache.notify_changed(shared) == 0


def test_recorded_mtime_is_kept_instead_of_restatting(tmp_path: Path) -> None:
    source = tmp_path / "a.css"
    source.write_text(".a{}", encoding="utf-8")
    read_at = source.stat().st_mtime_ns
    _bump_mtime(source)
    cache = ResultCache()

    cache.put("key", ".a{}", {source: read_at})

    assert cache.get("key") is None


class _RebuildDuringClear(ResultCache):
    """Re-inserts keys between the clear snapshot and the removals."""

    def _snapshot(self, region: str | None) -> list[CacheEntry]:
        snapshot = super()._snapshot(region)
        self.put("a", "rebuilt", region=region)
        self.put("c", "new", region=region)
        return snapshot


def test_clear_region_keeps_entries_inserted_after_snapshot() -> None:
    cache = _RebuildDuringClear()
    cache.put("a", "1", region="styles")
    cache.put("b", "2", region="styles")

    assert cache.clear("styles") == 1
    assert cache.get("a") == "rebuilt"
    assert cache.get("b") is None
    assert cache.get("c") == "new"
