"""In-memory result cache with file-change invalidation and region tags."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from bundlekit.io import file_mtime_ns

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached value plus the file snapshots and lifetime that govern it."""

    key: str
    value: object
    watched: dict[Path, int | None] = field(default_factory=dict)
    region: str | None = None
    inserted_at: float = 0.0
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at

    def changed_path(self) -> Path | None:
        """First watched path whose modification time differs from the snapshot."""
        for path, mtime_ns in self.watched.items():
            if file_mtime_ns(path) != mtime_ns:
                return path
        return None


def _is_empty(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


class ResultCache:
    """Process-local cache keyed by fingerprint.

    Entries are invalidated when a watched file changes: lookups compare the
    stored modification times with the current ones, and hosts that receive
    change notifications can push them through :meth:`notify_changed`.
    A secondary index from region tag to keys lets :meth:`clear` remove one
    region without scanning the whole cache.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, CacheEntry] = {}
        self._regions: dict[str, set[str]] = {}
        self._watchers: dict[Path, set[str]] = {}

    def get(self, key: str) -> object | None:
        """Return the cached value, or None when missing, expired or stale."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                self._remove(entry)
                return None
            changed = entry.changed_path()
            if changed is not None:
                logger.debug("Cache entry %s invalidated by change to %s", key, changed)
                self._remove(entry)
                return None
            return entry.value

    def put(
        self,
        key: str,
        value: object,
        watched_paths: Iterable[Path] | Mapping[Path, int | None] = (),
        *,
        region: str | None = None,
        ttl: float | None = None,
    ) -> bool:
        """Store ``value`` under ``key``; empty or whitespace-only values are never cached.

        ``watched_paths`` may map each path to the modification time recorded
        when it was read; bare paths are stat'ed now.
        """
        if _is_empty(value):
            logger.debug("Refusing to cache empty result for %s", key)
            return False

        if isinstance(watched_paths, Mapping):
            watched = dict(watched_paths)
        else:
            watched = {path: file_mtime_ns(path) for path in watched_paths}
        now = self._clock()
        entry = CacheEntry(
            key=key,
            value=value,
            watched=watched,
            region=region,
            inserted_at=now,
            expires_at=(now + ttl) if ttl is not None else None,
        )
        with self._lock:
            previous = self._entries.get(key)
            if previous is not None:
                self._remove(previous)
            self._entries[key] = entry
            if region is not None:
                self._regions.setdefault(region, set()).add(key)
            for path in watched:
                self._watchers.setdefault(path, set()).add(key)
        return True

    def invalidate(self, key: str) -> bool:
        """Remove a single entry; returns whether it existed."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False
            self._remove(entry)
            return True

    def clear(self, region: str | None = None) -> int:
        """Remove every entry, or only those tagged with ``region``.

        The entries to drop are snapshotted first; a key re-inserted after the
        snapshot is a different entry and survives the clear.
        """
        removed = 0
        for entry in self._snapshot(region):
            with self._lock:
                if self._entries.get(entry.key) is entry:
                    self._remove(entry)
                    removed += 1
        logger.debug("Cleared %d cache entries (region=%s)", removed, region)
        return removed

    def notify_changed(self, path: Path) -> int:
        """Invalidate every entry that watches ``path``; returns the number removed."""
        with self._lock:
            keys = list(self._watchers.get(path, ()))
            removed = 0
            for key in keys:
                entry = self._entries.get(key)
                if entry is not None:
                    self._remove(entry)
                    removed += 1
        if removed:
            logger.debug("File change %s invalidated %d cache entries", path, removed)
        return removed

    def entry(self, key: str) -> CacheEntry | None:
        """Raw entry lookup without staleness checks."""
        with self._lock:
            return self._entries.get(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _snapshot(self, region: str | None) -> list[CacheEntry]:
        with self._lock:
            if region is None:
                return list(self._entries.values())
            return [self._entries[key] for key in self._regions.get(region, ()) if key in self._entries]

    def _remove(self, entry: CacheEntry) -> None:
        # Caller holds self._lock.
        self._entries.pop(entry.key, None)
        if entry.region is not None:
            keys = self._regions.get(entry.region)
            if keys is not None:
                keys.discard(entry.key)
                if not keys:
                    del self._regions[entry.region]
        for path in entry.watched:
            keys = self._watchers.get(path)
            if keys is not None:
                keys.discard(entry.key)
                if not keys:
                    del self._watchers[path]
