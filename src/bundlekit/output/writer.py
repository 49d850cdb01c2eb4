"""Writes built artifacts to disk and trims stale generated files.

Disk checks are rate-limited with short-lived sentinel entries in the result
cache, so a busy site touches the file system at most once a minute per
output file. Sentinel lifetimes follow the cache clock; file ages follow the
wall clock because they are compared with on-disk timestamps.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from bundlekit.caching import ResultCache
from bundlekit.config import BundlerConfig
from bundlekit.constants.bundling import MANAGED_OUTPUT_EXTENSIONS
from bundlekit.constants.cache import (
    FILE_EXISTS_CHECK_SECONDS,
    FILE_EXISTS_SENTINEL_PREFIX,
    FILE_TOUCH_INTERVAL_SECONDS,
    FILE_TOUCH_SENTINEL_PREFIX,
    OUTPUT_TEMP_PREFIX,
    OUTPUT_TEMP_SUFFIX,
    REGION_SENTINELS,
    SECONDS_PER_DAY,
    SENTINEL_VALUE,
    TRIM_INTERVAL_SECONDS,
    TRIM_SENTINEL_PREFIX,
    TRIM_STARTUP_DELAY_SECONDS,
    TRIM_STARTUP_SENTINEL_PREFIX,
)
from bundlekit.io import ResourceResolver, write_text_atomic
from bundlekit.types import AssetKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrimReport:
    """Outcome of one trim pass over an output directory."""

    directory: Path
    deleted: tuple[Path, ...] = ()
    kept: int = 0
    failed: int = 0


def _creation_time(path: Path) -> float:
    try:
        stat = path.stat()
    except OSError:
        return 0.0
    return getattr(stat, "st_birthtime", stat.st_ctime)


class OutputWriter:
    def __init__(
        self,
        config: BundlerConfig,
        resolver: ResourceResolver,
        cache: ResultCache,
        *,
        region: str = REGION_SENTINELS,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config
        self.resolver = resolver
        self.cache = cache
        self.region = region
        self._wall_clock = wall_clock

    def output_directory(self, kind: AssetKind) -> Path:
        return self.resolver.map_virtual_directory(self.config.output_path_for(kind))

    async def get_or_create_file(self, file_name: str, content: str, kind: AssetKind) -> str:
        """Make sure ``file_name`` exists in the output directory and return its URL."""
        await self.trim(kind)

        file_path = self.output_directory(kind) / file_name
        exists_key = f"{FILE_EXISTS_SENTINEL_PREFIX}{file_path}"
        if self.cache.get(exists_key) is None:
            await asyncio.to_thread(self._ensure_file, file_path, content)
            self._arm(exists_key, FILE_EXISTS_CHECK_SECONDS)

        return self.resolver.virtual_to_url(self.config.output_path_for(kind), file_name)

    async def trim(self, kind: AssetKind, *, force: bool = False) -> TrimReport | None:
        """Delete generated files older than the retention window.

        Runs at most once per interval per directory. The first call after
        startup only arms the interval, so a restart does not trim straight away.
        ``force`` skips the rate limit and re-arms it.
        """
        if not self.config.trimming_enabled:
            return None

        directory = self.output_directory(kind)
        startup_key = f"{TRIM_STARTUP_SENTINEL_PREFIX}{directory}"
        interval_key = f"{TRIM_SENTINEL_PREFIX}{directory}"
        if not force:
            if self.cache.get(startup_key) is None:
                self._arm(startup_key, None)
                self._arm(interval_key, TRIM_STARTUP_DELAY_SECONDS)
                return None
            if self.cache.get(interval_key) is not None:
                return None

        self._arm(interval_key, TRIM_INTERVAL_SECONDS)
        report = await asyncio.to_thread(self._trim_directory, directory)
        logger.info(
            "Trimmed %s: %d deleted, %d kept, %d failed",
            directory,
            len(report.deleted),
            report.kept,
            report.failed,
        )
        return report

    def _arm(self, key: str, ttl: float | None) -> None:
        self.cache.put(key, SENTINEL_VALUE, region=self.region, ttl=ttl)

    def _ensure_file(self, file_path: Path, content: str) -> None:
        if file_path.exists():
            touch_key = f"{FILE_TOUCH_SENTINEL_PREFIX}{file_path}"
            if self.cache.get(touch_key) is None:
                # Keeps files that are still being served out of the trim window.
                os.utime(file_path)
                self._arm(touch_key, FILE_TOUCH_INTERVAL_SECONDS)
            return

        file_path.parent.mkdir(parents=True, exist_ok=True)
        write_text_atomic(
            path=file_path,
            content=content,
            temp_prefix=OUTPUT_TEMP_PREFIX,
            temp_suffix=OUTPUT_TEMP_SUFFIX,
        )
        logger.info("Wrote %s", file_path)

    def _trim_directory(self, directory: Path) -> TrimReport:
        if not directory.is_dir():
            return TrimReport(directory=directory)

        candidates = [
            path for path in directory.iterdir() if path.suffix.lower() in MANAGED_OUTPUT_EXTENSIONS and path.is_file()
        ]
        candidates.sort(key=_creation_time)

        cutoff = self._wall_clock() - self.config.days_to_keep * SECONDS_PER_DAY
        deleted: list[Path] = []
        kept = 0
        failed = 0
        for path in candidates:
            try:
                if path.stat().st_mtime > cutoff:
                    kept += 1
                    continue
                path.unlink()
            except OSError as exc:
                logger.debug("Could not trim %s: %s", path, exc)
                failed += 1
                continue
            deleted.append(path)
        return TrimReport(directory=directory, deleted=tuple(deleted), kept=kept, failed=failed)
