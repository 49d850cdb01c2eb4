"""Shared build flow: fingerprint, keyed lock, cache, build, store."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, ClassVar

from bundlekit.caching import build_cache_key
from bundlekit.processors.session import BuildSession
from bundlekit.types import AssetKind

if TYPE_CHECKING:
    from bundlekit.context import BundlerContext

logger = logging.getLogger(__name__)


class BundleProcessor:
    """Builds one asset kind; subclasses supply the post-concatenation steps."""

    kind: ClassVar[AssetKind]
    region: ClassVar[str]
    source_extensions: ClassVar[frozenset[str]]

    def __init__(self, context: BundlerContext) -> None:
        self.context = context

    async def process(self, tokens: Sequence[str], *, minify: bool) -> str:
        """Return the combined output for ``tokens``, building it at most once per key."""
        file_set = tuple(tokens)
        if not file_set:
            return ""

        key = build_cache_key(file_set, self.kind, minify=minify)
        async with self.context.locks.lock(key):
            cached = await asyncio.to_thread(self.context.cache.get, key)
            if isinstance(cached, str):
                logger.debug("Cache hit for %s bundle %s", self.kind.value, key)
                return cached

            logger.debug("Building %s bundle %s from %d tokens", self.kind.value, key, len(file_set))
            session = self.context.new_session(self.kind, minify=minify)
            content = await self.build(file_set, session)
            self.context.cache.put(
                key,
                content,
                session.watched,
                region=self.context.region_for(self.region),
            )
            return content

    async def build(self, file_set: tuple[str, ...], session: BuildSession) -> str:
        expanded = await asyncio.to_thread(self.context.expander.expand, file_set, session=session)
        parts: list[str] = []
        for token in expanded.files:
            path = self._source_path(token)
            if path is None:
                continue
            parts.append(await asyncio.to_thread(session.load_file, path))
        return await self.finish("\n".join(parts), session)

    async def finish(self, combined: str, session: BuildSession) -> str:
        raise NotImplementedError

    def _source_path(self, token: str) -> Path | None:
        resolved = self.context.resolver.resolve(token)
        if isinstance(resolved, str):
            logger.warning("Skipping remote %s reference %s", self.kind.value, resolved)
            return None
        if PurePath(resolved).suffix.lower() not in self.source_extensions:
            logger.warning("Skipping %s: not a %s source file", resolved, self.kind.value)
            return None
        return resolved
