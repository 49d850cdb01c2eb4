"""Explicit wiring of the shared bundler services."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from bundlekit.bundling import BundleExpander
from bundlekit.caching import AsyncKeyedMutex, ResultCache
from bundlekit.config import BundlerConfig, config_fingerprint, load_config
from bundlekit.constants.cache import REGION_MANIFESTS, REGION_SCRIPTS, REGION_SENTINELS, REGION_STYLES
from bundlekit.io import ResourceResolver
from bundlekit.output import OutputWriter
from bundlekit.postprocessors import AutoPrefixer, PrefixEngine
from bundlekit.preprocessors import PreprocessorChain
from bundlekit.processors.session import BuildSession, BundleOptions
from bundlekit.types import AssetKind


@dataclass
class BundlerContext:
    """Everything a render call needs, created once per site.

    Tests build one per case with fakes for the cache clock, the wall clock or
    the autoprefixer engine.
    """

    config: BundlerConfig
    cache: ResultCache = field(default_factory=ResultCache)
    locks: AsyncKeyedMutex = field(default_factory=AsyncKeyedMutex)
    chain: PreprocessorChain = field(default_factory=PreprocessorChain)
    autoprefix_engine: PrefixEngine | None = None
    wall_clock: Callable[[], float] = time.time

    def __post_init__(self) -> None:
        self.config_tag = config_fingerprint(self.config)[:12]
        self.resolver = ResourceResolver(self.config.web_root, self.config.site_url)
        self.expander = BundleExpander(self.resolver, self.cache, region=self.region_for(REGION_MANIFESTS))
        self.autoprefixer = AutoPrefixer(self.config.autoprefixer, self.resolver, self.autoprefix_engine)
        self.writer = OutputWriter(
            self.config,
            self.resolver,
            self.cache,
            region=self.region_for(REGION_SENTINELS),
            wall_clock=self.wall_clock,
        )
        self.watch_always = frozenset(
            path for path in (self.resolver.resolve_local(token) for token in self.config.watch_always) if path
        )

    @classmethod
    def from_root(
        cls,
        root: Path,
        config_path: Path | None = None,
        *,
        autoprefix_engine: PrefixEngine | None = None,
    ) -> BundlerContext:
        """Load the site configuration under ``root`` and wire a context for it."""
        return cls(load_config(root, config_path), autoprefix_engine=autoprefix_engine)

    def region_for(self, name: str) -> str:
        """Cache region tag scoped to this configuration."""
        return f"{name}:{self.config_tag}"

    def new_session(self, kind: AssetKind, *, minify: bool) -> BuildSession:
        options = BundleOptions(
            minify=minify,
            watch_files=self.config.watch_files,
            watch_always=self.watch_always,
        )
        return BuildSession(kind, options, self.resolver, self.chain)

    def clear_cache(self) -> int:
        """Drop this configuration's built bundles and manifest expansions."""
        return sum(self.cache.clear(self.region_for(name)) for name in (REGION_MANIFESTS, REGION_STYLES, REGION_SCRIPTS))
