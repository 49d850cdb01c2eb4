"""Typed configuration structures for bundlekit settings."""

from __future__ import annotations

from dataclasses import dataclass

from bundlekit.constants.config import DEFAULT_AUTOPREFIXER_BROWSERS


@dataclass(frozen=True)
class AutoPrefixerConfig:
    """Vendor-prefixing options passed to the autoprefixer engine."""

    enabled: bool = True
    browsers: tuple[str, ...] = DEFAULT_AUTOPREFIXER_BROWSERS
    cascade: bool = True
    add: bool = True
    remove: bool = True
    supports: bool = True
    flexbox: bool | str = True
    grid: bool = True
    stats: str | None = None
