"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "bundlekit.yaml"

DEFAULT_OUTPUT_PATH: str = "~/bundles"
DEFAULT_DAYS_TO_KEEP: int = 7
DEFAULT_WATCH_FILES: bool = True
DEFAULT_DEBUG: bool = False

DEFAULT_AUTOPREFIXER_BROWSERS: tuple[str, ...] = ("last 2 versions",)

# "no-2009" is the only string value autoprefixer accepts for flexbox.
AUTOPREFIXER_FLEXBOX_MODES: frozenset[str] = frozenset({"no-2009"})
