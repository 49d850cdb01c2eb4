"""Config data model for bundlekit."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from bundlekit.constants.config import (
    DEFAULT_DAYS_TO_KEEP,
    DEFAULT_DEBUG,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_WATCH_FILES,
)
from bundlekit.types import AssetKind, BundleOutput
from bundlekit.types.config import AutoPrefixerConfig


@dataclass(frozen=True)
class BundlerConfig:
    """Resolved bundler settings, set once at startup."""

    web_root: Path = field(default_factory=Path.cwd)
    output_path: str = DEFAULT_OUTPUT_PATH
    script_output_path: str | None = None
    style_output_path: str | None = None
    days_to_keep: int = DEFAULT_DAYS_TO_KEEP
    watch_files: bool = DEFAULT_WATCH_FILES
    watch_always: tuple[str, ...] = ()
    debug: bool = DEFAULT_DEBUG
    site_url: str | None = None
    remote_allowlist: tuple[str, ...] = ()
    autoprefixer: AutoPrefixerConfig = AutoPrefixerConfig()

    def output_path_for(self, kind: AssetKind) -> str:
        """Virtual output directory for the given asset kind."""
        if kind is AssetKind.SCRIPT and self.script_output_path:
            return self.script_output_path
        if kind is AssetKind.STYLE and self.style_output_path:
            return self.style_output_path
        return self.output_path

    @property
    def default_output(self) -> BundleOutput:
        """Per-file, unminified output while debugging; one minified file otherwise."""
        return BundleOutput.NORMAL if self.debug else BundleOutput.MINIFIED_AND_COMBINED

    @property
    def trimming_enabled(self) -> bool:
        return self.days_to_keep >= 1

    def is_allowed_remote(self, token: str) -> bool:
        """Whether a remote URL may be rendered without bundling."""
        lowered = token.strip().lower()
        return any(lowered.startswith(prefix.lower()) for prefix in self.remote_allowlist)
