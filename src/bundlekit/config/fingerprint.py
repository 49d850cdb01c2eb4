"""Config fingerprinting for cache regions."""

from __future__ import annotations

import hashlib
import json

from bundlekit.config.model import BundlerConfig


def config_fingerprint(config: BundlerConfig) -> str:
    """Return a stable hash of every setting that affects generated output."""
    payload = {
        "web_root": config.web_root.as_posix(),
        "output_path": config.output_path,
        "script_output_path": config.script_output_path,
        "style_output_path": config.style_output_path,
        "watch_files": config.watch_files,
        "watch_always": list(config.watch_always),
        "site_url": config.site_url,
        "remote_allowlist": list(config.remote_allowlist),
        "autoprefixer_enabled": config.autoprefixer.enabled,
        "autoprefixer_browsers": list(config.autoprefixer.browsers),
        "autoprefixer_cascade": config.autoprefixer.cascade,
        "autoprefixer_add": config.autoprefixer.add,
        "autoprefixer_remove": config.autoprefixer.remove,
        "autoprefixer_supports": config.autoprefixer.supports,
        "autoprefixer_flexbox": config.autoprefixer.flexbox,
        "autoprefixer_grid": config.autoprefixer.grid,
        "autoprefixer_stats": config.autoprefixer.stats,
    }
    blob = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(blob).hexdigest()
