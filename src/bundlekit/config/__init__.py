"""Configuration loading, validation, and normalization for bundlekit."""

from __future__ import annotations

from bundlekit.config.fingerprint import config_fingerprint
from bundlekit.config.loader import load_config, validate_raw_config
from bundlekit.config.model import BundlerConfig

__all__ = [
    "BundlerConfig",
    "config_fingerprint",
    "load_config",
    "validate_raw_config",
]
