"""Configuration-related exceptions."""

from __future__ import annotations

from bundlekit.exceptions.base import BundleKitError


class ConfigError(BundleKitError, ValueError):
    """Raised when bundler configuration is invalid."""
