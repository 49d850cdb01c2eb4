"""Shared exception hierarchy for bundlekit."""

from __future__ import annotations

from .base import BundleKitError
from .compilation import CompilationError, PostprocessingError
from .config import ConfigError
from .resources import ImportCycleError, ResourceNotFoundError

__all__ = [
    "BundleKitError",
    "CompilationError",
    "ConfigError",
    "ImportCycleError",
    "PostprocessingError",
    "ResourceNotFoundError",
]
