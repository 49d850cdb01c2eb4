"""Shared value types for bundlekit."""

from .assets import AssetKind, BundleOutput, ScriptLoad
from .config import AutoPrefixerConfig

__all__ = [
    "AssetKind",
    "AutoPrefixerConfig",
    "BundleOutput",
    "ScriptLoad",
]
