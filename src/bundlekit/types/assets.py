"""Enumerations describing asset kinds and rendering modes."""

from __future__ import annotations

from enum import Enum

from bundlekit.constants.bundling import DOT_CSS, DOT_JS


class AssetKind(str, Enum):
    """Kind of asset a bundle produces."""

    STYLE = "style"
    SCRIPT = "script"

    @property
    def extension(self) -> str:
        return DOT_CSS if self is AssetKind.STYLE else DOT_JS


class BundleOutput(str, Enum):
    """How a group of files is rendered."""

    NORMAL = "normal"
    MINIFIED = "minified"
    COMBINED = "combined"
    MINIFIED_AND_COMBINED = "minified-and-combined"

    @property
    def combined(self) -> bool:
        return self in (BundleOutput.COMBINED, BundleOutput.MINIFIED_AND_COMBINED)

    @property
    def minified(self) -> bool:
        return self in (BundleOutput.MINIFIED, BundleOutput.MINIFIED_AND_COMBINED)


class ScriptLoad(str, Enum):
    """Loading behaviour rendered on ``<script>`` tags."""

    INLINE = "inline"
    ASYNC = "async"
    DEFER = "defer"
