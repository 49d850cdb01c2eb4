"""Postprocessors applied to combined stylesheets."""

from .autoprefixer import AutoPrefixer, NodeAutoPrefixEngine, PrefixEngine, format_error_details

__all__ = ["AutoPrefixer", "NodeAutoPrefixEngine", "PrefixEngine", "format_error_details"]
