"""Expansion of ``.bundle`` manifests into concrete file lists."""

from .expander import BundleExpander, ExpandedFiles, is_bundle_token

__all__ = ["BundleExpander", "ExpandedFiles", "is_bundle_token"]
