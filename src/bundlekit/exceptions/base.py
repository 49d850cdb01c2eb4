"""Root of the bundlekit exception hierarchy."""

from __future__ import annotations


class BundleKitError(Exception):
    """Base class for all errors raised by bundlekit."""
