"""Errors reported by preprocessors and postprocessors."""

from __future__ import annotations

from bundlekit.exceptions.base import BundleKitError


class CompilationError(BundleKitError, RuntimeError):
    """Raised when the LESS or SASS compiler rejects a source file."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class PostprocessingError(BundleKitError, RuntimeError):
    """Raised when the vendor-prefixing engine reports an error."""
