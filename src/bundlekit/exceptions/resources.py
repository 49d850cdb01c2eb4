"""Exceptions for unresolvable source files and manifests."""

from __future__ import annotations

from bundlekit.exceptions.base import BundleKitError


class ResourceNotFoundError(BundleKitError, FileNotFoundError):
    """Raised when a referenced source file, manifest or stats file does not exist."""

    def __init__(self, reference: str, referrer: str | None = None) -> None:
        self.reference = reference
        self.referrer = referrer
        message = f"Resource not found: {reference}"
        if referrer:
            message = f"{message} (referenced by {referrer})"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class ImportCycleError(BundleKitError, ValueError):
    """Raised when a bundle manifest or import statement includes itself."""

    def __init__(self, chain: tuple[str, ...]) -> None:
        self.chain = chain
        super().__init__("Import cycle detected: " + " -> ".join(chain))
