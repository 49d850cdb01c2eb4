"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "bundlekit"
CLI_DESCRIPTION: str = "\n".join(
    (
        ">_ bundlekit",
        "     // fingerprinted style and script bundles",
    )
)
