"""Stable keys for file sets and content-addressed output names."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from pathlib import PurePath

from bundlekit.constants.bundling import DOT_MIN
from bundlekit.types import AssetKind


def md5_fingerprint(text: str) -> str:
    """Return the lowercase md5 hex digest of ``text``; blank input has no fingerprint."""
    if not text or not text.strip():
        return ""
    return hashlib.md5(text.encode("utf-8"), usedforsecurity=False).hexdigest()


def build_cache_key(tokens: Sequence[str], kind: AssetKind, *, minify: bool) -> str:
    """Return the cache key for an ordered file set rendered in the given mode.

    Order is significant: ``[a, b]`` and ``[b, a]`` concatenate differently and
    therefore get different keys.
    """
    canonical = "\n".join([kind.value, *tokens])
    digest = hashlib.md5(canonical.encode("utf-8"), usedforsecurity=False).hexdigest()
    return f"{digest}{DOT_MIN}" if minify else digest


def output_file_name(content: str, kind: AssetKind, *, minify: bool, source: str | None = None) -> str:
    """Name of the physical file for a built artifact.

    Combined output is ``<md5>.{min.}ext``; per-file output keeps the source
    basename as a prefix: ``<basename>.<md5>.{min.}ext``.
    """
    extension = f"{DOT_MIN}{kind.extension}" if minify else kind.extension
    digest = md5_fingerprint(content)
    if source is None:
        return f"{digest}{extension}"
    stem = PurePath(source.replace("\\", "/")).stem
    return f"{stem}.{digest}{extension}"
