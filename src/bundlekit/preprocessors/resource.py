"""Rewrites relative ``url(...)`` references so they survive relocation."""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from bundlekit.constants.bundling import SCHEME_DELIMITER
from bundlekit.constants.patterns import CSS_URL_PATTERN
from bundlekit.types import AssetKind

if TYPE_CHECKING:
    from bundlekit.processors.session import BuildSession

_ABSOLUTE_PREFIXES: tuple[str, ...] = ("/", "#", "data:", "about:", "%23")


def _is_relative_reference(url: str) -> bool:
    lowered = url.lower()
    return not (SCHEME_DELIMITER in lowered or lowered.startswith(_ABSOLUTE_PREFIXES) or "$" in url)


def _split_suffix(url: str) -> tuple[str, str]:
    for index, char in enumerate(url):
        if char in "?#":
            return url[:index], url[index:]
    return url, ""


@dataclass(frozen=True)
class ResourcePreprocessor:
    """Final pass for every file.

    Stylesheets are served from the output directory once combined, so a
    relative ``url(../img/x.png)`` is rewritten to the root-relative URL it
    meant in the source file's directory. Scripts pass through unchanged.
    """

    def __call__(self, text: str, path: Path, session: BuildSession, ancestors: tuple[Path, ...]) -> str:
        if session.kind is not AssetKind.STYLE or "url(" not in text.lower():
            return text
        base_url = session.resolver.to_url(path.parent)
        if base_url is None:
            return text

        def rewrite(match: re.Match[str]) -> str:
            url = match.group("url").strip()
            if not _is_relative_reference(url):
                return match.group(0)
            location, suffix = _split_suffix(url)
            absolute = posixpath.normpath(posixpath.join(base_url, location))
            quote = match.group("quote")
            return f"url({quote}{absolute}{suffix}{quote})"

        return CSS_URL_PATTERN.sub(rewrite, text)
