"""Inlining of ``@import url(...)`` statements in plain CSS."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from bundlekit.constants.bundling import SCHEME_DELIMITER
from bundlekit.constants.patterns import CSS_IMPORT_PATTERN

if TYPE_CHECKING:
    from bundlekit.processors.session import BuildSession


@dataclass(frozen=True)
class CssImportPreprocessor:
    """Replaces local ``@import url(...)`` statements with the imported stylesheet.

    An optional media clause wraps the imported rules in ``@media``. Remote
    imports are left in place for the browser to fetch.
    """

    def __call__(self, text: str, path: Path, session: BuildSession, ancestors: tuple[Path, ...]) -> str:
        if "@import" not in text.lower():
            return text

        def inline(match: re.Match[str]) -> str:
            filename = match.group("filename")
            if SCHEME_DELIMITER in filename:
                return match.group(0)
            imported = session.resolver.resolve_local(filename, path.parent)
            if imported is None:
                return match.group(0)
            css = session.load_file(imported, ancestors)
            media = (match.group("media") or "").strip()
            if media:
                return f"@media {media} {{\n{css}\n}}"
            return css

        return CSS_IMPORT_PATTERN.sub(inline, text)
