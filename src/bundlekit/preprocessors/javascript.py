"""Inlining of ``import "file.js";`` statements."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from bundlekit.constants.patterns import JS_IMPORT_PATTERN

if TYPE_CHECKING:
    from bundlekit.processors.session import BuildSession


@dataclass(frozen=True)
class JavascriptImportPreprocessor:
    """Recursively replaces ``import "other.js";`` lines with the imported script."""

    def __call__(self, text: str, path: Path, session: BuildSession, ancestors: tuple[Path, ...]) -> str:
        if "import" not in text.lower():
            return text

        def inline(match: re.Match[str]) -> str:
            imported = session.resolver.resolve_local(match.group("filename"), path.parent)
            if imported is None:
                return match.group(0)
            return session.load_file(imported, ancestors)

        return JS_IMPORT_PATTERN.sub(inline, text)
