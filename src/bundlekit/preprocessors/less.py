"""LESS compilation through lesscpy."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import lesscpy

from bundlekit.constants.bundling import DOT_LESS
from bundlekit.constants.patterns import LESS_IMPORT_PATTERN
from bundlekit.exceptions import CompilationError
from bundlekit.preprocessors.imports import collect_imports

if TYPE_CHECKING:
    from bundlekit.processors.session import BuildSession

logger = logging.getLogger(__name__)


class _NamedSource(io.StringIO):
    """In-memory source that tells lesscpy where it lives, so imports resolve beside it."""

    def __init__(self, text: str, name: str) -> None:
        super().__init__(text)
        self.name = name


class LessPathResolver:
    """Resolves LESS import targets relative to the importing file's directory."""

    def __init__(self, current_file_path: Path) -> None:
        self.current_file_path = current_file_path
        self.current_file_directory = current_file_path.parent

    @staticmethod
    def targets(text: str) -> list[str]:
        return [match.group("filename") for match in LESS_IMPORT_PATTERN.finditer(text)]

    @staticmethod
    def candidates(directory: Path, target: str) -> list[Path]:
        path = directory / target
        if path.suffix:
            return [path.resolve()]
        return [path.with_name(path.name + DOT_LESS).resolve()]

    def imports(self, text: str) -> dict[Path, int | None]:
        """Every local file the compiler will read while compiling ``text``, with its mtime."""
        return collect_imports(
            text,
            self.current_file_directory,
            find_targets=self.targets,
            candidates=self.candidates,
        )


@dataclass(frozen=True)
class LessPreprocessor:
    """Compiles ``.less`` sources to CSS; compression is left to the minifier."""

    def __call__(self, text: str, path: Path, session: BuildSession, ancestors: tuple[Path, ...]) -> str:
        # Imports are stat'ed before the compiler reads them.
        imports = LessPathResolver(path).imports(text)
        try:
            css = lesscpy.compile(_NamedSource(text, str(path)), minify=False)
        except Exception as exc:
            raise CompilationError(str(exc) or type(exc).__name__, str(path)) from exc

        for imported, mtime_ns in imports.items():
            session.add_file_monitor(imported, mtime_ns)
        logger.debug("Compiled LESS %s", path)
        return css
