"""SASS and SCSS compilation through libsass."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import sass

from bundlekit.constants.bundling import DOT_CSS, DOT_SASS, DOT_SCSS, SASS_PRECISION
from bundlekit.constants.patterns import QUOTED_TARGET_PATTERN, SASS_IMPORT_PATTERN
from bundlekit.exceptions import CompilationError
from bundlekit.preprocessors.imports import collect_imports

if TYPE_CHECKING:
    from bundlekit.processors.session import BuildSession

logger = logging.getLogger(__name__)


def _targets(text: str) -> list[str]:
    targets: list[str] = []
    for match in SASS_IMPORT_PATTERN.finditer(text):
        targets.extend(QUOTED_TARGET_PATTERN.findall(match.group("targets")))
    # Built-in modules such as "sass:math" are not files.
    return [target for target in targets if not target.startswith("sass:")]


def _candidates(directory: Path, target: str) -> list[Path]:
    path = directory / target
    if path.suffix.lower() in (DOT_SCSS, DOT_SASS, DOT_CSS):
        return [path.resolve(), path.with_name("_" + path.name).resolve()]
    found: list[Path] = []
    for extension in (DOT_SCSS, DOT_SASS, DOT_CSS):
        found.append(path.with_name(path.name + extension).resolve())
        found.append(path.with_name("_" + path.name + extension).resolve())
    for extension in (DOT_SCSS, DOT_SASS):
        found.append((path / f"_index{extension}").resolve())
        found.append((path / f"index{extension}").resolve())
    return found


@dataclass(frozen=True)
class SassPreprocessor:
    """Compiles ``.scss`` and indented ``.sass`` sources to CSS."""

    precision: int = SASS_PRECISION

    def __call__(self, text: str, path: Path, session: BuildSession, ancestors: tuple[Path, ...]) -> str:
        output_style = "compressed" if session.options.minify else "expanded"
        imports = collect_imports(text, path.parent, find_targets=_targets, candidates=_candidates)
        try:
            css = sass.compile(
                string=text,
                indented=path.suffix.lower() == DOT_SASS,
                include_paths=[str(path.parent)],
                output_style=output_style,
                precision=self.precision,
            )
        except sass.CompileError as exc:
            raise CompilationError(str(exc), str(path)) from exc

        for imported, mtime_ns in imports.items():
            session.add_file_monitor(imported, mtime_ns)
        logger.debug("Compiled SASS %s (%s)", path, output_style)
        return css
