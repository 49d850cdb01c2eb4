"""File extensions and token conventions used across the pipeline."""

from __future__ import annotations

DOT_BUNDLE: str = ".bundle"
DOT_CSS: str = ".css"
DOT_LESS: str = ".less"
DOT_SASS: str = ".sass"
DOT_SCSS: str = ".scss"
DOT_JS: str = ".js"
DOT_MIN: str = ".min"

BUNDLE_COMMENT_PREFIX: str = "#"
SCHEME_DELIMITER: str = "://"
VIRTUAL_ROOT_PREFIX: str = "~/"

STYLE_SOURCE_EXTENSIONS: frozenset[str] = frozenset({DOT_CSS, DOT_LESS, DOT_SASS, DOT_SCSS})
SCRIPT_SOURCE_EXTENSIONS: frozenset[str] = frozenset({DOT_JS})

# Generated files the trimmer is allowed to delete.
MANAGED_OUTPUT_EXTENSIONS: frozenset[str] = frozenset({DOT_CSS, DOT_JS})

SASS_PRECISION: int = 5
