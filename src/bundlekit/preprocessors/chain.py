"""Dispatch table from file extension to preprocessor kinds."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Protocol

from bundlekit.constants.bundling import DOT_CSS, DOT_JS, DOT_LESS, DOT_SASS, DOT_SCSS

if TYPE_CHECKING:
    from bundlekit.processors.session import BuildSession


class PreprocessorKind(str, Enum):
    """Closed set of source transforms."""

    CSS_IMPORT = "css-import"
    LESS = "less"
    SASS = "sass"
    JS_IMPORT = "js-import"
    # Not bound to an extension: runs last for every file.
    RESOURCE = "resource"


class Transform(Protocol):
    def __call__(self, text: str, path: Path, session: BuildSession, ancestors: tuple[Path, ...]) -> str: ...


EXTENSION_KINDS: Mapping[str, tuple[PreprocessorKind, ...]] = {
    DOT_CSS: (PreprocessorKind.CSS_IMPORT,),
    DOT_LESS: (PreprocessorKind.LESS,),
    DOT_SASS: (PreprocessorKind.SASS,),
    DOT_SCSS: (PreprocessorKind.SASS,),
    DOT_JS: (PreprocessorKind.JS_IMPORT,),
}


def _default_transforms() -> dict[PreprocessorKind, Transform]:
    from bundlekit.preprocessors.css import CssImportPreprocessor
    from bundlekit.preprocessors.javascript import JavascriptImportPreprocessor
    from bundlekit.preprocessors.less import LessPreprocessor
    from bundlekit.preprocessors.resource import ResourcePreprocessor
    from bundlekit.preprocessors.sass import SassPreprocessor

    return {
        PreprocessorKind.CSS_IMPORT: CssImportPreprocessor(),
        PreprocessorKind.LESS: LessPreprocessor(),
        PreprocessorKind.SASS: SassPreprocessor(),
        PreprocessorKind.JS_IMPORT: JavascriptImportPreprocessor(),
        PreprocessorKind.RESOURCE: ResourcePreprocessor(),
    }


@dataclass(frozen=True)
class PreprocessorChain:
    """Selects and applies transforms by extension, always finishing with ``RESOURCE``."""

    transforms: Mapping[PreprocessorKind, Transform] = field(default_factory=_default_transforms)
    extension_kinds: Mapping[str, tuple[PreprocessorKind, ...]] = field(default_factory=lambda: dict(EXTENSION_KINDS))

    def __post_init__(self) -> None:
        missing = set(PreprocessorKind) - set(self.transforms)
        if missing:
            names = ", ".join(sorted(kind.value for kind in missing))
            raise ValueError(f"No transform registered for: {names}")

    @property
    def allowed_extensions(self) -> frozenset[str]:
        return frozenset(self.extension_kinds)

    def kinds_for(self, path: str | PurePath) -> tuple[PreprocessorKind, ...]:
        selected = self.extension_kinds.get(PurePath(str(path)).suffix.lower(), ())
        return (*selected, PreprocessorKind.RESOURCE)

    def apply(self, text: str, path: Path, session: BuildSession, ancestors: tuple[Path, ...]) -> str:
        for kind in self.kinds_for(path):
            text = self.transforms[kind](text, path, session, ancestors)
        return text

    def replace(self, kind: PreprocessorKind, transform: Transform) -> PreprocessorChain:
        """Copy of this chain with one transform swapped out."""
        transforms = dict(self.transforms)
        transforms[kind] = transform
        return PreprocessorChain(transforms=transforms, extension_kinds=self.extension_kinds)
