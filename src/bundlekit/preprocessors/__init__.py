"""Extension-selected source transforms applied before files are combined."""

from .chain import EXTENSION_KINDS, PreprocessorChain, PreprocessorKind

__all__ = ["EXTENSION_KINDS", "PreprocessorChain", "PreprocessorKind"]
