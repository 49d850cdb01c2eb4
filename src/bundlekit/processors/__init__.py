"""Build orchestration for style and script bundles."""

from .base import BundleProcessor
from .script import ScriptProcessor
from .session import BuildSession, BundleOptions
from .style import StyleProcessor

__all__ = ["BuildSession", "BundleOptions", "BundleProcessor", "ScriptProcessor", "StyleProcessor"]
