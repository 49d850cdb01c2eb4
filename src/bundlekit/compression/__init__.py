"""CSS and JavaScript minifiers."""

from .css import minify_css
from .javascript import minify_javascript

__all__ = ["minify_css", "minify_javascript"]
