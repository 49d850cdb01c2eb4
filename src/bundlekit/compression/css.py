"""CSS minification through rcssmin."""

from __future__ import annotations

import rcssmin


def minify_css(stylesheet: str, aggressive: bool = True) -> str:
    """Strip comments and whitespace; non-aggressive mode keeps the stylesheet as written."""
    if not stylesheet or not stylesheet.strip():
        return ""
    if not aggressive:
        return stylesheet
    return rcssmin.cssmin(stylesheet, keep_bang_comments=False)
