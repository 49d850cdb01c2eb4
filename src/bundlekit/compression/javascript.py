"""JavaScript minification through calmjs.parse, with rjsmin for sources it cannot parse."""

from __future__ import annotations

import logging

import rjsmin
from calmjs.parse import es5
from calmjs.parse.exceptions import ECMASyntaxError
from calmjs.parse.unparsers.es5 import minify_print

logger = logging.getLogger(__name__)


def minify_javascript(script: str, aggressive: bool = True) -> str:
    """Minify ``script``; non-aggressive mode preserves formatting and names.

    Aggressive mode strips comments and whitespace and renames local
    variables and function arguments. Globals keep their names so other
    scripts can still reach them. Sources outside the ES5 grammar are only
    stripped of comments and whitespace.
    """
    if not script or not script.strip():
        return ""
    if not aggressive:
        return script
    try:
        program = es5(script)
    except ECMASyntaxError as exc:
        logger.warning("Cannot rename locals, minifying whitespace only: %s", exc)
        return rjsmin.jsmin(script, keep_bang_comments=False)
    return minify_print(program, obfuscate=True, obfuscate_globals=False)
