"""Compiled regular expressions for import statements and URL references."""

from __future__ import annotations

import re

# @import url("file.css") screen and (max-width: 600px);
CSS_IMPORT_PATTERN: re.Pattern[str] = re.compile(
    r"""@import\s*url\(\s*["']?\s*(?P<filename>[^"')\s]+\.\w+ss)\s*["']?\s*\)(?P<media>[^;@]+)?;""",
    re.IGNORECASE,
)

# import "file.js";
JS_IMPORT_PATTERN: re.Pattern[str] = re.compile(
    r"""^[ \t]*import\s*(["'])\s*(?P<filename>[^"'\n]+?\.js)\s*\1\s*;""",
    re.IGNORECASE | re.MULTILINE,
)

# @import "file"; @import (reference) "file.less"; @import url(file.less);
LESS_IMPORT_PATTERN: re.Pattern[str] = re.compile(
    r"""@import\s*(?:\([^)]*\)\s*)?(?:url\(\s*)?["']?(?P<filename>[^"');\s]+)["']?\s*\)?[^;]*;""",
    re.IGNORECASE,
)

# @import "a", "b"; @use "x" as y; @forward "z";
SASS_IMPORT_PATTERN: re.Pattern[str] = re.compile(
    r"""@(?:import|use|forward)\s+(?P<targets>(?:["'][^"']+["']\s*,?\s*)+)""",
    re.IGNORECASE,
)
QUOTED_TARGET_PATTERN: re.Pattern[str] = re.compile(r"""["']([^"']+)["']""")

CSS_URL_PATTERN: re.Pattern[str] = re.compile(
    r"""url\(\s*(?P<quote>["']?)(?P<url>[^"')]+?)(?P=quote)\s*\)""",
    re.IGNORECASE,
)
