"""JSON Schema for ``bundlekit.yaml``."""

from __future__ import annotations

from typing import Any

from bundlekit.constants.config import AUTOPREFIXER_FLEXBOX_MODES

_STRING_LIST: dict[str, Any] = {"type": "array", "items": {"type": "string"}}

AUTOPREFIXER_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "enabled": {"type": "boolean"},
        "browsers": {"oneOf": [_STRING_LIST, {"type": "string"}]},
        "cascade": {"type": "boolean"},
        "add": {"type": "boolean"},
        "remove": {"type": "boolean"},
        "supports": {"type": "boolean"},
        "flexbox": {"oneOf": [{"type": "boolean"}, {"enum": sorted(AUTOPREFIXER_FLEXBOX_MODES)}]},
        "grid": {"type": "boolean"},
        "stats": {"type": ["string", "null"]},
    },
}

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "web_root": {"type": "string"},
        "output_path": {"type": "string", "minLength": 1},
        "script_output_path": {"type": ["string", "null"]},
        "style_output_path": {"type": ["string", "null"]},
        "days_to_keep": {"type": "integer"},
        "watch_files": {"type": "boolean"},
        "watch_always": _STRING_LIST,
        "debug": {"type": "boolean"},
        "site_url": {"type": ["string", "null"]},
        "remote_allowlist": _STRING_LIST,
        "autoprefixer": {"oneOf": [AUTOPREFIXER_SCHEMA, {"type": "null"}]},
    },
}
