"""HTML templates for rendered asset tags."""

from __future__ import annotations

LINK_TEMPLATE: str = '<link href="{url}" rel="stylesheet" {attributes}/>'
SCRIPT_TEMPLATE: str = '<script src="{url}"{load}{attributes}></script>'
