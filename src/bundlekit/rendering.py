"""HTML tag rendering for bundle URLs."""

from __future__ import annotations

import html
from collections.abc import Mapping

from bundlekit.constants.rendering import LINK_TEMPLATE, SCRIPT_TEMPLATE
from bundlekit.types import ScriptLoad

AttributeValue = str | int | bool | list[str] | tuple[str, ...] | None


def html_attributes(attributes: Mapping[str, AttributeValue] | None, prefix: str = "", suffix: str = "") -> str:
    """Render ``attributes`` as HTML attribute text.

    Underscores in names become dashes (``data_id`` -> ``data-id``). An empty
    string or ``True`` renders a bare attribute; ``None`` and ``False`` are
    left out. Sequence values are joined with spaces. ``prefix``/``suffix``
    are only added when at least one attribute was rendered.
    """
    if not attributes:
        return ""

    rendered: list[str] = []
    for name, value in attributes.items():
        if value is None or value is False:
            continue
        key = name.replace("_", "-")
        if value is True:
            text = ""
        elif isinstance(value, (list, tuple)):
            text = " ".join(str(item) for item in value)
        else:
            text = str(value)
        rendered.append(f'{key}="{html.escape(text, quote=True)}"' if text else key)

    if not rendered:
        return ""
    return f"{prefix}{' '.join(rendered)}{suffix}"


def render_link(url: str, attributes: Mapping[str, AttributeValue] | None = None) -> str:
    return LINK_TEMPLATE.format(url=html.escape(url, quote=True), attributes=html_attributes(attributes, suffix=" "))


def render_script(
    url: str,
    attributes: Mapping[str, AttributeValue] | None = None,
    load: ScriptLoad = ScriptLoad.INLINE,
) -> str:
    load_text = "" if load is ScriptLoad.INLINE else f" {load.value}"
    return SCRIPT_TEMPLATE.format(
        url=html.escape(url, quote=True),
        load=load_text,
        attributes=html_attributes(attributes, prefix=" "),
    )
