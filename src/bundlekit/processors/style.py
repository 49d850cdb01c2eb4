"""Stylesheet bundles: preprocess, concatenate, autoprefix, minify."""

from __future__ import annotations

import asyncio

from bundlekit.compression import minify_css
from bundlekit.constants.bundling import STYLE_SOURCE_EXTENSIONS
from bundlekit.constants.cache import REGION_STYLES
from bundlekit.processors.base import BundleProcessor
from bundlekit.processors.session import BuildSession
from bundlekit.types import AssetKind


class StyleProcessor(BundleProcessor):
    kind = AssetKind.STYLE
    region = REGION_STYLES
    source_extensions = STYLE_SOURCE_EXTENSIONS

    async def finish(self, combined: str, session: BuildSession) -> str:
        prefixed = await self.context.autoprefixer.process(combined)
        if not session.options.minify:
            return prefixed
        return await asyncio.to_thread(minify_css, prefixed, True)
