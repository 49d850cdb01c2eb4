"""Script bundles: inline imports, concatenate, minify."""

from __future__ import annotations

import asyncio

from bundlekit.compression import minify_javascript
from bundlekit.constants.bundling import SCRIPT_SOURCE_EXTENSIONS
from bundlekit.constants.cache import REGION_SCRIPTS
from bundlekit.processors.base import BundleProcessor
from bundlekit.processors.session import BuildSession
from bundlekit.types import AssetKind


class ScriptProcessor(BundleProcessor):
    kind = AssetKind.SCRIPT
    region = REGION_SCRIPTS
    source_extensions = SCRIPT_SOURCE_EXTENSIONS

    async def finish(self, combined: str, session: BuildSession) -> str:
        if not session.options.minify:
            return combined
        return await asyncio.to_thread(minify_javascript, combined, True)
