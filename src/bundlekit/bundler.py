"""Async rendering facade: file tokens in, URLs or HTML tags out."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence

from bundlekit.caching import output_file_name
from bundlekit.context import BundlerContext
from bundlekit.processors import BundleProcessor, ScriptProcessor, StyleProcessor
from bundlekit.rendering import AttributeValue, render_link, render_script
from bundlekit.types import AssetKind, BundleOutput, ScriptLoad

logger = logging.getLogger(__name__)

_Run = tuple[str, ...] | str


class Bundler:
    """Renders style and script groups for a site.

    Within a group, allow-listed remote URLs are emitted in place and the
    local tokens between them are built as separate runs, so page order is
    preserved.
    """

    def __init__(self, context: BundlerContext) -> None:
        self.context = context
        self.processors: dict[AssetKind, BundleProcessor] = {
            AssetKind.STYLE: StyleProcessor(context),
            AssetKind.SCRIPT: ScriptProcessor(context),
        }

    async def style_urls(self, tokens: Sequence[str], output: BundleOutput | None = None) -> list[str]:
        return await self._urls(tokens, AssetKind.STYLE, output)

    async def script_urls(self, tokens: Sequence[str], output: BundleOutput | None = None) -> list[str]:
        return await self._urls(tokens, AssetKind.SCRIPT, output)

    async def styles(
        self,
        tokens: Sequence[str],
        attributes: Mapping[str, AttributeValue] | None = None,
        output: BundleOutput | None = None,
    ) -> str:
        urls = await self.style_urls(tokens, output)
        return "\n".join(render_link(url, attributes) for url in urls)

    async def scripts(
        self,
        tokens: Sequence[str],
        attributes: Mapping[str, AttributeValue] | None = None,
        output: BundleOutput | None = None,
        load: ScriptLoad = ScriptLoad.INLINE,
    ) -> str:
        urls = await self.script_urls(tokens, output)
        return "\n".join(render_script(url, attributes, load) for url in urls)

    async def _urls(self, tokens: Sequence[str], kind: AssetKind, output: BundleOutput | None) -> list[str]:
        output = output or self.context.config.default_output
        urls: list[str] = []
        for run in self._runs(tokens):
            if isinstance(run, str):
                urls.append(run)
            elif output.combined:
                url = await self._build_url(run, kind, output, source=None)
                if url is not None:
                    urls.append(url)
            else:
                urls.extend(await self._per_file_urls(run, kind, output))
        return urls

    async def _per_file_urls(self, run: tuple[str, ...], kind: AssetKind, output: BundleOutput) -> list[str]:
        expanded = await asyncio.to_thread(self.context.expander.expand, run)
        urls: list[str] = []
        for token in expanded.files:
            if self._is_allowed_remote(token):
                urls.append(token)
                continue
            url = await self._build_url((token,), kind, output, source=token)
            if url is not None:
                urls.append(url)
        return urls

    async def _build_url(
        self,
        file_set: tuple[str, ...],
        kind: AssetKind,
        output: BundleOutput,
        *,
        source: str | None,
    ) -> str | None:
        content = await self.processors[kind].process(file_set, minify=output.minified)
        if not content.strip():
            logger.debug("Empty %s build for %s; no tag rendered", kind.value, file_set)
            return None
        file_name = output_file_name(content, kind, minify=output.minified, source=source)
        return await self.context.writer.get_or_create_file(file_name, content, kind)

    def _runs(self, tokens: Sequence[str]) -> list[_Run]:
        runs: list[_Run] = []
        pending: list[str] = []
        for token in tokens:
            if self._is_allowed_remote(token):
                if pending:
                    runs.append(tuple(pending))
                    pending = []
                runs.append(token.strip())
            else:
                pending.append(token)
        if pending:
            runs.append(tuple(pending))
        return runs

    def _is_allowed_remote(self, token: str) -> bool:
        resolver = self.context.resolver
        if not resolver.is_remote(token) or resolver.is_local_url(token):
            return False
        return self.context.config.is_allowed_remote(token)
