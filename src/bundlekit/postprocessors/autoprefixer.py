"""Vendor prefixing of combined stylesheets through postcss/autoprefixer.

The prefixer itself is JavaScript. :class:`AutoPrefixer` builds the options
document and interprets the engine's reply; the engine is any async callable
with the :data:`PrefixEngine` signature. The default one runs a small helper
under ``node``, which needs the ``postcss`` and ``autoprefixer`` packages on
its module path.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import shutil
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from bundlekit.exceptions import PostprocessingError, ResourceNotFoundError
from bundlekit.io import ResourceResolver, read_text
from bundlekit.types.config import AutoPrefixerConfig

logger = logging.getLogger(__name__)

PrefixEngine = Callable[[str, Mapping[str, Any]], Awaitable[Mapping[str, Any]]]

_HELPER_SCRIPT = r"""
const chunks = [];
process.stdin.on("data", (chunk) => chunks.push(chunk));
process.stdin.on("end", async () => {
  const request = JSON.parse(Buffer.concat(chunks).toString("utf8"));
  const reply = { processedCode: "", errors: [] };
  try {
    const postcss = require("postcss");
    const autoprefixer = require("autoprefixer");
    const { browsers, stats, ...options } = request.options;
    options.overrideBrowserslist = browsers;
    if (stats) {
      options.stats = stats;
    }
    const result = await postcss([autoprefixer(options)]).process(request.css, { from: undefined });
    reply.processedCode = result.css;
  } catch (error) {
    reply.errors.push({
      message: error.reason || error.message,
      lineNumber: error.line || 0,
      columnNumber: error.column || 0,
    });
  }
  process.stdout.write(JSON.stringify(reply));
});
"""


def format_error_details(error: Mapping[str, Any]) -> str:
    """Render one engine error as ``Message``/``Line Number``/``Column Number`` lines."""
    lines = [f"Message: {error.get('message', '')}"]
    line_number = int(error.get("lineNumber") or 0)
    column_number = int(error.get("columnNumber") or 0)
    if line_number > 0:
        lines.append(f"Line Number: {line_number}")
    if column_number > 0:
        lines.append(f"Column Number: {column_number}")
    return "\n".join(lines)


class NodeAutoPrefixEngine:
    """Runs autoprefixer in a ``node`` subprocess, one process per call."""

    def __init__(self, node_executable: str = "node", node_path: str | None = None) -> None:
        self.node_executable = node_executable
        self.node_path = node_path

    async def __call__(self, css: str, options: Mapping[str, Any]) -> Mapping[str, Any]:
        executable = shutil.which(self.node_executable)
        if executable is None:
            raise PostprocessingError(f"Node.js executable not found: {self.node_executable}")

        env = dict(os.environ)
        if self.node_path:
            env["NODE_PATH"] = self.node_path

        process = await asyncio.create_subprocess_exec(
            executable,
            "-e",
            _HELPER_SCRIPT,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=env,
        )
        request = json.dumps({"css": css, "options": dict(options)}).encode("utf-8")
        stdout, stderr = await process.communicate(request)
        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise PostprocessingError(f"Autoprefixer engine exited with status {process.returncode}: {detail}")

        try:
            reply = json.loads(stdout.decode("utf-8"))
        except json.JSONDecodeError as exc:
            raise PostprocessingError(f"Autoprefixer engine returned invalid JSON: {exc}") from exc
        if not isinstance(reply, dict):
            raise PostprocessingError("Autoprefixer engine reply must be a JSON object")
        return reply


class AutoPrefixer:
    def __init__(
        self,
        config: AutoPrefixerConfig,
        resolver: ResourceResolver,
        engine: PrefixEngine | None = None,
    ) -> None:
        self.config = config
        self.resolver = resolver
        self.engine: PrefixEngine = engine if engine is not None else NodeAutoPrefixEngine()
        self._options: dict[str, Any] | None = None

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def options(self) -> dict[str, Any]:
        """Engine options; the stats file is read on first use and kept."""
        if self._options is None:
            self._options = {
                "browsers": list(self.config.browsers),
                "cascade": self.config.cascade,
                "add": self.config.add,
                "remove": self.config.remove,
                "supports": self.config.supports,
                "flexbox": self.config.flexbox,
                "grid": "autoplace" if self.config.grid else False,
                "stats": self._load_stats(),
            }
        return self._options

    async def process(self, css: str) -> str:
        if not self.enabled or not css.strip():
            return css

        reply = await self.engine(css, self.options())
        errors = reply.get("errors") or []
        if errors:
            raise PostprocessingError(format_error_details(errors[0]))

        processed = reply.get("processedCode")
        if not isinstance(processed, str):
            raise PostprocessingError("Autoprefixer engine reply has no processedCode")
        logger.debug("Autoprefixed %d characters of CSS", len(css))
        return processed

    def _load_stats(self) -> dict[str, Any] | None:
        if not self.config.stats:
            return None
        path = self.resolver.resolve_local(self.config.stats)
        if path is None or not path.is_file():
            raise ResourceNotFoundError(self.config.stats)
        try:
            stats = json.loads(read_text(path))
        except json.JSONDecodeError as exc:
            raise PostprocessingError(f"Invalid browser usage statistics in {path}: {exc}") from exc
        if not isinstance(stats, dict):
            raise PostprocessingError(f"Browser usage statistics in {path} must be a JSON object")
        return stats
