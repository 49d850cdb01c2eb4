"""CLI entrypoint for bundlekit."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from bundlekit import __version__
from bundlekit.bundler import Bundler
from bundlekit.config import load_config
from bundlekit.constants.branding import BRAND_NAME, CLI_DESCRIPTION
from bundlekit.context import BundlerContext
from bundlekit.exceptions import BundleKitError, ConfigError
from bundlekit.types import AssetKind, BundleOutput, ScriptLoad

_OUTPUT_CHOICES = [mode.value for mode in BundleOutput]
_LOAD_CHOICES = [mode.value for mode in ScriptLoad]


def _add_site_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-r", "--root", type=Path, required=True, help="Site root (web root) path")
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log cache and build diagnostics")


def _add_render_arguments(parser: argparse.ArgumentParser) -> None:
    _add_site_arguments(parser)
    parser.add_argument(
        "-o",
        "--output",
        choices=_OUTPUT_CHOICES,
        default=None,
        help="Rendering mode (default: normal when debug is on, minified-and-combined otherwise)",
    )
    parser.add_argument("-u", "--url", action="store_true", help="Print bare URLs instead of HTML tags")
    parser.add_argument("tokens", nargs="+", help="Files or .bundle manifests, in page order")


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog=BRAND_NAME,
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    styles = subparsers.add_parser("styles", help="Build stylesheets and print <link> tags")
    _add_render_arguments(styles)

    scripts = subparsers.add_parser("scripts", help="Build scripts and print <script> tags")
    _add_render_arguments(scripts)
    scripts.add_argument("-l", "--load", choices=_LOAD_CHOICES, default=ScriptLoad.INLINE.value)

    trim = subparsers.add_parser(
        "trim",
        help="Delete generated files older than days_to_keep now, ignoring the startup delay and rate limit",
    )
    _add_site_arguments(trim)

    validate = subparsers.add_parser("validate-config", help="Validate configuration without building")
    _add_site_arguments(validate)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    try:
        if args.command == "validate-config":
            load_config(args.root, args.config)
            print("Configuration is valid.")
            return 0

        context = BundlerContext.from_root(args.root, args.config)
        if args.command == "trim":
            return asyncio.run(_trim(context))
        if args.command in ("styles", "scripts"):
            print(asyncio.run(_render(context, args)))
            return 0
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except BundleKitError as exc:
        print(f"Bundling error: {exc}", file=sys.stderr)
        return 1

    parser.error(f"Unsupported command: {args.command}")
    return 2


async def _render(context: BundlerContext, args: argparse.Namespace) -> str:
    bundler = Bundler(context)
    output = BundleOutput(args.output) if args.output else None
    if args.command == "styles":
        if args.url:
            return "\n".join(await bundler.style_urls(args.tokens, output))
        return await bundler.styles(args.tokens, output=output)

    if args.url:
        return "\n".join(await bundler.script_urls(args.tokens, output))
    return await bundler.scripts(args.tokens, output=output, load=ScriptLoad(args.load))


async def _trim(context: BundlerContext) -> int:
    if not context.config.trimming_enabled:
        print("Trimming is disabled (days_to_keep < 1).")
        return 0

    seen: set[Path] = set()
    for kind in AssetKind:
        directory = context.writer.output_directory(kind)
        if directory in seen:
            continue
        seen.add(directory)
        # A one-shot process has no startup window or interval to respect.
        report = await context.writer.trim(kind, force=True)
        if report is None:
            continue
        print(f"{directory}: {len(report.deleted)} deleted, {report.kept} kept, {report.failed} failed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
