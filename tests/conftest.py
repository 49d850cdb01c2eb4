"""Shared pytest fixtures for site trees, clocks and fake engines."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import pytest

from bundlekit.caching import ResultCache
from bundlekit.config import BundlerConfig
from bundlekit.context import BundlerContext
from bundlekit.types.config import AutoPrefixerConfig


@dataclass
class FakeClock:
    """Manually advanced clock for TTL and age checks."""

    now: float = 1_000_000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class FakePrefixEngine:
    """Stands in for the node autoprefixer; tags output so tests can see it ran."""

    errors: list[dict[str, Any]] = field(default_factory=list)
    calls: list[tuple[str, Mapping[str, Any]]] = field(default_factory=list)

    async def __call__(self, css: str, options: Mapping[str, Any]) -> Mapping[str, Any]:
        self.calls.append((css, options))
        if self.errors:
            return {"processedCode": "", "errors": self.errors}
        return {"processedCode": css.replace("display: flex", "display: -webkit-flex;\n  display: flex"), "errors": []}


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def write_file() -> Callable[[Path, str], Path]:
    return write


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A small site with styles, scripts and manifests."""
    root = tmp_path / "site"
    write(root / "css" / "a.css", ".a {\n  color: red;\n}\n")
    write(root / "css" / "b.css", ".b {\n  display: flex;\n}\n")
    write(root / "css" / "c.css", "/* c */\n.c {\n  margin: 0;\n}\n")
    write(root / "css" / "print.css", ".print {\n  color: black;\n}\n")
    write(root / "js" / "a.js", "function add(first, second) {\n  return first + second;\n}\n")
    write(root / "js" / "b.js", "// b\nvar total = add(1, 2);\n")
    write(root / "bundles" / "site.bundle", "# site styles\n\n~/css/a.css\n~/bundles/extra.bundle\n")
    write(root / "bundles" / "extra.bundle", "../css/c.css\n")
    return root


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def wall_clock() -> FakeClock:
    return FakeClock(now=2_000_000_000.0)


@pytest.fixture
def prefix_engine() -> FakePrefixEngine:
    return FakePrefixEngine()


@pytest.fixture
def make_context(
    site_root: Path,
    clock: FakeClock,
    wall_clock: FakeClock,
    prefix_engine: FakePrefixEngine,
) -> Callable[..., BundlerContext]:
    """Factory for contexts over ``site_root``; keyword arguments override config fields."""

    def factory(**overrides: Any) -> BundlerContext:
        config = replace(
            BundlerConfig(web_root=site_root, output_path="~/out", autoprefixer=AutoPrefixerConfig()),
            **overrides,
        )
        return BundlerContext(
            config=config,
            cache=ResultCache(clock=clock),
            autoprefix_engine=prefix_engine,
            wall_clock=wall_clock,
        )

    return factory
