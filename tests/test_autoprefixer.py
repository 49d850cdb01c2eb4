"""Tests for the autoprefixer postprocessor."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from bundlekit.exceptions import PostprocessingError, ResourceNotFoundError
from bundlekit.io import ResourceResolver
from bundlekit.postprocessors import AutoPrefixer, NodeAutoPrefixEngine, format_error_details
from bundlekit.types.config import AutoPrefixerConfig

from conftest import FakePrefixEngine


def test_format_error_details_includes_positive_positions_only() -> None:
    assert format_error_details({"message": "Unknown word", "lineNumber": 3, "columnNumber": 7}) == (
        "Message: Unknown word\nLine Number: 3\nColumn Number: 7"
    )
    assert format_error_details({"message": "Broken", "lineNumber": 0, "columnNumber": -1}) == "Message: Broken"


def test_process_returns_engine_output(tmp_path: Path, prefix_engine: FakePrefixEngine) -> None:
    prefixer = AutoPrefixer(AutoPrefixerConfig(), ResourceResolver(tmp_path), prefix_engine)

    result = asyncio.run(prefixer.process(".b { display: flex; }"))

    assert "-webkit-flex" in result
    css, options = prefix_engine.calls[0]
    assert css == ".b { display: flex; }"
    assert options["browsers"] == ["last 2 versions"]
    assert options["grid"] == "autoplace"
    assert options["stats"] is None


def test_first_engine_error_is_raised(tmp_path: Path) -> None:
    engine = FakePrefixEngine(
        errors=[
            {"message": "Unclosed block", "lineNumber": 2, "columnNumber": 1},
            {"message": "ignored", "lineNumber": 9, "columnNumber": 9},
        ]
    )
    prefixer = AutoPrefixer(AutoPrefixerConfig(), ResourceResolver(tmp_path), engine)

    with pytest.raises(PostprocessingError) as excinfo:
        asyncio.run(prefixer.process(".b {"))

    assert str(excinfo.value) == "Message: Unclosed block\nLine Number: 2\nColumn Number: 1"


def test_disabled_prefixer_passes_through(tmp_path: Path, prefix_engine: FakePrefixEngine) -> None:
    prefixer = AutoPrefixer(AutoPrefixerConfig(enabled=False), ResourceResolver(tmp_path), prefix_engine)

    assert asyncio.run(prefixer.process(".b { display: flex; }")) == ".b { display: flex; }"
    assert prefix_engine.calls == []


def test_blank_css_skips_engine(tmp_path: Path, prefix_engine: FakePrefixEngine) -> None:
    prefixer = AutoPrefixer(AutoPrefixerConfig(), ResourceResolver(tmp_path), prefix_engine)

    assert asyncio.run(prefixer.process("  \n")) == "  \n"
    assert prefix_engine.calls == []


def test_stats_file_is_loaded_once(tmp_path: Path, prefix_engine: FakePrefixEngine) -> None:
    (tmp_path / "stats.json").write_text(json.dumps({"chrome": {"120": 40.5}}), encoding="utf-8")
    config = AutoPrefixerConfig(browsers=("> 5% in my stats",), stats="~/stats.json")
    prefixer = AutoPrefixer(config, ResourceResolver(tmp_path), prefix_engine)

    asyncio.run(prefixer.process(".a{}"))
    (tmp_path / "stats.json").unlink()
    asyncio.run(prefixer.process(".b{}"))

    assert prefix_engine.calls[1][1]["stats"] == {"chrome": {"120": 40.5}}


def test_missing_stats_file_raises(tmp_path: Path, prefix_engine: FakePrefixEngine) -> None:
    config = AutoPrefixerConfig(stats="~/missing.json")
    prefixer = AutoPrefixer(config, ResourceResolver(tmp_path), prefix_engine)

    with pytest.raises(ResourceNotFoundError):
        asyncio.run(prefixer.process(".a{}"))


def test_node_engine_reports_missing_executable() -> None:
    engine = NodeAutoPrefixEngine(node_executable="definitely-not-node-bundlekit")

    with pytest.raises(PostprocessingError, match="not found"):
        asyncio.run(engine(".a{}", {}))
