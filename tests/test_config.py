"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from bundlekit.config import load_config, validate_raw_config
from bundlekit.exceptions import ConfigError
from bundlekit.types import AssetKind, BundleOutput


def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    loaded = load_config(tmp_path)

    assert loaded.web_root == tmp_path.resolve()
    assert loaded.output_path == "~/bundles"
    assert loaded.days_to_keep == 7
    assert loaded.watch_files is True
    assert loaded.autoprefixer.enabled is True
    assert loaded.autoprefixer.browsers == ("last 2 versions",)
    assert loaded.default_output is BundleOutput.MINIFIED_AND_COMBINED


def test_load_config_reads_yaml(tmp_path: Path) -> None:
    (tmp_path / "bundlekit.yaml").write_text(
        "\n".join(
            [
                "web_root: public",
                "output_path: ~/static/bundles",
                "script_output_path: ~/static/js",
                "days_to_keep: 0",
                "debug: true",
                "watch_always: ['~/css/site.css']",
                "remote_allowlist: ['https://cdn.example.com/']",
                "autoprefixer:",
                "  browsers: '> 1%, last 2 versions'",
                "  flexbox: no-2009",
                "  grid: false",
            ]
        ),
        encoding="utf-8",
    )

    loaded = load_config(tmp_path)

    assert loaded.web_root == (tmp_path / "public").resolve()
    assert loaded.output_path_for(AssetKind.SCRIPT) == "~/static/js"
    assert loaded.output_path_for(AssetKind.STYLE) == "~/static/bundles"
    assert loaded.trimming_enabled is False
    assert loaded.default_output is BundleOutput.NORMAL
    assert loaded.watch_always == ("~/css/site.css",)
    assert loaded.is_allowed_remote("HTTPS://cdn.example.com/lib.js")
    assert not loaded.is_allowed_remote("https://evil.example.com/lib.js")
    assert loaded.autoprefixer.browsers == ("> 1%", "last 2 versions")
    assert loaded.autoprefixer.flexbox == "no-2009"
    assert loaded.autoprefixer.grid is False


def test_explicit_missing_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path, tmp_path / "nope.yaml")


def test_invalid_yaml_is_an_error(tmp_path: Path) -> None:
    config_path = tmp_path / "bundlekit.yaml"
    config_path.write_text("output_path: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(tmp_path, config_path)


def test_non_mapping_config_is_an_error(tmp_path: Path) -> None:
    config_path = tmp_path / "bundlekit.yaml"
    config_path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path, config_path)


@pytest.mark.parametrize(
    ("yaml_content", "expected_match"),
    [
        ("days_to_keep: true\n", "days_to_keep"),
        ("days_to_keep: soon\n", "days_to_keep"),
        ("watch_files: maybe\n", "watch_files"),
        ("remote_allowlist: https://cdn.example.com\n", "remote_allowlist"),
        ("output_path: ''\n", "output_path"),
        ("autoprefixer:\n  flexbox: sometimes\n", "autoprefixer"),
        ("outptu_path: ~/x\n", "outptu_path"),
    ],
    ids=["bool_days", "text_days", "non_bool_watch", "scalar_allowlist", "empty_output", "bad_flexbox", "typo_key"],
)
def test_load_config_rejects_invalid_field_values(tmp_path: Path, yaml_content: str, expected_match: str) -> None:
    config_path = tmp_path / "bundlekit.yaml"
    config_path.write_text(yaml_content, encoding="utf-8")

    with pytest.raises(ConfigError, match=expected_match):
        load_config(tmp_path, config_path)


def test_validate_raw_config_names_source() -> None:
    with pytest.raises(ConfigError, match="inline.yaml"):
        validate_raw_config({"debug": "yes"}, source="inline.yaml")

    validate_raw_config({"debug": True, "autoprefixer": None}, source="inline.yaml")
