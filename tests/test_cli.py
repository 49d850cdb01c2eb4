"""Tests for CLI parser and main behavior."""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from pathlib import Path

import pytest

from bundlekit.cli.main import build_parser, main


def _disable_prefixer(site_root: Path) -> Path:
    config_path = site_root / "bundlekit.yaml"
    config_path.write_text("output_path: ~/out\nautoprefixer:\n  enabled: false\n", encoding="utf-8")
    return config_path


def test_build_parser_accepts_render_flags(tmp_path: Path) -> None:
    parser = build_parser()

    args = parser.parse_args(["scripts", "-r", str(tmp_path), "-o", "combined", "-l", "async", "-u", "a.js", "b.js"])

    assert args.command == "scripts"
    assert args.root == tmp_path
    assert args.output == "combined"
    assert args.load == "async"
    assert args.url is True
    assert args.tokens == ["a.js", "b.js"]


def test_build_parser_rejects_unknown_output_mode(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["styles", "-r", str(tmp_path), "-o", "tiny", "a.css"])


def test_styles_command_prints_link(site_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _disable_prefixer(site_root)

    code = main(["styles", "-r", str(site_root), "~/css/a.css", "~/css/b.css"])

    assert code == 0
    output = capsys.readouterr().out.strip()
    assert re.fullmatch(r'<link href="/out/[0-9a-f]{32}\.min\.css" rel="stylesheet" />', output)


def test_scripts_command_prints_urls(site_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _disable_prefixer(site_root)

    code = main(["scripts", "-r", str(site_root), "--output", "normal", "--url", "~/js/a.js", "~/js/b.js"])

    assert code == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert [re.sub(r"[0-9a-f]{32}", "<md5>", line) for line in lines] == ["/out/a.<md5>.js", "/out/b.<md5>.js"]


def test_missing_source_exits_with_one(site_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _disable_prefixer(site_root)

    code = main(["styles", "-r", str(site_root), "~/css/missing.css"])

    assert code == 1
    assert "Resource not found" in capsys.readouterr().err


def test_invalid_config_exits_with_two(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "bundlekit.yaml").write_text("days_to_keep: soon\n", encoding="utf-8")

    code = main(["styles", "-r", str(tmp_path), "a.css"])

    assert code == 2
    assert "days_to_keep" in capsys.readouterr().err


def test_validate_config_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["validate-config", "-r", str(tmp_path)]) == 0
    assert "Configuration is valid." in capsys.readouterr().out

    assert main(["validate-config", "-r", str(tmp_path), "-c", str(tmp_path / "missing.yaml")]) == 2


def test_trim_command_runs_immediately(
    site_root: Path,
    write_file: Callable[[Path, str], Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    config_path = _disable_prefixer(site_root)
    stale = write_file(site_root / "out" / "old.css", "a")
    os.utime(stale, (1_000, 1_000))
    fresh = write_file(site_root / "out" / "new.css", "b")

    assert main(["trim", "-r", str(site_root), "-c", str(config_path)]) == 0

    assert not stale.exists()
    assert fresh.exists()
    assert "1 deleted, 1 kept, 0 failed" in capsys.readouterr().out
