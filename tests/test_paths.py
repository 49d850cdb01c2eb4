"""Tests for token resolution against the web root."""

from __future__ import annotations

from pathlib import Path

from bundlekit.io import ResourceResolver


def test_virtual_and_root_relative_tokens_map_to_web_root(tmp_path: Path) -> None:
    resolver = ResourceResolver(tmp_path)

    assert resolver.resolve("~/css/a.css") == (tmp_path / "css" / "a.css").resolve()
    assert resolver.resolve("/css/a.css") == (tmp_path / "css" / "a.css").resolve()


def test_relative_tokens_use_the_referencing_directory(tmp_path: Path) -> None:
    resolver = ResourceResolver(tmp_path)

    assert resolver.resolve("a.css") == (tmp_path / "a.css").resolve()
    assert resolver.resolve("../a.css", tmp_path / "css" / "sub") == (tmp_path / "css" / "a.css").resolve()


def test_physical_paths_under_web_root_are_kept(tmp_path: Path) -> None:
    resolver = ResourceResolver(tmp_path)
    physical = (tmp_path / "css" / "a.css").resolve()

    assert resolver.resolve(str(physical)) == physical


def test_remote_and_site_urls(tmp_path: Path) -> None:
    resolver = ResourceResolver(tmp_path, site_url="https://www.example.com/")

    assert resolver.resolve("https://cdn.example.com/x.css") == "https://cdn.example.com/x.css"
    assert resolver.resolve_local("https://cdn.example.com/x.css") is None
    assert resolver.resolve("https://www.example.com/css/a.css") == (tmp_path / "css" / "a.css").resolve()


def test_to_url_and_virtual_to_url(tmp_path: Path) -> None:
    resolver = ResourceResolver(tmp_path)

    assert resolver.to_url(tmp_path / "css" / "theme") == "/css/theme"
    assert resolver.to_url(tmp_path) == "/"
    assert resolver.to_url(tmp_path.parent) is None
    assert ResourceResolver.virtual_to_url("~/bundles", "x.css") == "/bundles/x.css"
    assert ResourceResolver.virtual_to_url("~/", "x.css") == "/x.css"
    assert resolver.map_virtual_directory("~/bundles/") == (tmp_path / "bundles").resolve()
