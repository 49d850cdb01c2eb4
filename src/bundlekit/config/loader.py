"""Config loading and normalization for bundlekit."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jsonschema
import yaml

from bundlekit.config.model import BundlerConfig
from bundlekit.constants.config import (
    CONFIG_FILENAME,
    DEFAULT_AUTOPREFIXER_BROWSERS,
    DEFAULT_DAYS_TO_KEEP,
    DEFAULT_DEBUG,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_WATCH_FILES,
)
from bundlekit.constants.config_schema import CONFIG_SCHEMA
from bundlekit.exceptions import ConfigError
from bundlekit.types.config import AutoPrefixerConfig

_VALIDATOR = jsonschema.Draft202012Validator(CONFIG_SCHEMA)


def load_config(root: Path, config_path: Path | None = None) -> BundlerConfig:
    """Load and validate bundler config from ``bundlekit.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return BundlerConfig(web_root=root)

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    validate_raw_config(raw, source=str(path))

    web_root_raw = raw.get("web_root")
    web_root = (path.parent / web_root_raw).resolve() if web_root_raw else root

    output_path = raw.get("output_path", DEFAULT_OUTPUT_PATH)
    if not output_path.strip():
        raise ConfigError("output_path must be a non-empty string")

    return BundlerConfig(
        web_root=web_root,
        output_path=output_path.strip(),
        script_output_path=_optional_string(raw.get("script_output_path")),
        style_output_path=_optional_string(raw.get("style_output_path")),
        days_to_keep=raw.get("days_to_keep", DEFAULT_DAYS_TO_KEEP),
        watch_files=raw.get("watch_files", DEFAULT_WATCH_FILES),
        watch_always=tuple(item.strip() for item in raw.get("watch_always", []) if item.strip()),
        debug=raw.get("debug", DEFAULT_DEBUG),
        site_url=_optional_string(raw.get("site_url")),
        remote_allowlist=tuple(item.strip() for item in raw.get("remote_allowlist", []) if item.strip()),
        autoprefixer=_build_autoprefixer_config(raw.get("autoprefixer") or {}),
    )


def validate_raw_config(raw: dict[str, Any], *, source: str) -> None:
    """Raise ConfigError for the first schema violation, naming the offending key."""
    errors = sorted(_VALIDATOR.iter_errors(raw), key=lambda error: [str(part) for part in error.absolute_path])
    if not errors:
        return
    first = errors[0]
    key = ".".join(str(part) for part in first.absolute_path) or _unknown_key(first)
    raise ConfigError(f"Invalid config at {source}: {key}: {first.message}")


def _unknown_key(error: jsonschema.ValidationError) -> str:
    """Best-effort key name for top-level errors such as unexpected properties."""
    if error.validator == "additionalProperties" and isinstance(error.instance, dict):
        allowed = set(error.schema.get("properties", {}))
        unknown = sorted(str(key) for key in error.instance if key not in allowed)
        if unknown:
            return unknown[0]
    return "<root>"


def _optional_string(value: Any) -> str | None:
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


def _build_autoprefixer_config(raw: dict[str, Any]) -> AutoPrefixerConfig:
    """Build an AutoPrefixerConfig from the raw autoprefixer YAML block."""
    browsers_raw = raw.get("browsers", list(DEFAULT_AUTOPREFIXER_BROWSERS))
    if isinstance(browsers_raw, str):
        browsers_raw = browsers_raw.split(",")
    browsers = tuple(browser.strip() for browser in browsers_raw if browser.strip())

    return AutoPrefixerConfig(
        enabled=raw.get("enabled", True),
        browsers=browsers,
        cascade=raw.get("cascade", True),
        add=raw.get("add", True),
        remove=raw.get("remove", True),
        supports=raw.get("supports", True),
        flexbox=raw.get("flexbox", True),
        grid=raw.get("grid", True),
        stats=_optional_string(raw.get("stats")),
    )
