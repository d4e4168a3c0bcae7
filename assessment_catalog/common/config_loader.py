"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from assessment_catalog.common.constants import CONFIG_DIR_ENV_VAR, CONFIG_FILENAME, DEFAULT_CONFIG_DIR
from assessment_catalog.common.errors import ConfigError
from assessment_catalog.common.fs import read_yaml
from assessment_catalog.common.schema import validate_catalog_config


@dataclass(frozen=True)
class CatalogConfig:
    source_location: str
    source_encoding: str
    connect_timeout: float
    read_timeout: float
    max_attempts: int
    log_level: str


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    return _deep_merge(base, overlay)


def default_config_dir() -> Path:
    return Path(os.environ.get(CONFIG_DIR_ENV_VAR, DEFAULT_CONFIG_DIR))


def load_catalog_config(
    config_dir: Path | None = None,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> CatalogConfig:
    if config_dir is None:
        config_dir = default_config_dir()
    overlay_path = None
    if overlay_config_dir is not None:
        overlay_path = overlay_config_dir / CONFIG_FILENAME

    cfg = validate_catalog_config(
        _load_yaml_with_overlay(config_dir / CONFIG_FILENAME, overlay_path),
        allow_unknown=allow_unknown,
    )

    location = cfg["source"]["location"]
    # Relative file locations resolve against the config directory's parent.
    if "://" not in location and not Path(location).is_absolute():
        location = str(config_dir.parent / location)

    return CatalogConfig(
        source_location=location,
        source_encoding=cfg["source"].get("encoding", "utf-8"),
        connect_timeout=float(cfg["http"]["connect_timeout"]),
        read_timeout=float(cfg["http"]["read_timeout"]),
        max_attempts=int(cfg["http"]["max_attempts"]),
        log_level=str(cfg["logging"]["level"]).upper(),
    )
