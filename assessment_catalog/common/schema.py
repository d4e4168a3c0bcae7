"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from assessment_catalog.common.errors import ConfigError

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "WARN", "ERROR"}


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_positive_number(value, ctx: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{ctx} must be a positive number")


def validate_catalog_config(cfg, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "catalog config")
    top_required = {"source", "http", "logging"}
    _assert_required_keys(cfg, top_required, "catalog config")
    _assert_no_unknown_keys(cfg, top_required, "catalog config", allow_unknown)

    source = cfg["source"]
    _assert_mapping(source, "source")
    _assert_required_keys(source, {"location"}, "source")
    _assert_no_unknown_keys(source, {"location", "encoding"}, "source", allow_unknown)
    if not isinstance(source["location"], str) or not source["location"].strip():
        raise ConfigError("source.location must be a non-empty string")

    http = cfg["http"]
    _assert_mapping(http, "http")
    http_keys = {"connect_timeout", "read_timeout", "max_attempts"}
    _assert_required_keys(http, http_keys, "http")
    _assert_no_unknown_keys(http, http_keys, "http", allow_unknown)
    for key in sorted(http_keys):
        _assert_positive_number(http[key], f"http.{key}")

    logging_cfg = cfg["logging"]
    _assert_mapping(logging_cfg, "logging")
    _assert_required_keys(logging_cfg, {"level"}, "logging")
    _assert_no_unknown_keys(logging_cfg, {"level"}, "logging", allow_unknown)
    if str(logging_cfg["level"]).upper() not in LOG_LEVELS:
        raise ConfigError(f"Unsupported logging.level: {logging_cfg['level']}")

    return cfg
