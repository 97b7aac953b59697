"""
Configuration loader: YAML + .env + env overrides.
Defaults reproduce the logger's documented behavior; everything is overridable for tests.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from cblogger.core.exceptions import ConfigError
from cblogger.core.schema import DEFAULT_DEPTH
from cblogger.utils.logger import get_logger

DEFAULT_CONFIG_FILE = "cblogger.yaml"
DEFAULT_REQUEST_ID_KEY = "_requestId"

logger = get_logger(__name__)


def _coerce_bool(s: Any) -> bool:
    if isinstance(s, bool):
        return s
    return (str(s).strip().lower() in ("1", "true", "yes", "on")) if s else False


def _coerce_int(s: Any, default: int) -> int:
    if s is None or s == "":
        return default
    try:
        return int(s)
    except (TypeError, ValueError):
        raise ConfigError(f"Expected an integer, got {s!r}") from None


@dataclass(frozen=True)
class LoggerConfig:
    """Immutable logger configuration. Built from YAML + env."""

    default_depth: int = DEFAULT_DEPTH
    timestamps: bool = True
    request_id_key: str = DEFAULT_REQUEST_ID_KEY
    source_root: str | None = None
    tracing: bool = False

    def __post_init__(self) -> None:
        if self.default_depth < 1:
            raise ConfigError(f"default_depth must be >= 1, got {self.default_depth}")
        if not self.request_id_key:
            raise ConfigError("request_id_key must not be empty")

    def option_defaults(self) -> dict[str, Any]:
        """Per-call option defaults derived from this config."""
        return {"ts": self.timestamps, "depth": self.default_depth}

    def with_overrides(self, **overrides: Any) -> LoggerConfig:
        """Return new config with replaced keys; None values are ignored."""
        known = {k: v for k, v in overrides.items() if k in self.__dataclass_fields__ and v is not None}
        return replace(self, **known)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    # Allow the settings to live under a top-level "cblogger" key
    section = data.get("cblogger", data)
    return section if isinstance(section, dict) else {}


def _config_from_dict(data: dict[str, Any]) -> LoggerConfig:
    """Build LoggerConfig from a flat dict. Env overrides applied in load_config."""
    source_root = data.get("source_root")
    return LoggerConfig(
        default_depth=_coerce_int(data.get("default_depth"), DEFAULT_DEPTH),
        timestamps=_coerce_bool(data.get("timestamps", True)),
        request_id_key=str(data.get("request_id_key", DEFAULT_REQUEST_ID_KEY)),
        source_root=str(source_root) if source_root else None,
        tracing=_coerce_bool(data.get("tracing", False)),
    )


def load_config(
    config_path: str | Path | None = None,
    env_file: str | Path | None = None,
) -> LoggerConfig:
    """
    Load config from YAML file, then apply env overrides.
    Env vars: CBLOGGER_DEPTH, CBLOGGER_TIMESTAMPS, CBLOGGER_REQUEST_ID_KEY,
    CBLOGGER_SOURCE_ROOT, CBLOGGER_TRACING.
    """
    if env_file is not None:
        load_dotenv(env_file, override=False)
    path = Path(config_path) if config_path else Path(os.getenv("CBLOGGER_CONFIG", DEFAULT_CONFIG_FILE))
    cfg = _config_from_dict(_load_yaml(path))

    overrides: dict[str, Any] = {}
    if os.getenv("CBLOGGER_DEPTH"):
        overrides["default_depth"] = _coerce_int(os.getenv("CBLOGGER_DEPTH"), cfg.default_depth)
    if os.getenv("CBLOGGER_TIMESTAMPS") is not None:
        overrides["timestamps"] = _coerce_bool(os.getenv("CBLOGGER_TIMESTAMPS"))
    if os.getenv("CBLOGGER_REQUEST_ID_KEY"):
        overrides["request_id_key"] = os.getenv("CBLOGGER_REQUEST_ID_KEY", "").strip()
    if os.getenv("CBLOGGER_SOURCE_ROOT"):
        overrides["source_root"] = os.getenv("CBLOGGER_SOURCE_ROOT")
    if os.getenv("CBLOGGER_TRACING") is not None:
        overrides["tracing"] = _coerce_bool(os.getenv("CBLOGGER_TRACING"))
    if not overrides:
        return cfg
    return cfg.with_overrides(**overrides)


def load_config_or_defaults(
    config_path: str | Path | None = None,
    env_file: str | Path | None = None,
) -> LoggerConfig:
    """
    Like load_config(), but never raises: invalid settings are reported through the
    internal logger and the defaults are used. Used for the import-time instance.
    """
    try:
        return load_config(config_path, env_file)
    except ConfigError as e:
        logger.warning("Invalid cblogger configuration, falling back to defaults: %s", e.message)
        return LoggerConfig()
