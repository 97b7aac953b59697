"""Shared utilities: config, internal logger."""

from cblogger.utils.config import LoggerConfig, load_config, load_config_or_defaults
from cblogger.utils.logger import get_logger, log_structured

__all__ = [
    "LoggerConfig",
    "load_config",
    "load_config_or_defaults",
    "get_logger",
    "log_structured",
]
