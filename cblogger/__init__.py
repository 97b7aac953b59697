"""
Structured console logger with pluggable alerting and crash reporting.

`logger` is the process-wide instance, created once at import time from a config that
falls back to defaults when the settings are invalid; its extension
slots change only through extend/unextend/attach_crash_reporter. Use create_logger()
for isolated instances.
"""

from cblogger.core import (
    LogLevel,
    ExtensionKind,
    CallSite,
    LogOptions,
    CBLoggerError,
    AlreadyExtendedError,
    InvalidExtensionError,
    MethodNotAllowedError,
    AlertingUnavailableError,
    ConfigError,
)
from cblogger.pipeline import CBLogger, create_logger
from cblogger.services import request_scope
from cblogger.utils import LoggerConfig, load_config, load_config_or_defaults

__version__ = "0.1.0"

logger: CBLogger = create_logger(load_config_or_defaults())

__all__ = [
    "logger",
    "CBLogger",
    "create_logger",
    "request_scope",
    "LoggerConfig",
    "load_config",
    "load_config_or_defaults",
    "LogLevel",
    "ExtensionKind",
    "CallSite",
    "LogOptions",
    "CBLoggerError",
    "AlreadyExtendedError",
    "InvalidExtensionError",
    "MethodNotAllowedError",
    "AlertingUnavailableError",
    "ConfigError",
]
