"""Core layer: interfaces, models, schema, exceptions."""

from cblogger.core.interfaces import (
    IAlerter,
    ICrashReporter,
    ITracer,
    ICallSiteResolver,
    IRecordFormatter,
)
from cblogger.core.models import (
    LogLevel,
    ExtensionKind,
    CallSite,
    AbsentError,
    StringError,
    StructuredError,
    ErrorValue,
    classify_error,
)
from cblogger.core.schema import LogOptions, normalize_options
from cblogger.core.exceptions import (
    CBLoggerError,
    AlreadyExtendedError,
    InvalidExtensionError,
    MethodNotAllowedError,
    AlertingUnavailableError,
    ConfigError,
)

__all__ = [
    "IAlerter",
    "ICrashReporter",
    "ITracer",
    "ICallSiteResolver",
    "IRecordFormatter",
    "LogLevel",
    "ExtensionKind",
    "CallSite",
    "AbsentError",
    "StringError",
    "StructuredError",
    "ErrorValue",
    "classify_error",
    "LogOptions",
    "normalize_options",
    "CBLoggerError",
    "AlreadyExtendedError",
    "InvalidExtensionError",
    "MethodNotAllowedError",
    "AlertingUnavailableError",
    "ConfigError",
]
