"""
Data models for the logger.
Uses dataclasses for DTOs; the pydantic options model lives in core.schema.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class LogLevel(str, Enum):
    """Log level; DEBUG/INFO go to stdout, WARN/ERROR to stderr."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def stream_name(self) -> str:
        return "stderr" if self in (LogLevel.WARN, LogLevel.ERROR) else "stdout"


class ExtensionKind(str, Enum):
    """Capability slots in the extension registry."""

    ALERTER = "alerter"
    CRASH_REPORTER = "crash-reporter"


@dataclass(frozen=True)
class CallSite:
    """Source location of the code that invoked a logging method."""

    source: str
    stack: str = ""


# ---------------------------------------------------------------------------
# Error value (tagged union decided at argument normalization)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AbsentError:
    """No error supplied."""


@dataclass(frozen=True)
class StringError:
    """Plain-text error; emitted verbatim."""

    text: str


@dataclass(frozen=True)
class StructuredError:
    """Structured error value (exception or any object); emitted inspected."""

    value: Any


ErrorValue = Union[AbsentError, StringError, StructuredError]


def classify_error(err: Any) -> ErrorValue:
    """Tag the err slot: None/'' -> Absent, str -> StringError, anything else -> StructuredError."""
    if err is None or (isinstance(err, str) and not err):
        return AbsentError()
    if isinstance(err, str):
        return StringError(err)
    return StructuredError(err)
