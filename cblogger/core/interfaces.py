"""
Abstract interfaces for the logger.
Every collaborator is behind an interface; the dispatcher never depends on a concrete
alerting, crash-reporting or tracing backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Awaitable, Protocol

from cblogger.core.models import CallSite, ErrorValue, LogLevel
from cblogger.core.schema import LogOptions


class IAlerter(Protocol):
    """Alerter capability: out-of-band notification when a log call requests `alert`."""

    def alert(
        self,
        level: LogLevel,
        key: str,
        data: Any,
        options: LogOptions,
        err: Any,
    ) -> Awaitable[Any]:
        """Send the alert. Resolves on success; raises (or rejects) on failure."""
        ...


class ICrashReporter(Protocol):
    """Crash-reporter capability: receives every error-level event that carries an error."""

    def notify(self, err: Any, context: dict[str, Any]) -> Any:
        """context is {"name": key, "context": data}. Result is ignored."""
        ...


class ITracer(Protocol):
    """Tracing collaborator: ambient per-request correlation id."""

    def current_id(self) -> str | None:
        """Return the current request id, or None outside a request."""
        ...


class ICallSiteResolver(ABC):
    """Abstract call-site lookup: current stack -> source + residual trace."""

    @abstractmethod
    def resolve(self) -> CallSite:
        """Return the caller's CallSite. Must not raise."""
        ...


class IRecordFormatter(ABC):
    """Abstract record formatting: call arguments -> ordered, non-empty text segments."""

    @abstractmethod
    def format(
        self,
        level: LogLevel,
        key: str,
        data: Any,
        options: LogOptions,
        call_site: CallSite,
        timestamp: datetime,
        err: ErrorValue,
    ) -> list[str]:
        """Pure: same inputs produce the same segment list."""
        ...
