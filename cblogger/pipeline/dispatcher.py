"""
Dispatcher: public entry points debug/info/warn/error -> one console write per record.
Flow: reclassify args -> normalize options -> request id -> call site + clock -> format
-> write -> crash report (ERROR with err), all before the call returns; then alert
dispatch with containment, settled through the returned awaitable.
All collaborators injected via constructor; no knowledge of concrete backends.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import sys
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Coroutine

from cblogger.core.exceptions import AlertingUnavailableError
from cblogger.core.interfaces import (
    IAlerter,
    ICallSiteResolver,
    ICrashReporter,
    IRecordFormatter,
    ITracer,
)
from cblogger.core.models import AbsentError, ExtensionKind, LogLevel, classify_error
from cblogger.core.schema import LogOptions, normalize_options
from cblogger.services.callsite_service import CallSiteResolver
from cblogger.services.format_service import RecordFormatter
from cblogger.services.registry_service import ExtensionRegistry
from cblogger.utils.config import LoggerConfig
from cblogger.utils.logger import get_logger, log_structured

logger = get_logger(__name__)

Writer = Callable[[LogLevel, list[str]], None]

CANNOT_ALERT_KEY = "logger_cannot_alert"
ALERT_RESPONSE_KEY = "alert_error_response"
ALERT_THROWN_KEY = "alert_error_thrown"


def console_write(level: LogLevel, segments: list[str]) -> None:
    """One print() per record: DEBUG/INFO to stdout, WARN/ERROR to stderr."""
    stream = sys.stderr if level.stream_name == "stderr" else sys.stdout
    print(*segments, file=stream)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def reclassify_arguments(data: Any, options: Any, err: Any) -> tuple[Any, Any, Any]:
    """Move an exception passed in the data (checked first) or options slot into err."""
    if err is None:
        if isinstance(data, BaseException):
            return None, options, data
        if isinstance(options, BaseException):
            return data, None, options
    return data, options, err


class _Settled:
    """Awaitable that completes immediately; returned when there is nothing left to wait for."""

    __slots__ = ()

    def __await__(self):
        return iter(())


SETTLED = _Settled()


class CBLogger:
    """
    Structured console logger with an alerter and a crash-reporter extension slot.
    Level methods write the record and notify the crash reporter before they return.
    The returned awaitable settles once the alert attempt (if any) has been handled.
    """

    def __init__(
        self,
        config: LoggerConfig | None = None,
        *,
        registry: ExtensionRegistry | None = None,
        resolver: ICallSiteResolver | None = None,
        formatter: IRecordFormatter | None = None,
        tracer: ITracer | None = None,
        clock: Callable[[], datetime] | None = None,
        writer: Writer | None = None,
    ) -> None:
        self._config = config or LoggerConfig()
        self._registry = registry or ExtensionRegistry()
        self._resolver = resolver or CallSiteResolver(source_root=self._config.source_root)
        self._formatter = formatter or RecordFormatter()
        self._tracer = tracer
        self._clock = clock or _utc_now
        self._writer = writer or console_write
        self._pending: set[asyncio.Future[Any]] = set()

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def registry(self) -> ExtensionRegistry:
        return self._registry

    @property
    def extended(self) -> bool:
        """True while an alerter is attached."""
        return self._registry.is_attached(ExtensionKind.ALERTER)

    # ------------------------------------------------------------------
    # Level methods
    # ------------------------------------------------------------------

    def debug(self, key: str, data: Any = None, options: Any = None, err: Any = None) -> Awaitable[None]:
        return self.log(LogLevel.DEBUG, key, data, options, err)

    def info(self, key: str, data: Any = None, options: Any = None, err: Any = None) -> Awaitable[None]:
        return self.log(LogLevel.INFO, key, data, options, err)

    def warn(self, key: str, data: Any = None, options: Any = None, err: Any = None) -> Awaitable[None]:
        return self.log(LogLevel.WARN, key, data, options, err)

    def error(self, key: str, data: Any = None, options: Any = None, err: Any = None) -> Awaitable[None]:
        return self.log(LogLevel.ERROR, key, data, options, err)

    def log(
        self,
        level: LogLevel | str,
        key: str,
        data: Any = None,
        options: Any = None,
        err: Any = None,
    ) -> Awaitable[None]:
        """
        Write one record now. Awaiting the result is only needed to wait for the alert;
        synchronous callers may ignore it when no alert is requested.
        """
        level = LogLevel(level)
        data, options, err = reclassify_arguments(data, options, err)
        opts = normalize_options(options, self._config.option_defaults())
        data = self._with_request_id(data)
        self._emit(level, key, data, opts, err)
        if not opts.alert:
            return SETTLED
        return self._dispatch_alert(level, key, data, opts, err)

    # ------------------------------------------------------------------
    # Extension API
    # ------------------------------------------------------------------

    def attach(self, kind: ExtensionKind | str, extension: Any) -> bool:
        return self._registry.attach(kind, extension)

    def detach(self, kind: ExtensionKind | str = ExtensionKind.ALERTER) -> bool:
        return self._registry.detach(kind)

    def extend(self, alerter: IAlerter) -> bool:
        """Attach an alerter. Raises AlreadyExtendedError / InvalidExtensionError."""
        return self._registry.attach(ExtensionKind.ALERTER, alerter)

    def unextend(self) -> bool:
        """Detach the alerter. Raises MethodNotAllowedError if none is attached."""
        return self._registry.detach(ExtensionKind.ALERTER)

    def attach_crash_reporter(self, reporter: ICrashReporter) -> bool:
        """Attach the crash reporter for the rest of the process; there is no detach."""
        return self._registry.attach(ExtensionKind.CRASH_REPORTER, reporter)

    def alert(self, *args: Any, **kwargs: Any) -> Awaitable[Any]:
        """Forward to the attached alerter's alert()."""
        alerter = self._registry.alerter
        if alerter is None:
            raise AlertingUnavailableError()
        return alerter.alert(*args, **kwargs)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _with_request_id(self, data: Any) -> Any:
        if self._tracer is None:
            return data
        try:
            request_id = self._tracer.current_id()
        except Exception as e:
            logger.debug("Tracer current_id() failed: %s", e)
            return data
        if not request_id:
            return data
        field = self._config.request_id_key
        if data is None:
            return {field: request_id}
        if isinstance(data, Mapping):
            return {**data, field: request_id}
        return data

    def _emit(self, level: LogLevel, key: str, data: Any, options: LogOptions, err: Any) -> None:
        """Format and write one record; notify the crash reporter for ERROR with an error."""
        error_value = classify_error(err)
        segments = self._formatter.format(
            level,
            key,
            data,
            options,
            self._resolver.resolve(),
            self._clock(),
            error_value,
        )
        self._writer(level, segments)
        if level is LogLevel.ERROR and not isinstance(error_value, AbsentError):
            self._report_crash(key, data, err)

    def _report_crash(self, key: str, data: Any, err: Any) -> None:
        reporter = self._registry.crash_reporter
        if reporter is None:
            return
        try:
            result = reporter.notify(err, {"name": key, "context": data})
        except Exception as e:
            log_structured(logger, logging.DEBUG, "Crash reporter notify failed", crash_key=key, error=repr(e))
            return
        if inspect.isawaitable(result):
            self._schedule(key, result)

    def _schedule(self, key: str, awaitable: Awaitable[Any]) -> None:
        """Fire-and-forget an awaitable crash report on the running loop."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            logger.debug("No running event loop; dropped async crash report for %s", key)
            return
        future = asyncio.ensure_future(awaitable, loop=loop)
        self._pending.add(future)

        def _settle(done: asyncio.Future[Any]) -> None:
            self._pending.discard(done)
            if done.cancelled():
                return
            exc = done.exception()
            if exc is not None:
                log_structured(logger, logging.DEBUG, "Crash reporter notify failed", crash_key=key, error=repr(exc))

        future.add_done_callback(_settle)


    def _dispatch_alert(
        self,
        level: LogLevel,
        key: str,
        data: Any,
        options: LogOptions,
        err: Any,
    ) -> Awaitable[None]:
        alerter = self._registry.alerter
        if alerter is None:
            unavailable = normalize_options({"stack": True}, self._config.option_defaults())
            self._emit(LogLevel.ERROR, CANNOT_ALERT_KEY, None, unavailable, AlertingUnavailableError())
            return SETTLED
        context = {"level": level.value, "key": key, "data": data}
        try:
            pending = alerter.alert(level, key, data, options, err)
            if not inspect.isawaitable(pending):
                raise TypeError(
                    f"{type(alerter).__name__}.alert() returned {type(pending).__name__}, expected an awaitable"
                )
        except Exception as e:
            return self.error(ALERT_THROWN_KEY, context, None, e)
        return self._track(self._settle_alert(pending, context))

    async def _settle_alert(self, pending: Awaitable[Any], context: dict[str, Any]) -> None:
        try:
            try:
                await pending
            except Exception as e:
                await self.error(ALERT_RESPONSE_KEY, context, None, e)
        except Exception as e:
            await self.error(ALERT_THROWN_KEY, context, None, e)

    def _track(self, coro: Coroutine[Any, Any, None]) -> Awaitable[None]:
        """Run the alert settlement as a task when a loop is running; otherwise hand the coroutine back."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return coro
        task = asyncio.ensure_future(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task
