"""
Record formatting: (level, key, data, options, call site, timestamp, err) -> ordered text segments.
Pure given its inputs; the dispatcher owns the clock and the call-site lookup.
"""

from __future__ import annotations

import pprint
import traceback
from datetime import datetime, timedelta, timezone
from typing import Any

from cblogger.core.interfaces import IRecordFormatter
from cblogger.core.models import (
    AbsentError,
    CallSite,
    ErrorValue,
    LogLevel,
    StringError,
    StructuredError,
)
from cblogger.core.schema import DEFAULT_DEPTH, LogOptions

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def inspect_value(value: Any, depth: int = DEFAULT_DEPTH) -> str:
    """
    Deterministic human-readable rendering; containers nested deeper than depth become {...}/[...].
    Never raises: a value whose repr fails is shown by type and id with a marker.
    """
    try:
        return pprint.pformat(value, depth=depth, sort_dicts=False)
    except Exception as e:
        return f"{object.__repr__(value)} <repr failed: {type(e).__name__}>"


def format_timestamp(ts: datetime) -> str:
    """'at YYYY-MM-DD HH:MM:SS.mmm (<epoch millis>)' in UTC. Naive datetimes are taken as UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    millis = (ts - EPOCH) // timedelta(milliseconds=1)
    return f"at {ts:%Y-%m-%d %H:%M:%S}.{ts.microsecond // 1000:03d} ({millis})"


def _is_present(data: Any) -> bool:
    if data is None:
        return False
    try:
        return bool(data)
    except (TypeError, ValueError):
        # Objects with ambiguous truth value (e.g. arrays) still get printed
        return True


def _format_error(err: ErrorValue, depth: int) -> str:
    if isinstance(err, StringError):
        return f"\n** {err.text}"
    if isinstance(err, StructuredError):
        text = f"\n** {inspect_value(err.value, depth)}"
        tb = err.value.__traceback__ if isinstance(err.value, BaseException) else None
        if tb is not None:
            text += "\n" + "".join(traceback.format_tb(tb)).rstrip()
        return text
    return ""


class RecordFormatter(IRecordFormatter):
    """Builds the segment list for one log line; empty segments are dropped."""

    def format(
        self,
        level: LogLevel,
        key: str,
        data: Any,
        options: LogOptions,
        call_site: CallSite,
        timestamp: datetime,
        err: ErrorValue = AbsentError(),
    ) -> list[str]:
        segments = [
            f"{LogLevel(level).value}: ** {key}",
            f"\n{inspect_value(data, options.depth)}" if _is_present(data) else "",
            _format_error(err, options.depth),
            f"\n-> {call_site.source}",
            format_timestamp(timestamp) if options.ts else "",
            f"\n   {call_site.stack}" if options.stack else "",
        ]
        return [segment for segment in segments if segment]
