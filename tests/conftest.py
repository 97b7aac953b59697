"""Shared test doubles: fixed call site, fixed clock, recording writer."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from cblogger.core.interfaces import ICallSiteResolver
from cblogger.core.models import CallSite, LogLevel
from cblogger.pipeline.dispatcher import CBLogger
from cblogger.utils.config import LoggerConfig

FIXED_TS = datetime(2024, 1, 1, tzinfo=timezone.utc)
FIXED_TS_LINE = "at 2024-01-01 00:00:00.000 (1704067200000)"
FAKE_SOURCE = "file.ext L12"
FAKE_STACK = 'File "caller.py", line 12, in main'


class FakeResolver(ICallSiteResolver):
    """Returns a fixed call site; counts lookups."""

    def __init__(self, source: str = FAKE_SOURCE, stack: str = FAKE_STACK) -> None:
        self.site = CallSite(source=source, stack=stack)
        self.calls = 0

    def resolve(self) -> CallSite:
        self.calls += 1
        return self.site


class RecordingWriter:
    """Captures (level, segments) for every record instead of printing."""

    def __init__(self) -> None:
        self.records: list[tuple[LogLevel, list[str]]] = []

    def __call__(self, level: LogLevel, segments: list[str]) -> None:
        self.records.append((level, list(segments)))

    @property
    def keys(self) -> list[str]:
        return [segments[0] for _, segments in self.records]


@pytest.fixture
def writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def make_logger(writer: RecordingWriter, resolver: FakeResolver):
    """Build an isolated CBLogger wired to the recording writer, fake resolver and fixed clock."""

    def _make(**kwargs) -> CBLogger:
        kwargs.setdefault("writer", writer)
        kwargs.setdefault("resolver", resolver)
        kwargs.setdefault("clock", lambda: FIXED_TS)
        config = kwargs.pop("config", None) or LoggerConfig()
        return CBLogger(config, **kwargs)

    return _make
