"""Tracing collaborator backed by a ContextVar; safe across asyncio tasks."""

from __future__ import annotations

import uuid
from contextlib import AbstractContextManager, contextmanager
from contextvars import ContextVar
from typing import Iterator

_request_id: ContextVar[str | None] = ContextVar("cblogger_request_id", default=None)


class ContextVarTracer:
    """Reads the ambient request id; request_scope sets it for the enclosed block."""

    def __init__(self, var: ContextVar[str | None] | None = None) -> None:
        self._var = var if var is not None else _request_id

    def current_id(self) -> str | None:
        return self._var.get()

    @contextmanager
    def request_scope(self, request_id: str | None = None) -> Iterator[str]:
        """Set the request id (generated when omitted) and restore the previous one on exit."""
        rid = request_id or str(uuid.uuid4())
        token = self._var.set(rid)
        try:
            yield rid
        finally:
            self._var.reset(token)


default_tracer = ContextVarTracer()


def request_scope(request_id: str | None = None) -> AbstractContextManager[str]:
    """Module-level shortcut on the process-wide tracer."""
    return default_tracer.request_scope(request_id)
