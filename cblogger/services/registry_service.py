"""
Extension registry: at most one object per capability slot.
The alerter slot can be detached; the crash-reporter binding is permanent.
"""

from __future__ import annotations

import threading
from typing import Any

from cblogger.core.exceptions import (
    AlreadyExtendedError,
    InvalidExtensionError,
    MethodNotAllowedError,
)
from cblogger.core.interfaces import IAlerter, ICrashReporter
from cblogger.core.models import ExtensionKind
from cblogger.utils.logger import get_logger

logger = get_logger(__name__)

REQUIRED_MEMBER = {
    ExtensionKind.ALERTER: "alert",
    ExtensionKind.CRASH_REPORTER: "notify",
}


class ExtensionRegistry:
    """Holds attached capability objects. Check-and-set is a single locked section."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._alerter: IAlerter | None = None
        self._crash_reporter: ICrashReporter | None = None

    @property
    def alerter(self) -> IAlerter | None:
        return self._alerter

    @property
    def crash_reporter(self) -> ICrashReporter | None:
        return self._crash_reporter

    def is_attached(self, kind: ExtensionKind | str) -> bool:
        kind = ExtensionKind(kind)
        if kind is ExtensionKind.ALERTER:
            return self._alerter is not None
        return self._crash_reporter is not None

    def attach(self, kind: ExtensionKind | str, extension: Any) -> bool:
        """Attach extension to the slot. Raises AlreadyExtendedError / InvalidExtensionError."""
        kind = ExtensionKind(kind)
        member = REQUIRED_MEMBER[kind]
        if not callable(getattr(extension, member, None)):
            raise InvalidExtensionError(
                f"Object passed as {kind.value} does not implement a callable `{member}`"
            )
        with self._lock:
            if self.is_attached(kind):
                raise AlreadyExtendedError(f"Logger already has an attached {kind.value}")
            if kind is ExtensionKind.ALERTER:
                self._alerter = extension
            else:
                self._crash_reporter = extension
        logger.debug("Attached %s: %s", kind.value, type(extension).__name__)
        return True

    def detach(self, kind: ExtensionKind | str = ExtensionKind.ALERTER) -> bool:
        """Detach the alerter. Raises MethodNotAllowedError if empty or for the crash reporter."""
        kind = ExtensionKind(kind)
        if kind is ExtensionKind.CRASH_REPORTER:
            raise MethodNotAllowedError("Crash reporter attachment is permanent")
        with self._lock:
            if self._alerter is None:
                raise MethodNotAllowedError()
            self._alerter = None
        logger.debug("Detached %s", kind.value)
        return True
