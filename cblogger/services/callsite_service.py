"""Call-site resolution: first stack frame outside the logger package + residual trace."""

from __future__ import annotations

import os
import traceback
from pathlib import Path

from cblogger.core.interfaces import ICallSiteResolver
from cblogger.core.models import CallSite
from cblogger.utils.logger import get_logger

logger = get_logger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parent.parent
UNKNOWN_SOURCE = "<unknown>"


class CallSiteResolver(ICallSiteResolver):
    """
    Captures a fresh stack on every call and skips the innermost frames that live
    inside the logger package, so the first remaining frame is the code that invoked
    a logging method. Paths are reported relative to source_root (default: cwd).
    """

    def __init__(
        self,
        source_root: str | Path | None = None,
        package_root: str | Path | None = None,
    ) -> None:
        self._source_root = str(source_root) if source_root else None
        self._package_root = os.path.realpath(str(package_root or PACKAGE_ROOT))

    def resolve(self) -> CallSite:
        try:
            frames = traceback.extract_stack()
            index = self._caller_index(frames)
            if index < 0:
                return CallSite(source=UNKNOWN_SOURCE)
            caller = frames[index]
            residual = traceback.format_list(frames[: index + 1])
            return CallSite(
                source=f"{self._relative(caller.filename)} L{caller.lineno}",
                stack="".join(residual).rstrip(),
            )
        except Exception as e:
            # Diagnostic only; a log call must not fail here
            logger.debug("Call-site resolution failed: %s", e)
            return CallSite(source=UNKNOWN_SOURCE)

    def _caller_index(self, frames: traceback.StackSummary) -> int:
        """Index of the innermost frame outside the package, -1 if none."""
        for index in range(len(frames) - 1, -1, -1):
            if not self._is_internal(frames[index].filename):
                return index
        return -1

    def _is_internal(self, filename: str) -> bool:
        path = os.path.realpath(filename)
        return path == self._package_root or path.startswith(self._package_root + os.sep)

    def _relative(self, filename: str) -> str:
        root = self._source_root or os.getcwd()
        try:
            return os.path.relpath(filename, root)
        except ValueError:
            # Different drive on Windows
            return filename
