"""Internal diagnostics via the stdlib logging tree; never configures handlers."""

from __future__ import annotations

import logging
from typing import Any


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module/component. No side effects."""
    return logging.getLogger(name)


def log_structured(logger: logging.Logger, level: int, msg: str, **kwargs: Any) -> None:
    """Emit a log record with extra keys for structured aggregation."""
    logger.log(level, msg, extra=kwargs)
