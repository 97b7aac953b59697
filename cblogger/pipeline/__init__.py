"""Pipeline: dispatcher and logger factory."""

from cblogger.pipeline.dispatcher import CBLogger, console_write, reclassify_arguments
from cblogger.pipeline.factory import create_logger

__all__ = [
    "CBLogger",
    "console_write",
    "reclassify_arguments",
    "create_logger",
]
