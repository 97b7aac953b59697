"""Factory for creating loggers from config. Used for the process-wide instance and for isolated tests."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from cblogger.core.interfaces import ICallSiteResolver, IRecordFormatter, ITracer
from cblogger.pipeline.dispatcher import CBLogger, Writer
from cblogger.services.registry_service import ExtensionRegistry
from cblogger.services.tracing_service import default_tracer
from cblogger.utils.config import LoggerConfig, load_config


def create_logger(
    config: LoggerConfig | None = None,
    *,
    tracer: ITracer | None = None,
    clock: Callable[[], datetime] | None = None,
    writer: Writer | None = None,
    resolver: ICallSiteResolver | None = None,
    formatter: IRecordFormatter | None = None,
    registry: ExtensionRegistry | None = None,
) -> CBLogger:
    """
    Create a logger. Config is loaded from YAML + env when not given.
    The tracer is resolved once here: the injected one, else the ContextVar tracer
    when config.tracing is on, else absent.
    """
    cfg = config or load_config()
    if tracer is None and cfg.tracing:
        tracer = default_tracer
    return CBLogger(
        cfg,
        registry=registry,
        resolver=resolver,
        formatter=formatter,
        tracer=tracer,
        clock=clock,
        writer=writer,
    )
