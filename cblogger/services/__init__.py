"""Logger services: call-site resolution, formatting, extension registry, tracing."""

from cblogger.services.callsite_service import CallSiteResolver
from cblogger.services.format_service import RecordFormatter, inspect_value, format_timestamp
from cblogger.services.registry_service import ExtensionRegistry
from cblogger.services.tracing_service import ContextVarTracer, default_tracer, request_scope

__all__ = [
    "CallSiteResolver",
    "RecordFormatter",
    "inspect_value",
    "format_timestamp",
    "ExtensionRegistry",
    "ContextVarTracer",
    "default_tracer",
    "request_scope",
]
