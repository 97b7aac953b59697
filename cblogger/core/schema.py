"""
Pydantic schema for the per-call options bag. Used by the dispatcher and formatter;
forwarded as-is to the attached alerter.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_DEPTH = 4


class LogOptions(BaseModel):
    """Recognized options; unknown keys are kept as passthrough extras for the alerter."""

    model_config = ConfigDict(extra="allow", frozen=True)

    ts: bool = True
    stack: bool = False
    alert: bool = False
    depth: int = Field(default=DEFAULT_DEPTH, ge=1)
    scope: Any = None

    @property
    def passthrough(self) -> dict[str, Any]:
        """Extra keys supplied by the caller (not interpreted by the logger)."""
        return dict(self.model_extra or {})


def normalize_options(raw: Any, defaults: Mapping[str, Any] | None = None) -> LogOptions:
    """
    Build LogOptions from whatever the caller passed.
    Non-mapping values become empty options; recognized keys with invalid values
    fall back to their defaults instead of raising.
    """
    if isinstance(raw, LogOptions):
        return raw
    base = dict(defaults or {})
    supplied = {str(k): v for k, v in raw.items()} if isinstance(raw, Mapping) else {}
    values = {**base, **supplied}
    try:
        return LogOptions.model_validate(values)
    except ValidationError as e:
        rejected = {str(err["loc"][0]) for err in e.errors() if err.get("loc")}
    cleaned = {k: v for k, v in values.items() if k not in rejected}
    for name in rejected:
        if name in base:
            cleaned[name] = base[name]
    return LogOptions.model_validate(cleaned)
