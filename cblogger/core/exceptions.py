"""Custom exceptions for the logger and its extension API. No generic Exception usage."""

from __future__ import annotations


class CBLoggerError(Exception):
    """Base exception for logger failures. Carries a stable code and HTTP-style title."""

    domain = "CBLogger"
    code = ""
    title = ""
    default_message = ""

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code!r}, domain={self.domain!r}, "
            f"title={self.title!r}, message={self.message!r})"
        )


class AlreadyExtendedError(CBLoggerError):
    """An extension slot is already occupied."""

    code = "cblogger_409"
    title = "Conflict"
    default_message = "Logger has already been extended"


class InvalidExtensionError(CBLoggerError):
    """Extension object does not implement the required capability member."""

    code = "cblogger_501"
    title = "Not Implemented"
    default_message = "Extension object does not implement the required capability"


class MethodNotAllowedError(CBLoggerError):
    """Detach requested for an empty or permanent slot."""

    code = "cblogger_405"
    title = "Method Not Allowed"
    default_message = "Logger has not been extended, cannot unextend"


class AlertingUnavailableError(CBLoggerError):
    """Alert requested but no alerter is attached."""

    code = "cblogger_503"
    title = "Service Unavailable"
    default_message = "CBLogger has not been extended, alert service unavailable"


class ConfigError(CBLoggerError):
    """Invalid or missing configuration."""

    code = "cblogger_400"
    title = "Bad Request"
    default_message = "Invalid logger configuration"
