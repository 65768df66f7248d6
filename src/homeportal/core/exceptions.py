"""
Domain-specific exception hierarchy for homeportal.

All custom exceptions inherit from PortalException for consistent error handling.
"""

from typing import Any


class PortalException(Exception):
    """
    Base exception for all homeportal errors.

    Attributes:
        message: Human-readable error message
        context: Additional context for debugging
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# ============================================================================
# Source Exceptions
# ============================================================================

class SourceException(PortalException):
    """Base class for failures while fetching source records."""

    def __init__(self, source: str, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, context={"source": source, **(context or {})})
        self.source = source


class SourceUnavailableError(SourceException):
    """Backing store cannot be reached, authenticated against, or read."""

    def __init__(self, source: str, reason: str, original_error: Exception | None = None):
        super().__init__(
            source,
            f"{source} source unavailable: {reason}",
            context={"original": str(original_error)} if original_error else None,
        )
        self.reason = reason
        self.original_error = original_error


class MalformedSourceError(SourceException):
    """Backing document exists but is structurally invalid."""

    def __init__(self, source: str, path: str, reason: str):
        super().__init__(
            source,
            f"Malformed {source} source {path}: {reason}",
            context={"path": path},
        )
        self.path = path
        self.reason = reason


# ============================================================================
# Configuration Exceptions
# ============================================================================

class ConfigurationException(PortalException):
    """Base class for configuration errors."""
    pass


class ConfigValidationError(ConfigurationException):
    """Configuration validation failed."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for '{field}': {reason}",
            context={"field": field, "value": value}
        )
        self.field = field
        self.value = value
