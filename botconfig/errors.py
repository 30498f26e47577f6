"""
Exception types raised by the configuration store.

Not-found and conflict outcomes are not errors; repositories report them
through ConfigResult. Everything here is a fault the caller cannot fix
per request.
"""

from typing import Any, Dict, List, Optional


class BotConfigError(Exception):
    """Base class for configuration store errors."""


class DocumentValidationError(BotConfigError, ValueError):
    """A persisted document does not conform to its schema."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.path = path
        self.errors = errors or []

    def __str__(self) -> str:
        base = super().__str__()
        if self.path:
            base = f"{base} (file: {self.path})"
        if self.errors:
            first = self.errors[0]
            base = f"{base}; first error at '{first.get('path', '')}': {first.get('message')}"
        return base


class MappingError(BotConfigError):
    """An internal entry cannot be mapped to its external shape."""


class PersistenceError(BotConfigError):
    """A write completed but the entry could not be read back."""
