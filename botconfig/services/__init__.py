"""Request-level services over the configuration repositories."""

from .config_service import ConfigService

__all__ = ["ConfigService"]
