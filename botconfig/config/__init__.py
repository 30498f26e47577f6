"""Settings management module."""

from .schema import Settings, FileNames, SchemaFileNames, LoggingSettings, PACKAGE_SCHEMA_DIR
from .loader import load_settings

__all__ = [
    "Settings",
    "FileNames",
    "SchemaFileNames",
    "LoggingSettings",
    "PACKAGE_SCHEMA_DIR",
    "load_settings",
]
