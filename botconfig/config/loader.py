"""
Settings loader.

Supports loading from:
- A YAML settings file (optional)
- BOTCONFIG_* environment variables, which win over the file
"""

from pathlib import Path
from typing import Optional

import yaml

from .schema import Settings


def load_settings(settings_path: Optional[str] = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        settings_path: Optional path to a YAML settings file

    Returns:
        Validated Settings object

    Raises:
        FileNotFoundError: If a settings file is given but doesn't exist
        ValidationError: If settings validation fails
    """
    settings_dict: dict = {}

    if settings_path is not None:
        path = Path(settings_path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {settings_path}")

        with open(path, "r", encoding="utf-8") as f:
            settings_dict = yaml.safe_load(f) or {}

    return Settings(**settings_dict)
