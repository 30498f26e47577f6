"""Utility modules for the configuration store."""

from .encryption import encrypt_data, decrypt_data, derive_key, is_encrypted
from .logging import setup_logging, get_logger

__all__ = [
    "encrypt_data",
    "decrypt_data",
    "derive_key",
    "is_encrypted",
    "setup_logging",
    "get_logger",
]
