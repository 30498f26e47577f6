"""
Encryption for configuration documents that hold exchange credentials.

Fernet symmetric encryption with a PBKDF2-derived key. Encrypted documents
start with a magic header followed by the salt.
"""

import base64
import secrets
from typing import Union

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

ENCRYPTED_MAGIC = b"BOTCONFIG_ENC_V1:"
SALT_LENGTH = 16
KDF_ITERATIONS = 480000


def derive_key(password: str, salt: bytes) -> bytes:
    """
    Derive a Fernet-compatible key from a password using PBKDF2.

    Args:
        password: Master password
        salt: Random salt, stored alongside the encrypted data

    Returns:
        Base64-encoded 32-byte key suitable for Fernet
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=KDF_ITERATIONS,
    )
    return base64.urlsafe_b64encode(kdf.derive(password.encode("utf-8")))


def encrypt_data(data: Union[bytes, str], password: str) -> bytes:
    """
    Encrypt data using Fernet with a password-derived key.

    Returns:
        Magic header + salt + Fernet token
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    salt = secrets.token_bytes(SALT_LENGTH)
    fernet = Fernet(derive_key(password, salt))
    return ENCRYPTED_MAGIC + salt + fernet.encrypt(data)


def decrypt_data(encrypted_data: Union[bytes, str], password: str) -> bytes:
    """
    Decrypt data produced by encrypt_data.

    Raises:
        ValueError: If the header is missing, the password is wrong
            or the data is corrupted
    """
    if isinstance(encrypted_data, str):
        encrypted_data = encrypted_data.encode("utf-8")

    if not is_encrypted(encrypted_data):
        raise ValueError("Data does not appear to be encrypted (missing magic header)")

    header_len = len(ENCRYPTED_MAGIC)
    salt = encrypted_data[header_len:header_len + SALT_LENGTH]
    token = encrypted_data[header_len + SALT_LENGTH:]

    try:
        return Fernet(derive_key(password, salt)).decrypt(token)
    except InvalidToken:
        raise ValueError("Decryption failed: incorrect password or corrupted data")


def is_encrypted(data: Union[bytes, str]) -> bool:
    """Check if data carries the encryption magic header."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return data.startswith(ENCRYPTED_MAGIC)
