"""
Document store: the only component that touches configuration files.

Data files are YAML, optionally encrypted, validated against a JSON Schema
file on every load and replaced atomically on every save.
"""

import contextlib
import json
import os
import stat
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Type, TypeVar, Union

import yaml
from jsonschema import Draft202012Validator
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..errors import DocumentValidationError
from ..utils.encryption import decrypt_data, encrypt_data, is_encrypted
from ..utils.logging import get_logger
from .locks import file_lock

logger = get_logger(__name__)

D = TypeVar("D", bound=BaseModel)

PathLike = Union[str, Path]

MAX_REPORTED_ERRORS = 50


class DocumentStore(Protocol):
    """Load and save whole configuration documents."""

    def load(self, document_type: Type[D], data_path: PathLike, schema_path: PathLike) -> D:
        ...

    def save(
        self, document_type: Type[D], document: D, data_path: PathLike, schema_path: PathLike
    ) -> None:
        ...


@lru_cache(maxsize=32)
def _load_validator(schema_path: str) -> Draft202012Validator:
    path = Path(schema_path)
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    schema = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(schema, dict):
        raise ValueError(f"Schema is not a JSON object: {schema_path}")

    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def get_validator(schema_path: PathLike) -> Draft202012Validator:
    """Return the (cached) validator for a schema file."""
    return _load_validator(str(Path(schema_path).expanduser().resolve()))


def schema_errors(validator: Draft202012Validator, data: Any) -> List[Dict[str, Any]]:
    """Collect schema violations as stable, JSON-serializable dicts."""
    errors: List[Dict[str, Any]] = []
    for e in sorted(validator.iter_errors(data), key=lambda x: (list(map(str, x.path)), str(x.message))):
        errors.append(
            {
                "path": ".".join(str(p) for p in e.path),
                "message": str(e.message),
                "schema_path": "/".join(str(p) for p in e.schema_path),
            }
        )
        if len(errors) >= MAX_REPORTED_ERRORS:
            break
    return errors


class YamlDocumentStore:
    """
    File-backed document store.

    Encrypted data files are decrypted on load and re-encrypted on save
    with the master password, so credentials never hit the disk in clear.
    """

    def __init__(self, password: Optional[str] = None):
        self._password = password

    def load(self, document_type: Type[D], data_path: PathLike, schema_path: PathLike) -> D:
        """
        Load, validate and parse a document.

        Args:
            document_type: Model class of the document tree
            data_path: YAML data file (plain or encrypted)
            schema_path: JSON Schema file the data must conform to

        Returns:
            The parsed document

        Raises:
            FileNotFoundError: If the data or schema file doesn't exist
            OSError: If a file cannot be read
            DocumentValidationError: If the content does not conform
        """
        path = Path(data_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {data_path}")

        validator = get_validator(schema_path)

        with open(path, "rb") as f:
            content = f.read()

        if is_encrypted(content):
            content = self._decrypt(content, path)

        try:
            data = yaml.safe_load(content.decode("utf-8"))
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise DocumentValidationError("Configuration file is not valid YAML", path=str(path)) from e

        if data is None:
            data = {}

        errors = schema_errors(validator, data)
        if errors:
            logger.error(
                "document_schema_validation_failed",
                path=str(path),
                schema=str(schema_path),
                error_count=len(errors),
            )
            raise DocumentValidationError(
                "Configuration file does not conform to its schema",
                path=str(path),
                errors=errors,
            )

        try:
            document = document_type.model_validate(data)
        except PydanticValidationError as e:
            raise DocumentValidationError(
                f"Configuration file cannot be parsed as {document_type.__name__}",
                path=str(path),
                errors=[
                    {"path": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                    for err in e.errors()
                ],
            ) from e

        logger.debug("document_loaded", path=str(path), document=document_type.__name__)
        return document

    def save(
        self, document_type: Type[D], document: D, data_path: PathLike, schema_path: PathLike
    ) -> None:
        """
        Serialize a full document and atomically replace the data file.

        The serialized content is checked against the schema first; a document
        that load() would reject is never written. The new content goes to a
        temporary file in the same directory, is synced, then renamed over the
        destination.

        Raises:
            DocumentValidationError: If the document does not conform to its schema
        """
        if not isinstance(document, document_type):
            raise TypeError(
                f"Expected {document_type.__name__}, got {type(document).__name__}"
            )

        path = Path(data_path)
        data = document.model_dump(mode="json", by_alias=True, exclude_none=True)

        errors = schema_errors(get_validator(schema_path), data)
        if errors:
            logger.error(
                "document_save_rejected",
                path=str(path),
                schema=str(schema_path),
                error_count=len(errors),
            )
            raise DocumentValidationError(
                "Document does not conform to its schema; nothing was written",
                path=str(path),
                errors=errors,
            )

        path.parent.mkdir(parents=True, exist_ok=True)
        payload = yaml.safe_dump(data, default_flow_style=False, sort_keys=False).encode("utf-8")

        encrypted = path.exists() and self._is_encrypted_file(path)
        if encrypted:
            if not self._password:
                raise DocumentValidationError(
                    "Configuration file is encrypted but no master password is configured",
                    path=str(path),
                )
            payload = encrypt_data(payload, self._password)

        self._atomic_write(path, payload)
        logger.info(
            "document_saved",
            path=str(path),
            document=document_type.__name__,
            encrypted=encrypted,
        )

    def encrypt_file(
        self, document_type: Type[D], data_path: PathLike, schema_path: PathLike
    ) -> None:
        """
        Encrypt a plain data file in place with the master password.

        The file must hold a valid document; an invalid one is left as is.
        Later saves keep the file encrypted.
        """
        path = Path(data_path)
        if not self._password:
            raise DocumentValidationError("No master password is configured", path=str(path))

        with file_lock(path):
            if self._is_encrypted_file(path):
                raise DocumentValidationError(
                    "Configuration file is already encrypted", path=str(path)
                )
            self.load(document_type, path, schema_path)
            self._atomic_write(path, encrypt_data(path.read_bytes(), self._password))

        logger.info("document_encrypted", path=str(path), document=document_type.__name__)

    def decrypt_file(
        self, document_type: Type[D], data_path: PathLike, schema_path: PathLike
    ) -> None:
        """Decrypt an encrypted data file in place, after checking its content."""
        path = Path(data_path)
        with file_lock(path):
            if not self._is_encrypted_file(path):
                raise DocumentValidationError(
                    "Configuration file is not encrypted", path=str(path)
                )
            self.load(document_type, path, schema_path)
            self._atomic_write(path, self._decrypt(path.read_bytes(), path))

        logger.info("document_decrypted", path=str(path), document=document_type.__name__)

    def _decrypt(self, content: bytes, path: Path) -> bytes:
        if not self._password:
            raise DocumentValidationError(
                "Configuration file is encrypted but no master password is configured",
                path=str(path),
            )
        try:
            return decrypt_data(content, self._password)
        except ValueError as e:
            raise DocumentValidationError(str(e), path=str(path)) from e

    @staticmethod
    def _is_encrypted_file(path: Path) -> bool:
        with open(path, "rb") as f:
            return is_encrypted(f.read(64))

    @staticmethod
    def _atomic_write(path: Path, payload: bytes) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            if path.exists():
                os.chmod(tmp_name, stat.S_IMODE(path.stat().st_mode))
            os.replace(tmp_name, path)
        except Exception:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise
