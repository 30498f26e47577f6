"""
Shared CRUD logic for id-keyed configuration documents.

Every call loads the document fresh. Writes rewrite the whole document while
holding the data file's lock, then reload it to confirm the result.
"""

from pathlib import Path
from typing import Generic, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel

from ..datastore.locks import file_lock
from ..datastore.store import DocumentStore
from ..errors import PersistenceError
from ..utils.logging import get_logger
from .results import ConfigResult

logger = get_logger(__name__)

D = TypeVar("D", bound=BaseModel)  # document
E = TypeVar("E", bound=BaseModel)  # persisted entry
C = TypeVar("C", bound=BaseModel)  # external entity


class ConfigRepository(Generic[D, E, C]):
    """
    Repository over a document holding an ordered list of id-keyed entries.

    Subclasses set ``document_type`` and ``entity_name`` and provide the
    entry/entity mapping.
    """

    document_type: Type[D]
    entity_name: str = "entry"

    def __init__(
        self,
        store: DocumentStore,
        data_path: Union[str, Path],
        schema_path: Union[str, Path],
    ):
        self.store = store
        self.data_path = Path(data_path)
        self.schema_path = Path(schema_path)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _entries(self, document: D) -> List[E]:
        return document.entries

    def _to_external(self, entry: E) -> C:
        raise NotImplementedError

    def _to_internal(self, entity: C) -> E:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_all(self) -> List[C]:
        """Get all entries in persisted order."""
        document = self._load()
        return [self._to_external(entry) for entry in self._entries(document)]

    def find_by_id(self, entity_id: str) -> ConfigResult[C]:
        """Get an entry by ID."""
        document = self._load()
        found = self._locate(document, entity_id)
        if found is None:
            return ConfigResult.not_found()
        return ConfigResult.ok(self._to_external(found[1]))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, entity: C) -> ConfigResult[C]:
        """Append a new entry. Reports a conflict if the ID is taken."""
        with file_lock(self.data_path):
            document = self._load()
            if self._locate(document, entity.id) is not None:
                logger.info(f"{self.entity_name}_create_conflict", id=entity.id)
                return ConfigResult.conflict()

            self._entries(document).append(self._to_internal(entity))
            self._save(document)
            created = self._reload_entry(entity.id)

        logger.info(f"{self.entity_name}_created", id=entity.id)
        return ConfigResult.ok(created)

    def update(self, entity: C) -> ConfigResult[C]:
        """Replace an existing entry in place, keeping its position."""
        with file_lock(self.data_path):
            document = self._load()
            found = self._locate(document, entity.id)
            if found is None:
                logger.info(f"{self.entity_name}_update_not_found", id=entity.id)
                return ConfigResult.not_found()

            index, _ = found
            self._entries(document)[index] = self._to_internal(entity)
            self._save(document)
            updated = self._reload_entry(entity.id)

        logger.info(f"{self.entity_name}_updated", id=entity.id)
        return ConfigResult.ok(updated)

    def delete_by_id(self, entity_id: str) -> ConfigResult[C]:
        """Remove an entry, returning what it held before removal."""
        with file_lock(self.data_path):
            document = self._load()
            found = self._locate(document, entity_id)
            if found is None:
                logger.info(f"{self.entity_name}_delete_not_found", id=entity_id)
                return ConfigResult.not_found()

            index, entry = found
            deleted = self._to_external(entry)
            del self._entries(document)[index]
            self._save(document)

        logger.info(f"{self.entity_name}_deleted", id=entity_id)
        return ConfigResult.ok(deleted)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load(self) -> D:
        return self.store.load(self.document_type, self.data_path, self.schema_path)

    def _save(self, document: D) -> None:
        self.store.save(self.document_type, document, self.data_path, self.schema_path)

    def _locate(self, document: D, entity_id: str) -> Optional[Tuple[int, E]]:
        for index, entry in enumerate(self._entries(document)):
            if entry.id == entity_id:
                return index, entry
        return None

    def _reload_entry(self, entity_id: str) -> C:
        found = self._locate(self._load(), entity_id)
        if found is None:
            raise PersistenceError(
                f"{self.entity_name} '{entity_id}' missing from {self.data_path} after save"
            )
        return self._to_external(found[1])
