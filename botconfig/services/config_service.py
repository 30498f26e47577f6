"""
Request-level access to strategy and market configuration.

Callers address an entry by the ID in the request path and send the entry
in the body. A body whose ID disagrees with the path ID is rejected here,
before the repository is reached.
"""

from typing import Generic, List, TypeVar

from pydantic import BaseModel

from ..repository.base import ConfigRepository
from ..repository.results import ConfigResult
from ..utils.logging import get_logger

logger = get_logger(__name__)

C = TypeVar("C", bound=BaseModel)


class ConfigService(Generic[C]):
    """Service for CRUD requests on an id-keyed configuration class."""

    def __init__(self, repository: ConfigRepository):
        self.repository = repository

    @property
    def entity_name(self) -> str:
        return self.repository.entity_name

    def find_all(self) -> List[C]:
        return self.repository.find_all()

    def find_by_id(self, entity_id: str) -> ConfigResult[C]:
        return self.repository.find_by_id(entity_id)

    def create(self, entity_id: str, entity: C) -> ConfigResult[C]:
        """Create an entry at ``entity_id``."""
        if not self._id_matches(entity_id, entity, "create"):
            return ConfigResult.invalid()
        return self.repository.create(entity)

    def update(self, entity_id: str, entity: C) -> ConfigResult[C]:
        """Update the entry at ``entity_id``."""
        if not self._id_matches(entity_id, entity, "update"):
            return ConfigResult.invalid()
        return self.repository.update(entity)

    def delete_by_id(self, entity_id: str) -> ConfigResult[C]:
        return self.repository.delete_by_id(entity_id)

    def _id_matches(self, entity_id: str, entity: C, action: str) -> bool:
        if entity is None or not entity_id or entity.id != entity_id:
            logger.warning(
                f"{self.entity_name}_{action}_id_mismatch",
                path_id=entity_id,
                body_id=getattr(entity, "id", None),
            )
            return False
        return True
