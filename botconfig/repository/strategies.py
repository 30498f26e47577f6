"""Repository for trading strategy configuration."""

from ..datastore.documents import StrategiesDocument, StrategyEntry
from ..domain.models import StrategyConfig
from .base import ConfigRepository
from .mapper import strategy_to_external, strategy_to_internal


class StrategyConfigRepository(ConfigRepository[StrategiesDocument, StrategyEntry, StrategyConfig]):
    """Repository for StrategyConfig operations."""

    document_type = StrategiesDocument
    entity_name = "strategy"

    def _to_external(self, entry: StrategyEntry) -> StrategyConfig:
        return strategy_to_external(entry)

    def _to_internal(self, entity: StrategyConfig) -> StrategyEntry:
        return strategy_to_internal(entity)
