"""Repository for market configuration."""

from ..datastore.documents import MarketEntry, MarketsDocument
from ..domain.models import MarketConfig
from .base import ConfigRepository
from .mapper import market_to_external, market_to_internal


class MarketConfigRepository(ConfigRepository[MarketsDocument, MarketEntry, MarketConfig]):
    """
    Repository for MarketConfig operations.

    A market's trading_strategy_id is stored as given; a reference to an
    unknown strategy is not rejected here.
    """

    document_type = MarketsDocument
    entity_name = "market"

    def _to_external(self, entry: MarketEntry) -> MarketConfig:
        return market_to_external(entry)

    def _to_internal(self, entity: MarketConfig) -> MarketEntry:
        return market_to_internal(entity)
