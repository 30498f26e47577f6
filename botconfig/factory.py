"""
Factory for wiring the configuration repositories.

All repositories share one document store so encrypted files open with the
same master password.
"""

from dataclasses import dataclass
from typing import Optional

from .config.schema import Settings
from .datastore.store import DocumentStore, YamlDocumentStore
from .repository.exchange import ExchangeConfigRepository
from .repository.markets import MarketConfigRepository
from .repository.strategies import StrategyConfigRepository
from .services.config_service import ConfigService
from .utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Repositories:
    """The repositories for one bot's configuration."""

    strategies: StrategyConfigRepository
    markets: MarketConfigRepository
    exchange: ExchangeConfigRepository

    def strategy_service(self) -> ConfigService:
        return ConfigService(self.strategies)

    def market_service(self) -> ConfigService:
        return ConfigService(self.markets)


def create_store(settings: Settings) -> YamlDocumentStore:
    """Create the file-backed store for the given settings."""
    return YamlDocumentStore(password=settings.get_master_password())


def create_repositories(
    settings: Settings,
    store: Optional[DocumentStore] = None,
) -> Repositories:
    """
    Create the strategy, market and exchange repositories.

    Args:
        settings: File locations and master password
        store: Document store to use instead of the file-backed default

    Returns:
        Repositories bundle (no files are read until the first call)
    """
    store = store or create_store(settings)

    repositories = Repositories(
        strategies=StrategyConfigRepository(
            store, settings.data_path("strategies"), settings.schema_path("strategies")
        ),
        markets=MarketConfigRepository(
            store, settings.data_path("markets"), settings.schema_path("markets")
        ),
        exchange=ExchangeConfigRepository(
            store, settings.data_path("exchange"), settings.schema_path("exchange")
        ),
    )

    logger.info(
        "repositories_created",
        data_dir=str(settings.data_dir),
        schema_dir=str(settings.schema_dir),
        encrypted_store=settings.get_master_password() is not None,
    )
    return repositories
