"""
Repository for the exchange adapter configuration.

There is one exchange adapter per bot, so this repository only reads and
replaces a single entry. Stored credentials survive every save untouched.
"""

from pathlib import Path
from typing import Union

from ..datastore.documents import ExchangeDocument
from ..datastore.locks import file_lock
from ..datastore.store import DocumentStore
from ..domain.models import ExchangeConfig
from ..utils.logging import get_logger
from .mapper import exchange_to_external, exchange_to_internal

logger = get_logger(__name__)


class ExchangeConfigRepository:
    """Repository for ExchangeConfig operations."""

    def __init__(
        self,
        store: DocumentStore,
        data_path: Union[str, Path],
        schema_path: Union[str, Path],
    ):
        self.store = store
        self.data_path = Path(data_path)
        self.schema_path = Path(schema_path)

    def get(self) -> ExchangeConfig:
        """Get the exchange adapter configuration."""
        return exchange_to_external(self._load().exchange)

    def save(self, config: ExchangeConfig) -> ExchangeConfig:
        """
        Replace the exchange adapter configuration.

        Returns:
            The configuration as re-read from storage
        """
        with file_lock(self.data_path):
            document = self._load()
            document.exchange = exchange_to_internal(
                config,
                authentication_config=document.exchange.authentication_config,
            )
            self.store.save(ExchangeDocument, document, self.data_path, self.schema_path)
            saved = exchange_to_external(self._load().exchange)

        logger.info("exchange_updated", name=saved.name, class_name=saved.class_name)
        return saved

    def _load(self) -> ExchangeDocument:
        return self.store.load(ExchangeDocument, self.data_path, self.schema_path)
