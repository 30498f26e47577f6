"""Document persistence for configuration files."""

from .documents import (
    ConfigItem,
    StrategyEntry,
    StrategiesDocument,
    MarketEntry,
    MarketsDocument,
    NetworkEntry,
    ExchangeEntry,
    ExchangeDocument,
)
from .locks import file_lock, get_file_lock
from .store import DocumentStore, YamlDocumentStore, get_validator

__all__ = [
    # Documents
    "ConfigItem",
    "StrategyEntry",
    "StrategiesDocument",
    "MarketEntry",
    "MarketsDocument",
    "NetworkEntry",
    "ExchangeEntry",
    "ExchangeDocument",
    # Store
    "DocumentStore",
    "YamlDocumentStore",
    "get_validator",
    # Locking
    "file_lock",
    "get_file_lock",
]
