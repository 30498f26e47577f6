"""
Pytest configuration and fixtures.
"""

import os
from pathlib import Path
from typing import Dict, List, Tuple, Type

import pytest
import yaml

from botconfig.config.schema import PACKAGE_SCHEMA_DIR, Settings
from botconfig.datastore.documents import (
    ConfigItem,
    ExchangeDocument,
    ExchangeEntry,
    MarketEntry,
    MarketsDocument,
    NetworkEntry,
    StrategiesDocument,
    StrategyEntry,
)
from botconfig.datastore.store import YamlDocumentStore
from botconfig.domain.models import ExchangeConfig, MarketConfig, NetworkConfig, StrategyConfig
from botconfig.repository.exchange import ExchangeConfigRepository
from botconfig.repository.markets import MarketConfigRepository
from botconfig.repository.strategies import StrategyConfigRepository

STRATEGIES_DATA = "strategies.yaml"
MARKETS_DATA = "markets.yaml"
EXCHANGE_DATA = "exchange.yaml"

STRATEGIES_SCHEMA = PACKAGE_SCHEMA_DIR / "strategies.schema.json"
MARKETS_SCHEMA = PACKAGE_SCHEMA_DIR / "markets.schema.json"
EXCHANGE_SCHEMA = PACKAGE_SCHEMA_DIR / "exchange.schema.json"

STRAT_ID_1 = "macd-long-position"
STRAT_NAME_1 = "MACD Strat Algo"
STRAT_DESCRIPTION_1 = "Uses MACD as indicator and takes long position in base currency."
STRAT_CLASSNAME_1 = "strategies.macd.MacdLongBase"

STRAT_ID_2 = "long-scalper"
STRAT_NAME_2 = "Long Position Scalper Algo"
STRAT_DESCRIPTION_2 = "Scalps and goes long..."
STRAT_CLASSNAME_2 = "strategies.scalper.LongScalper"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host BOTCONFIG_* variables out of the tests."""
    for name in list(os.environ):
        if name.startswith("BOTCONFIG_"):
            monkeypatch.delenv(name)


# ============================================================
# In-memory Store
# ============================================================
class FakeDocumentStore:
    """
    In-memory document store.

    Documents are copied on the way in and out so repositories cannot
    mutate stored state without calling save().
    """

    def __init__(self):
        self.documents: Dict[str, object] = {}
        self.loads: List[Tuple[str, str]] = []
        self.saves: List[str] = []

    def put(self, data_path, document) -> None:
        self.documents[str(data_path)] = document.model_copy(deep=True)

    def get(self, data_path):
        return self.documents[str(data_path)]

    def load(self, document_type: Type, data_path, schema_path):
        self.loads.append((str(data_path), str(schema_path)))
        try:
            document = self.documents[str(data_path)]
        except KeyError:
            raise FileNotFoundError(f"Configuration file not found: {data_path}")
        assert isinstance(document, document_type)
        return document.model_copy(deep=True)

    def save(self, document_type: Type, document, data_path, schema_path) -> None:
        assert isinstance(document, document_type)
        self.saves.append(str(data_path))
        self.documents[str(data_path)] = document.model_copy(deep=True)


# ============================================================
# Sample Documents
# ============================================================
def buy_config_items() -> List[ConfigItem]:
    return [
        ConfigItem(name="buy-price", value="671.15"),
        ConfigItem(name="buy-amount", value="0.5"),
    ]


def make_strategies_document() -> StrategiesDocument:
    return StrategiesDocument(
        strategies=[
            StrategyEntry(
                id=STRAT_ID_1,
                name=STRAT_NAME_1,
                description=STRAT_DESCRIPTION_1,
                class_name=STRAT_CLASSNAME_1,
                config_items=buy_config_items(),
            ),
        ]
    )


def make_markets_document() -> MarketsDocument:
    return MarketsDocument(
        markets=[
            MarketEntry(
                id="btc_usd",
                name="BTC/USD",
                base_currency="BTC",
                counter_currency="USD",
                enabled=True,
                trading_strategy_id=STRAT_ID_1,
            ),
            MarketEntry(
                id="ltc_usd",
                name="LTC/USD",
                base_currency="LTC",
                counter_currency="USD",
                enabled=False,
                trading_strategy_id=STRAT_ID_2,
            ),
        ]
    )


def make_exchange_document() -> ExchangeDocument:
    return ExchangeDocument(
        exchange=ExchangeEntry(
            name="Bitstamp",
            class_name="exchanges.bitstamp.BitstampExchangeAdapter",
            authentication_config=[
                ConfigItem(name="key", value="secret-api-key"),
                ConfigItem(name="secret", value="secret-api-secret"),
            ],
            network_config=NetworkEntry(
                connection_timeout=30,
                non_fatal_error_http_status_codes=[502, 503, 504],
                non_fatal_error_messages=["Connection reset", "Connection refused"],
            ),
            other_config=[
                ConfigItem(name="buy-fee", value="0.25"),
                ConfigItem(name="sell-fee", value="0.25"),
            ],
        )
    )


def write_document(path: Path, document) -> None:
    """Write a document as plain YAML, the way an operator would."""
    data = document.model_dump(mode="json", by_alias=True, exclude_none=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")


# ============================================================
# Entity Fixtures
# ============================================================
@pytest.fixture
def macd_strategy() -> StrategyConfig:
    """The strategy held by the sample strategies document."""
    return StrategyConfig(
        id=STRAT_ID_1,
        name=STRAT_NAME_1,
        description=STRAT_DESCRIPTION_1,
        class_name=STRAT_CLASSNAME_1,
        config_items={"buy-price": "671.15", "buy-amount": "0.5"},
    )


@pytest.fixture
def scalper_strategy() -> StrategyConfig:
    """A strategy not yet in the sample document."""
    return StrategyConfig(
        id=STRAT_ID_2,
        name=STRAT_NAME_2,
        description=STRAT_DESCRIPTION_2,
        class_name=STRAT_CLASSNAME_2,
        config_items={},
    )


@pytest.fixture
def eth_market() -> MarketConfig:
    """A market not yet in the sample document."""
    return MarketConfig(
        id="eth_usd",
        name="ETH/USD",
        base_currency="ETH",
        counter_currency="USD",
        enabled=True,
        trading_strategy_id=STRAT_ID_2,
    )


@pytest.fixture
def kraken_exchange() -> ExchangeConfig:
    """Replacement exchange settings."""
    return ExchangeConfig(
        name="Kraken",
        class_name="exchanges.kraken.KrakenExchangeAdapter",
        network_config=NetworkConfig(
            connection_timeout=60,
            non_fatal_error_http_status_codes=[520, 522],
            non_fatal_error_messages=["Remote host closed connection during handshake"],
        ),
        other_config={"max-retries": "3"},
    )


# ============================================================
# In-memory Repository Fixtures
# ============================================================
@pytest.fixture
def fake_store() -> FakeDocumentStore:
    """Fake store preloaded with the sample documents."""
    store = FakeDocumentStore()
    store.put(STRATEGIES_DATA, make_strategies_document())
    store.put(MARKETS_DATA, make_markets_document())
    store.put(EXCHANGE_DATA, make_exchange_document())
    return store


@pytest.fixture
def strategy_repo(fake_store: FakeDocumentStore) -> StrategyConfigRepository:
    return StrategyConfigRepository(fake_store, STRATEGIES_DATA, STRATEGIES_SCHEMA)


@pytest.fixture
def market_repo(fake_store: FakeDocumentStore) -> MarketConfigRepository:
    return MarketConfigRepository(fake_store, MARKETS_DATA, MARKETS_SCHEMA)


@pytest.fixture
def exchange_repo(fake_store: FakeDocumentStore) -> ExchangeConfigRepository:
    return ExchangeConfigRepository(fake_store, EXCHANGE_DATA, EXCHANGE_SCHEMA)


# ============================================================
# File-backed Fixtures
# ============================================================
@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Temporary data directory holding the sample documents as YAML."""
    write_document(tmp_path / STRATEGIES_DATA, make_strategies_document())
    write_document(tmp_path / MARKETS_DATA, make_markets_document())
    write_document(tmp_path / EXCHANGE_DATA, make_exchange_document())
    return tmp_path


@pytest.fixture
def yaml_store() -> YamlDocumentStore:
    return YamlDocumentStore()


@pytest.fixture
def file_settings(data_dir: Path) -> Settings:
    """Settings pointing at the temporary data directory."""
    return Settings(data_dir=data_dir, schema_dir=PACKAGE_SCHEMA_DIR)
