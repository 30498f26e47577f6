"""
Internal document trees as persisted on disk.

Field aliases match the keys used in the data files and JSON schemas.
Optional name/value lists stay None when absent from the file.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DocumentModel(BaseModel):
    """Base for persisted models: camelCase on disk, snake_case in code."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class ConfigItem(DocumentModel):
    """A single name/value setting."""

    name: str
    value: str


# ==================== Strategies ====================

class StrategyEntry(DocumentModel):
    """A trading strategy definition."""

    id: str
    name: str
    description: str = ""
    class_name: str = Field(alias="className")
    config_items: Optional[List[ConfigItem]] = Field(default=None, alias="configItems")


class StrategiesDocument(DocumentModel):
    """The strategies data file."""

    strategies: List[StrategyEntry] = Field(default_factory=list)

    @property
    def entries(self) -> List[StrategyEntry]:
        return self.strategies


# ==================== Markets ====================

class MarketEntry(DocumentModel):
    """A market the bot trades on."""

    id: str
    name: str
    base_currency: str = Field(alias="baseCurrency")
    counter_currency: str = Field(alias="counterCurrency")
    enabled: bool
    trading_strategy_id: str = Field(alias="tradingStrategyId")


class MarketsDocument(DocumentModel):
    """The markets data file."""

    markets: List[MarketEntry] = Field(default_factory=list)

    @property
    def entries(self) -> List[MarketEntry]:
        return self.markets


# ==================== Exchange ====================

class NetworkEntry(DocumentModel):
    """Exchange adapter network settings."""

    connection_timeout: int = Field(alias="connectionTimeout", ge=0)
    non_fatal_error_http_status_codes: List[int] = Field(
        default_factory=list, alias="nonFatalErrorHttpStatusCodes"
    )
    non_fatal_error_messages: List[str] = Field(
        default_factory=list, alias="nonFatalErrorMessages"
    )


class ExchangeEntry(DocumentModel):
    """The exchange adapter. Authentication items never leave this layer."""

    name: str
    class_name: str = Field(alias="className")
    authentication_config: Optional[List[ConfigItem]] = Field(
        default=None, alias="authenticationConfig"
    )
    network_config: NetworkEntry = Field(alias="networkConfig")
    other_config: Optional[List[ConfigItem]] = Field(default=None, alias="otherConfig")


class ExchangeDocument(DocumentModel):
    """The exchange data file."""

    exchange: ExchangeEntry
