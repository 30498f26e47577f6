"""
External configuration entities.

These are the flat shapes callers read and write. Settings lists from the
data files appear here as plain dicts; exchange credentials never do.
"""

from typing import Annotated, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

HttpStatusCode = Annotated[int, Field(ge=100, le=599)]
SettingName = Annotated[str, Field(min_length=1)]


def _unique(values: list) -> list:
    """Drop repeated values, keeping first occurrence order."""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


class StrategyConfig(BaseModel):
    """A trading strategy as seen by callers."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    class_name: str = Field(min_length=1)
    config_items: Dict[SettingName, str] = Field(default_factory=dict)


class MarketConfig(BaseModel):
    """A market as seen by callers."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    base_currency: str = Field(min_length=1)
    counter_currency: str = Field(min_length=1)
    enabled: bool = False
    # Not checked against the strategies document here
    trading_strategy_id: str = Field(min_length=1)


class NetworkConfig(BaseModel):
    """Exchange adapter network settings."""

    model_config = ConfigDict(extra="forbid")

    connection_timeout: int = Field(ge=0)
    non_fatal_error_http_status_codes: List[HttpStatusCode] = Field(default_factory=list)
    non_fatal_error_messages: List[str] = Field(default_factory=list)

    @field_validator("non_fatal_error_http_status_codes", "non_fatal_error_messages")
    @classmethod
    def drop_duplicates(cls, v: list) -> list:
        """Both lists behave as sets."""
        return _unique(v)


class ExchangeConfig(BaseModel):
    """The exchange adapter as seen by callers, without credentials."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    class_name: str = Field(min_length=1)
    network_config: NetworkConfig
    other_config: Dict[SettingName, str] = Field(default_factory=dict)
