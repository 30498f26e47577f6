"""
Conversions between persisted entries and external entities.

Pure functions, no I/O. An absent name/value list maps to an empty dict and
an empty dict maps back to an empty list, so round trips are stable.
"""

from typing import Dict, List, Optional

from ..datastore.documents import (
    ConfigItem,
    ExchangeEntry,
    MarketEntry,
    NetworkEntry,
    StrategyEntry,
)
from ..domain.models import ExchangeConfig, MarketConfig, NetworkConfig, StrategyConfig
from ..errors import MappingError


def config_items_to_dict(items: Optional[List[ConfigItem]], owner: str = "") -> Dict[str, str]:
    """Flatten a name/value list, rejecting repeated names."""
    if items is None:
        return {}

    result: Dict[str, str] = {}
    for item in items:
        if item.name in result:
            raise MappingError(f"Duplicate config item '{item.name}' in {owner or 'entry'}")
        result[item.name] = item.value
    return result


def dict_to_config_items(mapping: Dict[str, str]) -> List[ConfigItem]:
    """Inverse of config_items_to_dict, preserving key order."""
    return [ConfigItem(name=name, value=value) for name, value in mapping.items()]


# ==================== Strategies ====================

def strategy_to_external(entry: StrategyEntry) -> StrategyConfig:
    return StrategyConfig(
        id=entry.id,
        name=entry.name,
        description=entry.description,
        class_name=entry.class_name,
        config_items=config_items_to_dict(entry.config_items, owner=f"strategy '{entry.id}'"),
    )


def strategy_to_internal(entity: StrategyConfig) -> StrategyEntry:
    return StrategyEntry(
        id=entity.id,
        name=entity.name,
        description=entity.description,
        class_name=entity.class_name,
        config_items=dict_to_config_items(entity.config_items),
    )


# ==================== Markets ====================

def market_to_external(entry: MarketEntry) -> MarketConfig:
    return MarketConfig(
        id=entry.id,
        name=entry.name,
        base_currency=entry.base_currency,
        counter_currency=entry.counter_currency,
        enabled=entry.enabled,
        trading_strategy_id=entry.trading_strategy_id,
    )


def market_to_internal(entity: MarketConfig) -> MarketEntry:
    return MarketEntry(
        id=entity.id,
        name=entity.name,
        base_currency=entity.base_currency,
        counter_currency=entity.counter_currency,
        enabled=entity.enabled,
        trading_strategy_id=entity.trading_strategy_id,
    )


# ==================== Exchange ====================

def exchange_to_external(entry: ExchangeEntry) -> ExchangeConfig:
    """Map the exchange entry, leaving authentication items behind."""
    network = entry.network_config
    return ExchangeConfig(
        name=entry.name,
        class_name=entry.class_name,
        network_config=NetworkConfig(
            connection_timeout=network.connection_timeout,
            non_fatal_error_http_status_codes=list(network.non_fatal_error_http_status_codes),
            non_fatal_error_messages=list(network.non_fatal_error_messages),
        ),
        other_config=config_items_to_dict(entry.other_config, owner=f"exchange '{entry.name}'"),
    )


def exchange_to_internal(
    entity: ExchangeConfig,
    authentication_config: Optional[List[ConfigItem]] = None,
) -> ExchangeEntry:
    """
    Map an external exchange config to its persisted form.

    Credentials are not part of the external shape, so the caller passes
    the stored authentication items through to keep them.
    """
    network = entity.network_config
    return ExchangeEntry(
        name=entity.name,
        class_name=entity.class_name,
        authentication_config=authentication_config,
        network_config=NetworkEntry(
            connection_timeout=network.connection_timeout,
            non_fatal_error_http_status_codes=list(network.non_fatal_error_http_status_codes),
            non_fatal_error_messages=list(network.non_fatal_error_messages),
        ),
        other_config=dict_to_config_items(entity.other_config),
    )
