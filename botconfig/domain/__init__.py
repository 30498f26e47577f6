"""External configuration entities."""

from .models import StrategyConfig, MarketConfig, NetworkConfig, ExchangeConfig

__all__ = [
    "StrategyConfig",
    "MarketConfig",
    "NetworkConfig",
    "ExchangeConfig",
]
