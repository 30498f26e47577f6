"""Configuration repositories."""

from .results import ConfigResult, ResultStatus
from .base import ConfigRepository
from .strategies import StrategyConfigRepository
from .markets import MarketConfigRepository
from .exchange import ExchangeConfigRepository

__all__ = [
    "ConfigResult",
    "ResultStatus",
    "ConfigRepository",
    "StrategyConfigRepository",
    "MarketConfigRepository",
    "ExchangeConfigRepository",
]
