"""
Trading bot configuration store.

Strategy, market and exchange-adapter configuration kept as schema-validated
YAML documents and served through repositories.
"""

__version__ = "1.0.0"

from .config import Settings, load_settings
from .domain import StrategyConfig, MarketConfig, NetworkConfig, ExchangeConfig
from .errors import BotConfigError, DocumentValidationError, MappingError, PersistenceError
from .factory import Repositories, create_repositories
from .repository import ConfigResult, ResultStatus

__all__ = [
    "Settings",
    "load_settings",
    "StrategyConfig",
    "MarketConfig",
    "NetworkConfig",
    "ExchangeConfig",
    "BotConfigError",
    "DocumentValidationError",
    "MappingError",
    "PersistenceError",
    "Repositories",
    "create_repositories",
    "ConfigResult",
    "ResultStatus",
]
