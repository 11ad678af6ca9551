"""Configuration package for coin_source."""

from .state import (
    CoinSourceSettings,
    ConfigLoader,
    ConfigState,
    LoggingConfig,
    get_config,
    load_coin_source_config,
)

__all__ = [
    "CoinSourceSettings",
    "ConfigLoader",
    "ConfigState",
    "LoggingConfig",
    "get_config",
    "load_coin_source_config",
]
