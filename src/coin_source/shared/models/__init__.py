"""Shared domain models."""

from coin_source.shared.models.coin_source import CoinSourceConfig
from coin_source.shared.models.enums import AssetClass, SourceType

__all__ = [
    # Enums
    "AssetClass",
    "SourceType",
    # Models
    "CoinSourceConfig",
]
