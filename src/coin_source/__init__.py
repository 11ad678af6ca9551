"""
Coin source configuration for systematic trading strategies.

Modules:
- symbols: Symbol normalization (xyz dex assets vs USDT perpetuals)
- shared: Coin source models and enums
- editor: Copy-update operations over the coin source record
- validation: Lenient checks that surface warnings, not errors
- config / infrastructure: Settings and structured logging
"""

from coin_source.editor import CoinSourceEditor, add_coin, remove_coin
from coin_source.shared.models import AssetClass, CoinSourceConfig, SourceType
from coin_source.symbols import canonicalize, is_alternate_class_asset

__all__ = [
    "AssetClass",
    "CoinSourceConfig",
    "CoinSourceEditor",
    "SourceType",
    "add_coin",
    "canonicalize",
    "is_alternate_class_asset",
    "remove_coin",
]
