"""Symbol normalization."""

from coin_source.symbols.normalizer import (
    DEFAULT_QUOTE_SUFFIX,
    XYZ_DEX_ASSETS,
    XYZ_DEX_ASSETS_BY_CLASS,
    XYZ_PREFIX,
    asset_class_of,
    base_symbol,
    canonicalize,
    is_alternate_class_asset,
)

__all__ = [
    "DEFAULT_QUOTE_SUFFIX",
    "XYZ_DEX_ASSETS",
    "XYZ_DEX_ASSETS_BY_CLASS",
    "XYZ_PREFIX",
    "asset_class_of",
    "base_symbol",
    "canonicalize",
    "is_alternate_class_asset",
]
