"""
Symbol normalization for strategy coin lists.

Two symbol families are supported:
- xyz dex assets (stocks, forex, commodities, index): "xyz:TSLA", "xyz:GOLD"
- Everything else is a USDT-margined perpetual: "BTCUSDT", "SOLUSDT"

xyz dex assets never get the USDT suffix. User input may arrive in any case,
with or without the "xyz:" prefix, and with a quote suffix already attached
("TSLAUSD", "eur-USDC"); both functions below tolerate all of that.
"""

import re

from coin_source.infrastructure.observability import get_processing_logger
from coin_source.shared.models.enums import AssetClass

log = get_processing_logger("symbol-normalizer")

XYZ_PREFIX = "xyz"
DEFAULT_QUOTE_SUFFIX = "USDT"

# Stripping precedence: USDT, then USD, then -USDC. Only one suffix is removed.
_PREFIX_RE = re.compile(r"^xyz:", re.IGNORECASE)
_QUOTE_SUFFIX_RE = re.compile(r"USDT\Z|USD\Z|-USDC\Z", re.IGNORECASE)

XYZ_DEX_ASSETS_BY_CLASS: dict[AssetClass, frozenset[str]] = {
    AssetClass.EQUITY: frozenset(
        {
            "TSLA", "NVDA", "AAPL", "MSFT", "META", "AMZN", "GOOGL", "AMD",
            "COIN", "NFLX", "PLTR", "HOOD", "INTC", "MSTR", "TSM", "ORCL",
            "MU", "RIVN", "COST", "LLY", "CRCL", "SKHX", "SNDK",
        }
    ),
    AssetClass.FOREX: frozenset({"EUR", "JPY"}),
    AssetClass.COMMODITY: frozenset({"GOLD", "SILVER"}),
    AssetClass.INDEX: frozenset({"XYZ100"}),
}

XYZ_DEX_ASSETS: frozenset[str] = frozenset().union(*XYZ_DEX_ASSETS_BY_CLASS.values())


def _strip_decorations(symbol: str) -> str:
    base = _PREFIX_RE.sub("", symbol, count=1)
    return _QUOTE_SUFFIX_RE.sub("", base, count=1)


def base_symbol(symbol: str) -> str:
    """
    Extract the base token used for classification.

    Examples:
        >>> base_symbol("xyz:tsla")
        'TSLA'
        >>> base_symbol("EUR-USDC")
        'EUR'
        >>> base_symbol("btcusdt")
        'BTC'
    """
    return _strip_decorations(symbol.upper())


def is_alternate_class_asset(symbol: str) -> bool:
    """Return True if the symbol is an xyz dex asset (stock, forex, commodity, index)."""
    return base_symbol(symbol) in XYZ_DEX_ASSETS


def asset_class_of(symbol: str) -> AssetClass:
    """Asset class of a symbol; anything outside the xyz dex table is crypto."""
    base = base_symbol(symbol)
    for asset_class, codes in XYZ_DEX_ASSETS_BY_CLASS.items():
        if base in codes:
            return asset_class
    return AssetClass.CRYPTO


def canonicalize(symbol: str) -> str:
    """
    Normalize free-form user input into the canonical symbol stored in config.

    Callers must reject input that is empty after trimming.

    Args:
        symbol: Raw ticker text, e.g. "btc", "ETHUSDT", "xyz:tsla", "eur-USDC"

    Returns:
        "xyz:<BASE>" for xyz dex assets, "<BASE>USDT" otherwise

    Examples:
        >>> canonicalize("btc")
        'BTCUSDT'
        >>> canonicalize("xyz:tsla")
        'xyz:TSLA'
    """
    upper = symbol.upper().strip()

    if is_alternate_class_asset(upper):
        canonical = f"{XYZ_PREFIX}:{_strip_decorations(upper)}"
    elif upper.endswith(DEFAULT_QUOTE_SUFFIX):
        canonical = upper
    else:
        canonical = f"{upper}{DEFAULT_QUOTE_SUFFIX}"

    log.debug("symbol_canonicalized", raw=symbol, canonical=canonical)
    return canonical
