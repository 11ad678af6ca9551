"""
Shared enumerations for coin source configuration.
"""

import enum


# ============================================================================
# SOURCE MODES
# ============================================================================
class SourceType(str, enum.Enum):
    """How a strategy obtains its list of tradable symbols."""

    STATIC = "static"
    COINPOOL = "coinpool"  # AI500 data provider
    OI_TOP = "oi_top"  # Fastest open interest growth
    MIXED = "mixed"  # AI500 + OI Top + custom coins

    @property
    def uses_static_coins(self) -> bool:
        """Whether the custom coin list applies in this mode"""
        return self in (SourceType.STATIC, SourceType.MIXED)

    @property
    def uses_coin_pool(self) -> bool:
        """Whether the AI500 coin pool applies in this mode"""
        return self in (SourceType.COINPOOL, SourceType.MIXED)

    @property
    def uses_oi_top(self) -> bool:
        """Whether the OI Top ranking applies in this mode"""
        return self in (SourceType.OI_TOP, SourceType.MIXED)


# ============================================================================
# ASSET CLASSIFICATION
# ============================================================================
class AssetClass(str, enum.Enum):
    """Fundamental asset classification of a tradable symbol."""

    CRYPTO = "crypto"
    EQUITY = "equity"
    FOREX = "forex"
    COMMODITY = "commodity"
    INDEX = "index"
