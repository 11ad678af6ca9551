# coin_source/shared/models/coin_source.py

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from coin_source.exceptions import ConfigurationError
from coin_source.shared.models.enums import SourceType
from coin_source.symbols.normalizer import canonicalize

COIN_POOL_LIMIT_DEFAULT = 10
COIN_POOL_LIMIT_MAX = 100
OI_TOP_LIMIT_DEFAULT = 20
OI_TOP_LIMIT_MAX = 50


class CoinSourceConfig(BaseModel):
    """
    Where a strategy gets its tradable symbols from.

    Immutable: every change builds a new, fully validated record with
    ``model_validate`` (see ``coin_source.editor``). Entries in ``static_coins``
    are canonicalized and deduplicated in order on load; API URLs are stored
    as given and never fetched here.
    """

    model_config = ConfigDict(frozen=True)

    # ========== SOURCE MODE ==========
    source_type: SourceType = Field(default=SourceType.STATIC)

    # ========== STATIC LIST ==========
    static_coins: list[str] = Field(default_factory=list)

    # ========== AI500 COIN POOL ==========
    use_coin_pool: bool = Field(default=False)
    coin_pool_limit: int = Field(
        default=COIN_POOL_LIMIT_DEFAULT, ge=1, le=COIN_POOL_LIMIT_MAX
    )
    coin_pool_api_url: str = Field(default="")

    # ========== OI TOP ==========
    use_oi_top: bool = Field(default=False)
    oi_top_limit: int = Field(default=OI_TOP_LIMIT_DEFAULT, ge=1, le=OI_TOP_LIMIT_MAX)
    oi_top_api_url: str = Field(default="")

    # ==================== VALIDATORS ====================

    @field_validator("static_coins", mode="before")
    @classmethod
    def set_static_coins(cls, v):
        """Canonicalize entries, drop blanks and keep the first of any duplicate"""
        if not v:
            return []
        if not isinstance(v, (list, tuple)):
            return v

        coins = []
        for coin in v:
            if isinstance(coin, str):
                if not coin.strip():
                    continue
                coin = canonicalize(coin)
            if coin not in coins:
                coins.append(coin)
        return coins

    @field_validator("coin_pool_api_url", "oi_top_api_url", mode="before")
    @classmethod
    def set_api_url(cls, v):
        """Treat a missing URL as empty"""
        return v or ""

    # ==================== SERIALIZATION ====================

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary with the source type as its string value"""
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        """Convert to JSON string"""
        return self.model_dump_json(indent=2)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "CoinSourceConfig":
        """
        Build a record from a plain mapping (YAML, JSON, API payload).

        Raises:
            ConfigurationError: If a field fails validation
        """
        try:
            return cls.model_validate(data or {})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid coin source config: {e}") from e
