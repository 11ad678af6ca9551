"""
Copy-update operations over a strategy's coin source record.

Every function takes a ``CoinSourceConfig`` and returns a new one with a
single field changed; the input is never mutated. ``CoinSourceEditor`` wraps
a current value for callers that want a stateful editor with a change
callback and a read-only (disabled) mode.
"""

import re
from collections.abc import Callable

from coin_source.config.state import CoinSourceSettings
from coin_source.infrastructure.observability import get_processing_logger
from coin_source.shared.models.coin_source import (
    COIN_POOL_LIMIT_MAX,
    OI_TOP_LIMIT_MAX,
    CoinSourceConfig,
)
from coin_source.shared.models.enums import SourceType
from coin_source.symbols import canonicalize

log = get_processing_logger("coin-source-editor")

# Leading ASCII integer, like parseInt: "12abc" -> 12
LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def _replace(config: CoinSourceConfig, **changes) -> CoinSourceConfig:
    # model_copy skips validation, so re-validate the merged values
    return CoinSourceConfig.model_validate({**config.model_dump(), **changes})


def parse_limit(value: int | str | None, default: int, maximum: int) -> int:
    """
    Parse a limit typed by a user.

    Unparseable, empty or zero input falls back to ``default``; anything else
    is clamped into ``1..maximum``.

    Examples:
        >>> parse_limit("25", 10, 100)
        25
        >>> parse_limit("abc", 10, 100)
        10
        >>> parse_limit(500, 20, 50)
        50
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        parsed = value
    else:
        match = LEADING_INT_RE.match(value or "")
        if match is None:
            return default
        parsed = int(match.group(1))

    if parsed == 0:
        return default
    return max(1, min(parsed, maximum))


# =============================================================================
# STATIC COIN LIST
# =============================================================================


def add_coin(config: CoinSourceConfig, raw: str) -> CoinSourceConfig:
    """
    Canonicalize ``raw`` and append it to the static coin list.

    Empty input and symbols already present leave the config unchanged
    (the same object is returned).
    """
    if not raw or not raw.strip():
        return config

    symbol = canonicalize(raw)
    if symbol in config.static_coins:
        log.debug("coin_already_present", coin=symbol)
        return config

    log.info("coin_added", raw=raw, coin=symbol)
    return _replace(config, static_coins=[*config.static_coins, symbol])


def remove_coin(config: CoinSourceConfig, coin: str) -> CoinSourceConfig:
    """Remove every exact match of ``coin`` from the static coin list."""
    remaining = [c for c in config.static_coins if c != coin]
    if len(remaining) == len(config.static_coins):
        return config

    log.info(
        "coin_removed",
        coin=coin,
        occurrences=len(config.static_coins) - len(remaining),
    )
    return _replace(config, static_coins=remaining)


# =============================================================================
# FIELD UPDATES
# =============================================================================


def set_source_type(
    config: CoinSourceConfig, source_type: SourceType | str
) -> CoinSourceConfig:
    """Switch the source mode. Raises ValueError for an unknown mode."""
    return _replace(config, source_type=SourceType(source_type))


def set_use_coin_pool(config: CoinSourceConfig, enabled: bool) -> CoinSourceConfig:
    return _replace(config, use_coin_pool=bool(enabled))


def set_use_oi_top(config: CoinSourceConfig, enabled: bool) -> CoinSourceConfig:
    return _replace(config, use_oi_top=bool(enabled))


def set_coin_pool_limit(
    config: CoinSourceConfig,
    value: int | str | None,
    settings: CoinSourceSettings | None = None,
) -> CoinSourceConfig:
    """Set the AI500 limit; bad input falls back to the configured default."""
    settings = settings or CoinSourceSettings()
    limit = parse_limit(value, settings.default_coin_pool_limit, COIN_POOL_LIMIT_MAX)
    return _replace(config, coin_pool_limit=limit)


def set_oi_top_limit(
    config: CoinSourceConfig,
    value: int | str | None,
    settings: CoinSourceSettings | None = None,
) -> CoinSourceConfig:
    settings = settings or CoinSourceSettings()
    limit = parse_limit(value, settings.default_oi_top_limit, OI_TOP_LIMIT_MAX)
    return _replace(config, oi_top_limit=limit)


def set_coin_pool_api_url(config: CoinSourceConfig, url: str | None) -> CoinSourceConfig:
    return _replace(config, coin_pool_api_url=(url or "").strip())


def set_oi_top_api_url(config: CoinSourceConfig, url: str | None) -> CoinSourceConfig:
    return _replace(config, oi_top_api_url=(url or "").strip())


def fill_default_coin_pool_api_url(
    config: CoinSourceConfig, settings: CoinSourceSettings | None = None
) -> CoinSourceConfig:
    """Set the AI500 URL to the configured default, only if it is empty."""
    if config.coin_pool_api_url:
        return config
    settings = settings or CoinSourceSettings()
    return set_coin_pool_api_url(config, settings.default_coin_pool_api_url)


def fill_default_oi_top_api_url(
    config: CoinSourceConfig, settings: CoinSourceSettings | None = None
) -> CoinSourceConfig:
    """Set the OI Top URL to the configured default, only if it is empty."""
    if config.oi_top_api_url:
        return config
    settings = settings or CoinSourceSettings()
    return set_oi_top_api_url(config, settings.default_oi_top_api_url)


# =============================================================================
# STATEFUL EDITOR
# =============================================================================


class CoinSourceEditor:
    """
    Holds the current coin source record and applies edits to it.

    When ``disabled`` is set every edit is ignored. ``on_change`` is called
    with the new record only when an edit actually changes it.
    """

    def __init__(
        self,
        config: CoinSourceConfig | None = None,
        on_change: Callable[[CoinSourceConfig], None] | None = None,
        disabled: bool = False,
        settings: CoinSourceSettings | None = None,
    ):
        self.config = config or CoinSourceConfig()
        self.on_change = on_change
        self.disabled = disabled
        self.settings = settings or CoinSourceSettings()

    def _apply(self, update: Callable[..., CoinSourceConfig], *args) -> CoinSourceConfig:
        if self.disabled:
            log.debug("edit_ignored_disabled", operation=update.__name__)
            return self.config

        updated = update(self.config, *args)
        if updated != self.config:
            self.config = updated
            if self.on_change is not None:
                self.on_change(updated)
        return self.config

    def add_coin(self, raw: str) -> CoinSourceConfig:
        return self._apply(add_coin, raw)

    def remove_coin(self, coin: str) -> CoinSourceConfig:
        return self._apply(remove_coin, coin)

    def set_source_type(self, source_type: SourceType | str) -> CoinSourceConfig:
        return self._apply(set_source_type, source_type)

    def set_use_coin_pool(self, enabled: bool) -> CoinSourceConfig:
        return self._apply(set_use_coin_pool, enabled)

    def set_use_oi_top(self, enabled: bool) -> CoinSourceConfig:
        return self._apply(set_use_oi_top, enabled)

    def set_coin_pool_limit(self, value: int | str | None) -> CoinSourceConfig:
        return self._apply(set_coin_pool_limit, value, self.settings)

    def set_oi_top_limit(self, value: int | str | None) -> CoinSourceConfig:
        return self._apply(set_oi_top_limit, value, self.settings)

    def set_coin_pool_api_url(self, url: str | None) -> CoinSourceConfig:
        return self._apply(set_coin_pool_api_url, url)

    def set_oi_top_api_url(self, url: str | None) -> CoinSourceConfig:
        return self._apply(set_oi_top_api_url, url)

    def fill_default_coin_pool_api_url(self) -> CoinSourceConfig:
        return self._apply(fill_default_coin_pool_api_url, self.settings)

    def fill_default_oi_top_api_url(self) -> CoinSourceConfig:
        return self._apply(fill_default_oi_top_api_url, self.settings)
