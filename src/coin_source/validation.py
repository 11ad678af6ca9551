"""
Lenient checks for a coin source record.

A record may be saved incomplete: an enabled source without an API URL is a
warning, not an error, because the URL can be filled in later. Callers that
need a hard gate use ``ensure_valid``.
"""

from dataclasses import dataclass

from coin_source.exceptions import CoinSourceValidationError
from coin_source.infrastructure.observability import get_processing_logger
from coin_source.shared.models.coin_source import CoinSourceConfig

log = get_processing_logger("coin-source-validator")


@dataclass(frozen=True)
class ConfigWarning:
    """One problem found in a coin source record."""

    code: str
    field: str
    message: str


def validate_config(config: CoinSourceConfig) -> list[ConfigWarning]:
    """
    Check the sections the current source mode uses.

    Returns:
        Warnings in section order (static list, AI500, OI Top); empty if clean
    """
    warnings: list[ConfigWarning] = []
    mode = config.source_type

    if mode.uses_static_coins and not config.static_coins:
        warnings.append(
            ConfigWarning(
                code="static_coins_empty",
                field="static_coins",
                message="No custom coins configured",
            )
        )

    if mode.uses_coin_pool and config.use_coin_pool and not config.coin_pool_api_url:
        warnings.append(
            ConfigWarning(
                code="api_url_required",
                field="coin_pool_api_url",
                message="AI500 API URL required to fetch data",
            )
        )

    if mode.uses_oi_top and config.use_oi_top and not config.oi_top_api_url:
        warnings.append(
            ConfigWarning(
                code="api_url_required",
                field="oi_top_api_url",
                message="OI Top API URL required to fetch data",
            )
        )

    dynamic_enabled = (mode.uses_coin_pool and config.use_coin_pool) or (
        mode.uses_oi_top and config.use_oi_top
    )
    if mode.uses_coin_pool or mode.uses_oi_top:
        # In mixed mode the static list alone is enough
        if not dynamic_enabled and not (mode.uses_static_coins and config.static_coins):
            warnings.append(
                ConfigWarning(
                    code="source_disabled",
                    field="source_type",
                    message=f"No data source enabled for mode '{mode.value}'",
                )
            )

    for warning in warnings:
        log.warning(
            "coin_source_warning",
            code=warning.code,
            field=warning.field,
            source_type=mode.value,
        )
    return warnings


def ensure_valid(config: CoinSourceConfig) -> CoinSourceConfig:
    """
    Strict gate: raise if ``validate_config`` finds anything.

    Raises:
        CoinSourceValidationError: Carrying the warnings that were found
    """
    warnings = validate_config(config)
    if warnings:
        summary = "; ".join(f"{w.field}: {w.message}" for w in warnings)
        raise CoinSourceValidationError(
            f"Coin source config is incomplete: {summary}", warnings=warnings
        )
    return config
