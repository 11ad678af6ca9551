"""
Unified configuration state for coin-source.

Single source of truth for application settings, combining hierarchical YAML
files with environment overrides, type validation, and sensible defaults.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from coin_source.exceptions import ConfigurationError
from coin_source.infrastructure.observability import get_infrastructure_logger
from coin_source.shared.models.coin_source import (
    COIN_POOL_LIMIT_DEFAULT,
    COIN_POOL_LIMIT_MAX,
    OI_TOP_LIMIT_DEFAULT,
    OI_TOP_LIMIT_MAX,
    CoinSourceConfig,
)

log = get_infrastructure_logger("config-loader")

# Public endpoints; auth query parameters belong in YAML or the environment.
DEFAULT_COIN_POOL_API_URL = "http://nofxaios.com:30006/api/ai500/list"
DEFAULT_OI_TOP_API_URL = (
    "http://nofxaios.com:30006/api/oi/top-ranking?limit=20&duration=1h"
)


# =============================================================================
# PYDANTIC MODELS - Type-Safe Configuration
# =============================================================================


class CoinSourceSettings(BaseModel):
    """Defaults offered when a strategy's coin source is edited."""

    model_config = ConfigDict(extra="allow")

    default_coin_pool_api_url: str = Field(default=DEFAULT_COIN_POOL_API_URL)
    default_oi_top_api_url: str = Field(default=DEFAULT_OI_TOP_API_URL)
    default_coin_pool_limit: int = Field(
        default=COIN_POOL_LIMIT_DEFAULT, ge=1, le=COIN_POOL_LIMIT_MAX
    )
    default_oi_top_limit: int = Field(
        default=OI_TOP_LIMIT_DEFAULT, ge=1, le=OI_TOP_LIMIT_MAX
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="allow")

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)


class ConfigState(BaseModel):
    """
    Root configuration state - single source of truth for all app config.
    """

    model_config = ConfigDict(extra="allow")

    coin_source: CoinSourceSettings = Field(default_factory=CoinSourceSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Environment metadata
    env: str = Field(default="dev")
    config_dir: str = Field(default="./config")


# =============================================================================
# CONFIG LOADER - Clean, Validated Loading
# =============================================================================


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Read a YAML mapping; a missing file yields an empty mapping."""
    if not path.exists():
        log.debug("config_file_missing", path=str(path))
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Malformed YAML in {path}: {e}", path=str(path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read {path}: {e}", path=str(path)) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected a mapping at the top of {path}, got {type(data).__name__}",
            path=str(path),
        )
    return data


class ConfigLoader:
    """
    Load and validate configuration from hierarchical YAML files.

    Merges:
      1. Global defaults (hardcoded)
      2. coin_source.yaml from config_dir
      3. env/<env>.yaml
      4. Environment variable overrides
    """

    def __init__(self, config_dir: str | Path = "./config"):
        self.config_dir = Path(config_dir)
        self._yaml_cache: dict[Path, dict[str, Any]] = {}
        self.env = os.getenv("COIN_SOURCE_ENV", "dev")

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load YAML file with caching."""
        if path not in self._yaml_cache:
            self._yaml_cache[path] = _load_yaml_file(path)
        return self._yaml_cache[path]

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config."""
        if pool_url := os.getenv("COIN_SOURCE_POOL_API_URL"):
            config.setdefault("coin_source", {})["default_coin_pool_api_url"] = pool_url

        if oi_url := os.getenv("COIN_SOURCE_OI_TOP_API_URL"):
            config.setdefault("coin_source", {})["default_oi_top_api_url"] = oi_url

        if log_level := os.getenv("LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level

        if (json_logs := os.getenv("LOG_JSON")) is not None:
            config.setdefault("logging", {})["json_logs"] = json_logs.strip().lower() in (
                "1",
                "true",
                "yes",
            )

        return config

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        """Deep merge override into base dict."""
        result = base.copy()
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def load(self) -> ConfigState:
        """
        Load complete configuration state.

        Returns:
            ConfigState: Validated configuration object

        Raises:
            ConfigurationError: If a file is malformed or a value is invalid
        """
        log.info("config_loading", config_dir=str(self.config_dir), env=self.env)

        config: dict[str, Any] = {}
        config = self._merge_dicts(
            config, self._load_yaml(self.config_dir / "coin_source.yaml")
        )
        config = self._merge_dicts(
            config, self._load_yaml(self.config_dir / "env" / f"{self.env}.yaml")
        )
        config = self._apply_env_overrides(config)

        # Directory and env come from the loader, not the files
        config.pop("env", None)
        config.pop("config_dir", None)

        try:
            state = ConfigState(env=self.env, config_dir=str(self.config_dir), **config)
        except ValidationError as e:
            log.error("config_validation_failed", error=str(e))
            raise ConfigurationError(
                f"Configuration validation failed: {e}", path=str(self.config_dir)
            ) from e

        log.info(
            "config_loaded",
            env=state.env,
            log_level=state.logging.level,
            coin_pool_url_set=bool(state.coin_source.default_coin_pool_api_url),
            oi_top_url_set=bool(state.coin_source.default_oi_top_api_url),
        )
        return state


# =============================================================================
# GLOBAL INSTANCE
# =============================================================================


def get_config(config_dir: str | Path | None = None) -> ConfigState:
    """
    Load and return the configuration state.

    Args:
        config_dir: Override config directory. Defaults to
            $COIN_SOURCE_CONFIG_DIR, then ./config

    Returns:
        ConfigState: Validated configuration object
    """
    if config_dir is None:
        config_dir = os.getenv("COIN_SOURCE_CONFIG_DIR", "./config")
        if not Path(config_dir).exists():
            log.warning("config_dir_not_found", config_dir=str(config_dir))

    return ConfigLoader(config_dir=config_dir).load()


def load_coin_source_config(path: str | Path) -> CoinSourceConfig:
    """
    Load a strategy's coin source record from a YAML file.

    The file may hold the record at the top level or under a ``coin_source`` key.

    Raises:
        ConfigurationError: If the file is missing, malformed, or invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Coin source file not found: {path}", path=str(path))

    data = _load_yaml_file(path)
    if isinstance(data.get("coin_source"), dict):
        data = data["coin_source"]

    record = CoinSourceConfig.from_dict(data)
    log.info(
        "coin_source_loaded",
        path=str(path),
        source_type=record.source_type.value,
        static_coins=len(record.static_coins),
    )
    return record


__all__ = [
    "ConfigLoader",
    "ConfigState",
    "CoinSourceSettings",
    "DEFAULT_COIN_POOL_API_URL",
    "DEFAULT_OI_TOP_API_URL",
    "LoggingConfig",
    "get_config",
    "load_coin_source_config",
]
