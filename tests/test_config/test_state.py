"""
Tests for settings loading: YAML layering, environment overrides and
strategy coin source files.
"""

import pytest

from coin_source.config import (
    ConfigLoader,
    ConfigState,
    get_config,
    load_coin_source_config,
)
from coin_source.config.state import DEFAULT_COIN_POOL_API_URL
from coin_source.editor import add_coin
from coin_source.exceptions import ConfigurationError
from coin_source.shared.models import SourceType

# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Settings read the environment; start every test from a blank slate."""
    for var in (
        "COIN_SOURCE_ENV",
        "COIN_SOURCE_CONFIG_DIR",
        "COIN_SOURCE_POOL_API_URL",
        "COIN_SOURCE_OI_TOP_API_URL",
        "LOG_LEVEL",
        "LOG_JSON",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "env").mkdir()
    (tmp_path / "coin_source.yaml").write_text(
        "coin_source:\n"
        "  default_coin_pool_api_url: http://pool.example/list\n"
        "  default_oi_top_limit: 30\n"
        "logging:\n"
        "  level: WARNING\n"
    )
    (tmp_path / "env" / "dev.yaml").write_text("logging:\n  json_logs: false\n")
    return tmp_path


# ============================================================================
# CONFIG LOADER
# ============================================================================


class TestConfigLoader:
    def test_missing_dir_gives_defaults(self, tmp_path):
        state = ConfigLoader(tmp_path / "nope").load()
        assert isinstance(state, ConfigState)
        assert state.coin_source.default_coin_pool_api_url == DEFAULT_COIN_POOL_API_URL
        assert state.logging.level == "INFO"
        assert state.env == "dev"

    def test_yaml_layers_merge(self, config_dir):
        state = ConfigLoader(config_dir).load()
        assert state.coin_source.default_coin_pool_api_url == "http://pool.example/list"
        assert state.coin_source.default_oi_top_limit == 30
        assert state.coin_source.default_coin_pool_limit == 10
        assert state.logging.level == "WARNING"
        assert state.logging.json_logs is False

    def test_env_selects_overlay(self, config_dir, monkeypatch):
        (config_dir / "env" / "prod.yaml").write_text("logging:\n  level: ERROR\n")
        monkeypatch.setenv("COIN_SOURCE_ENV", "prod")

        state = ConfigLoader(config_dir).load()

        assert state.env == "prod"
        assert state.logging.level == "ERROR"
        assert state.logging.json_logs is True

    def test_environment_variables_win(self, config_dir, monkeypatch):
        monkeypatch.setenv("COIN_SOURCE_POOL_API_URL", "http://env.example/pool")
        monkeypatch.setenv("COIN_SOURCE_OI_TOP_API_URL", "http://env.example/oi")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_JSON", "true")

        state = ConfigLoader(config_dir).load()

        assert state.coin_source.default_coin_pool_api_url == "http://env.example/pool"
        assert state.coin_source.default_oi_top_api_url == "http://env.example/oi"
        assert state.logging.level == "DEBUG"
        assert state.logging.json_logs is True

    def test_malformed_yaml_raises(self, tmp_path):
        (tmp_path / "coin_source.yaml").write_text("coin_source: [unclosed\n")
        with pytest.raises(ConfigurationError):
            ConfigLoader(tmp_path).load()

    def test_unreadable_settings_file_raises(self, tmp_path):
        (tmp_path / "coin_source.yaml").mkdir()
        with pytest.raises(ConfigurationError):
            ConfigLoader(tmp_path).load()

    def test_invalid_value_raises(self, tmp_path):
        (tmp_path / "coin_source.yaml").write_text(
            "coin_source:\n  default_oi_top_limit: 500\n"
        )
        with pytest.raises(ConfigurationError):
            ConfigLoader(tmp_path).load()

    def test_get_config_reads_env_dir(self, config_dir, monkeypatch):
        monkeypatch.setenv("COIN_SOURCE_CONFIG_DIR", str(config_dir))
        assert get_config().config_dir == str(config_dir)


# ============================================================================
# STRATEGY COIN SOURCE FILES
# ============================================================================


class TestLoadCoinSourceConfig:
    def test_nested_under_key(self, tmp_path):
        path = tmp_path / "strategy.yaml"
        path.write_text(
            "coin_source:\n"
            "  source_type: mixed\n"
            "  static_coins: [BTCUSDT, 'xyz:TSLA']\n"
            "  use_oi_top: true\n"
        )
        config = load_coin_source_config(path)
        assert config.source_type == SourceType.MIXED
        assert config.static_coins == ["BTCUSDT", "xyz:TSLA"]
        assert config.use_oi_top is True

    def test_top_level_record(self, tmp_path):
        path = tmp_path / "strategy.yaml"
        path.write_text("source_type: oi_top\noi_top_limit: 15\n")
        config = load_coin_source_config(path)
        assert config.source_type == SourceType.OI_TOP
        assert config.oi_top_limit == 15

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_coin_source_config(tmp_path / "missing.yaml")

    def test_duplicates_collapse_on_load(self, tmp_path):
        path = tmp_path / "strategy.yaml"
        path.write_text("static_coins: [btc, BTCUSDT, BTCUSDT]\n")
        config = load_coin_source_config(path)
        assert config.static_coins == ["BTCUSDT"]
        assert add_coin(config, "btc") is config

    def test_undecodable_file_raises(self, tmp_path):
        path = tmp_path / "strategy.yaml"
        path.write_bytes(b"\xff\xfe static_coins: []\n")
        with pytest.raises(ConfigurationError):
            load_coin_source_config(path)

    def test_directory_path_raises(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_coin_source_config(tmp_path)

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "strategy.yaml"
        path.write_text("- BTCUSDT\n- ETHUSDT\n")
        with pytest.raises(ConfigurationError):
            load_coin_source_config(path)
