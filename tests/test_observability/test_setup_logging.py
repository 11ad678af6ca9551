"""
Tests for setup_logging() and the layer logger factories.

structlog and logging keep global state, so every test starts from a clean
configuration and captures output through a handler on the root logger.
"""

import json
import logging
from io import StringIO

import pytest
import structlog

from coin_source.editor import add_coin
from coin_source.infrastructure.observability import (
    get_infrastructure_logger,
    get_logger,
    get_processing_logger,
    setup_logging,
)
from coin_source.shared.models import CoinSourceConfig


@pytest.fixture
def clean_logging():
    """Reset logging and structlog before and after each test."""
    original_handlers = logging.root.handlers[:]

    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
    structlog.reset_defaults()

    yield

    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
    structlog.reset_defaults()

    logging.root.handlers = original_handlers


@pytest.fixture
def capture(clean_logging):
    """Attach a capturing handler to the root logger."""
    captured = StringIO()
    handler = logging.StreamHandler(captured)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.root.addHandler(handler)

    yield captured

    logging.root.removeHandler(handler)


def _json_lines(captured: StringIO) -> list[dict]:
    entries = []
    for line in captured.getvalue().splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            entries.append(json.loads(line))
        except json.JSONDecodeError:
            continue
    return entries


class TestSetupLogging:
    def test_setup_json_mode(self, capture):
        setup_logging(level="INFO", json_logs=True, include_timestamp=True)
        assert structlog.is_configured()
        logging.root.setLevel(logging.INFO)

        structlog.get_logger("test_json").info("json_test_event", value=123)

        entries = _json_lines(capture)
        assert entries, "No valid JSON found"
        assert entries[-1]["event"] == "json_test_event"
        assert entries[-1]["value"] == 123
        assert entries[-1]["app"] == "coin-source"
        assert entries[-1]["severity"] == "INFO"
        assert "timestamp" in entries[-1]

    def test_setup_text_mode(self, capture):
        setup_logging(level="INFO", json_logs=False)
        logging.root.setLevel(logging.INFO)

        structlog.get_logger("test_text").info("text_test_event", value=456)

        output = capture.getvalue()
        assert "text_test_event" in output
        assert _json_lines(capture) == []

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR"])
    def test_setup_sets_root_level(self, clean_logging, level):
        setup_logging(level=level, json_logs=True)
        assert logging.root.level == getattr(logging, level)

    def test_invalid_level_falls_back_to_info(self, clean_logging):
        setup_logging(level="INVALID_LEVEL", json_logs=True)
        assert logging.root.level == logging.INFO

    def test_level_applies_when_root_already_has_handlers(self, clean_logging):
        logging.root.addHandler(logging.NullHandler())
        logging.root.setLevel(logging.WARNING)

        setup_logging(level="DEBUG", json_logs=True)

        assert logging.root.level == logging.DEBUG

    def test_without_timestamp(self, capture):
        setup_logging(level="INFO", json_logs=True, include_timestamp=False)
        logging.root.setLevel(logging.INFO)

        logger = structlog.get_logger("test_no_ts")
        logger.debug("debug_should_not_appear")
        logger.info("no_timestamp_test", test_value=True)

        entries = _json_lines(capture)
        assert [e["event"] for e in entries] == ["no_timestamp_test"]
        assert "timestamp" not in entries[0]


class TestLoggerFactories:
    def test_get_logger_binds_context(self, capture):
        setup_logging(level="INFO", json_logs=True)
        logging.root.setLevel(logging.INFO)

        log = get_logger("tests.module", layer="processing", component="unit", run=7)
        log.info("factory_event")

        entry = _json_lines(capture)[-1]
        assert entry["layer"] == "processing"
        assert entry["component"] == "unit"
        assert entry["module"] == "tests.module"
        assert entry["run"] == 7

    @pytest.mark.parametrize(
        "factory,layer",
        [
            (get_infrastructure_logger, "infrastructure"),
            (get_processing_logger, "processing"),
        ],
    )
    def test_layer_factories(self, capture, factory, layer):
        setup_logging(level="INFO", json_logs=True)
        logging.root.setLevel(logging.INFO)

        factory("some-component", extra="x").info("layer_event")

        entry = _json_lines(capture)[-1]
        assert entry["layer"] == layer
        assert entry["component"] == "some-component"
        assert entry["extra"] == "x"

    def test_logger_created_before_setup_uses_later_config(self, capture):
        log = get_processing_logger("early-component")

        setup_logging(level="INFO", json_logs=True)
        logging.root.setLevel(logging.INFO)
        log.info("late_configured_event")

        entry = _json_lines(capture)[-1]
        assert entry["event"] == "late_configured_event"
        assert entry["component"] == "early-component"

    def test_editor_logs_coin_added(self, capture):
        setup_logging(level="INFO", json_logs=True)
        logging.root.setLevel(logging.INFO)

        add_coin(CoinSourceConfig(), "tsla")

        events = [e for e in _json_lines(capture) if e["event"] == "coin_added"]
        assert events
        assert events[-1]["coin"] == "xyz:TSLA"
        assert events[-1]["component"] == "coin-source-editor"
