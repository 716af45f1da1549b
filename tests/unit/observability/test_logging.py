"""Tests for structured logging."""

import json
from collections.abc import Generator

import pytest
import structlog

from dimconfig.config.settings import Settings
from dimconfig.engine import ConfigEngine
from dimconfig.observability.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults so captured streams do not leak."""
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_json_output_is_valid_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should write one JSON object per event to stderr."""
        setup_logging(level="INFO", format="json")
        get_logger("test.json").info("config_registered", bundle="app", config="site")

        parsed = json.loads(capsys.readouterr().err.strip())
        assert parsed["event"] == "config_registered"
        assert parsed["bundle"] == "app"
        assert parsed["level"] == "info"
        assert "timestamp" in parsed

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Events below the configured level are dropped."""
        setup_logging(level="WARNING", format="json")
        logger = get_logger("test.level")
        logger.info("dropped")
        logger.warning("kept")

        lines = capsys.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["kept"]

    def test_console_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should render human readable output for development."""
        setup_logging(level="DEBUG", format="console")
        get_logger("test.console").debug("resolver_built", kind="flat")

        assert "resolver_built" in capsys.readouterr().err

    def test_bound_context_appears(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Context bound via structlog.contextvars is merged into events."""
        setup_logging(level="INFO", format="json")
        structlog.contextvars.bind_contextvars(request_id="abc123")
        get_logger("test.context").info("config_loaded")

        assert json.loads(capsys.readouterr().err.strip())["request_id"] == "abc123"


def test_engine_configures_logging_from_settings(capsys: pytest.CaptureFixture[str]) -> None:
    settings = Settings(logging={"level": "ERROR", "format": "json"})
    ConfigEngine.from_settings(settings, configure_logging=True)

    logger = get_logger("test.engine")
    logger.warning("dropped")
    logger.error("kept")

    lines = capsys.readouterr().err.strip().splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["kept"]
