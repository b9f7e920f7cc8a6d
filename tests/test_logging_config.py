"""
Tests for logging configuration.
"""
import json
import logging
import sys

from item_reliability import ReliabilitySettings, setup_logging
from item_reliability.logging_config import (
    JSONFormatter,
    build_logging_config,
    calculation_id_context,
)


def _record(level=logging.INFO, msg="alpha computed", **extra):
    record = logging.LogRecord(
        name="item_reliability.cronbach",
        level=level,
        pathname="cronbach.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self) -> None:
        """Entries carry timestamp, level, logger and message."""
        entry = json.loads(JSONFormatter().format(_record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "item_reliability.cronbach"
        assert entry["message"] == "alpha computed"
        assert "timestamp" in entry
        assert "calculation_id" not in entry
        assert "source" not in entry

    def test_calculation_id_from_context(self) -> None:
        """The current calculation ID is attached to every entry."""
        token = calculation_id_context.set("abc123")
        try:
            entry = json.loads(JSONFormatter().format(_record()))
        finally:
            calculation_id_context.reset(token)

        assert entry["calculation_id"] == "abc123"

    def test_structured_extras(self) -> None:
        """n_items, n_obs and metric extras are copied into the entry."""
        entry = json.loads(
            JSONFormatter().format(_record(n_items=4, n_obs=120, metric="alpha"))
        )

        assert entry["n_items"] == 4
        assert entry["n_obs"] == 120
        assert entry["metric"] == "alpha"

    def test_errors_include_source(self) -> None:
        """Error-level entries point at their source location."""
        entry = json.loads(JSONFormatter().format(_record(level=logging.ERROR)))
        assert entry["source"] == "cronbach.py:42"

    def test_exception_is_formatted(self) -> None:
        """Exception info is rendered into the entry."""
        try:
            raise ValueError("bad digits")
        except ValueError:
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        entry = json.loads(JSONFormatter().format(record))

        assert "ValueError: bad digits" in entry["exception"]


class TestBuildLoggingConfig:
    """Tests for build_logging_config()."""

    def test_development_uses_plain_format(self) -> None:
        """Development output is human readable."""
        config = build_logging_config(ReliabilitySettings(ENV="development"))
        assert config["handlers"]["console"]["formatter"] == "default"

    def test_production_uses_json(self) -> None:
        """Production output is JSON."""
        config = build_logging_config(ReliabilitySettings(ENV="production"))
        assert config["handlers"]["console"]["formatter"] == "json"

    def test_level_from_settings(self) -> None:
        """The package logger level follows LOG_LEVEL."""
        config = build_logging_config(ReliabilitySettings(LOG_LEVEL="debug"))

        assert config["loggers"]["item_reliability"]["level"] == logging.DEBUG
        assert config["handlers"]["console"]["level"] == logging.DEBUG

    def test_only_package_logger_is_configured(self) -> None:
        """No third-party logger levels are set."""
        config = build_logging_config(ReliabilitySettings())
        assert list(config["loggers"]) == ["item_reliability"]


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_configures_package_logger(self, reset_package_logger) -> None:
        """setup_logging() applies the level and attaches a handler."""
        setup_logging(ReliabilitySettings(LOG_LEVEL="WARNING", ENV="production"))

        assert reset_package_logger.level == logging.WARNING
        assert reset_package_logger.handlers
        assert isinstance(reset_package_logger.handlers[0].formatter, JSONFormatter)
