"""Tests for centralized logging configuration."""

import datetime as dt
import json
import logging
from decimal import Decimal

import pytest

from src.config.logging_config import (
    JSONFormatter,
    LoggingConfig,
    configure_logging,
    get_logger,
    reset_logging,
)


class TestLoggingConfig:
    """Test LoggingConfig class."""

    def test_default_configuration(self):
        """Test default logging configuration."""
        config = LoggingConfig()

        assert config.log_level == "INFO"
        assert config.log_format == "standard"
        assert config.log_file is None
        assert config.enable_console is True
        assert config.enable_file is False
        assert config.max_file_size == 5 * 1024 * 1024
        assert config.backup_count == 3

    def test_environment_variable_override(self, monkeypatch, tmp_path):
        """Test configuration from environment variables."""
        log_file = str(tmp_path / "engine.log")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("LOG_FILE", log_file)
        monkeypatch.setenv("LOG_CONSOLE", "false")

        config = LoggingConfig.from_env()

        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.log_file == log_file
        assert config.enable_file is True
        assert config.enable_console is False

    def test_from_env_default_level(self, monkeypatch):
        """Test the fallback level when LOG_LEVEL is unset."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("LOG_FILE", raising=False)

        config = LoggingConfig.from_env(default_level="WARNING")

        assert config.log_level == "WARNING"
        assert config.enable_file is False

    def test_invalid_log_level(self):
        """Test invalid log level raises error."""
        with pytest.raises(ValueError, match="Invalid log level"):
            LoggingConfig(log_level="INVALID")

    def test_invalid_log_format(self):
        """Test invalid log format raises error."""
        with pytest.raises(ValueError, match="Invalid log format"):
            LoggingConfig(log_format="invalid")

    def test_file_logging_enabled_without_path(self):
        """Test file logging enabled without file path raises error."""
        with pytest.raises(ValueError, match="log_file must be specified"):
            LoggingConfig(enable_file=True, log_file=None)


class TestConfigureLogging:
    """Test configure_logging function."""

    def teardown_method(self):
        """Reset logging after each test."""
        reset_logging()

    def test_console_handler_configuration(self):
        """Test a single console handler is installed."""
        configure_logging(LoggingConfig(log_level="DEBUG"))

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_file_handler_configuration(self, tmp_path):
        """Test file output goes through a rotating handler."""
        log_file = tmp_path / "logs" / "engine.log"
        configure_logging(
            LoggingConfig(
                enable_console=False,
                enable_file=True,
                log_file=str(log_file),
                max_file_size=1024,
                backup_count=2,
            )
        )

        handler = logging.getLogger().handlers[0]
        assert isinstance(handler, logging.handlers.RotatingFileHandler)
        assert handler.maxBytes == 1024
        assert handler.backupCount == 2
        assert log_file.parent.exists()

    def test_log_level_filtering(self, tmp_path):
        """Test records below the configured level are dropped."""
        log_file = tmp_path / "engine.log"
        configure_logging(
            LoggingConfig(
                log_level="WARNING",
                enable_console=False,
                enable_file=True,
                log_file=str(log_file),
            )
        )

        logger = logging.getLogger("test_module")
        logger.info("Aggregating weekly overtime")
        logger.warning("Skipping row 3")
        logging.getLogger().handlers[0].flush()

        content = log_file.read_text()
        assert "Skipping row 3" in content
        assert "Aggregating weekly overtime" not in content

    def test_reconfiguration(self):
        """Test configuring twice does not duplicate handlers."""
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig(log_level="ERROR"))

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.ERROR


class TestJSONFormatter:
    """Test JSON output."""

    def test_json_format_structure(self):
        """Test the standard keys of a JSON record."""
        record = logging.makeLogRecord(
            {"name": "engine", "levelname": "INFO", "msg": "Costed 3 workers"}
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Costed 3 workers"
        assert data["level"] == "INFO"
        assert data["logger"] == "engine"
        assert "timestamp" in data

    def test_extra_fields_rendered_with_str(self):
        """Test Decimal and date extras are serialized."""
        record = logging.makeLogRecord(
            {
                "msg": "Totaled pay period",
                "total_pay": Decimal("1100.0"),
                "week_start": dt.date(2023, 6, 12),
            }
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["total_pay"] == "1100.0"
        assert data["week_start"] == "2023-06-12"


class TestGetLogger:
    """Test get_logger function."""

    def test_get_logger_returns_logger(self):
        """Test get_logger returns a named logger."""
        logger = get_logger("src.aggregators")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "src.aggregators"

    def test_get_logger_caching(self):
        """Test the same logger instance is returned."""
        assert get_logger("engine") is get_logger("engine")


class TestResetLogging:
    """Test reset_logging function."""

    def test_reset_removes_handlers(self):
        """Test reset removes root handlers."""
        configure_logging(LoggingConfig())
        reset_logging()

        assert logging.getLogger().handlers == []

    def test_reset_sets_default_level(self):
        """Test reset restores the WARNING level."""
        configure_logging(LoggingConfig(log_level="DEBUG"))
        reset_logging()

        assert logging.getLogger().level == logging.WARNING
