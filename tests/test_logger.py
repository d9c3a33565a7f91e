"""Tests for logger module."""

import logging
from unittest.mock import patch

import pytest

import querycodec.logger as logger_module
from querycodec.logger import (
    _LEVELS,
    Logger,
    get_logger,
    resolve_level,
    setup_global_logging,
)
from querycodec.settings import settings


@pytest.fixture
def unconfigured():
    """Reset the module's configured flag and restore it afterwards."""
    previous = logger_module._configured
    logger_module._configured = False
    yield
    logger_module._configured = previous


class TestSetupGlobalLogging:
    """Tests for setup_global_logging function."""

    @pytest.mark.parametrize(
        "level,expected",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
            ("info", logging.INFO),
            ("INVALID", logging.INFO),
        ],
    )
    def test_levels(self, unconfigured, level, expected):
        with patch("logging.basicConfig") as mock_basicconfig:
            setup_global_logging(level=level)
            mock_basicconfig.assert_called_once()
            args, kwargs = mock_basicconfig.call_args
            assert kwargs["level"] == expected

    def test_default_level_and_format(self, unconfigured):
        with patch("logging.basicConfig") as mock_basicconfig:
            setup_global_logging()
            args, kwargs = mock_basicconfig.call_args
            assert kwargs["level"] == logging.INFO
            assert kwargs["format"] == "%(asctime)s %(levelname)s [%(name)s] %(message)s"

    def test_idempotent(self, unconfigured):
        logger_module._configured = True
        with patch("logging.basicConfig") as mock_basicconfig:
            setup_global_logging()
            mock_basicconfig.assert_not_called()


class TestResolveLevel:
    """Tests for resolve_level function."""

    def test_known(self):
        assert resolve_level("warning") == logging.WARNING

    @pytest.mark.parametrize("level", [None, "", "LOUD"])
    def test_unknown_is_info(self, level):
        assert resolve_level(level) == logging.INFO


class TestGetLogger:
    """Tests for get_logger function."""

    def test_with_name(self, unconfigured):
        with patch("logging.basicConfig"):
            logger = get_logger("querycodec.test_module")
            assert isinstance(logger, Logger)
            assert logger.name == "querycodec.test_module"

    @pytest.mark.parametrize("name", [None, ""])
    def test_without_name_uses_package(self, unconfigured, name):
        with patch("logging.basicConfig"):
            assert get_logger(name).name == "querycodec"

    def test_first_logger_configures_from_settings(self, unconfigured):
        with patch.object(settings, "LOG_LEVEL", "DEBUG"):
            with patch("querycodec.logger.setup_global_logging") as mock_setup:
                Logger("test")
                mock_setup.assert_called_once_with("DEBUG")


class TestLoggerClass:
    """Tests for Logger class methods."""

    @pytest.fixture
    def logger(self, unconfigured):
        with patch("logging.basicConfig"):
            return Logger("test_logger")

    @pytest.mark.parametrize("method", ["debug", "info", "warning", "error", "critical"])
    def test_level_methods_delegate(self, logger, method):
        with patch.object(logger._logger, method) as mock_method:
            getattr(logger, method)("Value %s", "x", extra={"key": "value"})
            mock_method.assert_called_once_with("Value %s", "x", extra={"key": "value"})

    @pytest.mark.parametrize(
        "level,expected",
        [
            ("DEBUG", logging.DEBUG),
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
        ],
    )
    def test_message_uses_configured_level(self, logger, level, expected):
        with patch.object(settings, "LOG_LEVEL", level):
            with patch.object(logger._logger, "log") as mock_log:
                logger.message("Test message")
                mock_log.assert_called_once_with(expected, "Test message")


class TestLevelsMapping:
    """Tests for _LEVELS mapping."""

    def test_values_are_correct(self):
        assert _LEVELS == {
            "CRITICAL": logging.CRITICAL,
            "ERROR": logging.ERROR,
            "WARNING": logging.WARNING,
            "INFO": logging.INFO,
            "DEBUG": logging.DEBUG,
        }
