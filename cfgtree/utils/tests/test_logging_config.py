"""Unit tests for cfgtree.utils.logging_config module."""

import logging
import logging.handlers
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from cfgtree.utils.logging_config import (
    DEBUG_LOG_FORMAT,
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_MAX_BYTES,
    LOG_FORMAT,
    PACKAGE_LOGGER_NAME,
    _create_console_handler,
    _create_file_handler,
    configure_logging,
    get_logger,
    log_function_call,
)


@pytest.fixture(autouse=True)
def package_logger() -> Iterator[logging.Logger]:
    """Detach the handlers of the package logger during a test."""
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    for handler in saved_handlers:
        logger.removeHandler(handler)

    yield logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        logger.addHandler(handler)
    logger.setLevel(saved_level)


class TestCreateHandlers:
    """Tests for the handler factory functions."""

    def test_create_console_handler_sets_level_and_formatter(self) -> None:
        """Test creating console handler with DEBUG level."""
        # Arrange
        formatter = logging.Formatter(DEBUG_LOG_FORMAT)

        # Act
        handler = _create_console_handler(logging.DEBUG, formatter)

        # Assert
        assert isinstance(handler, logging.StreamHandler)
        assert handler.level == logging.DEBUG
        assert handler.formatter is formatter

    def test_create_file_handler_creates_directory(self, tmp_path: Path) -> None:
        """Test rotation parameters and creation of the log directory."""
        log_path = tmp_path / "logs" / "cfgtree.log"

        handler = _create_file_handler(
            str(log_path), logging.INFO, logging.Formatter(LOG_FORMAT)
        )

        try:
            assert isinstance(handler, logging.handlers.RotatingFileHandler)
            assert handler.maxBytes == LOG_FILE_MAX_BYTES
            assert handler.backupCount == LOG_FILE_BACKUP_COUNT
            assert handler.level == logging.INFO
            assert log_path.parent.is_dir()
        finally:
            handler.close()


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_caches_logger_instance(self) -> None:
        """Test that logger is cached and reused."""
        logger1 = get_logger("cfgtree.test.cached")
        logger2 = get_logger("cfgtree.test.cached")

        assert logger1 is logger2
        assert logger1.name == "cfgtree.test.cached"

    def test_module_loggers_have_no_handlers(self) -> None:
        """Test that module loggers delegate to the package logger."""
        logger = get_logger("cfgtree.test.module")

        assert not logger.handlers
        assert logger.propagate


class TestConfigureLogging:
    """Tests for configure_logging function."""

    @patch("cfgtree.utils.logging_config._create_console_handler")
    def test_console_handler_uses_level(
        self, mock_console_handler: Mock, package_logger: logging.Logger
    ) -> None:
        """Test configuring console output."""
        mock_console_handler.return_value = logging.NullHandler()

        result = configure_logging("info")

        assert result is package_logger
        assert package_logger.level == logging.INFO
        mock_console_handler.assert_called_once()
        level, formatter = mock_console_handler.call_args.args
        assert level == logging.INFO
        assert formatter._fmt == LOG_FORMAT

    @patch("cfgtree.utils.logging_config._create_console_handler")
    def test_debug_level_uses_detailed_format(self, mock_console_handler: Mock) -> None:
        """Test that DEBUG messages include the source location."""
        mock_console_handler.return_value = logging.NullHandler()

        configure_logging("DEBUG")

        assert mock_console_handler.call_args.args[1]._fmt == DEBUG_LOG_FORMAT

    @patch("cfgtree.utils.logging_config._create_console_handler")
    def test_repeated_calls_replace_handlers(
        self, mock_console_handler: Mock, package_logger: logging.Logger
    ) -> None:
        """Test that handlers of earlier calls are removed."""
        mock_console_handler.side_effect = lambda *args: logging.NullHandler()

        configure_logging("INFO")
        configure_logging("ERROR")

        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.ERROR

    def test_log_file_receives_module_messages(
        self, tmp_path: Path, package_logger: logging.Logger
    ) -> None:
        """Test that module loggers write to the configured log file."""
        # Arrange
        log_path = tmp_path / "logs" / "convert.log"
        configure_logging("WARNING", log_file=str(log_path), console=False)
        logger = get_logger("cfgtree.test.file")

        # Act
        logger.info("hidden")
        logger.warning("written")
        for handler in package_logger.handlers:
            handler.flush()

        # Assert
        content = log_path.read_text(encoding="utf-8")
        assert "cfgtree.test.file - WARNING - written" in content
        assert "hidden" not in content

    def test_unknown_level_raises(self, package_logger: logging.Logger) -> None:
        """Test that unknown level names are rejected before any change."""
        with pytest.raises(ValueError):
            configure_logging("verbose")

        assert not package_logger.handlers


class TestLogFunctionCall:
    """Tests for log_function_call decorator."""

    def test_logs_call_and_result(self) -> None:
        """Test that arguments and return value are logged."""
        mock_logger = Mock()

        @log_function_call(mock_logger)
        def add(a: int, b: int = 0) -> int:
            return a + b

        assert add(1, b=2) == 3
        assert add.__name__ == "add"
        messages = [call.args[0] for call in mock_logger.debug.call_args_list]
        assert messages == ["Calling add(1, b=2)", "add returned 3"]

    def test_logs_and_reraises_exceptions(self) -> None:
        """Test that exceptions are logged and propagated."""
        mock_logger = Mock()

        @log_function_call(mock_logger)
        def fail() -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            fail()

        mock_logger.error.assert_called_once_with("fail raised RuntimeError: boom")
        assert len(mock_logger.debug.call_args_list) == 1
