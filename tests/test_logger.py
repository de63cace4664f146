"""Tests for logger module."""

import logging
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

from interactcord.util import logger as logger_module
from interactcord.util.logger import (
    DATE_FORMAT,
    LOG_FORMAT,
    ColorFormatter,
    PromptToolkitHandler,
    get_logger,
    handle_exception,
    setup_logger,
    should_use_color,
)


def make_record(level, msg):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
        func="test_func",
    )


class TestShouldUseColor:
    """Tests for should_use_color function."""

    @patch('sys.stderr.isatty')
    def test_should_use_color_tty(self, mock_isatty):
        mock_isatty.return_value = True
        assert should_use_color() is True

    @patch('sys.stderr.isatty')
    def test_should_use_color_no_tty(self, mock_isatty):
        mock_isatty.return_value = False
        assert should_use_color() is False

    @patch('sys.stderr.isatty')
    def test_should_use_color_exception(self, mock_isatty):
        """Color is disabled when the terminal cannot be queried."""
        mock_isatty.side_effect = Exception("Error")
        assert should_use_color() is False


class TestColorFormatter:
    """Tests for ColorFormatter class."""

    def test_debug_is_cyan(self):
        formatter = ColorFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        formatted = formatter.format(make_record(logging.DEBUG, "Debug message"))

        assert formatted.startswith("\033[36m")
        assert "Debug message" in formatted
        assert formatted.endswith("\033[0m")

    def test_error_is_red(self):
        formatter = ColorFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        formatted = formatter.format(make_record(logging.ERROR, "Error message"))

        assert formatted.startswith("\033[31m")

    def test_custom_level_is_uncolored(self):
        formatter = ColorFormatter("%(message)s")
        record = make_record(25, "Custom level")
        record.levelname = "NOTICE"

        assert formatter.format(record) == "Custom level"


class TestSetupLogger:
    """Tests for setup_logger function."""

    def test_setup_logger_creates_logger(self):
        logger = setup_logger("test_logger_unique_1")

        assert logger.name == "test_logger_unique_1"
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_setup_logger_returns_existing_without_duplicate_handlers(self):
        logger1 = setup_logger("test_logger_unique_2")
        handler_count = len(logger1.handlers)
        logger2 = setup_logger("test_logger_unique_2")

        assert logger1 is logger2
        assert len(logger2.handlers) == handler_count

    def test_setup_logger_handlers(self):
        logger = setup_logger("test_logger_unique_3")
        handler_types = {type(handler) for handler in logger.handlers}

        assert PromptToolkitHandler in handler_types
        assert RotatingFileHandler in handler_types

    def test_file_handler_rotates(self):
        logger = setup_logger("test_logger_unique_4")
        file_handler = next(h for h in logger.handlers if isinstance(h, RotatingFileHandler))

        assert file_handler.maxBytes == logger_module.LOG_MAX_BYTES
        assert file_handler.backupCount == logger_module.LOG_BACKUP_COUNT


class TestGetLogger:
    def test_get_logger_same_name_returns_same(self):
        assert get_logger("test_module_unique_1") is get_logger("test_module_unique_1")

    def test_log_file_is_shared(self):
        first = get_logger("test_module_unique_2")
        second = get_logger("test_module_unique_3")

        first_path = next(h for h in first.handlers if isinstance(h, RotatingFileHandler)).baseFilename
        second_path = next(h for h in second.handlers if isinstance(h, RotatingFileHandler)).baseFilename
        assert first_path == second_path


class TestPromptToolkitHandler:
    def test_emit_prints_formatted_record(self):
        handler = PromptToolkitHandler(formatter=logging.Formatter("%(message)s"))

        with patch("interactcord.util.logger.print_formatted_text") as mock_print:
            handler.emit(make_record(logging.INFO, "hello"))

        mock_print.assert_called_once()

    def test_emit_failure_is_handled(self):
        handler = PromptToolkitHandler()

        with patch("interactcord.util.logger.print_formatted_text", side_effect=OSError("closed")):
            with patch.object(handler, "handleError") as mock_handle_error:
                handler.emit(make_record(logging.INFO, "hello"))

        mock_handle_error.assert_called_once()


class TestHandleException:
    def test_keyboard_interrupt_goes_to_default_hook(self):
        with patch("sys.__excepthook__") as mock_hook:
            handle_exception(KeyboardInterrupt, KeyboardInterrupt(), None)

        mock_hook.assert_called_once()

    def test_other_exceptions_are_logged(self):
        error = ValueError("boom")

        with patch("interactcord.util.logger.logging.error") as mock_error:
            handle_exception(ValueError, error, None)

        assert mock_error.call_args.kwargs["exc_info"][1] is error


def test_noisy_library_loggers_are_muted():
    for name in logger_module.NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.ERROR
