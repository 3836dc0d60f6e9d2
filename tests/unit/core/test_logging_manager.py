"""
Tests for logging_manager module.

Tests the DiaryLogger file/console setup, the safe_logger function and
NullLogger class that provide null-safe logging throughout the codebase,
and the CLI error boundary.
"""
import logging
from unittest.mock import MagicMock

import click
import pytest

from diary.core.exceptions import NotFoundError
from diary.core.logging_manager import (
    ColourFormatter,
    DiaryLogger,
    NullLogger,
    handle_cli_error,
    safe_logger,
)


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_null_logger_methods_are_no_ops(self):
        """NullLogger should accept every logging call silently."""
        logger = NullLogger()
        logger.log_operation("test_op", {"key": "value"})
        logger.log_error(ValueError("test error"), {"context": "test"})
        logger.log_debug("debug message", {"key": "value"})
        logger.log_info("info message")
        logger.log_warning("warning message")

    def test_null_logger_log_cli_error_returns_formatted(self):
        """NullLogger.log_cli_error should return formatted error string."""
        result = NullLogger().log_cli_error(ValueError("test error"))
        assert "ValueError" in result
        assert "test error" in result


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_safe_logger_returns_logger_when_provided(self):
        mock_logger = MagicMock(spec=DiaryLogger)
        assert safe_logger(mock_logger) is mock_logger

    def test_safe_logger_returns_null_logger_when_none(self):
        assert isinstance(safe_logger(None), NullLogger)

    def test_safe_logger_null_logger_is_singleton(self):
        assert safe_logger(None) is safe_logger(None)


class TestDiaryLogger:
    """Tests for DiaryLogger."""

    def test_creates_log_files(self, tmp_path):
        logger = DiaryLogger(tmp_path / "logs", "test_component")
        logger.log_operation("commit", {"uid": "e1"})
        try:
            raise NotFoundError("missing thing")
        except NotFoundError as e:
            logger.log_error(e, {"operation": "about"})

        main_log = (tmp_path / "logs" / "test_component.log").read_text(encoding="utf-8")
        error_log = (tmp_path / "logs" / "errors.log").read_text(encoding="utf-8")
        assert "OPERATION - commit" in main_log
        assert '"uid": "e1"' in main_log
        assert "NotFoundError: missing thing" in error_log
        assert "operation=about" in error_log

    def _console_handler(self, logger):
        return next(
            h for h in logger.main_logger.handlers
            if type(h) is logging.StreamHandler
        )

    def test_console_quiet_by_default(self, tmp_path):
        logger = DiaryLogger(tmp_path, "quiet")
        assert self._console_handler(logger).level == logging.WARNING

    def test_console_verbose(self, tmp_path):
        logger = DiaryLogger(tmp_path, "loud", verbose=True)
        assert self._console_handler(logger).level == logging.DEBUG

    def test_reinitialising_does_not_duplicate_handlers(self, tmp_path):
        DiaryLogger(tmp_path, "same")
        logger = DiaryLogger(tmp_path, "same")
        assert len(logger.main_logger.handlers) == 2

    def test_log_cli_error_format(self, tmp_path):
        logger = DiaryLogger(tmp_path, "cli")
        message = logger.log_cli_error(NotFoundError("Entry 'x' does not exist"))
        assert message == "❌ NotFoundError: Entry 'x' does not exist"


class TestColourFormatter:
    """Tests for the console formatter."""

    def test_prefixes_level_name(self):
        record = logging.LogRecord("n", logging.WARNING, __file__, 1, "careful", None, None)
        output = ColourFormatter("%(message)s").format(record)
        assert "[WARNING]" in click.unstyle(output)
        assert click.unstyle(output).endswith("careful")


class TestHandleCliError:
    """Tests for the CLI error boundary."""

    def test_exits_with_code_and_message(self, capsys):
        ctx = click.Context(click.Command("dummy"), obj={"logger": None, "verbose": False})
        with pytest.raises(SystemExit) as excinfo:
            handle_cli_error(ctx, NotFoundError("gone"), "about", {"uid": "x"})
        assert excinfo.value.code == 1
        assert "NotFoundError: gone" in capsys.readouterr().err

    def test_logs_context(self):
        logger = MagicMock(spec=DiaryLogger)
        logger.log_cli_error.return_value = "msg"
        ctx = click.Context(click.Command("dummy"), obj={"logger": logger, "verbose": True})
        with pytest.raises(SystemExit):
            handle_cli_error(ctx, NotFoundError("gone"), "about", {"uid": "x"}, exit_code=3)
        _, context = logger.log_cli_error.call_args.args
        assert context == {"operation": "about", "uid": "x"}
        assert logger.log_cli_error.call_args.kwargs["show_traceback"] is True
