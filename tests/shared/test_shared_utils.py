"""Tests for utility functions."""

import logging
from datetime import datetime

import pytest

from elspot.shared.utils import parse_date, setup_logger


def test_setup_logger_basic():
    """Test basic logger setup."""
    logger = setup_logger("test_logger")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test_logger"
    assert logger.level == logging.INFO


def test_setup_logger_with_file(tmp_path):
    """Test logger setup with file handler."""
    log_file = tmp_path / "logs" / "test.log"
    logger = setup_logger("test_file_logger", log_file=log_file)

    logger.info("Test message")

    assert log_file.exists()
    assert "Test message" in log_file.read_text()


def test_setup_logger_custom_level():
    """Test logger with custom level."""
    logger = setup_logger("test_debug_logger", level=logging.DEBUG)
    assert logger.level == logging.DEBUG


def test_setup_logger_string_level():
    """Test logger with a level given by name."""
    logger = setup_logger("test_string_level_logger", level="warning")
    assert logger.level == logging.WARNING


def test_setup_logger_no_duplicate_handlers(tmp_path):
    """Calling setup_logger twice keeps one handler per destination."""
    log_file = tmp_path / "dup.log"
    setup_logger("test_dup_logger", log_file=log_file)
    logger = setup_logger("test_dup_logger", log_file=log_file)

    assert len(logger.handlers) == 2


def test_parse_date():
    assert parse_date("2018-01-26") == datetime(2018, 1, 26)


@pytest.mark.parametrize("value", ["26-01-2018", "2018-13-01", "tomorrow", ""])
def test_parse_date_invalid(value):
    with pytest.raises(ValueError, match="YYYY-MM-DD"):
        parse_date(value)
