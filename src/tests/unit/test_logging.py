"""Tests for logging configuration."""

import json
import tempfile
from pathlib import Path
from unittest.mock import Mock

from symbol_index.config.logging import (
    configure_logging,
    get_logger,
    log_performance,
)


def test_configure_logging_basic():
    """Test basic logging configuration."""
    logger = configure_logging(level="DEBUG")
    assert hasattr(logger, "info")


def test_configure_logging_with_file():
    """Test logging configuration with file output."""
    with tempfile.NamedTemporaryFile(suffix=".log", delete=False) as f:
        temp_file = f.name

    try:
        logger = configure_logging(level="INFO", log_file=temp_file)
        logger.info("Test message", key="value")

        log_path = Path(temp_file)
        assert log_path.exists()
        content = log_path.read_text()
        assert "Test message" in content
    finally:
        Path(temp_file).unlink(missing_ok=True)


def test_json_logging_format():
    """Test JSON logging format."""
    with tempfile.NamedTemporaryFile(suffix=".log", delete=False) as f:
        temp_file = f.name

    try:
        logger = configure_logging(level="INFO", log_file=temp_file, json_logs=True)
        logger.info("Indexed symbols", documents=3)

        lines = Path(temp_file).read_text().strip().splitlines()
        record = json.loads(lines[-1])
        assert record["event"] == "Indexed symbols"
        assert record["documents"] == 3
        assert record["level"] == "info"
    finally:
        Path(temp_file).unlink(missing_ok=True)


def test_get_logger_with_context():
    """Test logger creation with initial context."""
    logger = get_logger(__name__, component="test", version="1.0")
    assert hasattr(logger, "info")


def test_log_performance():
    """Test performance logging function."""
    logger = get_logger(__name__)
    # Should not raise an exception
    log_performance(logger, "search_classes", 12.3456, results=4)


def test_performance_logging_can_be_disabled():
    """Test that disabling performance logging silences log_performance."""
    logger = Mock()
    try:
        configure_logging(level="DEBUG", enable_performance_logging=False)
        log_performance(logger, "search", 1.0)
        logger.debug.assert_not_called()

        configure_logging(level="DEBUG", enable_performance_logging=True)
        log_performance(logger, "search", 1.0)
        logger.debug.assert_called_once()
        assert logger.debug.call_args.kwargs["operation"] == "search"
    finally:
        configure_logging(level="INFO")
