"""Unit tests for the logging utilities."""

import logging

import pytest

from build_provenance.utils.logging import (
    ROOT_LOGGER,
    StructuredFormatter,
    configure_logging,
    get_logger,
    get_logger_with_context,
)


@pytest.fixture
def restore_root_logger():
    """Undo configure_logging after the test."""
    logger = logging.getLogger(ROOT_LOGGER)
    saved = (logger.handlers[:], logger.level, logger.propagate)
    yield logger
    logger.handlers, logger.level, logger.propagate = saved


class TestLogging:
    """Tests for logger helpers."""

    def test_get_logger_prefix(self):
        """Test that module names are placed under the package logger."""
        assert get_logger("core.git").name == "build_provenance.core.git"
        assert get_logger("build_provenance.core").name == "build_provenance.core"

    def test_configure_logging(self, restore_root_logger):
        """Test installing a single stderr handler."""
        configure_logging("debug")
        configure_logging("warning")
        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.propagate is False

    def test_structured_formatter(self):
        """Test that context fields are appended in key order."""
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "probe failed", None, None)
        record.extra_fields = {"root": "/src", "collector": "git"}
        formatted = StructuredFormatter("%(message)s").format(record)
        assert formatted == "probe failed collector=git root=/src"

    def test_context_adapter(self, caplog):
        """Test that adapters attach their context to records."""
        caplog.set_level(logging.DEBUG, logger=ROOT_LOGGER)
        log = get_logger_with_context("collectors.git", root="/src")
        log.debug("probing")
        (record,) = [r for r in caplog.records if r.getMessage() == "probing"]
        assert record.extra_fields == {"root": "/src"}

    def test_per_call_fields(self, caplog):
        """Test that fields passed with a call extend the adapter's context."""
        caplog.set_level(logging.DEBUG, logger=ROOT_LOGGER)
        log = get_logger_with_context("collectors.git", root="/src")
        log.debug("describing", extra={"extra_fields": {"root": "/other", "step": "describe"}})
        (record,) = [r for r in caplog.records if r.getMessage() == "describing"]
        assert record.extra_fields == {"root": "/other", "step": "describe"}
