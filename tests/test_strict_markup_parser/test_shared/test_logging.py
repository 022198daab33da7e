"""Tests for correlation-aware logging."""

import logging

import pytest

from strict_markup_parser.shared.logging import CorrelationLogger, configure_logging, get_logger


class TestCorrelationLogger:
    """Tests for CorrelationLogger."""

    def test_component_defaults_to_last_name_part(self):
        """Test default component name."""
        logger = get_logger("strict_markup_parser.parser.builder")

        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "builder"
        assert logger.correlation_id is None

    def test_records_carry_correlation_info(self, caplog):
        """Test extras are attached to emitted records."""
        logger = get_logger("strict_markup_parser.test", "req-42", "unit")

        with caplog.at_level(logging.INFO, logger="strict_markup_parser.test"):
            logger.info("hello", extra={"detail": 1})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "unit"
        assert record.correlation_id == "req-42"
        assert record.detail == 1

    def test_debug_suppressed_above_level(self, caplog):
        """Test level filtering applies."""
        logger = get_logger("strict_markup_parser.quiet")

        with caplog.at_level(logging.WARNING, logger="strict_markup_parser.quiet"):
            logger.debug("hidden")
            logger.warning("shown")
            assert not logger.is_enabled_for(logging.DEBUG)

        assert [r.getMessage() for r in caplog.records] == ["shown"]


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_rejects_unknown_level(self):
        """Test invalid level names."""
        with pytest.raises(ValueError, match="logging level must be one of"):
            configure_logging("CHATTY")
