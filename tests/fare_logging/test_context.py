"""Tests for logging context managers."""

import logging

import pytest

from grab_fare.fare_logging import (
    ContextFilter,
    LogContext,
    log_context,
    log_quote_context,
    new_quote_id,
)


@pytest.mark.unit
class TestLogContext:
    """Tests for log_context context manager."""

    @pytest.fixture
    def logger(self):
        logger = logging.getLogger("test.context")
        logger.setLevel(logging.DEBUG)
        return logger

    @pytest.fixture
    def captured_records(self, logger):
        """Capture log records for inspection."""
        records: list[logging.LogRecord] = []

        class RecordCapture(logging.Handler):
            def emit(self, record: logging.LogRecord) -> None:
                records.append(record)

        handler = RecordCapture()
        handler.addFilter(ContextFilter())
        logger.addHandler(handler)
        yield records
        logger.removeHandler(handler)

    def test_log_context_adds_extra_fields(self, logger, captured_records):
        with log_context(vehicle="bike", promo_code="SUPER20"):
            logger.info("Test message")

        assert len(captured_records) == 1
        record = captured_records[0]
        assert record.vehicle == "bike"
        assert record.promo_code == "SUPER20"

    def test_log_context_clears_on_exit(self, logger, captured_records):
        with log_context(quote_id="q-002"):
            pass
        logger.info("after context")

        assert LogContext.get() == {}
        assert not hasattr(captured_records[0], "quote_id")

    def test_log_context_clears_on_error(self):
        with pytest.raises(RuntimeError):
            with log_context(quote_id="q-003"):
                raise RuntimeError("boom")

        assert LogContext.get() == {}

    def test_explicit_extra_wins_over_context(self, logger, captured_records):
        with log_context(vehicle="bike"):
            logger.info("override", extra={"vehicle": "premium"})

        assert captured_records[0].vehicle == "premium"

    def test_log_quote_context(self, logger, captured_records):
        with log_quote_context("q-004", vehicle="economy"):
            logger.info("quoted")

        record = captured_records[0]
        assert record.quote_id == "q-004"
        assert record.vehicle == "economy"

    def test_nested_context_restores_outer_fields(self, logger, captured_records):
        with log_context(vehicle="economy"):
            with log_context(promo_code="GRAB10"):
                logger.info("inner")
            logger.info("outer")

        inner, outer = captured_records
        assert inner.vehicle == "economy"
        assert inner.promo_code == "GRAB10"
        assert outer.vehicle == "economy"
        assert not hasattr(outer, "promo_code")

    def test_log_quote_context_generates_id(self, logger, captured_records):
        with log_quote_context(vehicle="bike") as quote_id:
            logger.info("quoted")

        assert len(quote_id) == 8
        assert captured_records[0].quote_id == quote_id

    def test_new_quote_ids_differ(self):
        assert new_quote_id() != new_quote_id()
