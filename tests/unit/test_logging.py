"""Unit tests for structured logging helpers."""

import logging

import pytest

from rental_pricing.utils.logging import (
    CorrelationIdFilter,
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    log_pricing_operation,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def clean_correlation_id():
    clear_correlation_id()
    yield
    clear_correlation_id()


class TestCorrelationId:
    """Tests for correlation ID context management."""

    def test_set_explicit(self) -> None:
        assert set_correlation_id("req-123") == "req-123"
        assert get_correlation_id() == "req-123"

    def test_generated_when_missing(self) -> None:
        cid = set_correlation_id()
        assert cid
        assert get_correlation_id() == cid

    def test_clear(self) -> None:
        set_correlation_id("req-123")
        clear_correlation_id()
        assert get_correlation_id() is None

    def test_formatter_prefix(self) -> None:
        set_correlation_id("req-123")
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)

        CorrelationIdFilter().filter(record)
        output = StructuredFormatter("%(message)s").format(record)

        assert output == "[req-123] hello"

    def test_formatter_without_correlation_id(self) -> None:
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)
        assert StructuredFormatter("%(message)s").format(record) == "[no-correlation-id] hello"

    def test_get_logger_adds_filter_once(self) -> None:
        logger = get_logger("rental_pricing.tests.filter")
        get_logger("rental_pricing.tests.filter")
        assert sum(isinstance(f, CorrelationIdFilter) for f in logger.filters) == 1


class TestLogPricingOperation:
    """Tests for log_pricing_operation."""

    def test_info_message(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("rental_pricing.tests.ops")

        with caplog.at_level(logging.INFO, logger="rental_pricing.tests.ops"):
            log_pricing_operation(logger, "quote", asset_id="apt-101", nights=3, total=40880)

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert record.getMessage() == (
            "Pricing operation: quote | asset_id=apt-101 | nights=3 | total=40880"
        )
        assert record.pricing == {
            "operation": "quote",
            "asset_id": "apt-101",
            "nights": 3,
            "total": 40880,
        }

    def test_error_logged_at_error_level(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("rental_pricing.tests.ops")

        with caplog.at_level(logging.INFO, logger="rental_pricing.tests.ops"):
            log_pricing_operation(logger, "payment_split", error="fee out of range")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.pricing["error"] == "fee out of range"

    def test_custom_level(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("rental_pricing.tests.ops")

        with caplog.at_level(logging.DEBUG, logger="rental_pricing.tests.ops"):
            log_pricing_operation(logger, "nightly_prices", level=logging.DEBUG, nights=2)

        assert caplog.records[-1].levelno == logging.DEBUG
