"""Tests for logging context managers."""

import logging

import pytest

from ridedispatch.dispatch_logging import ContextFilter, LogContext, log_context, log_trip_context


@pytest.mark.unit
class TestLogContext:
    """Tests for log_context and log_trip_context."""

    @pytest.fixture
    def logger(self):
        """Logger at DEBUG for the context tests."""
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
        LogContext.clear()

    def test_log_context_adds_extra_fields(self, logger, captured_records):
        """Fields set in the context appear on records."""
        with log_context(driver_id=3, passenger_id=6):
            logger.info("assigning")

        record = captured_records[0]
        assert record.driver_id == 3
        assert record.passenger_id == 6

    def test_log_context_clears_on_exit(self, logger, captured_records):
        """Fields are gone after the block exits."""
        with log_context(driver_id=3):
            pass
        logger.info("after")

        assert not hasattr(captured_records[0], "driver_id")

    def test_nested_context_restores_outer_fields(self, logger, captured_records):
        """Leaving an inner block restores the outer fields."""
        with log_context(passenger_id=6):
            with log_context(driver_id=3):
                pass
            logger.info("outer")

        record = captured_records[0]
        assert record.passenger_id == 6
        assert not hasattr(record, "driver_id")

    def test_log_trip_context_sets_correlation_id(self, logger, captured_records):
        """Trip context derives the correlation id from the trip id."""
        with log_trip_context(9, driver_id=3):
            logger.info("trip event")

        record = captured_records[0]
        assert record.trip_id == 9
        assert record.correlation_id == "trip-9"
        assert record.driver_id == 3

    def test_explicit_extra_wins_over_context(self, logger, captured_records):
        """An explicit extra overrides a context field."""
        with log_context(driver_id=3):
            logger.info("explicit", extra={"driver_id": 8})

        assert captured_records[0].driver_id == 8

    def test_dispatch_logs_carry_trip_context(self, dispatcher, caplog):
        """A dispatch log record carries its trip, driver and passenger."""
        caplog.handler.addFilter(ContextFilter())
        with caplog.at_level(logging.INFO, logger="ridedispatch.dispatcher"):
            trip = dispatcher.request_trip(6)

        record = next(r for r in caplog.records if r.name == "ridedispatch.dispatcher")
        assert record.trip_id == trip.id
        assert record.driver_id == 3
        assert record.passenger_id == 6
        assert record.eligible_drivers == 6
