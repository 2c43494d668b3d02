"""Tests for the structured logging system (invoice_kernel/logging_config.py)."""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO
from uuid import uuid4

from invoice_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
)


def _make_handler() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    return handler, stream


def _parse_log(stream: StringIO) -> dict:
    """Parse the first JSON log line from a stream."""
    line = stream.getvalue().strip().split("\n")[0]
    return json.loads(line)


def _parse_all_logs(stream: StringIO) -> list[dict]:
    lines = stream.getvalue().strip().split("\n")
    return [json.loads(line) for line in lines if line]


# ---------------------------------------------------------------------------
# StructuredFormatter tests
# ---------------------------------------------------------------------------


class TestStructuredFormatter:
    """Tests for JSON log output format."""

    def setup_method(self):
        self.handler, self.stream = _make_handler()
        configure_logging(handler=self.handler)
        self.logger = get_logger("test")

    def test_basic_json_output(self):
        self.logger.info("hello")

        record = _parse_log(self.stream)
        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["logger"] == "invoice_kernel.test"
        assert "ts" in record

    def test_extra_fields_included(self):
        self.logger.info("summarized", extra={"item_count": 3, "split": True})

        record = _parse_log(self.stream)
        assert record["item_count"] == 3
        assert record["split"] is True

    def test_context_fields_included(self):
        LogContext.set(correlation_id="abc-123", invoice_number="INV-000042")
        self.logger.info("test_msg")

        record = _parse_log(self.stream)
        assert record["correlation_id"] == "abc-123"
        assert record["invoice_number"] == "INV-000042"

    def test_exception_fields(self):
        try:
            raise ValueError("boom")
        except ValueError:
            self.logger.error("failed", exc_info=True)

        record = _parse_log(self.stream)
        assert record["exc_type"] == "ValueError"
        assert record["exc_message"] == "boom"
        assert "traceback" in record

    def test_kernel_exception_code_extracted(self):
        """Invoice kernel exceptions carry a .code attribute."""
        from invoice_kernel.exceptions import PercentageOutOfRangeError

        try:
            raise PercentageOutOfRangeError("discount.percent", Decimal("120"))
        except PercentageOutOfRangeError:
            self.logger.error("percent_error", exc_info=True)

        record = _parse_log(self.stream)
        assert record["exc_code"] == "PERCENTAGE_OUT_OF_RANGE"
        assert record["exc_type"] == "PercentageOutOfRangeError"
        assert record["exc_field"] == "discount.percent"
        assert record["exc_value"] == "120"

    def test_no_context_fields_when_empty(self):
        self.logger.info("bare_message")

        record = _parse_log(self.stream)
        assert "correlation_id" not in record
        assert "invoice_number" not in record

    def test_uuid_date_and_decimal_serialized(self):
        uid = uuid4()
        self.logger.info("with_values", extra={
            "request_id": uid,
            "invoice_date": date(2026, 4, 1),
            "total_amount": Decimal("2360.00"),
        })

        record = _parse_log(self.stream)
        assert record["request_id"] == str(uid)
        assert record["invoice_date"] == "2026-04-01"
        assert record["total_amount"] == "2360.00"

    def test_valid_json_every_line(self):
        self.logger.info("first")
        self.logger.warning("second", extra={"k": "v"})
        self.logger.debug("third")

        logs = _parse_all_logs(self.stream)
        # default level is INFO, so the debug line is dropped
        assert len(logs) == 2
        for record in logs:
            assert "ts" in record
            assert "level" in record
            assert "logger" in record
            assert "message" in record


# ---------------------------------------------------------------------------
# LogContext tests
# ---------------------------------------------------------------------------


class TestLogContext:
    """Tests for context propagation."""

    def test_set_and_get(self):
        LogContext.set(correlation_id="x", invoice_number="y")
        assert LogContext.get_all() == {"correlation_id": "x", "invoice_number": "y"}

    def test_clear(self):
        LogContext.set(correlation_id="x")
        LogContext.clear()
        assert LogContext.get_all() == {}

    def test_bind_context_manager(self):
        LogContext.set(invoice_number="outer")
        with LogContext.bind(invoice_number="inner"):
            assert LogContext.get_all()["invoice_number"] == "inner"
        assert LogContext.get_all()["invoice_number"] == "outer"

    def test_bind_restores_none(self):
        """bind() restores to None if there was no previous value."""
        assert "correlation_id" not in LogContext.get_all()
        with LogContext.bind(correlation_id="temp"):
            assert LogContext.get_all()["correlation_id"] == "temp"
        assert "correlation_id" not in LogContext.get_all()

    def test_bind_skips_none(self):
        with LogContext.bind(invoice_number=None):
            assert LogContext.get_all() == {}

    def test_additive_set(self):
        LogContext.set(correlation_id="a")
        LogContext.set(actor_id="b")
        ctx = LogContext.get_all()
        assert ctx["correlation_id"] == "a"
        assert ctx["actor_id"] == "b"

    def test_all_fields(self):
        LogContext.set(
            correlation_id="c",
            invoice_number="n",
            actor_id="a",
            trace_id="t",
        )
        ctx = LogContext.get_all()
        assert len(ctx) == 4
        assert ctx["trace_id"] == "t"


# ---------------------------------------------------------------------------
# configure_logging tests
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    """Tests for initialization."""

    def test_idempotent(self):
        h1, _ = _make_handler()
        configure_logging(handler=h1)
        h2, _ = _make_handler()
        configure_logging(handler=h2)  # second call is no-op
        root = logging.getLogger("invoice_kernel")
        assert len(root.handlers) == 1

    def test_get_logger_returns_child(self):
        logger = get_logger("services.totals")
        assert logger.name == "invoice_kernel.services.totals"

    def test_logger_hierarchy(self):
        """Child loggers inherit the invoice_kernel root config."""
        handler, stream = _make_handler()
        configure_logging(handler=handler, level=logging.DEBUG)
        get_logger("deep.nested.module").debug("hierarchy_test")

        record = _parse_log(stream)
        assert record["message"] == "hierarchy_test"
        assert record["logger"] == "invoice_kernel.deep.nested.module"
