"""
Pytest fixtures for the invoice totals test suite.

Provides:
- Logging isolation (structured logging reset between tests)
- A JSON log capture helper
- Common invoice inputs
"""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from invoice_config import InvoicingConfig
from invoice_kernel.domain.invoice import (
    DiscountConfiguration,
    LineItem,
    PartyLocation,
    TaxConfiguration,
    TaxKind,
)
from invoice_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


class LogCapture:
    """Collects structured JSON log lines written during a test."""

    def __init__(self) -> None:
        self.stream = StringIO()
        self.handler = logging.StreamHandler(self.stream)
        self.handler.setFormatter(StructuredFormatter())

    @property
    def records(self) -> list[dict]:
        lines = self.stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    def messages(self) -> list[str]:
        return [r["message"] for r in self.records]

    def find(self, message: str) -> list[dict]:
        return [r for r in self.records if r["message"] == message]


@pytest.fixture
def log_capture() -> LogCapture:
    """Configure structured logging at DEBUG into an in-memory stream."""
    capture = LogCapture()
    configure_logging(level=logging.DEBUG, handler=capture.handler)
    return capture


@pytest.fixture
def default_config() -> InvoicingConfig:
    return InvoicingConfig()


@pytest.fixture
def two_items() -> tuple[LineItem, ...]:
    """1 x 1000 + 2 x 500 = 2000."""
    return (
        LineItem("Website design", 1, "1000"),
        LineItem("Hosting (months)", 2, "500"),
    )


@pytest.fixture
def gst_18() -> TaxConfiguration:
    return TaxConfiguration(kind=TaxKind.CONSUMPTION, rate_percent=Decimal("18"))


@pytest.fixture
def ten_percent_off() -> DiscountConfiguration:
    return DiscountConfiguration(percent=Decimal("10"))


@pytest.fixture
def same_region() -> tuple[PartyLocation, PartyLocation]:
    return PartyLocation("Same"), PartyLocation("Same")
