"""
Tests for invoice input validation.

Every rejected field is reported at once, in field order, so that an
editor can highlight all of them.
"""

from decimal import Decimal

import pytest

from invoice_kernel.domain.invoice import (
    AdjustmentConfiguration,
    DiscountConfiguration,
    LineItem,
    TaxConfiguration,
    TaxKind,
)
from invoice_kernel.domain.validation import (
    collect_issues,
    is_valid_percent,
    require_percent,
    validate_invoice_input,
)
from invoice_kernel.exceptions import (
    InvoiceValidationError,
    PercentageOutOfRangeError,
    ValidationError,
)


def _issues(items=(), discount="0", tax=None, adjustment="0"):
    return collect_issues(
        items,
        DiscountConfiguration(discount),
        tax or TaxConfiguration(),
        AdjustmentConfiguration(amount=adjustment),
    )


class TestPercentChecks:

    @pytest.mark.parametrize("value", ["0", "0.01", "18", "100"])
    def test_valid(self, value):
        assert is_valid_percent(Decimal(value))

    @pytest.mark.parametrize("value", ["-0.01", "100.01", "NaN", "Infinity"])
    def test_invalid(self, value):
        assert not is_valid_percent(Decimal(value))

    def test_require_percent_returns_value(self):
        assert require_percent(Decimal("5"), "discount.percent") == Decimal("5")

    def test_require_percent_raises(self):
        with pytest.raises(PercentageOutOfRangeError) as exc_info:
            require_percent(Decimal("101"), "discount.percent")

        assert exc_info.value.field == "discount.percent"
        assert exc_info.value.value == "101"
        assert exc_info.value.code == "PERCENTAGE_OUT_OF_RANGE"


class TestCollectIssues:

    def test_valid_input(self):
        items = [LineItem("Design", 1, "1000", tax_rate_percent=18)]
        tax = TaxConfiguration(kind=TaxKind.CONSUMPTION, rate_percent=18)

        assert _issues(items, discount="10", tax=tax) == ()

    def test_empty_invoice_is_valid(self):
        assert _issues() == ()

    def test_line_item_issues(self):
        items = [
            LineItem("  ", 0, "-1"),
            LineItem("OK", "NaN", "5", tax_rate_percent=150),
        ]

        issues = _issues(items)

        assert [(i.field, i.code) for i in issues] == [
            ("items[0].description", "REQUIRED"),
            ("items[0].quantity", "NOT_POSITIVE"),
            ("items[0].unit_rate", "NEGATIVE"),
            ("items[1].quantity", "NOT_A_NUMBER"),
            ("items[1].tax_rate_percent", "OUT_OF_RANGE"),
        ]

    def test_discount_out_of_range(self):
        issues = _issues(discount="150")

        assert issues[0].as_dict() == {
            "field": "discount.percent",
            "code": "OUT_OF_RANGE",
            "message": "discount.percent must be between 0 and 100",
        }

    def test_tax_rate_ignored_without_tax(self):
        tax = TaxConfiguration(kind=TaxKind.NONE, rate_percent=500)

        assert _issues(tax=tax) == ()

    def test_tax_rate_checked_with_tax(self):
        tax = TaxConfiguration(kind=TaxKind.WITHHOLDING_DEBIT, rate_percent="NaN")

        issues = _issues(tax=tax)

        assert [(i.field, i.code) for i in issues] == [
            ("tax.rate_percent", "NOT_A_NUMBER"),
        ]

    def test_negative_adjustment_allowed(self):
        assert _issues(adjustment="-250") == ()

    def test_infinite_adjustment_rejected(self):
        issues = _issues(adjustment="Infinity")

        assert issues[0].field == "adjustment.amount"


class TestValidateInvoiceInput:

    def test_passes_silently(self):
        validate_invoice_input(
            [LineItem("A", 1, 1)],
            DiscountConfiguration(),
            TaxConfiguration(),
            AdjustmentConfiguration(),
        )

    def test_raises_with_all_fields(self):
        with pytest.raises(InvoiceValidationError) as exc_info:
            validate_invoice_input(
                [LineItem("", 1, 1)],
                DiscountConfiguration(-5),
                TaxConfiguration(kind="GST", rate_percent=120),
                AdjustmentConfiguration(),
            )

        error = exc_info.value
        assert isinstance(error, ValidationError)
        assert error.code == "INVOICE_VALIDATION_FAILED"
        assert error.fields == (
            "items[0].description",
            "discount.percent",
            "tax.rate_percent",
        )
        assert "3 issue(s)" in str(error)
