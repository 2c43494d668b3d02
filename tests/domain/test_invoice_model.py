"""Tests for the invoice input model."""

from decimal import Decimal

import pytest

from invoice_kernel.domain.invoice import (
    AdjustmentConfiguration,
    CatalogProduct,
    DiscountConfiguration,
    LineItem,
    PartyLocation,
    TaxConfiguration,
    TaxKind,
    TaxMethod,
    is_intra_region,
    to_decimal,
)


class TestToDecimal:

    def test_passthrough(self):
        value = Decimal("1.50")
        assert to_decimal(value) is value

    def test_float_uses_text(self):
        assert to_decimal(1.1) == Decimal("1.1")

    def test_rejects_bool(self):
        with pytest.raises(TypeError):
            to_decimal(True, "quantity")

    def test_rejects_garbage(self):
        with pytest.raises(ValueError, match="Invalid quantity"):
            to_decimal("two", "quantity")


class TestLineItem:

    def test_line_amount(self):
        item = LineItem("Hours", "7.5", "1200")

        assert item.line_amount == Decimal("9000.0")

    def test_missing_tax_rate_is_zero(self):
        assert LineItem("Item", 1, 1).effective_tax_rate_percent == Decimal("0")

    def test_from_product(self):
        product = CatalogProduct(
            name="Annual support",
            description="Support plan, 12 months",
            rate="4999",
            tax_rate_percent=18,
        )
        item = LineItem.from_product(product, quantity=2)

        assert item.description == "Support plan, 12 months"
        assert item.unit_rate == Decimal("4999")
        assert item.tax_rate_percent == Decimal("18")
        assert item.line_amount == Decimal("9998")

    def test_from_product_without_tax_or_description(self):
        item = LineItem.from_product(CatalogProduct(name="Widget", rate=10))

        assert item.description == "Widget"
        assert item.quantity == Decimal("1")
        assert item.tax_rate_percent == Decimal("0")


class TestTaxConfiguration:

    def test_defaults(self):
        tax = TaxConfiguration()

        assert tax.kind == TaxKind.NONE
        assert tax.rate_percent == Decimal("0")
        assert tax.method == TaxMethod.GLOBAL
        assert not tax.is_inclusive

    @pytest.mark.parametrize("name,kind", [
        ("GST", TaxKind.CONSUMPTION),
        ("tds", TaxKind.WITHHOLDING_DEBIT),
        ("TCS", TaxKind.WITHHOLDING_CREDIT),
        ("None", TaxKind.NONE),
        ("withholding_debit", TaxKind.WITHHOLDING_DEBIT),
    ])
    def test_kind_from_source_names(self, name, kind):
        assert TaxConfiguration(kind=name).kind == kind

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown tax kind"):
            TaxConfiguration(kind="VAT")

    def test_method_from_string(self):
        assert TaxConfiguration(method="per_line").method == TaxMethod.PER_LINE

    def test_inclusive_only_for_consumption(self):
        assert TaxConfiguration(kind=TaxKind.CONSUMPTION, inclusive=True).is_inclusive
        assert not TaxConfiguration(kind=TaxKind.WITHHOLDING_CREDIT, inclusive=True).is_inclusive

    def test_per_line_only_for_consumption(self):
        assert TaxConfiguration(kind="GST", method=TaxMethod.PER_LINE).is_per_line
        assert not TaxConfiguration(kind="TDS", method=TaxMethod.PER_LINE).is_per_line

    def test_only_debit_is_deducted(self):
        deducted = [kind for kind in TaxKind if TaxConfiguration(kind=kind).is_deducted]

        assert deducted == [TaxKind.WITHHOLDING_DEBIT]

    def test_short_names(self):
        assert [k.short_name for k in TaxKind] == ["None", "GST", "TDS", "TCS"]


class TestOtherConfigurations:

    def test_discount_coerced(self):
        assert DiscountConfiguration(12.5).percent == Decimal("12.5")

    def test_adjustment_defaults(self):
        adjustment = AdjustmentConfiguration()

        assert adjustment.description == "Adjustment"
        assert adjustment.amount == Decimal("0")


class TestIntraRegion:

    @pytest.mark.parametrize("a,b,expected", [
        ("Karnataka", "Karnataka", True),
        ("Karnataka", " karnataka ", True),
        ("Karnataka", "Kerala", False),
        (None, "Kerala", False),
        ("", "", False),
        ("  ", "  ", False),
        (None, None, False),
    ])
    def test_matching(self, a, b, expected):
        assert is_intra_region(PartyLocation(a), PartyLocation(b)) is expected
