"""
Invoice Totals Engine - subtotal, discount, tax and payable total.

Pure function with no I/O and no shared state: every call recomputes the
whole result from its inputs, so an editor may call it on each keystroke
and servers may call it concurrently for many invoices.

Order of operations:
    1. sub_total        = sum(quantity * unit_rate)
    2. discount_amount  = sub_total * discount%
    3. after_discount   = sub_total - discount_amount
    4. tax_amount       = per tax kind / method / inclusiveness (below)
    5. total_amount     = after_discount (+|-) tax_amount + adjustment
    6. balance_due      = total_amount

Tax rules:
    - NONE: no tax.
    - CONSUMPTION, PER_LINE: each line taxed at its own rate on its RAW
      amount. The invoice discount is not distributed over lines, so a
      discounted invoice is taxed on the undiscounted lines.
    - Any other case: the invoice rate applied to after_discount.
    - Inclusive (consumption only): tax is extracted from the amount,
      tax = amount - amount / (1 + rate), and is not added to the total.
    - WITHHOLDING_DEBIT subtracts the tax from the total; every other kind,
      WITHHOLDING_CREDIT included, adds it.

All amounts stay unrounded Decimals. ``InvoiceTotals.rounded()`` is the
presentation boundary.

Usage:
    from invoice_engines.totals import calculate_invoice_totals
    from invoice_kernel.domain.invoice import (
        DiscountConfiguration, LineItem, PartyLocation, TaxConfiguration, TaxKind,
    )

    totals = calculate_invoice_totals(
        items=[LineItem("Consulting", 2, "500")],
        discount=DiscountConfiguration(percent=10),
        tax=TaxConfiguration(kind=TaxKind.CONSUMPTION, rate_percent=18),
        issuer=PartyLocation("Karnataka"),
        recipient=PartyLocation("karnataka "),
    )
    totals.total_amount.round()  # Money(Decimal("1062.00"), Currency("INR"))
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Sequence

from invoice_engines.tracer import traced_engine
from invoice_kernel.domain.invoice import (
    AdjustmentConfiguration,
    DiscountConfiguration,
    LineItem,
    PartyLocation,
    TaxConfiguration,
    TaxKind,
    is_intra_region,
)
from invoice_kernel.domain.validation import require_percent
from invoice_kernel.domain.values import Currency, Money
from invoice_kernel.logging_config import get_logger

logger = get_logger("engines.totals")

_ZERO = Decimal("0")
_ONE = Decimal("1")
_HUNDRED = Decimal("100")

DEFAULT_CURRENCY = "INR"


@dataclass(frozen=True)
class InvoiceTotals:
    """
    Derived totals of one invoice.

    Never mutated: any input change produces a new InvoiceTotals.
    ``tax_amount`` is a magnitude; ``tax_kind`` decides whether it was added
    to or deducted from the total. ``intra_region`` tells renderers whether
    consumption tax is shown as two halves.
    """

    sub_total: Money
    discount_amount: Money
    amount_after_discount: Money
    tax_amount: Money
    total_amount: Money
    balance_due: Money
    tax_kind: TaxKind = TaxKind.NONE
    tax_inclusive: bool = False
    intra_region: bool = False

    @property
    def currency(self) -> Currency:
        return self.sub_total.currency

    @property
    def taxable_base(self) -> Money:
        """Amount before tax: back-calculated when tax is inclusive."""
        if self.tax_inclusive:
            return self.amount_after_discount - self.tax_amount
        return self.amount_after_discount

    @property
    def is_split(self) -> bool:
        """Consumption tax presented as two co-equal jurisdictional halves."""
        return self.tax_kind == TaxKind.CONSUMPTION and self.intra_region

    def rounded(self) -> InvoiceTotals:
        """Copy with every amount rounded to the currency's decimal places."""
        return replace(
            self,
            sub_total=self.sub_total.round(),
            discount_amount=self.discount_amount.round(),
            amount_after_discount=self.amount_after_discount.round(),
            tax_amount=self.tax_amount.round(),
            total_amount=self.total_amount.round(),
            balance_due=self.balance_due.round(),
        )


def _extract_inclusive_tax(gross: Decimal, rate_percent: Decimal) -> Decimal:
    """Tax contained in a tax-inclusive amount."""
    base = gross / (_ONE + rate_percent / _HUNDRED)
    return gross - base


def _line_tax(item: LineItem, index: int, inclusive: bool) -> Decimal:
    rate = require_percent(
        item.effective_tax_rate_percent, f"items[{index}].tax_rate_percent"
    )
    if inclusive:
        return _extract_inclusive_tax(item.line_amount, rate)
    return item.line_amount * (rate / _HUNDRED)


def _compute_tax(
    items: Sequence[LineItem],
    amount_after_discount: Decimal,
    tax: TaxConfiguration,
) -> Decimal:
    if tax.kind == TaxKind.NONE:
        return _ZERO

    if tax.is_per_line:
        total = _ZERO
        for index, item in enumerate(items):
            total += _line_tax(item, index, tax.is_inclusive)
        return total

    rate = require_percent(tax.rate_percent, "tax.rate_percent")
    if rate == _ZERO:
        return _ZERO
    if tax.is_inclusive:
        return _extract_inclusive_tax(amount_after_discount, rate)
    return amount_after_discount * (rate / _HUNDRED)


@traced_engine(
    "invoice_totals", "1.0",
    fingerprint_fields=("items", "discount", "tax", "adjustment", "issuer", "recipient"),
)
def calculate_invoice_totals(
    *,
    items: Sequence[LineItem],
    discount: DiscountConfiguration = DiscountConfiguration(),
    tax: TaxConfiguration = TaxConfiguration(),
    adjustment: AdjustmentConfiguration = AdjustmentConfiguration(),
    issuer: PartyLocation = PartyLocation(),
    recipient: PartyLocation = PartyLocation(),
    currency: str | Currency = DEFAULT_CURRENCY,
) -> InvoiceTotals:
    """
    Compute the totals of an invoice.

    Args:
        items: Line items in display order (order does not affect totals).
        discount: Percentage discount on the raw subtotal.
        tax: Tax kind, rate, method and inclusiveness.
        adjustment: Signed amount added after tax.
        issuer: Issuer region, for the consumption tax split flag.
        recipient: Recipient region, for the consumption tax split flag.
        currency: Currency the amounts are denominated in.

    Returns:
        InvoiceTotals with unrounded amounts.

    Raises:
        PercentageOutOfRangeError: If the discount or an applicable tax rate
            is outside [0, 100]. Other malformed input (negative quantities,
            NaN) must be rejected by validate_invoice_input beforehand.
    """
    t0 = time.monotonic()
    if isinstance(currency, str):
        currency = Currency(currency)

    logger.debug("invoice_totals_calculation_started", extra={
        "item_count": len(items),
        "discount_percent": str(discount.percent),
        "tax_kind": tax.kind.value,
        "tax_method": tax.method.value,
        "tax_inclusive": tax.is_inclusive,
        "currency": currency.code,
    })

    sub_total = sum((item.line_amount for item in items), _ZERO)

    discount_percent = require_percent(discount.percent, "discount.percent")
    discount_amount = sub_total * (discount_percent / _HUNDRED)
    amount_after_discount = sub_total - discount_amount

    if tax.is_per_line and discount_amount != _ZERO:
        logger.debug("per_line_tax_on_undiscounted_lines", extra={
            "discount_amount": str(discount_amount),
        })

    tax_amount = _compute_tax(items, amount_after_discount, tax)

    if tax.is_inclusive:
        total_amount = amount_after_discount + adjustment.amount
    elif tax.is_deducted:
        total_amount = amount_after_discount - tax_amount + adjustment.amount
    else:
        total_amount = amount_after_discount + tax_amount + adjustment.amount

    intra_region = is_intra_region(issuer, recipient)

    totals = InvoiceTotals(
        sub_total=Money(sub_total, currency),
        discount_amount=Money(discount_amount, currency),
        amount_after_discount=Money(amount_after_discount, currency),
        tax_amount=Money(tax_amount, currency),
        total_amount=Money(total_amount, currency),
        balance_due=Money(total_amount, currency),
        tax_kind=tax.kind,
        tax_inclusive=tax.is_inclusive,
        intra_region=intra_region,
    )

    logger.info("invoice_totals_calculated", extra={
        "sub_total": str(sub_total),
        "discount_amount": str(discount_amount),
        "tax_amount": str(tax_amount),
        "total_amount": str(total_amount),
        "tax_kind": tax.kind.value,
        "intra_region": intra_region,
        "duration_ms": round((time.monotonic() - t0) * 1000, 2),
    })

    return totals


class InvoiceTotalsCalculator:
    """
    Calculate invoice totals for a fixed currency.

    Stateless apart from the currency; safe to share between threads.
    """

    def __init__(self, currency: str | Currency = DEFAULT_CURRENCY):
        self.currency = Currency(currency) if isinstance(currency, str) else currency

    def calculate(
        self,
        items: Sequence[LineItem],
        discount: DiscountConfiguration = DiscountConfiguration(),
        tax: TaxConfiguration = TaxConfiguration(),
        adjustment: AdjustmentConfiguration = AdjustmentConfiguration(),
        issuer: PartyLocation = PartyLocation(),
        recipient: PartyLocation = PartyLocation(),
    ) -> InvoiceTotals:
        return calculate_invoice_totals(
            items=tuple(items),
            discount=discount,
            tax=tax,
            adjustment=adjustment,
            issuer=issuer,
            recipient=recipient,
            currency=self.currency,
        )
