"""
Tax presentation - how an invoice's tax is broken down for display.

One helper shared by every renderer (editor totals panel, document
templates) so the intra/inter-region decision is made in a single place.
The split never changes the scalar tax: the lines of a breakdown always
add up to ``InvoiceTotals.tax_amount`` exactly.

    GST, same region      ->  CGST (rate/2) + SGST (rate/2)
    GST, other region     ->  IGST (rate)
    TDS                   ->  one line, deducted ("-")
    TCS                   ->  one line, added ("+")
    None                  ->  no lines
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from invoice_engines.totals import InvoiceTotals
from invoice_kernel.domain.currency import DigitGrouping
from invoice_kernel.domain.invoice import TaxConfiguration, TaxKind
from invoice_kernel.domain.values import Money

_TWO = Decimal("2")

CENTRAL_CODE = "CGST"
STATE_CODE = "SGST"
INTEGRATED_CODE = "IGST"


@dataclass(frozen=True)
class TaxBreakdownLine:
    """
    One displayed tax line.

    ``rate_percent`` is None when tax was computed per line item (there is
    no single rate to show). ``included`` marks tax already contained in
    the prices, rendered as "(incl.)" instead of "+".
    """

    code: str
    label: str
    rate_percent: Decimal | None
    amount: Money
    sign: str = "+"
    included: bool = False

    @property
    def title(self) -> str:
        """Label with the rate, e.g. ``CGST (9%)``."""
        if self.rate_percent is None:
            return self.label
        return f"{self.label} ({_format_rate(self.rate_percent)}%)"

    @property
    def signed_amount(self) -> Money:
        return -self.amount if self.sign == "-" else self.amount


def _format_rate(rate: Decimal) -> str:
    return format(rate.normalize(), "f")


def _split_halves(amount: Money, rounded: bool) -> tuple[Money, Money]:
    first = amount / _TWO
    if rounded:
        first = first.round()
    # remainder goes to the second half so the pair reconstitutes the total
    return first, amount - first


def build_tax_breakdown(
    totals: InvoiceTotals,
    tax: TaxConfiguration,
    rounded: bool = False,
) -> tuple[TaxBreakdownLine, ...]:
    """
    Derive the displayed tax lines for an invoice.

    Args:
        totals: Result of calculate_invoice_totals for the same ``tax``.
        tax: The tax configuration the totals were computed with.
        rounded: Round the total tax to the currency first, then split, so
            displayed halves sum to the displayed tax to the cent.

    Returns:
        Tuple of TaxBreakdownLine in display order (empty for no tax).
    """
    if tax.kind == TaxKind.NONE:
        return ()

    amount = totals.tax_amount.round() if rounded else totals.tax_amount

    if tax.kind == TaxKind.CONSUMPTION:
        rate = None if tax.is_per_line else tax.rate_percent
        included = tax.is_inclusive
        if totals.is_split:
            half_rate = rate / _TWO if rate is not None else None
            central, state = _split_halves(amount, rounded)
            return (
                TaxBreakdownLine(CENTRAL_CODE, CENTRAL_CODE, half_rate, central, "+", included),
                TaxBreakdownLine(STATE_CODE, STATE_CODE, half_rate, state, "+", included),
            )
        return (
            TaxBreakdownLine(INTEGRATED_CODE, INTEGRATED_CODE, rate, amount, "+", included),
        )

    code = tax.kind.short_name
    label = tax.label.strip() or code
    sign = "-" if tax.is_deducted else "+"
    return (TaxBreakdownLine(code, label, tax.rate_percent, amount, sign),)


def _group_digits(digits: str, grouping: DigitGrouping) -> str:
    if len(digits) <= 3:
        return digits
    if grouping == DigitGrouping.INDIAN:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        return ",".join(pairs + [tail])
    groups = []
    while digits:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    return ",".join(groups)


def format_amount(
    money: Money,
    grouping: DigitGrouping = DigitGrouping.INDIAN,
    with_symbol: bool = False,
) -> str:
    """
    Format an amount for display, rounded to the currency's decimal places.

    >>> format_amount(Money.of("1234567.891", "INR"))
    '12,34,567.89'
    """
    rounded = money.round()
    text = format(abs(rounded.amount), "f")
    integer, _, fraction = text.partition(".")
    body = _group_digits(integer, grouping)
    if fraction:
        body = f"{body}.{fraction}"
    if with_symbol:
        body = f"{money.currency.symbol}{body}"
    return f"-{body}" if rounded.is_negative else body
