"""
invoice_services.totals_service -- Validate, calculate and present invoice totals.

Responsibility:
    The caller-facing entry point for an invoice editor or a server that
    re-computes totals before saving: validates a draft at the boundary,
    runs the pure totals engine, derives the tax breakdown and formats
    display values.

Architecture position:
    Services -- orchestration over engines + kernel, configured by
    invoice_config. Holds no mutable state apart from an optional LRU cache.

Failure modes:
    - InvoiceValidationError: the draft has one or more rejected fields.

Usage:
    from invoice_services import InvoiceTotalsService
    from invoice_kernel.domain.invoice import LineItem

    service = InvoiceTotalsService()
    draft = service.new_draft(items=[LineItem("Design", 2, 500)])
    summary = service.summarize(draft)
    summary.display()["total"]  # '1,000.00'
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from invoice_config import InvoicingConfig, get_active_config
from invoice_engines.numbering import next_invoice_number
from invoice_engines.tax_presentation import (
    TaxBreakdownLine,
    build_tax_breakdown,
    format_amount,
)
from invoice_engines.totals import InvoiceTotals, InvoiceTotalsCalculator
from invoice_kernel.domain.currency import DigitGrouping
from invoice_kernel.domain.invoice import (
    AdjustmentConfiguration,
    DiscountConfiguration,
    LineItem,
    PartyLocation,
    TaxConfiguration,
)
from invoice_kernel.domain.validation import validate_invoice_input
from invoice_kernel.domain.values import Money
from invoice_kernel.exceptions import InvoiceValidationError
from invoice_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.totals")


@dataclass(frozen=True)
class InvoiceDraft:
    """Everything the totals depend on, as currently entered."""

    items: tuple[LineItem, ...] = ()
    discount: DiscountConfiguration = field(default_factory=DiscountConfiguration)
    tax: TaxConfiguration = field(default_factory=TaxConfiguration)
    adjustment: AdjustmentConfiguration = field(default_factory=AdjustmentConfiguration)
    issuer: PartyLocation = field(default_factory=PartyLocation)
    recipient: PartyLocation = field(default_factory=PartyLocation)
    invoice_number: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class InvoiceSummary:
    """
    Totals plus everything a renderer needs to lay them out.

    ``totals`` keeps full precision for persistence; ``display_totals`` and
    ``tax_breakdown`` are rounded to the currency.
    """

    totals: InvoiceTotals
    display_totals: InvoiceTotals
    tax_breakdown: tuple[TaxBreakdownLine, ...]
    adjustment: Money
    adjustment_description: str
    grouping: DigitGrouping = DigitGrouping.INDIAN

    def format(self, money: Money) -> str:
        return format_amount(money, self.grouping)

    def display(self) -> dict[str, Any]:
        """Formatted strings for the totals block; a zero adjustment is omitted."""
        shown = self.display_totals
        result: dict[str, Any] = {
            "sub_total": self.format(shown.sub_total),
            "discount": self.format(shown.discount_amount),
            "tax_lines": [
                (
                    line.title,
                    f"{'(incl.)' if line.included else line.sign} {self.format(line.amount)}",
                )
                for line in self.tax_breakdown
            ],
            "total": self.format(shown.total_amount),
            "balance_due": self.format(shown.balance_due),
        }
        if not self.adjustment.is_zero:
            sign = "+" if self.adjustment.is_positive else "-"
            result["adjustment"] = (
                self.adjustment_description,
                f"{sign} {self.format(abs(self.adjustment))}",
            )
        return result


class InvoiceTotalsService:
    """
    Validate drafts and compute their totals.

    Contract:
        summarize() either raises InvoiceValidationError listing every
        rejected field, or returns a summary whose totals are exactly
        those of calculate_invoice_totals for the same inputs.

    Guarantees:
        - Results are identical with and without the cache; the cache only
          skips recomputation for a repeated input tuple.
        - Safe to share across threads.
    """

    def __init__(
        self,
        config: InvoicingConfig | None = None,
        cache_size: int | None = None,
    ):
        self.config = config if config is not None else get_active_config()
        self._calculator = InvoiceTotalsCalculator(self.config.currency)

        size = self.config.totals_cache_size if cache_size is None else cache_size
        if size > 0:
            self._compute = functools.lru_cache(maxsize=size)(self._calculator.calculate)
        else:
            self._compute = self._calculator.calculate

    @property
    def cache_info(self) -> Any:
        """functools cache statistics, or None when caching is disabled."""
        info = getattr(self._compute, "cache_info", None)
        return info() if info else None

    def new_draft(
        self,
        items: Sequence[LineItem] = (),
        invoice_number: str = "",
        issuer: PartyLocation | None = None,
        recipient: PartyLocation | None = None,
    ) -> InvoiceDraft:
        """A draft carrying the configured tax and adjustment defaults."""
        return InvoiceDraft(
            items=tuple(items),
            tax=self.config.tax.to_configuration(),
            adjustment=AdjustmentConfiguration(
                description=self.config.adjustment_description,
            ),
            issuer=issuer or PartyLocation(),
            recipient=recipient or PartyLocation(),
            invoice_number=invoice_number,
        )

    def summarize(self, draft: InvoiceDraft) -> InvoiceSummary:
        """
        Validate a draft and compute its totals and tax breakdown.

        Raises:
            InvoiceValidationError: If any field is rejected.
        """
        with LogContext.bind(invoice_number=draft.invoice_number or None):
            try:
                validate_invoice_input(
                    draft.items, draft.discount, draft.tax, draft.adjustment,
                )
            except InvoiceValidationError as e:
                logger.warning("invoice_input_rejected", extra={
                    "issue_count": len(e.issues),
                    "fields": list(e.fields),
                })
                raise

            totals = self._compute(
                draft.items,
                draft.discount,
                draft.tax,
                draft.adjustment,
                draft.issuer,
                draft.recipient,
            )
            breakdown = build_tax_breakdown(totals, draft.tax, rounded=True)

            logger.info("invoice_summarized", extra={
                "item_count": len(draft.items),
                "total_amount": str(totals.total_amount.amount),
                "tax_line_count": len(breakdown),
                "split": totals.is_split,
            })

            return InvoiceSummary(
                totals=totals,
                display_totals=totals.rounded(),
                tax_breakdown=breakdown,
                adjustment=Money(draft.adjustment.amount, totals.currency).round(),
                adjustment_description=draft.adjustment.description,
                grouping=self.config.digit_grouping,
            )

    def next_number(self, existing: Iterable[str]) -> str:
        """Next invoice number in the configured format."""
        numbering = self.config.numbering
        return next_invoice_number(existing, prefix=numbering.prefix, width=numbering.width)
