"""
Configuration schema (``invoice_config.schema``).

Frozen dataclasses describing the invoicing defaults a deployment can
override: currency, number sequence format, display grouping, payment
terms, and the tax settings a new invoice starts with. Declarative data
only; parsing lives in ``invoice_config.loader``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from invoice_kernel.domain.currency import DigitGrouping
from invoice_kernel.domain.invoice import TaxConfiguration, TaxKind, TaxMethod


@dataclass(frozen=True)
class TaxDefaults:
    """Tax settings pre-selected on a new invoice."""

    kind: TaxKind = TaxKind.NONE
    rate_percent: Decimal = Decimal("0")
    method: TaxMethod = TaxMethod.GLOBAL
    inclusive: bool = False
    label: str = "No Tax"

    def to_configuration(self) -> TaxConfiguration:
        return TaxConfiguration(
            kind=self.kind,
            rate_percent=self.rate_percent,
            method=self.method,
            inclusive=self.inclusive,
            label=self.label,
        )


@dataclass(frozen=True)
class NumberingConfig:
    """Invoice number format: ``prefix`` + zero-padded sequence."""

    prefix: str = "INV-"
    width: int = 6


@dataclass(frozen=True)
class InvoicingConfig:
    """Complete invoicing configuration."""

    currency: str = "INR"
    digit_grouping: DigitGrouping = DigitGrouping.INDIAN
    default_terms: str = "Due on Receipt"
    adjustment_description: str = "Adjustment"
    numbering: NumberingConfig = field(default_factory=NumberingConfig)
    tax: TaxDefaults = field(default_factory=TaxDefaults)
    # 0 disables memoization of totals in InvoiceTotalsService
    totals_cache_size: int = 0
