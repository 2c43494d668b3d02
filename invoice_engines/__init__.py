"""
Module: invoice_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines. This is the import surface for invoice_services
    and for any renderer that needs totals or a tax breakdown.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import invoice_kernel (and sibling engine modules).
    MUST NOT import invoice_services or invoice_config.

Invariants enforced:
    - Decimal-only arithmetic: amounts are never floats and are never
      rounded mid-computation.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from invoice_engines import calculate_invoice_totals, build_tax_breakdown
    from invoice_engines import next_invoice_number, format_amount
"""

from invoice_engines.numbering import (
    next_invoice_number,
    trailing_number,
)
from invoice_engines.tax_presentation import (
    TaxBreakdownLine,
    build_tax_breakdown,
    format_amount,
)
from invoice_engines.totals import (
    InvoiceTotals,
    InvoiceTotalsCalculator,
    calculate_invoice_totals,
)

__all__ = [
    # Totals
    "InvoiceTotals",
    "InvoiceTotalsCalculator",
    "calculate_invoice_totals",
    # Tax presentation
    "TaxBreakdownLine",
    "build_tax_breakdown",
    "format_amount",
    # Numbering
    "next_invoice_number",
    "trailing_number",
]
