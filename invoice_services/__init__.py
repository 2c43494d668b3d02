"""
invoice_services -- orchestration over the invoice engines.

Usage:
    from invoice_services import InvoiceTotalsService, InvoiceDraft
"""

from invoice_services.totals_service import (
    InvoiceDraft,
    InvoiceSummary,
    InvoiceTotalsService,
)

__all__ = [
    "InvoiceDraft",
    "InvoiceSummary",
    "InvoiceTotalsService",
]
