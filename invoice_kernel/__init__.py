"""
Invoice Kernel - domain values, typed errors and structured logging.

Usage:
    from invoice_kernel.domain.values import Money
    from invoice_kernel.domain.invoice import LineItem, TaxConfiguration, TaxKind
    from invoice_kernel.exceptions import InvoiceValidationError
    from invoice_kernel.logging_config import configure_logging, get_logger
"""

__version__ = "0.1.0"
