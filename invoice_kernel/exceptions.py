"""
Typed Exception Hierarchy for the Invoice Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Invoice forms surface every rejected value next to the field that caused
it. Parsing exception messages to find that field is fragile, so:
  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, API-safe)
  3. Exceptions carry structured DATA (field names, offending values)

Example:
    try:
        summary = service.summarize(draft)
    except InvoiceValidationError as e:
        return {"error": e.code, "issues": [i.as_dict() for i in e.issues]}

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    InvoiceKernelError (base)
    |
    +-- ValidationError
    |   +-- InvoiceValidationError
    |   +-- PercentageOutOfRangeError
    |
    +-- CurrencyError
    |   +-- InvalidCurrencyError
    |
    +-- ConfigurationError
        +-- InvalidConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Validation      | INVOICE_VALIDATION_FAILED   | One or more invoice inputs rejected
                | PERCENTAGE_OUT_OF_RANGE     | Discount/tax rate outside [0, 100]
----------------|-----------------------------|-----------------------------------------
Currency        | INVALID_CURRENCY            | Not a known ISO 4217 code
----------------|-----------------------------|-----------------------------------------
Configuration   | INVALID_CONFIGURATION       | Config file value rejected

Value objects (Money, Currency) keep raising ValueError/TypeError on bad
construction; these typed errors belong to the invoice boundary.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from invoice_kernel.domain.validation import ValidationIssue


class InvoiceKernelError(Exception):
    """
    Base exception for all invoice kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "INVOICE_KERNEL_ERROR"


# Validation exceptions


class ValidationError(InvoiceKernelError):
    """Base exception for rejected invoice input."""

    code: str = "VALIDATION_ERROR"


class PercentageOutOfRangeError(ValidationError):
    """A percentage is not a finite number within [0, 100]."""

    code: str = "PERCENTAGE_OUT_OF_RANGE"

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = str(value)
        super().__init__(
            f"{field} must be a percentage between 0 and 100, got {value}"
        )


class InvoiceValidationError(ValidationError):
    """One or more invoice inputs failed boundary validation."""

    code: str = "INVOICE_VALIDATION_FAILED"

    def __init__(self, issues: tuple[ValidationIssue, ...]):
        self.issues = tuple(issues)
        fields = ", ".join(issue.field for issue in self.issues)
        super().__init__(
            f"Invoice input rejected ({len(self.issues)} issue(s)): {fields}"
        )

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(issue.field for issue in self.issues)


# Currency exceptions


class CurrencyError(InvoiceKernelError):
    """Base exception for currency errors."""

    code: str = "CURRENCY_ERROR"


class InvalidCurrencyError(CurrencyError):
    """Currency code is not in the registry."""

    code: str = "INVALID_CURRENCY"

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"Invalid currency code: {currency}")


# Configuration exceptions


class ConfigurationError(InvoiceKernelError):
    """Base exception for configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class InvalidConfigurationError(ConfigurationError):
    """A configuration value was rejected while loading."""

    code: str = "INVALID_CONFIGURATION"

    def __init__(self, key: str, value: Any, reason: str):
        self.key = key
        self.value = str(value) if isinstance(value, Decimal) else value
        self.reason = reason
        super().__init__(f"Invalid configuration {key}={value!r}: {reason}")
