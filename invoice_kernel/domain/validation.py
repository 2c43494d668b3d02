"""
Boundary validation for invoice input.

Pure checks with no I/O, run before the totals calculator is invoked. The
calculator assumes percentages in [0, 100] and finite numbers; this module
is where violations become user-facing errors, one ValidationIssue per
offending field.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from invoice_kernel.domain.invoice import (
    AdjustmentConfiguration,
    DiscountConfiguration,
    LineItem,
    TaxConfiguration,
    TaxKind,
)
from invoice_kernel.exceptions import InvoiceValidationError, PercentageOutOfRangeError

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class ValidationIssue:
    """A single rejected field."""

    field: str
    code: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "code": self.code, "message": self.message}


def is_valid_percent(value: Decimal) -> bool:
    return value.is_finite() and _ZERO <= value <= _HUNDRED


def require_percent(value: Decimal, field: str) -> Decimal:
    """Return value unchanged, or raise PercentageOutOfRangeError."""
    if not is_valid_percent(value):
        raise PercentageOutOfRangeError(field, value)
    return value


def _check_percent(value: Decimal, field: str, issues: list[ValidationIssue]) -> None:
    if not value.is_finite():
        issues.append(ValidationIssue(field, "NOT_A_NUMBER", f"{field} must be a number"))
    elif not is_valid_percent(value):
        issues.append(ValidationIssue(
            field, "OUT_OF_RANGE", f"{field} must be between 0 and 100",
        ))


def _check_item(item: LineItem, index: int, issues: list[ValidationIssue]) -> None:
    prefix = f"items[{index}]"
    if not item.description or not item.description.strip():
        issues.append(ValidationIssue(
            f"{prefix}.description", "REQUIRED", "Description is required",
        ))

    if not item.quantity.is_finite():
        issues.append(ValidationIssue(
            f"{prefix}.quantity", "NOT_A_NUMBER", "Quantity must be a number",
        ))
    elif item.quantity <= _ZERO:
        issues.append(ValidationIssue(
            f"{prefix}.quantity", "NOT_POSITIVE", "Quantity must be greater than 0",
        ))

    if not item.unit_rate.is_finite():
        issues.append(ValidationIssue(
            f"{prefix}.unit_rate", "NOT_A_NUMBER", "Rate must be a number",
        ))
    elif item.unit_rate < _ZERO:
        issues.append(ValidationIssue(
            f"{prefix}.unit_rate", "NEGATIVE", "Rate cannot be negative",
        ))

    if item.tax_rate_percent is not None:
        _check_percent(item.tax_rate_percent, f"{prefix}.tax_rate_percent", issues)


def collect_issues(
    items: Sequence[LineItem],
    discount: DiscountConfiguration,
    tax: TaxConfiguration,
    adjustment: AdjustmentConfiguration,
) -> tuple[ValidationIssue, ...]:
    """Return every validation issue in field order (empty when valid)."""
    issues: list[ValidationIssue] = []

    for index, item in enumerate(items):
        _check_item(item, index, issues)

    _check_percent(discount.percent, "discount.percent", issues)

    if tax.kind != TaxKind.NONE:
        _check_percent(tax.rate_percent, "tax.rate_percent", issues)

    if not adjustment.amount.is_finite():
        issues.append(ValidationIssue(
            "adjustment.amount", "NOT_A_NUMBER", "Adjustment must be a number",
        ))

    return tuple(issues)


def validate_invoice_input(
    items: Sequence[LineItem],
    discount: DiscountConfiguration,
    tax: TaxConfiguration,
    adjustment: AdjustmentConfiguration,
) -> None:
    """
    Validate everything the calculator will read.

    Raises:
        InvoiceValidationError: carrying all issues, if any input is rejected.
    """
    issues = collect_issues(items, discount, tax, adjustment)
    if issues:
        raise InvoiceValidationError(issues)
