"""
Invoice input model -- the values the totals calculator reads.

Everything here is an immutable value: an invoice editor builds fresh
instances on every change and hands them to
``invoice_engines.totals.calculate_invoice_totals``. Numeric fields are
coerced to Decimal the same way Money coerces its amount; range checks
live in ``invoice_kernel.domain.validation`` so that a form can report
every bad field at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

_ZERO = Decimal("0")


def to_decimal(value: Any, name: str = "value") -> Decimal:
    """Convert int/str/float to Decimal via ``str``; Decimal passes through."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"{name} must be numeric, got bool")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid {name}: {value!r}") from e


class TaxKind(str, Enum):
    """Tax regime applied to the invoice."""

    NONE = "none"
    CONSUMPTION = "consumption"  # GST: added, may split by region
    WITHHOLDING_DEBIT = "withholding_debit"  # TDS: deducted from the total
    WITHHOLDING_CREDIT = "withholding_credit"  # TCS: collected on top

    @property
    def short_name(self) -> str:
        return _SHORT_NAMES[self]

    @classmethod
    def from_short_name(cls, name: str) -> TaxKind:
        """Resolve ``GST``/``TDS``/``TCS``/``None`` (any case) or an enum value."""
        key = name.strip().lower()
        for kind, short in _SHORT_NAMES.items():
            if key in (short.lower(), kind.value):
                return kind
        raise ValueError(f"Unknown tax kind: {name!r}")


_SHORT_NAMES = {
    TaxKind.NONE: "None",
    TaxKind.CONSUMPTION: "GST",
    TaxKind.WITHHOLDING_DEBIT: "TDS",
    TaxKind.WITHHOLDING_CREDIT: "TCS",
}


class TaxMethod(str, Enum):
    """Where the consumption tax rate comes from."""

    GLOBAL = "global"  # one rate on the discounted subtotal
    PER_LINE = "per_line"  # each line's own rate on its raw amount


@dataclass(frozen=True)
class CatalogProduct:
    """A saved product whose rate and tax pre-fill an invoice line."""

    name: str
    rate: Decimal
    description: str = ""
    tax_rate_percent: Decimal | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rate", to_decimal(self.rate, "rate"))
        if self.tax_rate_percent is not None:
            object.__setattr__(
                self, "tax_rate_percent",
                to_decimal(self.tax_rate_percent, "tax_rate_percent"),
            )


@dataclass(frozen=True)
class LineItem:
    """
    One billed line: quantity x unit rate.

    ``tax_rate_percent`` is only read when consumption tax is computed per
    line; otherwise it is carried for display.
    """

    description: str
    quantity: Decimal
    unit_rate: Decimal
    tax_rate_percent: Decimal | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantity", to_decimal(self.quantity, "quantity"))
        object.__setattr__(self, "unit_rate", to_decimal(self.unit_rate, "unit_rate"))
        if self.tax_rate_percent is not None:
            object.__setattr__(
                self, "tax_rate_percent",
                to_decimal(self.tax_rate_percent, "tax_rate_percent"),
            )

    @property
    def line_amount(self) -> Decimal:
        return self.quantity * self.unit_rate

    @property
    def effective_tax_rate_percent(self) -> Decimal:
        """Per-line rate with a missing rate treated as zero."""
        return self.tax_rate_percent if self.tax_rate_percent is not None else _ZERO

    @classmethod
    def from_product(
        cls,
        product: CatalogProduct,
        quantity: Decimal | int | str = 1,
    ) -> LineItem:
        """Pre-fill a line from a catalog product (missing tax rate -> 0)."""
        return cls(
            description=product.description or product.name,
            quantity=quantity,
            unit_rate=product.rate,
            tax_rate_percent=(
                product.tax_rate_percent
                if product.tax_rate_percent is not None
                else _ZERO
            ),
        )


@dataclass(frozen=True)
class TaxConfiguration:
    """
    Tax settings for a whole invoice.

    ``method`` and ``inclusive`` only have an effect for consumption tax;
    ``label`` is a display name for withholding taxes.
    """

    kind: TaxKind = TaxKind.NONE
    rate_percent: Decimal = _ZERO
    method: TaxMethod = TaxMethod.GLOBAL
    inclusive: bool = False
    label: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.kind, str) and not isinstance(self.kind, TaxKind):
            object.__setattr__(self, "kind", TaxKind.from_short_name(self.kind))
        if isinstance(self.method, str) and not isinstance(self.method, TaxMethod):
            object.__setattr__(self, "method", TaxMethod(self.method))
        object.__setattr__(
            self, "rate_percent", to_decimal(self.rate_percent, "rate_percent")
        )

    @property
    def is_inclusive(self) -> bool:
        return self.inclusive and self.kind == TaxKind.CONSUMPTION

    @property
    def is_per_line(self) -> bool:
        return self.method == TaxMethod.PER_LINE and self.kind == TaxKind.CONSUMPTION

    @property
    def is_deducted(self) -> bool:
        """Tax reduces the payable total instead of adding to it."""
        return self.kind == TaxKind.WITHHOLDING_DEBIT


@dataclass(frozen=True)
class DiscountConfiguration:
    percent: Decimal = _ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "percent", to_decimal(self.percent, "percent"))


@dataclass(frozen=True)
class AdjustmentConfiguration:
    """Signed amount added to the total after tax (negative subtracts)."""

    description: str = "Adjustment"
    amount: Decimal = _ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount, "amount"))


@dataclass(frozen=True)
class PartyLocation:
    """Issuer or recipient state/province."""

    region: str | None = None


def is_intra_region(issuer: PartyLocation, recipient: PartyLocation) -> bool:
    """True when both regions are present and equal ignoring case and padding."""
    a = (issuer.region or "").strip()
    b = (recipient.region or "").strip()
    if not a or not b:
        return False
    return a.lower() == b.lower()
