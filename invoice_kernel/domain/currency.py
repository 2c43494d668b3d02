"""Currency -- ISO 4217 registry with display symbols and derived rounding."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import ClassVar


@dataclass(frozen=True)
class CurrencyInfo:
    """Information about a single ISO 4217 currency."""

    code: str
    decimal_places: int
    name: str
    symbol: str = ""

    @property
    def rounding_tolerance(self) -> Decimal:
        """Smallest representable unit, derived from decimal places."""
        if self.decimal_places == 0:
            return Decimal("1")
        return Decimal("0." + "0" * (self.decimal_places - 1) + "1")

    @property
    def quantize_string(self) -> str:
        """String for Decimal.quantize() to round to this currency's precision."""
        if self.decimal_places == 0:
            return "1"
        return "0." + "0" * self.decimal_places


class CurrencyRegistry:
    """Registry of the ISO 4217 currencies invoices can be issued in."""

    _CURRENCIES: ClassVar[dict[str, CurrencyInfo]] = {
        # South Asia
        "INR": CurrencyInfo("INR", 2, "Indian Rupee", "₹"),
        "BDT": CurrencyInfo("BDT", 2, "Bangladeshi Taka", "৳"),
        "LKR": CurrencyInfo("LKR", 2, "Sri Lankan Rupee", "Rs"),
        "NPR": CurrencyInfo("NPR", 2, "Nepalese Rupee", "Rs"),
        "PKR": CurrencyInfo("PKR", 2, "Pakistani Rupee", "Rs"),
        # Major currencies
        "USD": CurrencyInfo("USD", 2, "US Dollar", "$"),
        "EUR": CurrencyInfo("EUR", 2, "Euro", "€"),
        "GBP": CurrencyInfo("GBP", 2, "Pound Sterling", "£"),
        "CHF": CurrencyInfo("CHF", 2, "Swiss Franc", "CHF"),
        "CAD": CurrencyInfo("CAD", 2, "Canadian Dollar", "$"),
        "AUD": CurrencyInfo("AUD", 2, "Australian Dollar", "$"),
        "NZD": CurrencyInfo("NZD", 2, "New Zealand Dollar", "$"),
        "SGD": CurrencyInfo("SGD", 2, "Singapore Dollar", "$"),
        "AED": CurrencyInfo("AED", 2, "UAE Dirham", "AED"),
        "SAR": CurrencyInfo("SAR", 2, "Saudi Riyal", "SAR"),
        "ZAR": CurrencyInfo("ZAR", 2, "South African Rand", "R"),
        "MYR": CurrencyInfo("MYR", 2, "Malaysian Ringgit", "RM"),
        "CNY": CurrencyInfo("CNY", 2, "Chinese Yuan", "¥"),
        # Zero decimal currencies
        "JPY": CurrencyInfo("JPY", 0, "Japanese Yen", "¥"),
        "KRW": CurrencyInfo("KRW", 0, "South Korean Won", "₩"),
        "VND": CurrencyInfo("VND", 0, "Vietnamese Dong", "₫"),
        # Three decimal currencies
        "BHD": CurrencyInfo("BHD", 3, "Bahraini Dinar", "BD"),
        "KWD": CurrencyInfo("KWD", 3, "Kuwaiti Dinar", "KD"),
        "OMR": CurrencyInfo("OMR", 3, "Omani Rial", "OMR"),
    }

    # Decimal places assumed for codes missing from the registry
    DEFAULT_DECIMAL_PLACES: ClassVar[int] = 2

    @classmethod
    def is_valid(cls, code: str) -> bool:
        """Check if a currency code is known to the registry."""
        if not code or not isinstance(code, str):
            return False
        return code.upper().strip() in cls._CURRENCIES

    @classmethod
    def get_info(cls, code: str) -> CurrencyInfo | None:
        """Get currency information by code."""
        if not code or not isinstance(code, str):
            return None
        return cls._CURRENCIES.get(code.upper().strip())

    @classmethod
    def get_decimal_places(cls, code: str) -> int:
        info = cls.get_info(code)
        return info.decimal_places if info else cls.DEFAULT_DECIMAL_PLACES

    @classmethod
    def get_rounding_tolerance(cls, code: str) -> Decimal:
        """Get rounding tolerance derived from currency precision."""
        info = cls.get_info(code)
        if info:
            return info.rounding_tolerance
        return Decimal("0." + "0" * (cls.DEFAULT_DECIMAL_PLACES - 1) + "1")

    @classmethod
    def get_symbol(cls, code: str) -> str:
        """Display symbol, falling back to the code itself."""
        info = cls.get_info(code)
        if info and info.symbol:
            return info.symbol
        return code.upper().strip() if isinstance(code, str) else ""

    @classmethod
    def all_codes(cls) -> frozenset[str]:
        """Get all valid currency codes."""
        return frozenset(cls._CURRENCIES.keys())


class DigitGrouping(str, Enum):
    """Thousands-separator convention used when amounts are displayed."""

    INDIAN = "en-IN"  # 12,34,567.89
    WESTERN = "en-US"  # 1,234,567.89
