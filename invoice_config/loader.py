"""
Configuration Loader (``invoice_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the typed
``invoice_config.schema`` dataclasses. Keys missing from the file keep
their schema defaults; keys present are validated.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown currency  -> ``InvalidCurrencyError``.
* Any other rejected value or unknown key  -> ``InvalidConfigurationError``.

``compute_checksum`` produces a deterministic SHA-256 identity for a loaded
configuration so that a deployment can log which settings were active.
"""

from __future__ import annotations

import dataclasses
import hashlib
import json
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from invoice_config.schema import InvoicingConfig, NumberingConfig, TaxDefaults
from invoice_kernel.domain.currency import CurrencyRegistry, DigitGrouping
from invoice_kernel.domain.invoice import TaxKind, TaxMethod
from invoice_kernel.domain.validation import is_valid_percent
from invoice_kernel.exceptions import InvalidConfigurationError, InvalidCurrencyError

_TOP_LEVEL_KEYS = frozenset({
    "currency",
    "digit_grouping",
    "default_terms",
    "adjustment_description",
    "numbering",
    "tax",
    "totals_cache_size",
})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        InvalidConfigurationError: if the document is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise InvalidConfigurationError(str(path), type(data).__name__, "expected a mapping")
    return data


def _parse_int(key: str, value: Any, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(key, value, "expected an integer")
    if value < minimum:
        raise InvalidConfigurationError(key, value, f"must be >= {minimum}")
    return value


def _parse_enum(key: str, value: Any, enum_cls: type[Enum]) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(str(m.value) for m in enum_cls)
        raise InvalidConfigurationError(key, value, f"expected one of: {allowed}") from None


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise InvalidConfigurationError(key, value, "expected a mapping")
    return value


def parse_numbering(data: dict[str, Any]) -> NumberingConfig:
    """Parse a NumberingConfig from a dict."""
    defaults = NumberingConfig()
    return NumberingConfig(
        prefix=str(data.get("prefix", defaults.prefix)),
        width=_parse_int("numbering.width", data.get("width", defaults.width), 1),
    )


def parse_tax_defaults(data: dict[str, Any]) -> TaxDefaults:
    """
    Parse TaxDefaults from a dict.

    ``kind`` accepts source names (``GST``, ``TDS``, ``TCS``, ``None``) as
    well as enum values.
    """
    defaults = TaxDefaults()

    kind = defaults.kind
    if "kind" in data:
        try:
            kind = TaxKind.from_short_name(str(data["kind"]))
        except ValueError:
            raise InvalidConfigurationError("tax.kind", data["kind"], "unknown tax kind") from None

    rate = defaults.rate_percent
    if "rate_percent" in data:
        try:
            rate = Decimal(str(data["rate_percent"]))
        except InvalidOperation:
            raise InvalidConfigurationError(
                "tax.rate_percent", data["rate_percent"], "expected a number"
            ) from None
        if not is_valid_percent(rate):
            raise InvalidConfigurationError("tax.rate_percent", rate, "must be between 0 and 100")

    method = defaults.method
    if "method" in data:
        method = _parse_enum("tax.method", data["method"], TaxMethod)

    inclusive = data.get("inclusive", defaults.inclusive)
    if not isinstance(inclusive, bool):
        raise InvalidConfigurationError("tax.inclusive", inclusive, "expected true or false")

    return TaxDefaults(
        kind=kind,
        rate_percent=rate,
        method=method,
        inclusive=inclusive,
        label=str(data.get("label", defaults.label)),
    )


def parse_config(data: dict[str, Any]) -> InvoicingConfig:
    """Parse an InvoicingConfig from a dict (e.g. a loaded YAML document)."""
    unknown = sorted(set(data) - _TOP_LEVEL_KEYS)
    if unknown:
        raise InvalidConfigurationError(unknown[0], data[unknown[0]], "unknown key")

    defaults = InvoicingConfig()

    currency = str(data.get("currency", defaults.currency)).upper().strip()
    if not CurrencyRegistry.is_valid(currency):
        raise InvalidCurrencyError(currency)

    grouping = defaults.digit_grouping
    if "digit_grouping" in data:
        grouping = _parse_enum("digit_grouping", data["digit_grouping"], DigitGrouping)

    return InvoicingConfig(
        currency=currency,
        digit_grouping=grouping,
        default_terms=str(data.get("default_terms", defaults.default_terms)),
        adjustment_description=str(
            data.get("adjustment_description", defaults.adjustment_description)
        ),
        numbering=parse_numbering(_section(data, "numbering")),
        tax=parse_tax_defaults(_section(data, "tax")),
        totals_cache_size=_parse_int(
            "totals_cache_size",
            data.get("totals_cache_size", defaults.totals_cache_size),
            0,
        ),
    )


def load_config(path: Path | str) -> InvoicingConfig:
    """Load and parse a YAML configuration file."""
    return parse_config(load_yaml_file(Path(path)))


def compute_checksum(config: InvoicingConfig) -> str:
    """
    Compute SHA-256 checksum of the canonical JSON form of a configuration.

    Identical configurations always produce identical checksums.
    """
    canonical = json.dumps(dataclasses.asdict(config), sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
