"""
invoice_config -- single public entrypoint for invoicing configuration.

Responsibility:
    ``get_active_config()`` is the one place runtime settings come from.
    Without an override it returns the schema defaults (INR, ``INV-000001``
    numbering, Indian digit grouping, no tax). When the
    ``INVOICE_CONFIG_PATH`` environment variable names a YAML file, that
    file is loaded and validated instead.

Architecture position:
    Configuration -- sits above ``invoice_kernel`` and below
    ``invoice_services``. Engines never import this package; services pass
    the relevant values down as arguments.

Failure modes:
    - ``FileNotFoundError`` -- the configured path does not exist.
    - ``InvalidConfigurationError`` / ``InvalidCurrencyError`` -- a value
      in the file was rejected.
"""

from __future__ import annotations

import os
from pathlib import Path

from invoice_config.loader import compute_checksum, load_config, parse_config
from invoice_config.schema import InvoicingConfig, NumberingConfig, TaxDefaults
from invoice_kernel.logging_config import get_logger

_logger = get_logger("config")

CONFIG_PATH_ENV = "INVOICE_CONFIG_PATH"


def get_active_config(path: Path | str | None = None) -> InvoicingConfig:
    """Return the active configuration.

    Args:
        path: Explicit YAML file; overrides the environment variable.
    """
    source = path or os.environ.get(CONFIG_PATH_ENV)
    config = load_config(source) if source else InvoicingConfig()

    _logger.info("INVOICE_CONFIG_TRACE", extra={
        "trace_type": "INVOICE_CONFIG_TRACE",
        "source": str(source) if source else "defaults",
        "checksum": compute_checksum(config),
        "currency": config.currency,
    })
    return config


__all__ = [
    "CONFIG_PATH_ENV",
    "InvoicingConfig",
    "NumberingConfig",
    "TaxDefaults",
    "compute_checksum",
    "get_active_config",
    "load_config",
    "parse_config",
]
