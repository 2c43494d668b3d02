"""
Invoice numbering - next number in a user's sequence.

Numbers are free text (users may type their own), so the sequence is
derived from the trailing digit run of every existing number regardless of
prefix: ``INV-000041``, ``2024/17`` and ``A7`` contribute 41, 17 and 7.
"""

from __future__ import annotations

import re
from typing import Iterable

from invoice_kernel.logging_config import get_logger

logger = get_logger("engines.numbering")

DEFAULT_PREFIX = "INV-"
DEFAULT_WIDTH = 6

_TRAILING_DIGITS = re.compile(r"(\d+)$")


def trailing_number(invoice_number: str) -> int | None:
    """Integer value of the trailing digits, or None if there are none."""
    if not isinstance(invoice_number, str):
        return None
    match = _TRAILING_DIGITS.search(invoice_number.strip())
    return int(match.group(1)) if match else None


def next_invoice_number(
    existing: Iterable[str],
    prefix: str = DEFAULT_PREFIX,
    width: int = DEFAULT_WIDTH,
) -> str:
    """
    Return the number following the highest existing one.

    Args:
        existing: Invoice numbers already issued (any order, any format).
        prefix: Prefix of the generated number.
        width: Minimum digit count, zero-padded.

    Returns:
        e.g. ``INV-000042`` after ``INV-000041``; ``INV-000001`` when no
        existing number ends in digits.
    """
    if width < 1:
        raise ValueError(f"width must be positive, got {width}")

    highest = 0
    seen = 0
    for number in existing:
        seen += 1
        value = trailing_number(number)
        if value is not None and value > highest:
            highest = value

    result = f"{prefix}{highest + 1:0{width}d}"
    logger.debug("invoice_number_generated", extra={
        "existing_count": seen,
        "highest": highest,
        "generated_number": result,
    })
    return result
