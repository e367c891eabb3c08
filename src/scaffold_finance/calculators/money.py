"""Currency coercion and rounding.

Every total is rounded to cents as soon as it is produced, not only when it
is displayed, so repeated additions never accumulate float drift.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
CENTS = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Coerce a raw amount to Decimal.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` and not
    its binary expansion. Missing or non-numeric values count as zero.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    return result if result.is_finite() else ZERO


def round_to_cents(amount: Any) -> Decimal:
    """Round amount to 2 decimal places (cents), half up."""
    return to_decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def sum_to_cents(amounts: Iterable[Any]) -> Decimal:
    """Sum raw amounts and round the total to cents."""
    total = ZERO
    for amount in amounts:
        total += to_decimal(amount)
    return round_to_cents(total)


def format_currency(amount: Any, symbol: str = "$") -> str:
    """Render an amount as ``$1234.50``."""
    return f"{symbol}{round_to_cents(amount)}"
