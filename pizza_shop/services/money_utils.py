"""
Money utilities.

Prices are stored as decimal strings (e.g. "2.49") and all arithmetic is done
in integer cents. Decimal strings only appear again when a value leaves the
pricing code (API responses, stored customization payloads).
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")

PriceLike = Union[str, int, float, Decimal]


def to_decimal(amount: PriceLike) -> Decimal:
    """Parse a price into a Decimal rounded to 2 places (half up)."""
    if isinstance(amount, bool):
        raise ValueError(f"Invalid price: {amount!r}")
    try:
        # Floats go through str() so 2.49 stays 2.49 instead of 2.4900000000000002
        value = Decimal(str(amount).strip()) if not isinstance(amount, Decimal) else amount
    except InvalidOperation:
        raise ValueError(f"Invalid price: {amount!r}") from None
    if not value.is_finite():
        raise ValueError(f"Invalid price: {amount!r}")
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(amount: PriceLike) -> int:
    """
    Convert a price to integer cents.

    Args:
        amount: Decimal string, number, or Decimal (e.g. "3.49")

    Returns:
        Amount in cents (e.g. 349)

    Raises:
        ValueError: If the amount is malformed or negative
    """
    value = to_decimal(amount)
    if value < 0:
        raise ValueError(f"Price cannot be negative: {amount!r}")
    return int(value * 100)


def cents_to_decimal(cents: int) -> Decimal:
    """Convert integer cents back to a 2-place Decimal."""
    return (Decimal(cents) / 100).quantize(CENT)


def format_cents(cents: int) -> str:
    """Format integer cents as a decimal string, e.g. 349 -> "3.49"."""
    return str(cents_to_decimal(cents))
