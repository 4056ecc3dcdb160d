"""Denomination checks and currency unit conversion.

Amounts cross the core boundary as `Decimal` major units and are held
internally as integer minor units (centavos).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from vending.config import CURRENCY_CODE
from vending.constant import ACCEPTED_DENOMINATIONS

_CENT = Decimal("0.01")

SMALLEST_UNIT = min(ACCEPTED_DENOMINATIONS)


def _as_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() gives the shortest repr, so 0.1 becomes Decimal("0.1") not its binary expansion.
        return Decimal(str(value))
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"Not a currency amount: {value!r}") from exc


def to_minor_units(value: Decimal | int | float | str) -> int:
    """Convert a major-unit amount to integer minor units, rounding half up."""
    quantized = _as_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)
    return int(quantized * 100)


def to_major_units(minor: int) -> Decimal:
    """Convert integer minor units back to a two-place Decimal."""
    return (Decimal(int(minor)) / 100).quantize(_CENT)


def is_accepted_denomination(value: Decimal | int | float | str) -> bool:
    """Exact-match test against the accepted denomination set."""
    try:
        exact = _as_decimal(value)
    except ValueError:
        return False
    if not exact.is_finite():
        return False
    minor = to_minor_units(exact)
    if to_major_units(minor) != exact:
        return False
    return minor in ACCEPTED_DENOMINATIONS


def format_amount(minor: int) -> str:
    return f"{CURRENCY_CODE} {to_major_units(minor):,.2f}"


def format_denomination(minor: int) -> str:
    """Short label for a denomination: whole units for bills, decimals for centavos."""
    if minor % 100 == 0:
        return str(minor // 100)
    return f"{to_major_units(minor):.2f}"
