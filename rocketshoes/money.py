"""
Money Utilities - Safe Decimal operations for prices.

Avoids float precision issues by using Decimal throughout.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")


def to_decimal(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            # Go through repr to keep 179.9 as 179.9
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_decimal(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Strict conversion for prices read from payloads.

    Unlike ``to_decimal`` this never substitutes zero.

    Raises:
        ValueError: for None, booleans, non-numeric or non-finite values
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"not a price: {value!r}")

    try:
        result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"not a price: {value!r}") from e

    if not result.is_finite():
        raise ValueError(f"not a price: {value!r}")
    return result


def round_money(value: Union[str, int, float, Decimal]) -> Decimal:
    """Round to cents (ROUND_HALF_UP)."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def multiply(value: Union[str, int, float, Decimal], factor: Union[str, int, float, Decimal]) -> Decimal:
    """Multiply two monetary values without float conversion."""
    return to_decimal(value) * to_decimal(factor)
