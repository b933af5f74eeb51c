"""
Decimal helpers shared by the totals calculator and the words converter.

Callers hand us already-parsed numbers. Strings are NOT coerced here:
turning user input into numbers is the job of the validation layer.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, DecimalException
from typing import Union

from .exceptions import InvalidAmount

Numeric = Union[int, float, Decimal]

CENTS = Decimal("0.01")


def to_decimal(value: object, field: str = "amount") -> Decimal:
    """Convert an int/float/Decimal to a finite Decimal.

    Floats go through ``str()`` so ``1250.5`` becomes ``Decimal("1250.5")``
    and not its binary expansion.

    Raises:
        InvalidAmount: If the value is not a number (``bool`` included) or
            is NaN/infinite.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidAmount(
            f"{field} must be a number, got {type(value).__name__}: {value!r}",
            details={"field": field, "value": repr(value)},
        )

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        result = Decimal(value)

    if not result.is_finite():
        raise InvalidAmount(
            f"{field} must be finite, got {value!r}",
            details={"field": field, "value": repr(value)},
        )
    return result


def money(value: Decimal) -> Decimal:
    """Round to cents, half-up (the presentation boundary).

    Raises:
        InvalidAmount: If the value has too many digits to carry cents.
    """
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except DecimalException as exc:
        raise InvalidAmount(
            f"amount {value} is too large to round to cents",
            details={"field": "amount", "value": str(value)},
        ) from exc


def split_amount(value: Decimal) -> tuple[int, int]:
    """Split a non-negative amount into (whole pesos, cents).

    The amount is rounded to cents first, so 0.999 yields (1, 0) rather
    than a 100-cent remainder.
    """
    rounded = money(value)
    integer_part = int(rounded)
    cents = int((rounded - integer_part) * 100)
    return integer_part, cents
