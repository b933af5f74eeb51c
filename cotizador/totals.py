"""
Subtotal / IVA / total derivation from quote line items.

Rounding happens once, when the Totals value is built. Intermediate
values are never rounded, so the tax is computed from the exact subtotal.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal, DecimalException

from .amounts import money, to_decimal
from .exceptions import InvalidAmount, InvalidLineItem
from .models import Totals

logger = logging.getLogger(__name__)

# Mexican IVA
IVA_RATE = Decimal("0.16")

_QUANTITY_KEYS = ("quantity", "unidades")
_PRICE_KEYS = ("unit_price", "unitPrice", "precio_unitario")
_MISSING = object()


def compute_totals(items: Iterable[object], tax_rate: Decimal = IVA_RATE) -> Totals:
    """Sum ``quantity * unit_price`` over the items and add IVA.

    Args:
        items: LineItem models, mappings, or objects with ``quantity`` and
            ``unit_price``. May be empty.
        tax_rate: Fraction, e.g. ``Decimal("0.16")``.

    Returns:
        Totals rounded half-up to cents.

    Raises:
        InvalidLineItem: If an item lacks a field, or a quantity/price is
            not a number, non-finite, or negative. Also raised when the
            totals are too large to round to cents.
    """
    subtotal = Decimal(0)
    count = 0

    for index, item in enumerate(items):
        subtotal += _line_value(item, index)
        count += 1

    tax = subtotal * tax_rate
    total = subtotal + tax

    logger.debug(
        "Computed totals for %d line(s): subtotal=%s tax=%s total=%s",
        count, subtotal, tax, total,
    )
    try:
        return Totals(subtotal=money(subtotal), tax=money(tax), total=money(total))
    except InvalidAmount as e:
        raise InvalidLineItem(
            f"Total of {count} line item(s) is too large: {e.message}",
            details={"field": "total", "value": str(total)},
        ) from e


def line_total(item: object) -> Decimal:
    """Unrounded pre-tax value of a single line."""
    return _line_value(item, 0)


# ─── Internal Helpers ────────────────────────────────────────────────


def _line_value(item: object, index: int) -> Decimal:
    quantity = _read_number(item, _QUANTITY_KEYS, index)
    unit_price = _read_number(item, _PRICE_KEYS, index)
    try:
        return quantity * unit_price
    except DecimalException as e:
        raise InvalidLineItem(
            f"Line item {index}: quantity * unit_price is too large",
            details={"index": index, "quantity": str(quantity), "unit_price": str(unit_price)},
        ) from e


def _read_number(item: object, keys: tuple[str, ...], index: int) -> Decimal:
    """Fetch the first present key (mapping) or attribute and validate it."""
    field = keys[0]
    raw = _lookup(item, keys)
    if raw is _MISSING:
        raise InvalidLineItem(
            f"Line item {index} has no {field}",
            details={"index": index, "field": field},
        )

    try:
        value = to_decimal(raw, field)
    except InvalidAmount as e:
        raise InvalidLineItem(
            f"Line item {index}: {e.message}",
            details={"index": index, **e.details},
        ) from e

    if value < 0:
        raise InvalidLineItem(
            f"Line item {index}: {field} must not be negative, got {value}",
            details={"index": index, "field": field, "value": str(value)},
        )
    return value


def _lookup(item: object, keys: tuple[str, ...]) -> object:
    if isinstance(item, Mapping):
        for key in keys:
            if key in item:
                return item[key]
        return _MISSING
    for key in keys:
        if hasattr(item, key):
            return getattr(item, key)
    return _MISSING
