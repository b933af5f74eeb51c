"""
Convert a peso amount to its written Spanish form (Mexican convention).

THIS TEXT IS PRINTED ON EVERY QUOTE next to the numeric total, so the
output must stay byte-for-byte stable with previously issued documents.

Examples:
    0        → "cero pesos 00/100 M.N."
    1        → "un peso 00/100 M.N."
    21       → "veintiuno pesos 00/100 M.N."
    1000     → "mil pesos 00/100 M.N."
    1250.5   → "mil doscientos cincuenta pesos 50/100 M.N."
    2500000  → "dos millones quinientos mil pesos 00/100 M.N."

Known quirk: any amount whose whole part is exactly 100 renders as
"cien pesos 00/100 M.N." and drops the cents. Old quotes were issued with
that text, so it is kept as-is.
"""

from __future__ import annotations

from .amounts import Numeric, split_amount, to_decimal
from .exceptions import InvalidAmount

# ─── Word Lookup Tables ──────────────────────────────────────────────

_UNITS: tuple[str, ...] = (
    "", "uno", "dos", "tres", "cuatro", "cinco", "seis", "siete", "ocho", "nueve",
)

_TEENS: tuple[str, ...] = (
    "diez", "once", "doce", "trece", "catorce",
    "quince", "dieciséis", "diecisiete", "dieciocho", "diecinueve",
)

_TENS: tuple[str, ...] = (
    "", "", "veinte", "treinta", "cuarenta",
    "cincuenta", "sesenta", "setenta", "ochenta", "noventa",
)

_HUNDREDS: tuple[str, ...] = (
    "", "ciento", "doscientos", "trescientos", "cuatrocientos",
    "quinientos", "seiscientos", "setecientos", "ochocientos", "novecientos",
)

CURRENCY_MARKER = "M.N."

# One trillion pesos: "billón" is not in the tables.
MAX_INTEGER_PART = 999_999_999_999


# ─── Group Converters ────────────────────────────────────────────────


def _convert_group(n: int) -> str:
    """Convert 0..999 to words. Zero yields an empty string."""
    if n == 0:
        return ""
    if n == 100:
        return "cien"

    hundreds, rest = divmod(n, 100)
    tens, units = divmod(rest, 10)
    parts: list[str] = []

    if hundreds:
        parts.append(_HUNDREDS[hundreds])

    if tens == 1:
        parts.append(_TEENS[units])
    elif tens == 2 and units:
        parts.append("veinti" + _UNITS[units])
    elif tens:
        parts.append(f"{_TENS[tens]} y {_UNITS[units]}" if units else _TENS[tens])
    elif units:
        parts.append(_UNITS[units])

    return " ".join(parts)


def _convert_thousands(n: int) -> str:
    """Convert 0..999,999 to words ("mil" alone for a thousands group of 1)."""
    thousands, rest = divmod(n, 1000)
    parts: list[str] = []

    if thousands == 1:
        parts.append("mil")
    elif thousands:
        parts.append(f"{_convert_group(thousands)} mil")

    if rest:
        parts.append(_convert_group(rest))

    return " ".join(parts)


# ─── Public API ──────────────────────────────────────────────────────


def integer_to_words(n: int) -> str:
    """Convert a whole number of pesos to Spanish words.

    Args:
        n: 0 <= n <= MAX_INTEGER_PART

    Returns:
        e.g. ``integer_to_words(1_250)`` → ``"mil doscientos cincuenta"``

    Raises:
        InvalidAmount: If n is negative or above MAX_INTEGER_PART.
    """
    if n < 0 or n > MAX_INTEGER_PART:
        raise InvalidAmount(
            f"Whole-peso amount {n} is outside the supported range 0..{MAX_INTEGER_PART:,}",
            details={"integer_part": n},
        )
    if n == 0:
        return "cero"

    millions, rest = divmod(n, 1_000_000)
    parts: list[str] = []

    if millions == 1:
        parts.append("un millón")
    elif millions:
        parts.append(f"{_convert_thousands(millions)} millones")

    if rest:
        parts.append(_convert_thousands(rest))

    return " ".join(parts)


def amount_to_words(amount: Numeric) -> str:
    """Convert a non-negative peso amount to "<words> pesos NN/100 M.N.".

    The result is all lowercase; the document layer capitalizes it.

    Raises:
        InvalidAmount: If the amount is negative, non-finite, not a number,
            or too large for the numeral tables.
    """
    value = to_decimal(amount, "amount")
    if value < 0:
        raise InvalidAmount(
            f"amount must not be negative, got {value}",
            details={"field": "amount", "value": str(value)},
        )
    if value >= MAX_INTEGER_PART + 1:
        raise InvalidAmount(
            f"amount {value} is outside the supported range 0..{MAX_INTEGER_PART:,}",
            details={"field": "amount", "value": str(value)},
        )

    integer_part, cents = split_amount(value)

    if integer_part == 0 and cents == 0:
        return f"cero pesos 00/100 {CURRENCY_MARKER}"
    if integer_part == 100:
        return f"cien pesos 00/100 {CURRENCY_MARKER}"
    if integer_part == 1:
        return f"un peso {cents:02d}/100 {CURRENCY_MARKER}"

    return f"{integer_to_words(integer_part)} pesos {cents:02d}/100 {CURRENCY_MARKER}"


# Short alias matching how templates and callers refer to it
to_words = amount_to_words