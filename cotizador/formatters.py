"""
Display formatting for printed quotes: currency, Spanish dates, capitalization.
"""

from __future__ import annotations

from datetime import date

from .amounts import Numeric, money, to_decimal

_SPANISH_MONTHS: tuple[str, ...] = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)


def format_currency(value: Numeric) -> str:
    """Format with thousands commas and 2 decimals: 1234.5 → "1,234.50"."""
    return f"{money(to_decimal(value, 'value')):,.2f}"


def format_date_spanish(value: date | str) -> str:
    """Format a date as "12 de agosto de 2025".

    Args:
        value: A date, or an ISO "YYYY-MM-DD" string.

    Raises:
        ValueError: If the string is not a valid ISO date.
    """
    if isinstance(value, str):
        value = date.fromisoformat(value.strip())
    return f"{value.day} de {_SPANISH_MONTHS[value.month - 1]} de {value.year}"


def capitalize_phrase(text: str) -> str:
    """Upper-case only the first character ("mil pesos" → "Mil pesos")."""
    return text[:1].upper() + text[1:]
