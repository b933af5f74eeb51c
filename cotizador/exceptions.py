"""
Custom exception hierarchy for quote calculations.

Each exception carries a machine-readable code so the HTTP layer can
report it without inspecting the message text.
"""

from __future__ import annotations


class QuoteError(Exception):
    """Base exception for all quote calculation failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidAmount(QuoteError):
    """A monetary amount is negative, non-finite, or not a number."""

    def __init__(self, message: str, details: dict | None = None, code: str = "INVALID_AMOUNT"):
        super().__init__(code, message, details)


class InvalidLineItem(InvalidAmount):
    """A line item has a missing, negative, or non-finite quantity or price."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, details, code="INVALID_LINE_ITEM")


class ConfigurationError(QuoteError):
    """An environment setting could not be parsed."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("INVALID_CONFIGURATION", message, details)
