"""
Deterministic input checks for quotes and their product lines.

Each validator function:
  - Takes a Quote (or a QuoteLine and its position)
  - Returns a list of ValidationFinding objects (empty = all clear)
  - Never raises for bad data; raising is reserved for the totals and
    words converters, which only ever see data that passed these checks

The validate_all() function runs every check and aggregates findings.
"""

from __future__ import annotations

import re
from decimal import Decimal

from .amounts import money
from .models import Quote, QuoteLine, Severity, ValidationFinding
from .number_to_words import MAX_INTEGER_PART
from .totals import IVA_RATE


# ─── Constants ───────────────────────────────────────────────────────

MAX_COMPANY_LENGTH = 200
MAX_CONTACT_LENGTH = 200
MAX_PROJECT_LENGTH = 500
MAX_PRODUCT_NAME_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 1000
MAX_IMAGE_NAME_LENGTH = 500

MAX_QUANTITY = 999_999
MAX_UNIT_PRICE = Decimal("999999999.99")

VALID_SORT_OPTIONS: frozenset[str] = frozenset({
    "id-asc", "id-desc", "nombre-asc", "nombre-desc", "precio-asc", "precio-desc",
})

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^[\d\s\-+()]{7,20}$")


# ─── Orchestrator ────────────────────────────────────────────────────


def validate_all(quote: Quote, tax_rate: Decimal = IVA_RATE) -> list[ValidationFinding]:
    """Run ALL validators and collect findings."""
    findings: list[ValidationFinding] = []
    findings.extend(validate_client_fields(quote))
    findings.extend(validate_contact_channels(quote))
    findings.extend(validate_sort_option(quote))
    findings.extend(validate_has_lines(quote))
    for position, line in enumerate(quote.lines):
        findings.extend(validate_line(line, position))
    findings.extend(validate_total_in_range(quote, tax_rate))
    return findings


# ─── Quote Validators ────────────────────────────────────────────────


def validate_client_fields(quote: Quote) -> list[ValidationFinding]:
    """Company, contact and project are required and length-limited."""
    findings: list[ValidationFinding] = []
    findings.extend(_required_text(quote.company, "company", "Company name", MAX_COMPANY_LENGTH))
    findings.extend(
        _required_text(quote.contact_name, "contact_name", "Contact name", MAX_CONTACT_LENGTH)
    )
    findings.extend(
        _required_text(quote.project, "project", "Project or service", MAX_PROJECT_LENGTH)
    )
    return findings


def validate_contact_channels(quote: Quote) -> list[ValidationFinding]:
    """Phone and email are optional, but must look right when present."""
    findings: list[ValidationFinding] = []

    phone = (quote.phone or "").strip()
    if phone and not _PHONE_RE.match(phone):
        findings.append(
            ValidationFinding(
                severity=Severity.ERROR,
                code="INVALID_PHONE",
                field="phone",
                message=(
                    f"Phone '{phone}' must be 7-20 characters of digits, spaces, "
                    f"dashes, parentheses or '+'."
                ),
                details={"phone": phone},
            )
        )

    email = (quote.email or "").strip()
    if email and not _EMAIL_RE.match(email):
        findings.append(
            ValidationFinding(
                severity=Severity.ERROR,
                code="INVALID_EMAIL",
                field="email",
                message=f"Email '{email}' is not a valid address.",
                details={"email": email},
            )
        )

    return findings


def validate_sort_option(quote: Quote) -> list[ValidationFinding]:
    """The saved product ordering criterion must be a known one."""
    if quote.sort_option in VALID_SORT_OPTIONS:
        return []
    return [
        ValidationFinding(
            severity=Severity.ERROR,
            code="INVALID_SORT_OPTION",
            field="sort_option",
            message=(
                f"Sort option '{quote.sort_option}' is not valid. Expected one of: "
                f"{', '.join(sorted(VALID_SORT_OPTIONS))}."
            ),
            details={
                "sort_option": quote.sort_option,
                "valid_options": sorted(VALID_SORT_OPTIONS),
            },
        )
    ]


def validate_has_lines(quote: Quote) -> list[ValidationFinding]:
    """An empty quote is allowed (totals are zero) but almost always a mistake."""
    if quote.lines:
        return []
    return [
        ValidationFinding(
            severity=Severity.WARNING,
            code="QUOTE_HAS_NO_LINES",
            field="lines",
            message="Quote has no product lines; its total will be zero.",
        )
    ]


def validate_total_in_range(
    quote: Quote, tax_rate: Decimal = IVA_RATE
) -> list[ValidationFinding]:
    """The total with tax must fit what the amount-in-words text can express.

    Lines that fail their own quantity or price checks are left out of the
    sum; validate_line already reports them.
    """
    subtotal = Decimal(0)
    for line in quote.lines:
        if _line_in_range(line):
            subtotal += line.quantity * line.unit_price

    total = money(subtotal * (1 + tax_rate))
    if total < MAX_INTEGER_PART + 1:
        return []
    return [
        ValidationFinding(
            severity=Severity.ERROR,
            code="TOTAL_OUT_OF_RANGE",
            field="lines",
            message=(
                f"Quote total {total:,} exceeds the largest amount that can be "
                f"written out ({MAX_INTEGER_PART:,}.99)."
            ),
            details={"total": str(total), "max_total": f"{MAX_INTEGER_PART}.99"},
        )
    ]


# ─── Line Validators ─────────────────────────────────────────────────


def validate_line(line: QuoteLine, position: int) -> list[ValidationFinding]:
    """Check one product line. ``position`` is its 0-based index in the quote."""
    prefix = f"lines[{position}]"
    findings: list[ValidationFinding] = []

    findings.extend(
        _required_text(line.name, f"{prefix}.name", "Product name", MAX_PRODUCT_NAME_LENGTH)
    )
    findings.extend(
        _required_text(
            line.description, f"{prefix}.description", "Description", MAX_DESCRIPTION_LENGTH
        )
    )

    if not _quantity_in_range(line):
        findings.append(
            ValidationFinding(
                severity=Severity.ERROR,
                code="QUANTITY_OUT_OF_RANGE",
                field=f"{prefix}.quantity",
                message=(
                    f"Quantity {line.quantity} must be a whole number between 1 "
                    f"and {MAX_QUANTITY:,}."
                ),
                details={"quantity": line.quantity, "position": position},
            )
        )

    if not _unit_price_in_range(line):
        findings.append(
            ValidationFinding(
                severity=Severity.ERROR,
                code="UNIT_PRICE_OUT_OF_RANGE",
                field=f"{prefix}.unit_price",
                message=(
                    f"Unit price {line.unit_price} must be between 0 and "
                    f"{MAX_UNIT_PRICE:,}."
                ),
                details={"unit_price": str(line.unit_price), "position": position},
            )
        )

    if line.image and len(line.image.strip()) > MAX_IMAGE_NAME_LENGTH:
        findings.append(
            ValidationFinding(
                severity=Severity.ERROR,
                code="IMAGE_NAME_TOO_LONG",
                field=f"{prefix}.image",
                message=f"Image name exceeds {MAX_IMAGE_NAME_LENGTH} characters.",
                details={"length": len(line.image.strip()), "position": position},
            )
        )

    if line.order < 0:
        findings.append(
            ValidationFinding(
                severity=Severity.ERROR,
                code="NEGATIVE_ORDER",
                field=f"{prefix}.order",
                message=f"Display order {line.order} must not be negative.",
                details={"order": line.order, "position": position},
            )
        )

    return findings


# ─── Internal Helpers ────────────────────────────────────────────────


def _required_text(
    value: str, field: str, label: str, max_length: int
) -> list[ValidationFinding]:
    stripped = value.strip()
    if not stripped:
        return [
            ValidationFinding(
                severity=Severity.ERROR,
                code="MISSING_REQUIRED_FIELD",
                field=field,
                message=f"{label} is required and cannot be empty.",
            )
        ]
    if len(stripped) > max_length:
        return [
            ValidationFinding(
                severity=Severity.ERROR,
                code="FIELD_TOO_LONG",
                field=field,
                message=f"{label} cannot exceed {max_length} characters ({len(stripped)} given).",
                details={"length": len(stripped), "max_length": max_length},
            )
        ]
    return []
