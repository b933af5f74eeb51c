"""
Pydantic models for quote data.

Money fields are Decimal end to end. Field aliases accept the column
names used by the quotes database (``unidades``, ``precio_unitario``, ...)
so rows can be validated straight into these models.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ─── Severity Levels ────────────────────────────────────────────────


class Severity(str, Enum):
    """Severity of a validation finding."""

    ERROR = "ERROR"  # Quote cannot be summarized
    WARNING = "WARNING"  # Suspicious, but the document can still be produced
    INFO = "INFO"


# ─── Validation Finding ─────────────────────────────────────────────


class ValidationFinding(BaseModel):
    """A single validation finding with severity, machine-readable code, and details."""

    severity: Severity
    code: str  # Machine-readable, e.g. "QUANTITY_OUT_OF_RANGE"
    field: str  # Dotted path, e.g. "lines[2].unit_price"
    message: str
    details: dict = Field(default_factory=dict)


# ─── Line Items ─────────────────────────────────────────────────────


class LineItem(BaseModel):
    """The part of a line that feeds the totals: how many, at what price."""

    model_config = ConfigDict(frozen=True)

    quantity: int = Field(validation_alias=AliasChoices("quantity", "unidades"))
    unit_price: Decimal = Field(
        validation_alias=AliasChoices("unit_price", "unitPrice", "precio_unitario")
    )


class QuoteLine(LineItem):
    """A "Producto" row of a quote."""

    name: str = Field(validation_alias=AliasChoices("name", "nombre_producto"))
    description: str = Field(default="", validation_alias=AliasChoices("description", "concepto"))
    image: Optional[str] = Field(default=None, validation_alias=AliasChoices("image", "imagen"))
    order: int = Field(default=0, validation_alias=AliasChoices("order", "orden"))


# ─── Quote ──────────────────────────────────────────────────────────


class Quote(BaseModel):
    """A "Cotización": client metadata plus its ordered product lines."""

    company: str = Field(validation_alias=AliasChoices("company", "empresa"))
    contact_name: str = Field(validation_alias=AliasChoices("contact_name", "nombre_contacto"))
    project: str = Field(validation_alias=AliasChoices("project", "proyecto_servicio"))
    quote_date: date = Field(validation_alias=AliasChoices("quote_date", "fecha"))
    phone: Optional[str] = Field(default=None, validation_alias=AliasChoices("phone", "telefono"))
    email: Optional[str] = None
    terms: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("terms", "terminos_condiciones")
    )
    sort_option: str = Field(default="id-desc", validation_alias=AliasChoices("sort_option", "ordenar"))
    lines: list[QuoteLine] = Field(
        default_factory=list, validation_alias=AliasChoices("lines", "productos")
    )


# ─── Totals ─────────────────────────────────────────────────────────


class Totals(BaseModel):
    """Subtotal, IVA and grand total, each rounded to cents."""

    model_config = ConfigDict(frozen=True)

    subtotal: Decimal
    tax: Decimal
    total: Decimal

    def as_strings(self) -> dict[str, str]:
        return {
            "subtotal": str(self.subtotal),
            "tax": str(self.tax),
            "total": str(self.total),
        }


# ─── Quote Summary (document data) ──────────────────────────────────


class SummaryLine(BaseModel):
    """One printed row: the line plus its pre-tax amount."""

    position: int  # 1-based, after ordering
    name: str
    description: str
    image: Optional[str] = None
    quantity: int
    unit_price: Decimal
    line_total: Decimal  # quantity * unit_price, rounded to cents
    unit_price_display: str  # "$1,234.50"
    line_total_display: str


class QuoteSummary(BaseModel):
    """Everything the document layer needs to print a quote."""

    company: str
    contact_name: str
    project: str
    date_display: str  # "12 de agosto de 2025"
    lines: list[SummaryLine] = Field(default_factory=list)
    totals: Totals
    tax_rate: Decimal
    subtotal_display: str
    tax_display: str
    total_display: str
    total_in_words: str  # lowercase, as returned by amount_to_words
    total_in_words_display: str  # first letter capitalized for printing
    has_images: bool = False


class QuoteSummaryReport(BaseModel):
    """The final output of the summary pipeline."""

    is_valid: bool
    findings: list[ValidationFinding] = Field(default_factory=list)
    summary: Optional[QuoteSummary] = None
