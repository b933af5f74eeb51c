#!/usr/bin/env python3
"""
Cotizador — Entry Point
=======================

Builds a sample quote, runs the summary pipeline and prints what the
document would show: lines, subtotal, IVA, total and the total in words.

Usage:
    python main.py                           # Default 16% IVA
    COTIZADOR_TAX_RATE=0.08 python main.py   # Border-region rate
"""

from __future__ import annotations

import sys
from datetime import date
from decimal import Decimal

from cotizador.config import configure_logging, load_settings
from cotizador.models import Quote, QuoteLine, QuoteSummaryReport, Severity
from cotizador.pipeline import QuoteSummaryPipeline

# ─── Sample Quote ───────────────────────────────────────────────────

SAMPLE_QUOTE = Quote(
    company="Constructora del Bajío S.A. de C.V.",
    contact_name="Ing. Laura Méndez",
    project="Suministro de iluminación para nave industrial",
    quote_date=date(2025, 8, 12),
    phone="(477) 123 4567",
    email="compras@constructorabajio.mx",
    lines=[
        QuoteLine(
            name="Luminaria LED 150W",
            description="Campana industrial, 6500K, IP65",
            quantity=8,
            unit_price=Decimal("1250.50"),
            order=0,
        ),
        QuoteLine(
            name="Instalación",
            description="Mano de obra y material eléctrico",
            quantity=1,
            unit_price=Decimal("4800.00"),
            order=2,
        ),
        QuoteLine(
            name="Sensor de presencia",
            description="Montaje en techo, 360°",
            quantity=4,
            unit_price=Decimal("389.90"),
            order=1,
        ),
    ],
)


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_YELLOW = "\033[93m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72


# ─── Pretty Printer ─────────────────────────────────────────────────


def print_report(report: QuoteSummaryReport) -> int:
    """Pretty-print the quote summary (or its findings).

    Returns:
        0 if the quote is valid, 1 otherwise.
    """
    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  COTIZACIÓN{_RESET}")
    print(f"{'=' * _WIDTH}")

    summary = report.summary
    if summary is not None:
        print(f"  Empresa:     {summary.company}")
        print(f"  Contacto:    {summary.contact_name}")
        print(f"  Proyecto:    {summary.project}")
        print(f"  Fecha:       {summary.date_display}")
        print(f"{'─' * _WIDTH}")
        for line in summary.lines:
            print(
                f"  {line.position:>2}. {line.quantity:>4} x {line.name:<28}"
                f"{line.unit_price_display:>14}{line.line_total_display:>16}"
            )
        print(f"{'─' * _WIDTH}")
        print(f"  {'TOTAL sin IVA':<50}{summary.subtotal_display:>18}")
        print(f"  {'IVA':<50}{summary.tax_display:>18}")
        print(f"  {_BOLD}{'TOTAL':<50}{summary.total_display:>18}{_RESET}")
        print(f"\n  {_DIM}***({summary.total_in_words_display})***{_RESET}")

    problems = [f for f in report.findings if f.severity != Severity.INFO]
    if problems:
        print(f"{'─' * _WIDTH}")
        for f in problems:
            color = _RED if f.severity == Severity.ERROR else _YELLOW
            print(f"  {color}[{f.code}]{_RESET} {f.field}: {f.message}")

    print(f"{'=' * _WIDTH}")
    if report.is_valid:
        print(f"  {_GREEN}{_BOLD}QUOTE READY{_RESET}")
    else:
        print(f"  {_RED}{_BOLD}QUOTE REJECTED{_RESET}")
    print(f"{'=' * _WIDTH}\n")

    return 0 if report.is_valid else 1


# ─── Main ────────────────────────────────────────────────────────────


def main():
    """Run the summary pipeline on the sample quote and print it."""
    settings = load_settings()
    configure_logging(settings)

    pipeline = QuoteSummaryPipeline(settings)
    report = pipeline.run(SAMPLE_QUOTE)
    sys.exit(print_report(report))


if __name__ == "__main__":
    main()
