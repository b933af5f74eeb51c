"""
Quote summary pipeline — turns a Quote into the data printed on its document.

Flow:
  ┌─────────┐
  │  Quote  │
  └────┬────┘
       │
  ┌────▼──────┐
  │ Validators│   ← Findings; any ERROR stops here
  └────┬──────┘
       │
  ┌────▼──────┐
  │  Ordering │   ← Saved display order of the lines
  └────┬──────┘
       │
  ┌────▼──────┐
  │  Totals   │   ← Subtotal, IVA, total
  └────┬──────┘
       │
  ┌────▼──────┐
  │  Words    │   ← "mil doscientos ... pesos NN/100 M.N."
  └────┬──────┘
       │
  ┌────▼──────┐
  │  Report   │
  └───────────┘

A failure computing totals propagates before the words step runs, so a
document can never be produced with a blank or corrupt total.
"""

from __future__ import annotations

import logging

from .amounts import money
from .config import Settings
from .formatters import capitalize_phrase, format_currency, format_date_spanish
from .models import (
    Quote,
    QuoteLine,
    QuoteSummary,
    QuoteSummaryReport,
    Severity,
    SummaryLine,
)
from .number_to_words import amount_to_words
from .totals import compute_totals, line_total
from .validators import validate_all

logger = logging.getLogger(__name__)


class QuoteSummaryPipeline:
    """Orchestrates validation, totals and the written total for one quote.

    Usage:
        pipeline = QuoteSummaryPipeline()
        report = pipeline.run(quote)
        if report.is_valid:
            print(report.summary.total_in_words_display)
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()

    def run(self, quote: Quote) -> QuoteSummaryReport:
        """Validate the quote and, if it has no errors, build its summary.

        Raises:
            InvalidLineItem: Only if a line slipped past validation with a
                value the totals calculator rejects.
            InvalidAmount: Only if a total slipped past validation and is
                too large to write out in words.
        """
        # ── Step 1: Validate ────────────────────────────────────────
        findings = validate_all(quote, self.settings.tax_rate)
        errors = [f for f in findings if f.severity == Severity.ERROR]
        if errors:
            logger.info(
                "Quote for %r rejected with %d error(s)", quote.company, len(errors)
            )
            return QuoteSummaryReport(is_valid=False, findings=findings)

        # ── Step 2: Order lines as saved by the editor ──────────────
        lines = self._ordered_lines(quote.lines)

        # ── Step 3: Totals ──────────────────────────────────────────
        totals = compute_totals(lines, self.settings.tax_rate)

        # ── Step 4: Total in words ──────────────────────────────────
        words = amount_to_words(totals.total)

        summary = QuoteSummary(
            company=quote.company.strip(),
            contact_name=quote.contact_name.strip(),
            project=quote.project.strip(),
            date_display=format_date_spanish(quote.quote_date),
            lines=[self._summary_line(i, line) for i, line in enumerate(lines, start=1)],
            totals=totals,
            tax_rate=self.settings.tax_rate,
            subtotal_display=f"${format_currency(totals.subtotal)}",
            tax_display=f"${format_currency(totals.tax)}",
            total_display=f"${format_currency(totals.total)}",
            total_in_words=words,
            total_in_words_display=capitalize_phrase(words),
            has_images=any(line.image for line in lines),
        )

        logger.info(
            "Quote for %r summarized: %d line(s), total %s",
            summary.company, len(summary.lines), totals.total,
        )
        return QuoteSummaryReport(is_valid=True, findings=findings, summary=summary)

    # ─── Helpers ────────────────────────────────────────────────────

    @staticmethod
    def _ordered_lines(lines: list[QuoteLine]) -> list[QuoteLine]:
        """Sort by saved display order; ties keep their input order."""
        # sort_option is validated but not applied: the saved order wins.
        return sorted(lines, key=lambda line: line.order)

    @staticmethod
    def _summary_line(position: int, line: QuoteLine) -> SummaryLine:
        amount = money(line_total(line))
        return SummaryLine(
            position=position,
            name=line.name.strip(),
            description=line.description.strip(),
            image=line.image,
            quantity=line.quantity,
            unit_price=line.unit_price,
            line_total=amount,
            unit_price_display=f"${format_currency(line.unit_price)}",
            line_total_display=f"${format_currency(amount)}",
        )
