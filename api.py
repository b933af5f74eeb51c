"""
Cotizador — FastAPI Server
==========================

HTTP access to quote totals and amounts in words, for the desktop
editor and the document renderer.

Endpoints:
    POST /totals            Subtotal, IVA and total for a list of line items
    POST /words             A peso amount written out in Spanish
    POST /quotes/summary    Validate a full quote and build its document data
    GET  /health            Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from decimal import Decimal

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from cotizador import __version__
from cotizador.config import Settings, configure_logging, load_settings
from cotizador.exceptions import QuoteError
from cotizador.formatters import capitalize_phrase
from cotizador.models import LineItem, Quote, QuoteSummaryReport
from cotizador.number_to_words import amount_to_words
from cotizador.pipeline import QuoteSummaryPipeline
from cotizador.totals import compute_totals

logger = logging.getLogger(__name__)


# ─── Application Lifespan ───────────────────────────────────────────

_settings: Settings | None = None
_pipeline: QuoteSummaryPipeline | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load settings from the environment and build the pipeline on startup."""
    global _settings, _pipeline  # noqa: PLW0603
    _settings = load_settings()
    configure_logging(_settings)
    _pipeline = QuoteSummaryPipeline(_settings)
    logger.info("Cotizador API ready (tax rate %s)", _settings.tax_rate)
    yield
    _settings = None
    _pipeline = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Cotizador API",
    description=(
        "Quote totals (subtotal, 16% IVA, total) and totals written out in "
        "Spanish words using the Mexican peso convention."
    ),
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(QuoteError)
async def quote_error_handler(request: Request, exc: QuoteError) -> JSONResponse:
    logger.warning("%s on %s: %s", exc.code, request.url.path, exc.message)
    return JSONResponse(
        status_code=422,
        content={"code": exc.code, "message": exc.message, "details": exc.details},
    )


# ─── Request / Response Schemas ─────────────────────────────────────


class TotalsRequest(BaseModel):
    items: list[LineItem] = Field(default_factory=list)

    model_config = {"json_schema_extra": {"example": {
        "items": [{"quantity": 2, "unit_price": "100.00"}],
    }}}


class TotalsResponse(BaseModel):
    subtotal: str
    tax: str
    total: str
    tax_rate: str


class WordsRequest(BaseModel):
    amount: Decimal = Field(..., description="Non-negative peso amount, at most 2 decimals.")

    model_config = {"json_schema_extra": {"example": {"amount": "1250.50"}}}


class WordsResponse(BaseModel):
    amount: str
    words: str
    display: str


class HealthResponse(BaseModel):
    status: str
    version: str
    tax_rate: str


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_pipeline() -> QuoteSummaryPipeline:
    if _pipeline is None:
        raise HTTPException(status_code=503, detail="Pipeline not initialised")
    return _pipeline


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post("/totals", summary="Compute quote totals", tags=["Totals"])
def totals(request: TotalsRequest) -> TotalsResponse:
    """Subtotal, IVA and total, each as a 2-decimal string."""
    pipeline = _get_pipeline()
    result = compute_totals(request.items, pipeline.settings.tax_rate)
    return TotalsResponse(**result.as_strings(), tax_rate=str(pipeline.settings.tax_rate))


@app.post(
    "/words",
    summary="Write out a peso amount",
    tags=["Totals"],
    responses={422: {"description": "Negative or non-finite amount"}},
)
def words(request: WordsRequest) -> WordsResponse:
    """Return e.g. ``"mil doscientos cincuenta pesos 50/100 M.N."``."""
    text = amount_to_words(request.amount)
    return WordsResponse(amount=str(request.amount), words=text, display=capitalize_phrase(text))


@app.post(
    "/quotes/summary",
    summary="Validate a quote and build its document data",
    tags=["Quotes"],
    responses={503: {"description": "Pipeline not yet initialised"}},
)
def quote_summary(quote: Quote) -> QuoteSummaryReport:
    """Findings plus, when the quote has no errors, the printable summary."""
    return _get_pipeline().run(quote)


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Pipeline not yet initialised"}},
)
def health_check() -> HealthResponse:
    pipeline = _get_pipeline()
    return HealthResponse(
        status="healthy",
        version=__version__,
        tax_rate=str(pipeline.settings.tax_rate),
    )
