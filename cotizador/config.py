"""
Runtime settings read from the environment (and a .env file, if present).

    COTIZADOR_TAX_RATE   IVA as a fraction (default 0.16)
    COTIZADOR_LOG_LEVEL  DEBUG / INFO / WARNING / ... (default INFO)
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .totals import IVA_RATE

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
HANDLER_NAME = "cotizador"


@dataclass(frozen=True)
class Settings:
    tax_rate: Decimal = IVA_RATE
    log_level: str = "INFO"


def load_settings(env_file: str | None = None) -> Settings:
    """Build Settings from the process environment.

    Raises:
        ConfigurationError: If COTIZADOR_TAX_RATE is not a finite,
            non-negative number.
    """
    load_dotenv(env_file)

    raw_rate = os.environ.get("COTIZADOR_TAX_RATE")
    tax_rate = IVA_RATE if raw_rate is None else _parse_tax_rate(raw_rate)
    log_level = os.environ.get("COTIZADOR_LOG_LEVEL", "INFO").strip().upper() or "INFO"

    return Settings(tax_rate=tax_rate, log_level=log_level)


def configure_logging(settings: Settings) -> None:
    """Send everything to stdout at the configured level (idempotent)."""
    root = logging.getLogger()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)

    root.setLevel(level)


def _parse_tax_rate(raw: str) -> Decimal:
    try:
        rate = Decimal(raw.strip())
    except InvalidOperation as e:
        raise ConfigurationError(
            f"COTIZADOR_TAX_RATE must be a number, got {raw!r}",
            details={"COTIZADOR_TAX_RATE": raw},
        ) from e

    if not rate.is_finite() or rate < 0:
        raise ConfigurationError(
            f"COTIZADOR_TAX_RATE must be a finite, non-negative fraction, got {raw!r}",
            details={"COTIZADOR_TAX_RATE": raw},
        )
    return rate
