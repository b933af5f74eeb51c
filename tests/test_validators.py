"""
Tests for quote input validation, display formatters and settings.

Run: pytest tests/ -v
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any

import pytest

from cotizador.config import HANDLER_NAME, Settings, configure_logging, load_settings
from cotizador.exceptions import ConfigurationError
from cotizador.formatters import capitalize_phrase, format_currency, format_date_spanish
from cotizador.models import Quote, QuoteLine, Severity
from cotizador.validators import (
    validate_all,
    validate_client_fields,
    validate_contact_channels,
    validate_has_lines,
    validate_line,
    validate_sort_option,
    validate_total_in_range,
)


# ─── Test Data ───────────────────────────────────────────────────────


def _make_line(**overrides: Any) -> QuoteLine:
    kwargs: dict[str, Any] = {
        "name": "Luminaria LED 150W",
        "description": "Campana industrial, 6500K",
        "quantity": 2,
        "unit_price": Decimal("100.00"),
        "order": 0,
    }
    kwargs.update(overrides)
    return QuoteLine(**kwargs)


def _make_quote(**overrides: Any) -> Quote:
    """Factory for a valid quote; override fields to introduce errors."""
    kwargs: dict[str, Any] = {
        "company": "Constructora del Bajío",
        "contact_name": "Laura Méndez",
        "project": "Iluminación de nave industrial",
        "quote_date": date(2025, 8, 12),
        "phone": "(477) 123 4567",
        "email": "compras@bajio.mx",
        "lines": [_make_line()],
    }
    kwargs.update(overrides)
    return Quote(**kwargs)


def _codes(findings) -> set[str]:
    return {f.code for f in findings}


# ═══════════════════════════════════════════════════════════════════════
# QUOTE VALIDATORS
# ═══════════════════════════════════════════════════════════════════════


class TestValidQuote:
    def test_no_findings(self):
        assert validate_all(_make_quote()) == []

    def test_optional_contact_fields_may_be_blank(self):
        assert validate_all(_make_quote(phone=None, email="")) == []


class TestClientFields:
    def test_blank_company_is_error(self):
        findings = validate_client_fields(_make_quote(company="   "))
        assert len(findings) == 1
        assert findings[0].severity == Severity.ERROR
        assert findings[0].code == "MISSING_REQUIRED_FIELD"
        assert findings[0].field == "company"

    def test_long_company_is_error(self):
        findings = validate_client_fields(_make_quote(company="x" * 201))
        assert findings[0].code == "FIELD_TOO_LONG"
        assert findings[0].details == {"length": 201, "max_length": 200}

    def test_company_at_limit_passes(self):
        assert validate_client_fields(_make_quote(company="x" * 200)) == []

    def test_project_allows_500_chars(self):
        assert validate_client_fields(_make_quote(project="p" * 500)) == []
        assert _codes(validate_client_fields(_make_quote(project="p" * 501))) == {"FIELD_TOO_LONG"}

    def test_blank_contact(self):
        findings = validate_client_fields(_make_quote(contact_name=""))
        assert findings[0].field == "contact_name"


class TestContactChannels:
    def test_bad_phone(self):
        findings = validate_contact_channels(_make_quote(phone="call me"))
        assert _codes(findings) == {"INVALID_PHONE"}

    def test_short_phone(self):
        assert _codes(validate_contact_channels(_make_quote(phone="12345"))) == {"INVALID_PHONE"}

    def test_international_phone_passes(self):
        assert validate_contact_channels(_make_quote(phone="+52 477-123-4567")) == []

    def test_bad_email(self):
        findings = validate_contact_channels(_make_quote(email="compras@bajio"))
        assert _codes(findings) == {"INVALID_EMAIL"}


class TestSortOption:
    @pytest.mark.parametrize("option", ["id-asc", "id-desc", "nombre-asc", "precio-desc"])
    def test_known_options(self, option):
        assert validate_sort_option(_make_quote(sort_option=option)) == []

    def test_unknown_option(self):
        findings = validate_sort_option(_make_quote(sort_option="fecha-asc"))
        assert findings[0].code == "INVALID_SORT_OPTION"
        assert "precio-asc" in findings[0].details["valid_options"]

    def test_default_is_id_desc(self):
        assert _make_quote().sort_option == "id-desc"


class TestHasLines:
    def test_empty_quote_is_only_a_warning(self):
        findings = validate_has_lines(_make_quote(lines=[]))
        assert findings[0].severity == Severity.WARNING
        assert findings[0].code == "QUOTE_HAS_NO_LINES"


class TestTotalRange:
    def test_largest_valid_line_overflows_words(self):
        quote = _make_quote(lines=[_make_line(quantity=999_999, unit_price=Decimal("999999999.99"))])
        findings = validate_total_in_range(quote)
        assert _codes(findings) == {"TOTAL_OUT_OF_RANGE"}
        assert findings[0].severity == Severity.ERROR
        assert findings[0].details["max_total"] == "999999999999.99"

    def test_validate_all_reports_total(self):
        quote = _make_quote(lines=[_make_line(quantity=999_999, unit_price=Decimal("999999999.99"))])
        assert _codes(validate_all(quote)) == {"TOTAL_OUT_OF_RANGE"}

    def test_tax_pushes_total_over_limit(self):
        # 862,068,965,520.00 * 1.16 = 1,000,000,000,003.20
        line = _make_line(quantity=1000, unit_price=Decimal("862068965.52"))
        quote = _make_quote(lines=[line])
        assert _codes(validate_total_in_range(quote)) == {"TOTAL_OUT_OF_RANGE"}
        assert validate_total_in_range(quote, tax_rate=Decimal("0")) == []

    def test_total_below_limit_passes(self):
        line = _make_line(quantity=1000, unit_price=Decimal("999999999.99"))
        quote = _make_quote(lines=[line])
        assert validate_total_in_range(quote, tax_rate=Decimal("0")) == []

    def test_out_of_range_lines_are_left_out(self):
        quote = _make_quote(lines=[_make_line(quantity=10**30)])
        assert validate_total_in_range(quote) == []
        assert _codes(validate_all(quote)) == {"QUANTITY_OUT_OF_RANGE"}


# ═══════════════════════════════════════════════════════════════════════
# LINE VALIDATORS
# ═══════════════════════════════════════════════════════════════════════


class TestLineValidation:
    def test_valid_line(self):
        assert validate_line(_make_line(), 0) == []

    @pytest.mark.parametrize("quantity", [0, -1, 1_000_000])
    def test_quantity_out_of_range(self, quantity):
        findings = validate_line(_make_line(quantity=quantity), 3)
        assert _codes(findings) == {"QUANTITY_OUT_OF_RANGE"}
        assert findings[0].field == "lines[3].quantity"

    def test_max_quantity_passes(self):
        assert validate_line(_make_line(quantity=999_999), 0) == []

    @pytest.mark.parametrize("price", [Decimal("-0.01"), Decimal("1000000000.00")])
    def test_price_out_of_range(self, price):
        assert _codes(validate_line(_make_line(unit_price=price), 0)) == {"UNIT_PRICE_OUT_OF_RANGE"}

    def test_free_line_passes(self):
        assert validate_line(_make_line(unit_price=Decimal("0")), 0) == []

    def test_missing_name_and_description(self):
        findings = validate_line(_make_line(name="", description=""), 1)
        assert {f.field for f in findings} == {"lines[1].name", "lines[1].description"}

    def test_long_image_name(self):
        findings = validate_line(_make_line(image="a" * 501), 0)
        assert _codes(findings) == {"IMAGE_NAME_TOO_LONG"}

    def test_negative_order(self):
        assert _codes(validate_line(_make_line(order=-1), 0)) == {"NEGATIVE_ORDER"}

    def test_validate_all_reports_line_position(self):
        quote = _make_quote(lines=[_make_line(), _make_line(quantity=0)])
        findings = validate_all(quote)
        assert [f.field for f in findings] == ["lines[1].quantity"]

    def test_line_accepts_database_columns(self):
        line = QuoteLine.model_validate({
            "nombre_producto": "Cable",
            "concepto": "Calibre 12",
            "unidades": 100,
            "precio_unitario": "12.40",
            "orden": 4,
            "imagen": "cable.png",
        })
        assert line.name == "Cable"
        assert line.order == 4
        assert line.image == "cable.png"


# ═══════════════════════════════════════════════════════════════════════
# FORMATTERS
# ═══════════════════════════════════════════════════════════════════════


class TestFormatters:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1234.5, "1,234.50"),
            (0, "0.00"),
            (Decimal("1000000"), "1,000,000.00"),
            (Decimal("0.125"), "0.13"),
            (Decimal("18981.776"), "18,981.78"),
        ],
    )
    def test_format_currency(self, value, expected):
        assert format_currency(value) == expected

    def test_spanish_date_from_string(self):
        assert format_date_spanish("2025-08-12") == "12 de agosto de 2025"

    def test_spanish_date_from_date(self):
        assert format_date_spanish(date(2024, 1, 1)) == "1 de enero de 2024"

    def test_december(self):
        assert format_date_spanish(date(2023, 12, 31)) == "31 de diciembre de 2023"

    def test_malformed_date_raises(self):
        with pytest.raises(ValueError):
            format_date_spanish("12/08/2025")

    def test_capitalize_phrase(self):
        assert capitalize_phrase("mil pesos 00/100 M.N.") == "Mil pesos 00/100 M.N."

    def test_capitalize_keeps_rest(self):
        assert capitalize_phrase("un millón pesos") == "Un millón pesos"

    def test_capitalize_empty(self):
        assert capitalize_phrase("") == ""


# ═══════════════════════════════════════════════════════════════════════
# SETTINGS
# ═══════════════════════════════════════════════════════════════════════


class TestSettings:
    def test_defaults(self, tmp_path):
        settings = load_settings(str(tmp_path / ".env"))
        assert settings == Settings(tax_rate=Decimal("0.16"), log_level="INFO")

    def test_tax_rate_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COTIZADOR_TAX_RATE", "0.08")
        assert load_settings(str(tmp_path / ".env")).tax_rate == Decimal("0.08")

    def test_tax_rate_from_dotenv_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("COTIZADOR_TAX_RATE=0.11\n", encoding="utf-8")
        assert load_settings(str(env_file)).tax_rate == Decimal("0.11")

    @pytest.mark.parametrize("raw", ["abc", "-0.16", "NaN"])
    def test_bad_tax_rate(self, tmp_path, monkeypatch, raw):
        monkeypatch.setenv("COTIZADOR_TAX_RATE", raw)
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(str(tmp_path / ".env"))
        assert exc_info.value.code == "INVALID_CONFIGURATION"

    def test_log_level_normalized(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COTIZADOR_LOG_LEVEL", "debug")
        assert load_settings(str(tmp_path / ".env")).log_level == "DEBUG"

    def test_configure_logging_is_idempotent(self):
        root = logging.getLogger()
        before = list(root.handlers)
        level = root.level
        try:
            configure_logging(Settings(log_level="WARNING"))
            configure_logging(Settings(log_level="WARNING"))
            ours = [h for h in root.handlers if h.get_name() == HANDLER_NAME]
            assert len(ours) == 1
            assert root.level == logging.WARNING
        finally:
            for handler in root.handlers[:]:
                if handler not in before:
                    root.removeHandler(handler)
            root.setLevel(level)
