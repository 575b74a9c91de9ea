"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from faktur.config import Settings


def test_postgres_url_gets_async_driver(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@host:5432/ledger")
    assert Settings().database_url == "postgresql+asyncpg://u:p@host:5432/ledger"


def test_cors_origins_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.test, https://b.test")
    assert Settings().cors_origins == ["https://a.test", "https://b.test"]


def test_currency_is_normalized(monkeypatch):
    monkeypatch.setenv("DEFAULT_CURRENCY", "eur")
    assert Settings().default_currency == "EUR"


@pytest.mark.parametrize("name, value", [
    ("DEFAULT_CURRENCY", "EURO"),
    ("DASHBOARD_DEFAULT_MONTHS", "0"),
    ("LOG_LEVEL", "chatty"),
    ("INVOICE_NUMBER_PREFIX", ""),
])
def test_invalid_settings_fail_fast(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings()
