"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a working default for docker-compose; env / .env override
    - get_settings() is cached (lru_cache) — single instance per process
    - Invoicing settings are validated at startup, not at first use

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - CORS origins accept a comma-separated string as well as a JSON list
"""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "postgresql+asyncpg://faktur:faktur@db:5432/faktur"
    database_pool_size: int = Field(20, ge=1)
    database_max_overflow: int = Field(10, ge=0)

    # Invoicing
    invoice_number_prefix: str = Field("INV-", min_length=1, max_length=20)
    default_currency: str = "USD"
    dashboard_default_months: int = Field(6, ge=1, le=24)

    # API
    cors_origins: Annotated[list[str], NoDecode] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("default_currency")
    @classmethod
    def check_currency(cls, v: str) -> str:
        v = v.strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError("default_currency must be a 3-letter ISO 4217 code")
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {v!r}")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
