# src/currencyx/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides defaults for the exchange factories (API keys, upstream URLs,
timeouts, default base currency and locale) and for logging. Values come from
environment variables or a local .env file; every field has a default so
importing this module never fails on a clean environment.

Files that USE this module:
- currencyx.config.exchanges (factory defaults for google() and fixer())
- currencyx.adapters.exchanges.* (timeout and URL defaults)
- currencyx.adapters.formatting.formatter (default locale)

Files that this module USES:
- currencyx.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from currencyx.shared.validators import (
    validate_currency_code,  # Validate ISO currency code format
    validate_locale,  # Validate locale identifier format
)


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Exchanges ---
    fixer_api_key: str = Field(default="", alias="FIXER_API_KEY")
    fixer_url: str = Field(default="http://data.fixer.io/api", alias="FIXER_URL")
    google_finance_url: str = Field(default="https://www.google.com/finance", alias="GOOGLE_FINANCE_URL")

    # --- HTTP Settings ---
    http_timeout_seconds: float = Field(default=5.0, alias="HTTP_TIMEOUT_SECONDS", gt=0, le=60)

    # --- Defaults ---
    default_base: str = Field(default="USD", alias="CURRENCYX_DEFAULT_BASE")
    default_locale: str = Field(default="en_US", alias="CURRENCYX_DEFAULT_LOCALE")

    # --- Logging ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="CURRENCYX_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("default_base")
    @classmethod
    def validate_default_base(cls, v: str) -> str:
        """Normalise and validate the default base currency."""
        v = v.strip().upper()
        if not validate_currency_code(v):
            raise ValueError("CURRENCYX_DEFAULT_BASE must be a three-letter currency code")
        return v

    @field_validator("default_locale")
    @classmethod
    def validate_default_locale(cls, v: str) -> str:
        if not validate_locale(v):
            raise ValueError("Invalid CURRENCYX_DEFAULT_LOCALE format")
        return v

    @field_validator("fixer_url", "google_finance_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


# Global settings instance
settings = Settings()
