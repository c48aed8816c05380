# src/currencyx/domain/__init__.py
"""
Domain Layer - Value Objects, Currency Metadata and Errors

This package holds the pure business objects shared by every layer.
It has no dependencies on HTTP, configuration or logging.
"""

from currencyx.domain.errors import (
    ConfigurationError,
    ConversionFailedError,
    DomainError,
    ErrorType,
    ExchangeNotConfiguredError,
    FetchError,
    NoActiveExchangeError,
)
from currencyx.domain.models import (
    ConversionInfo,
    ConversionQuery,
    ConversionResult,
    ConvertParams,
    CurrencyCode,
    CurrencyInfo,
    ExchangeHealth,
    ExchangeRatesParams,
    ExchangeRatesResult,
    FormattedConversion,
    HealthCheckResult,
    RateResolution,
    ResultError,
)

__all__ = [
    "ConfigurationError",
    "ConversionFailedError",
    "DomainError",
    "ErrorType",
    "ExchangeNotConfiguredError",
    "FetchError",
    "NoActiveExchangeError",
    "ConversionInfo",
    "ConversionQuery",
    "ConversionResult",
    "ConvertParams",
    "CurrencyCode",
    "CurrencyInfo",
    "ExchangeHealth",
    "ExchangeRatesParams",
    "ExchangeRatesResult",
    "FormattedConversion",
    "HealthCheckResult",
    "RateResolution",
    "ResultError",
]
