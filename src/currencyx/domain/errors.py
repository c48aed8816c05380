# src/currencyx/domain/errors.py
"""
Domain Errors - Exceptions and Envelope Error Types

Configuration problems are raised as exceptions at the call site that caused
them. Upstream problems (network, parsing, missing rates) are never raised out
of an exchange; they are reported through the ``error`` field of a result
envelope, tagged with one of the ``ErrorType`` values below.

Files that USE this module:
- currencyx.adapters.exchanges.* (ErrorType for envelopes, FetchError internally)
- currencyx.application.currency_service (registry errors)
- currencyx.config.* (ConfigurationError for bad setup)

Files that this module USES:
- None (pure domain layer)
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from currencyx.domain.models import ConversionResult


class ErrorType(str, Enum):
    """Values used in ``ResultError.type``."""

    FETCH_ERROR = "FETCH_ERROR"
    RATE_NOT_FOUND = "RATE_NOT_FOUND"
    CONVERSION_ERROR = "CONVERSION_ERROR"
    API_ERROR = "API_ERROR"

    def __str__(self) -> str:
        return self.value


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class ConfigurationError(DomainError):
    """Raised when the service or an exchange is set up incorrectly."""
    pass


class ExchangeNotConfiguredError(ConfigurationError):
    """Raised when an exchange name has no entry in the registry."""

    def __init__(self, name: str):
        super().__init__(f"Exchange '{name}' is not configured")
        self.name = name


class NoActiveExchangeError(DomainError):
    """Raised when an operation needs the active exchange but none is selected."""
    pass


class FetchError(DomainError):
    """Raised by HTTP helpers when an upstream source cannot be reached or read."""
    pass


class ConversionFailedError(DomainError):
    """Raised by convert_and_format when the underlying conversion did not succeed."""

    def __init__(self, message: str, result: "ConversionResult"):
        super().__init__(message)
        self.result = result
