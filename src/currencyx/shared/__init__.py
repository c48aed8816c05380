# src/currencyx/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from currencyx.shared.logging_conf import setup_logging
from currencyx.shared.validators import (
    validate_api_key,
    validate_currency_code,
    validate_locale,
)

__all__ = [
    "setup_logging",
    "validate_api_key",
    "validate_currency_code",
    "validate_locale",
]
