# src/currencyx/config/exchanges.py
"""
Exchange Factories - Configured Exchange Instances

Helpers that build exchanges for a CurrencyConfig, filling unset options from
settings. Missing credentials are reported here, when the configuration is
built, rather than on the first request.

Usage:
    from currencyx.config import exchanges
    from currencyx.config.define_config import define_config

    config = define_config(
        default="google",
        exchanges={
            "google": exchanges.google(base="USD"),
            "fixer": exchanges.fixer(access_key="..."),
        },
    )

Files that USE this module:
- Host applications building a CurrencyConfig
- tests.test_config (unit tests)

Files that this module USES:
- currencyx.adapters.exchanges.fixer (FixerExchange)
- currencyx.adapters.exchanges.google_finance (GoogleFinanceExchange)
- currencyx.config.settings (defaults)
- currencyx.shared.validators (option checks)
"""
from __future__ import annotations

from typing import Optional

from currencyx.adapters.exchanges.fixer import FixerExchange
from currencyx.adapters.exchanges.google_finance import GoogleFinanceExchange
from currencyx.config.settings import settings
from currencyx.domain.errors import ConfigurationError
from currencyx.shared.validators import validate_api_key, validate_currency_code


def _base_or_default(base: Optional[str]) -> str:
    base = (base or settings.default_base).strip().upper()
    if not validate_currency_code(base):
        raise ConfigurationError(f"Invalid base currency code: {base!r}")
    return base


def google(base: Optional[str] = None, timeout: Optional[float] = None) -> GoogleFinanceExchange:
    """
    Build a Google Finance exchange.

    Args:
        base: Base currency (defaults to settings.default_base)
        timeout: HTTP timeout in seconds (defaults to settings.http_timeout_seconds)

    Raises:
        ConfigurationError: If base is not a three-letter code
    """
    return GoogleFinanceExchange(
        base=_base_or_default(base),
        timeout=timeout or settings.http_timeout_seconds,
    )


def fixer(
    access_key: Optional[str] = None,
    base: Optional[str] = None,
    timeout: Optional[float] = None,
) -> FixerExchange:
    """
    Build a Fixer exchange.

    Args:
        access_key: Fixer access key (defaults to settings.fixer_api_key)
        base: Base currency (defaults to settings.default_base)
        timeout: HTTP timeout in seconds (defaults to settings.http_timeout_seconds)

    Raises:
        ConfigurationError: If no access key is available or base is invalid
    """
    key = access_key or settings.fixer_api_key
    if not validate_api_key(key):
        raise ConfigurationError("Fixer exchange requires an access key")
    return FixerExchange(
        access_key=key,
        base=_base_or_default(base),
        timeout=timeout or settings.http_timeout_seconds,
    )
