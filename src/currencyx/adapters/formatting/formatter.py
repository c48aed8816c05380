# src/currencyx/adapters/formatting/formatter.py
"""
Currency Formatter - Locale-aware Amount Presentation

Renders an amount in a currency for a locale using Babel's CLDR data. An
unknown currency code or locale never raises; the amount falls back to the
fixed "<CODE> <amount with 2 decimals>" form.

Files that USE this module:
- currencyx.application.currency_service (format_currency, convert_and_format)
- tests.test_formatter (unit tests)

Files that this module USES:
- currencyx.config.settings (default locale)
"""
from __future__ import annotations

import logging
from typing import Optional

from babel.core import UnknownLocaleError
from babel.numbers import UnknownCurrencyError, format_currency as babel_format_currency, validate_currency

from currencyx.config.settings import settings

log = logging.getLogger(__name__)


def fallback_format(amount: float, currency: str) -> str:
    """Fixed representation used when locale formatting is unavailable."""
    return f"{currency} {amount:.2f}"


def format_currency(amount: float, currency: str, locale: Optional[str] = None) -> str:
    """
    Format an amount as money for a locale.

    Args:
        amount: Amount to format
        currency: ISO 4217 currency code
        locale: Locale identifier such as "en_US" or "de-DE" (defaults to settings.default_locale)

    Returns:
        Formatted string, e.g. "$1,234.56" for en_US, or "XYZ 1234.56" when
        the currency or locale is unknown
    """
    locale = (locale or settings.default_locale).replace("-", "_")
    try:
        validate_currency(currency)
        return babel_format_currency(amount, currency, locale=locale)
    except (UnknownCurrencyError, UnknownLocaleError, ValueError) as e:
        log.debug("Falling back to plain format for %s in %s: %s", currency, locale, e)
        return fallback_format(amount, currency)
