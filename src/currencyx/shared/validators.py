# src/currencyx/shared/validators.py
"""
Input Validation Utilities - Configuration Validation

This module provides validation functions for configuration values:
currency codes, API keys and locale identifiers. The conversion engine itself
treats currency codes as opaque strings; these checks guard settings and the
exchange factories only.

Files that USE this module:
- currencyx.config.settings (uses validation functions in Settings field validators)
- currencyx.config.exchanges (checks keys and base codes passed to factories)

Files that this module USES:
- None (pure utility functions)
"""
import re

_CURRENCY_CODE = re.compile(r"^[A-Z]{3}$")
_LOCALE = re.compile(r"^[a-zA-Z]{2,3}([_-][a-zA-Z0-9]{2,8})*$")


def validate_currency_code(code: str) -> bool:
    """
    Validate ISO 4217 style currency code format.

    Args:
        code: Currency code to validate

    Returns:
        True if the code is three upper-case ASCII letters, False otherwise
    """
    if not code:
        return False
    return bool(_CURRENCY_CODE.match(code))


def validate_api_key(api_key: str, min_length: int = 1) -> bool:
    """
    Validate API key format.

    Args:
        api_key: API key to validate
        min_length: Minimum length requirement

    Returns:
        True if valid, False otherwise
    """
    if not api_key:
        return False

    return len(api_key) >= min_length and not api_key.isspace()


def validate_locale(locale: str) -> bool:
    """
    Validate a locale identifier such as "en_US", "de-DE" or "fr".

    Args:
        locale: Locale identifier to validate

    Returns:
        True if valid, False otherwise
    """
    if not locale:
        return False
    return bool(_LOCALE.match(locale))
