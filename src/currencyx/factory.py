# src/currencyx/factory.py
"""
Service Factory

Files that USE this module:
- Host applications (create_currency entry point)
- tests.test_currency_service (unit tests)

Files that this module USES:
- currencyx.application.currency_service (CurrencyService)
- currencyx.config.define_config (CurrencyConfig)
"""
from __future__ import annotations

from currencyx.application.currency_service import CurrencyService
from currencyx.config.define_config import CurrencyConfig


def create_currency(config: CurrencyConfig) -> CurrencyService:
    """
    Create a currency service from a configuration.

    Example:
        config = define_config(
            default="google",
            exchanges={"google": exchanges.google(), "fixer": exchanges.fixer(access_key="...")},
        )
        currency = create_currency(config)
        currency.use("fixer").convert_amount(100, "USD", "EUR")
    """
    return CurrencyService(config)
