# src/currencyx/__init__.py
"""
CurrencyX - Currency Conversion over Pluggable Exchanges

Converts amounts between currencies and reports exchange rates, delegating
rate acquisition to interchangeable upstream sources: the Fixer.io JSON API
and Google Finance quote pages.
"""

from currencyx.config import exchanges
from currencyx.config.define_config import CurrencyConfig, define_config
from currencyx.factory import create_currency

__version__ = "1.0.0"

__all__ = [
    "CurrencyConfig",
    "create_currency",
    "define_config",
    "exchanges",
]
