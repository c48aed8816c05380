# src/currencyx/adapters/exchanges/__init__.py
"""
Exchange Adapters - Upstream Rate Sources

This package contains adapters for upstream exchange rate sources.
All exchanges implement the CurrencyExchange contract.
"""

from currencyx.adapters.exchanges.base import BaseExchange, CurrencyExchange
from currencyx.adapters.exchanges.extraction import DEFAULT_PATTERNS, RateExtractor
from currencyx.adapters.exchanges.fixer import FixerExchange
from currencyx.adapters.exchanges.google_finance import GoogleFinanceExchange

__all__ = [
    "BaseExchange",
    "CurrencyExchange",
    "DEFAULT_PATTERNS",
    "RateExtractor",
    "FixerExchange",
    "GoogleFinanceExchange",
]
