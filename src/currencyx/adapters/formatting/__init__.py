# src/currencyx/adapters/formatting/__init__.py
"""
Formatting Adapters - Output Presentation

Locale-aware rendering of monetary amounts.
"""

from currencyx.adapters.formatting.formatter import format_currency

__all__ = ["format_currency"]
