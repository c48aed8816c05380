# src/currencyx/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains the service that routes requests to exchanges.
It talks to upstream sources only through the exchange contract.
"""

from currencyx.application.currency_service import CurrencyService

__all__ = ["CurrencyService"]
