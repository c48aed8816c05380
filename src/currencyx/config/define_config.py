# src/currencyx/config/define_config.py
"""
Service Configuration

CurrencyConfig names the default exchange and maps exchange names to either a
ready exchange instance or a zero-argument factory returning one. The service
resolves factories once, at construction.

Files that USE this module:
- currencyx.application.currency_service (CurrencyService reads CurrencyConfig)
- currencyx.factory (create_currency)
- tests.test_config (unit tests)

Files that this module USES:
- currencyx.adapters.exchanges.base (CurrencyExchange type)
- currencyx.domain.errors (ConfigurationError)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Union

from currencyx.adapters.exchanges.base import CurrencyExchange
from currencyx.domain.errors import ConfigurationError

ExchangeEntry = Union[CurrencyExchange, Callable[[], CurrencyExchange]]


@dataclass(frozen=True)
class CurrencyConfig:
    default: str
    exchanges: Dict[str, ExchangeEntry] = field(default_factory=dict)


def define_config(default: str, exchanges: Mapping[str, ExchangeEntry]) -> CurrencyConfig:
    """
    Build a service configuration.

    Args:
        default: Name of the exchange active after construction
        exchanges: Exchange name → instance or zero-argument factory

    Returns:
        Frozen CurrencyConfig

    Raises:
        ConfigurationError: If no exchanges are given or default is not one of them
    """
    if not exchanges:
        raise ConfigurationError("At least one exchange must be configured")
    if default not in exchanges:
        raise ConfigurationError(
            f"Default exchange '{default}' is not configured; available: {', '.join(exchanges)}"
        )
    return CurrencyConfig(default=default, exchanges=dict(exchanges))
