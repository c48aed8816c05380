# src/currencyx/application/currency_service.py
"""
Currency Service - Exchange Registry and Request Routing

This module holds the configured exchanges in a name-keyed registry, tracks
which one is active, and forwards conversion and rates requests to it. Results
from the active exchange are returned unmodified.

Registry entries are fixed at construction; only the active-exchange pointer
changes afterwards (via use). The service is meant for one caller at a time:
use() racing with convert() on another thread is not guarded.

Files that USE this module:
- currencyx.factory (create_currency builds a CurrencyService)
- tests.test_currency_service (unit tests)

Files that this module USES:
- currencyx.adapters.exchanges.base (CurrencyExchange contract)
- currencyx.adapters.formatting.formatter (format_currency)
- currencyx.config.define_config (CurrencyConfig)
- currencyx.domain (requests, results, errors)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Standard library for logging messages
import time  # Latency measurement for health checks
from typing import Callable, Dict, List, Optional, Sequence  # Type hints

from currencyx.adapters.exchanges.base import CurrencyExchange
from currencyx.adapters.formatting.formatter import format_currency
from currencyx.config.define_config import CurrencyConfig
from currencyx.domain.errors import (
    ConfigurationError,
    ConversionFailedError,
    ExchangeNotConfiguredError,
    NoActiveExchangeError,
)
from currencyx.domain.models import (
    ConversionResult,
    ConvertParams,
    CurrencyCode,
    ExchangeHealth,
    ExchangeRatesParams,
    ExchangeRatesResult,
    FormattedConversion,
    HealthCheckResult,
)

log = logging.getLogger(__name__)  # Create logger for this module


class CurrencyService:
    """
    Registry of configured exchanges with one active exchange.

    Every conversion and rates call goes to the active exchange, selected
    with use(). Selecting an unknown name raises before any I/O.
    """

    def __init__(self, config: CurrencyConfig):
        """
        Initialize the service from a configuration.

        Factories in the configuration are invoked once, here.

        Args:
            config: CurrencyConfig with the default name and exchange entries

        Raises:
            ConfigurationError: If an entry is neither an exchange nor a factory
                returning one, or the default name has no entry
        """
        self._exchanges: Dict[str, CurrencyExchange] = {}
        self._health_info: Dict[str, Optional[Callable[[], HealthCheckResult]]] = {}
        self._current: Optional[str] = None

        for name, entry in config.exchanges.items():
            self._register(name, entry)

        if config.default not in self._exchanges:
            raise ConfigurationError(f"Default exchange '{config.default}' is not configured")
        self._current = config.default
        log.info("Currency service ready: exchanges=%s, default=%s", list(self._exchanges), self._current)

    def _register(self, name: str, entry) -> None:
        if isinstance(entry, CurrencyExchange):
            exchange = entry
        elif callable(entry):
            exchange = entry()
            if not isinstance(exchange, CurrencyExchange):
                raise ConfigurationError(
                    f"Factory for exchange '{name}' returned {type(exchange).__name__}, not an exchange"
                )
        else:
            raise ConfigurationError(
                f"Exchange '{name}' must be an exchange instance or a factory, got {type(entry).__name__}"
            )

        self._exchanges[name] = exchange
        # optional capability, looked up once
        self._health_info[name] = exchange.get_health_info if exchange.supports_health_info else None

    def _active(self) -> CurrencyExchange:
        if self._current is None:
            raise NoActiveExchangeError("No exchange is currently active")
        return self._exchanges[self._current]

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def use(self, name: str) -> "CurrencyService":
        """
        Make ``name`` the active exchange.

        Raises:
            ExchangeNotConfiguredError: If ``name`` is not registered
        """
        if name not in self._exchanges:
            raise ExchangeNotConfiguredError(name)
        if name != self._current:
            log.info("Switching active exchange: %s → %s", self._current, name)
        self._current = name
        return self

    def get_exchange(self, name: Optional[str] = None) -> CurrencyExchange:
        """
        Get a registered exchange, the active one by default.

        Raises:
            ExchangeNotConfiguredError: If ``name`` is not registered
            NoActiveExchangeError: If no name is given and none is active
        """
        if name is None:
            return self._active()
        if name not in self._exchanges:
            raise ExchangeNotConfiguredError(name)
        return self._exchanges[name]

    def get_current_exchange(self) -> Optional[str]:
        return self._current

    def get_available_exchanges(self) -> List[str]:
        return list(self._exchanges)

    # ------------------------------------------------------------------
    # Conversion and rates
    # ------------------------------------------------------------------

    def convert(self, params: ConvertParams) -> ConversionResult:
        return self._active().convert(params)

    def convert_amount(self, amount: float, from_currency: CurrencyCode, to_currency: CurrencyCode) -> ConversionResult:
        return self.convert(ConvertParams(amount=amount, from_currency=from_currency, to_currency=to_currency))

    def get_exchange_rates(self, params: Optional[ExchangeRatesParams] = None) -> ExchangeRatesResult:
        return self._active().get_exchange_rates(params or ExchangeRatesParams())

    def get_rates(
        self,
        base: Optional[CurrencyCode] = None,
        symbols: Optional[Sequence[CurrencyCode]] = None,
    ) -> ExchangeRatesResult:
        return self.get_exchange_rates(ExchangeRatesParams(base=base, symbols=symbols))

    def round(self, value: float, precision: int = 2) -> float:
        return self._active().round(value, precision)

    def get_supported_currencies(self, name: Optional[str] = None) -> List[CurrencyCode]:
        """Currency codes of an exchange (the active one by default); [] for unknown names."""
        if name is not None and name not in self._exchanges:
            return []
        return list(self.get_exchange(name).currencies)

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def is_healthy(self, name: Optional[str] = None) -> bool:
        """
        Check an exchange (the active one by default).

        Returns:
            True if the exchange answered a health check, False otherwise or for unknown names
        """
        target = name if name is not None else self._current
        if target is None or target not in self._exchanges:
            return False
        try:
            return bool(self._exchanges[target].is_healthy())
        except Exception as e:
            log.warning("Health check for exchange %s failed: %s", target, e)
            return False

    def get_exchanges_health(self) -> List[ExchangeHealth]:
        return [
            ExchangeHealth(name=name, healthy=self.is_healthy(name), current=name == self._current)
            for name in self._exchanges
        ]

    def get_exchange_health_info(self, name: Optional[str] = None) -> HealthCheckResult:
        """
        Detailed health of an exchange (the active one by default).

        Exchanges without a detailed health check are timed around is_healthy().

        Raises:
            ExchangeNotConfiguredError: If ``name`` is not registered
        """
        exchange = self.get_exchange(name)
        target = name if name is not None else self._current
        health_info = self._health_info.get(target)

        started = time.monotonic()
        try:
            if health_info is not None:
                return health_info()
            healthy = bool(exchange.is_healthy())
        except Exception as e:
            log.warning("Health check for exchange %s failed: %s", target, e)
            return HealthCheckResult(
                healthy=False,
                latency_ms=int((time.monotonic() - started) * 1000),
                error=str(e),
            )
        return HealthCheckResult(healthy=healthy, latency_ms=int((time.monotonic() - started) * 1000))

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format_currency(self, amount: float, currency: CurrencyCode, locale: Optional[str] = None) -> str:
        return format_currency(amount, currency, locale)

    def convert_and_format(
        self,
        amount: float,
        from_currency: CurrencyCode,
        to_currency: CurrencyCode,
        locale: Optional[str] = None,
    ) -> FormattedConversion:
        """
        Convert an amount and format both sides for a locale.

        Raises:
            ConversionFailedError: If the conversion did not succeed; the
                envelope is available as ``.result``
        """
        result = self.convert_amount(amount, from_currency, to_currency)
        if not result.success or result.result is None:
            message = result.error.info if result.error is not None else "Conversion failed"
            raise ConversionFailedError(message, result)

        return FormattedConversion(
            original=format_currency(amount, from_currency, locale),
            converted=format_currency(result.result, to_currency, locale),
            rate=result.info.rate,
        )
