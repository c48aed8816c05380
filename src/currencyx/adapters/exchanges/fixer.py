# src/currencyx/adapters/exchanges/fixer.py
"""
Fixer.io Exchange - Base-relative JSON API

Fixer returns every rate relative to a single base currency. Conversions
between two arbitrary currencies are derived from base-relative rates:
- from is the base:    rate = base→to
- to is the base:      rate = 1 / base→from
- neither is the base: rate = base→to / base→from, both legs from one call

A missing, zero, negative or non-numeric leg makes the rate unavailable;
nothing is ever divided by zero.

Files that USE this module:
- currencyx.config.exchanges (fixer() factory)
- tests.test_fixer_exchange (unit tests)

Files that this module USES:
- currencyx.adapters.exchanges.base (BaseExchange)
- currencyx.config.settings (default URL and timeout)
- currencyx.shared.validators (access key check)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Standard library for logging messages
import math  # Finite-number checks
import time  # Latency measurement for health checks
from typing import Any, Dict, List, Optional, Sequence  # Type hints

import requests  # HTTP library for making API requests

from currencyx.adapters.exchanges.base import BaseExchange
from currencyx.config.settings import settings
from currencyx.domain.errors import ConfigurationError, ErrorType, FetchError
from currencyx.domain.models import (
    CurrencyCode,
    ExchangeRatesParams,
    ExchangeRatesResult,
    HealthCheckResult,
    RateResolution,
    ResultError,
)
from currencyx.shared.validators import validate_api_key

log = logging.getLogger(__name__)  # Create logger for this module


def _positive_rate(value: Any) -> Optional[float]:
    """Return value as float if it is a usable rate, None otherwise."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        return None
    return value


class FixerExchange(BaseExchange):
    """Exchange backed by the Fixer.io latest-rates endpoint."""

    supports_health_info = True

    def __init__(
        self,
        access_key: str,
        base: CurrencyCode = "EUR",
        timeout: Optional[float] = None,
        base_url: Optional[str] = None,
    ):
        """
        Initialize Fixer exchange.

        Args:
            access_key: Fixer API access key
            base: Base currency (Fixer's free plan only serves EUR)
            timeout: HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            base_url: API root (defaults to settings.fixer_url)

        Raises:
            ConfigurationError: If access_key is missing or empty
        """
        if not validate_api_key(access_key or ""):
            raise ConfigurationError("Fixer exchange requires an access key")
        super().__init__(base)
        self.access_key = access_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.base_url = (base_url or settings.fixer_url).rstrip("/")

    @property
    def name(self) -> str:
        return "fixer"

    def set_key(self, key: str) -> "FixerExchange":
        if not validate_api_key(key or ""):
            raise ConfigurationError("Fixer exchange requires an access key")
        self.access_key = key
        return self

    def _fetch_latest(self, base: CurrencyCode, symbols: Optional[Sequence[CurrencyCode]]) -> Dict[str, Any]:
        """
        Call the latest-rates endpoint.

        Args:
            base: Base currency for the quote
            symbols: Currencies to quote; None asks for every supported currency

        Returns:
            Decoded JSON payload

        Raises:
            FetchError: On timeout, transport failure, non-2xx status or invalid JSON
        """
        params = {"access_key": self.access_key, "base": base}
        if symbols:
            params["symbols"] = ",".join(symbols)

        try:
            log.info("Fetching Fixer rates for base=%s symbols=%s", base, params.get("symbols", "*"))
            resp = requests.get(f"{self.base_url}/latest", params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.Timeout:
            log.warning("Fixer API timeout after %s seconds", self.timeout)
            raise FetchError(f"Fixer API timeout after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            log.warning("Fixer API request failed: %s", e)
            raise FetchError(f"Fixer API request failed: {e}") from e
        except ValueError as e:
            log.error("Fixer API returned invalid JSON: %s", e)
            raise FetchError(f"Fixer API returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            log.error("Fixer unexpected response structure: %s", data)
            raise FetchError("Fixer API returned an unexpected payload")
        return data

    @staticmethod
    def _api_error(data: Dict[str, Any]) -> Optional[ResultError]:
        """Extract the structured upstream error, if the payload reports one."""
        if data.get("success") is not False and "error" not in data:
            return None
        details = data.get("error") or {}
        if not isinstance(details, dict):
            details = {"info": str(details)}
        return ResultError(
            info=details.get("info") or details.get("type") or "Fixer API request failed",
            type=ErrorType.API_ERROR,
            code=details.get("code"),
        )

    def get_exchange_rates(self, params: Optional[ExchangeRatesParams] = None) -> ExchangeRatesResult:
        """
        Get rates relative to the base currency.

        Symbols equal to the base are answered with 1.0 locally; when no other
        symbol remains no request is made.

        Args:
            params: Optional base and symbols

        Returns:
            ExchangeRatesResult envelope
        """
        params = params or ExchangeRatesParams()
        if params.base:
            self.set_base(params.base)
        base = self.base

        local: Dict[CurrencyCode, float] = {}
        remote: Optional[List[CurrencyCode]] = None
        if params.symbols is not None:
            remote = []
            for symbol in params.symbols:
                if symbol == base:
                    local[symbol] = 1.0
                elif symbol not in remote:
                    remote.append(symbol)
            if not remote:
                if not local:
                    return self.build_rates_result(
                        base, local, ResultError(info="No symbols requested", type=ErrorType.RATE_NOT_FOUND)
                    )
                return self.build_rates_result(base, local)

        try:
            data = self._fetch_latest(base, remote)
        except FetchError as e:
            return self.build_rates_result(base, {}, ResultError(info=str(e), type=ErrorType.FETCH_ERROR))
        except Exception as e:
            log.error("Fixer rates request failed unexpectedly: %s", e, exc_info=True)
            return self.build_rates_result(base, {}, ResultError(info=str(e), type=ErrorType.FETCH_ERROR))

        api_error = self._api_error(data)
        if api_error is not None:
            log.warning("Fixer API error %s: %s", api_error.code, api_error.info)
            return self.build_rates_result(base, {}, api_error)

        reported_base = data.get("base") or base
        if reported_base == base:
            rates: Dict[CurrencyCode, float] = dict(local)
        else:
            # upstream quoted another base; local 1.0 entries would not belong to it
            log.warning("Fixer answered for base %s instead of %s", reported_base, base)
            rates = {}

        upstream = data.get("rates") or {}
        if isinstance(upstream, dict):
            for symbol, value in upstream.items():
                rate = _positive_rate(value)
                if rate is not None:
                    rates[symbol] = rate

        if not rates:
            return self.build_rates_result(
                reported_base,
                rates,
                ResultError(info=f"No exchange rates returned for base {reported_base}", type=ErrorType.RATE_NOT_FOUND),
            )
        return self.build_rates_result(reported_base, rates)

    def _resolve_rate(self, from_currency: CurrencyCode, to_currency: CurrencyCode) -> RateResolution:
        base = self.base
        if from_currency == base:
            legs = [to_currency]
        elif to_currency == base:
            legs = [from_currency]
        else:
            legs = [from_currency, to_currency]

        result = self.get_exchange_rates(ExchangeRatesParams(symbols=legs))
        if result.error is not None:
            return RateResolution(error=result.error)
        if result.base != base:
            log.warning("Fixer rates are relative to %s, not %s; no %s-%s rate", result.base, base, from_currency, to_currency)
            return RateResolution()

        base_to_from = 1.0 if from_currency == base else _positive_rate(result.rates.get(from_currency))
        base_to_to = 1.0 if to_currency == base else _positive_rate(result.rates.get(to_currency))
        if base_to_from is None or base_to_to is None:
            log.debug("Fixer has no usable leg for %s-%s (base %s)", from_currency, to_currency, base)
            return RateResolution()
        return RateResolution(rate=base_to_to / base_to_from)

    def get_health_info(self) -> HealthCheckResult:
        """
        Check the API with a single EUR→USD quote.

        Returns:
            HealthCheckResult with latency in milliseconds
        """
        started = time.monotonic()
        try:
            data = self._fetch_latest("EUR", ["USD"])
        except FetchError as e:
            return HealthCheckResult(healthy=False, latency_ms=_elapsed_ms(started), error=str(e))
        latency_ms = _elapsed_ms(started)

        api_error = self._api_error(data)
        if api_error is not None:
            return HealthCheckResult(healthy=False, latency_ms=latency_ms, error=api_error.info)
        if _positive_rate((data.get("rates") or {}).get("USD")) is None:
            return HealthCheckResult(healthy=False, latency_ms=latency_ms, error="Fixer response has no USD rate")
        return HealthCheckResult(healthy=True, latency_ms=latency_ms)

    def is_healthy(self) -> bool:
        return self.get_health_info().healthy


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
