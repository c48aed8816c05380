# src/currencyx/adapters/exchanges/base.py
"""
Exchange Contract and Base Exchange

This module defines the abstract contract every exchange implements and the
shared base class that concrete exchanges extend. The base class owns the
behaviour all exchanges must agree on:
- the identical-currency short-circuit in convert
- rounding
- construction of result envelopes (success/error invariants)
- base currency state and currency metadata passthrough

Concrete exchanges only decide how a from→to rate is resolved
(_resolve_rate) and how a rates request is served (get_exchange_rates).

Files that USE this module:
- currencyx.adapters.exchanges.fixer (FixerExchange extends BaseExchange)
- currencyx.adapters.exchanges.google_finance (GoogleFinanceExchange extends BaseExchange)
- currencyx.application.currency_service (holds CurrencyExchange instances)
- tests.test_base_exchange (unit tests)

Files that this module USES:
- currencyx.domain.models (requests and result envelopes)
- currencyx.domain.errors (ErrorType values)
- currencyx.domain.currencies (currency metadata table)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Standard library for logging messages
from abc import ABC, abstractmethod  # Abstract base classes for defining interfaces
from datetime import datetime, timezone  # Timestamps for result envelopes
from decimal import ROUND_HALF_UP, Decimal  # Deterministic half-up rounding
from typing import List, Mapping, Optional, Tuple  # Type hints

from currencyx.domain import currencies as currency_table
from currencyx.domain.errors import ErrorType
from currencyx.domain.models import (
    ConversionInfo,
    ConversionQuery,
    ConversionResult,
    ConvertParams,
    CurrencyCode,
    CurrencyInfo,
    ExchangeRatesParams,
    ExchangeRatesResult,
    HealthCheckResult,
    RateResolution,
    ResultError,
)

log = logging.getLogger(__name__)  # Create logger for this module


class CurrencyExchange(ABC):
    """
    Contract all currency exchanges must satisfy.

    The service stores exchanges behind this interface only. Expected failure
    modes (network errors, unknown rates) are reported inside the returned
    envelopes; convert and get_exchange_rates never raise for them.
    """

    base: CurrencyCode

    # Optional capability: detailed health information. Exchanges that offer it
    # set this to True and override get_health_info.
    supports_health_info: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Exchange name for identification."""
        raise NotImplementedError

    @property
    @abstractmethod
    def currencies(self) -> List[CurrencyCode]:
        """All currency codes this exchange recognises."""
        raise NotImplementedError

    @abstractmethod
    def set_base(self, currency: CurrencyCode) -> "CurrencyExchange":
        raise NotImplementedError

    @abstractmethod
    def set_key(self, key: str) -> "CurrencyExchange":
        raise NotImplementedError

    @abstractmethod
    def get_exchange_rates(self, params: Optional[ExchangeRatesParams] = None) -> ExchangeRatesResult:
        raise NotImplementedError

    @abstractmethod
    def convert(self, params: ConvertParams) -> ConversionResult:
        raise NotImplementedError

    @abstractmethod
    def get_convert_rate(self, from_currency: CurrencyCode, to_currency: CurrencyCode) -> Optional[float]:
        raise NotImplementedError

    @abstractmethod
    def round(self, value: float, precision: int = 2) -> float:
        raise NotImplementedError

    @abstractmethod
    def is_healthy(self) -> bool:
        raise NotImplementedError

    def get_health_info(self) -> HealthCheckResult:
        raise NotImplementedError(f"{type(self).__name__} does not provide health information")


class BaseExchange(CurrencyExchange):
    """
    Shared behaviour for all concrete exchanges.

    Subclasses implement get_exchange_rates and _resolve_rate. Every envelope
    they return must be produced by build_conversion_result or
    build_rates_result.
    """

    def __init__(self, base: CurrencyCode = "USD"):
        """
        Initialize base exchange.

        Args:
            base: Base currency code all rates are expressed against
        """
        self.base = base

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name}, base={self.base})>"

    # ------------------------------------------------------------------
    # Currency metadata passthrough
    # ------------------------------------------------------------------

    @property
    def currencies(self) -> List[CurrencyCode]:
        return currency_table.get_common_currency_codes()

    def get_list(self) -> List[CurrencyInfo]:
        return currency_table.get_currency_list()

    def filter_by_name(self, name: str) -> List[CurrencyInfo]:
        return currency_table.filter_by_name(name)

    def filter_by_country(self, iso2: str) -> List[CurrencyInfo]:
        return currency_table.filter_by_country(iso2)

    def get_by_country(self, iso2: str) -> Optional[CurrencyInfo]:
        return currency_table.get_by_country(iso2)

    def get_by_code(self, code: CurrencyCode) -> Optional[CurrencyInfo]:
        return currency_table.lookup(code)

    def get_by_symbol(self, symbol: str) -> Optional[CurrencyInfo]:
        return currency_table.get_by_symbol(symbol)

    def get_by_numeric_code(self, numeric_code: str) -> Optional[CurrencyInfo]:
        return currency_table.get_by_numeric_code(numeric_code)

    # ------------------------------------------------------------------
    # Mutable state
    # ------------------------------------------------------------------

    def set_base(self, currency: CurrencyCode) -> "BaseExchange":
        self.base = currency
        return self

    def set_key(self, key: str) -> "BaseExchange":
        """Default does nothing; exchanges that need a credential override this."""
        return self

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def round(self, value: float, precision: int = 2) -> float:
        """
        Round a value to ``precision`` decimal places, half away from zero.

        The value is scaled by 10**precision, rounded to an integer and scaled
        back. The scaled float goes through its shortest string form so that
        123.456 * 100 (12345.599999999999) rounds to 12346.

        Args:
            value: Value to round
            precision: Decimal places (default: 2); may be negative

        Returns:
            Rounded value as float
        """
        factor = Decimal(10) ** precision
        scaled = Decimal(str(value * float(factor))).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return float(scaled / factor)

    # ------------------------------------------------------------------
    # Result envelopes
    # ------------------------------------------------------------------

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def build_conversion_result(
        self,
        amount: float,
        from_currency: CurrencyCode,
        to_currency: CurrencyCode,
        result: Optional[float] = None,
        rate: Optional[float] = None,
        error: Optional[ResultError] = None,
    ) -> ConversionResult:
        """Create a conversion envelope; success requires no error and a result."""
        now = self._now()
        return ConversionResult(
            success=error is None and result is not None,
            query=ConversionQuery(from_currency=from_currency, to_currency=to_currency, amount=amount),
            info=ConversionInfo(timestamp=int(now.timestamp() * 1000), rate=rate),
            date=now.isoformat(),
            result=result,
            error=error,
        )

    def build_rates_result(
        self,
        base: CurrencyCode,
        rates: Mapping[CurrencyCode, float],
        error: Optional[ResultError] = None,
    ) -> ExchangeRatesResult:
        """Create a rates envelope; success requires no error and at least one rate."""
        now = self._now()
        return ExchangeRatesResult(
            success=error is None and len(rates) > 0,
            timestamp=int(now.timestamp() * 1000),
            date=now.isoformat(),
            base=base,
            rates=dict(rates),
            error=error,
        )

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    @abstractmethod
    def _resolve_rate(self, from_currency: CurrencyCode, to_currency: CurrencyCode) -> RateResolution:
        """
        Resolve the from→to rate from the upstream source.

        Called only for distinct currencies. Implementations report upstream
        failures through RateResolution.error and a missing rate as rate=None.
        """
        raise NotImplementedError

    def convert(self, params: ConvertParams) -> ConversionResult:
        """
        Convert an amount between two currencies.

        Identical currencies convert at rate 1.0 without contacting the
        upstream source. Never raises for upstream or parsing failures.

        Args:
            params: Amount and currency pair

        Returns:
            ConversionResult envelope
        """
        amount = params.amount
        from_currency, to_currency = params.from_currency, params.to_currency

        if from_currency == to_currency:
            return self.build_conversion_result(amount, from_currency, to_currency, amount, 1.0)

        try:
            resolution = self._resolve_rate(from_currency, to_currency)
            if resolution.error is not None:
                return self.build_conversion_result(
                    amount, from_currency, to_currency, error=resolution.error
                )
            if resolution.rate is None:
                return self.build_conversion_result(
                    amount,
                    from_currency,
                    to_currency,
                    error=ResultError(
                        info=f"Failed to get exchange rate for {from_currency}-{to_currency}",
                        type=ErrorType.RATE_NOT_FOUND,
                    ),
                )
            rate = resolution.rate
            return self.build_conversion_result(amount, from_currency, to_currency, rate * amount, rate)
        except Exception as e:
            log.error("%s: conversion %s-%s failed: %s", self.name, from_currency, to_currency, e, exc_info=True)
            return self.build_conversion_result(
                amount,
                from_currency,
                to_currency,
                error=ResultError(info=str(e) or "Conversion failed", type=ErrorType.CONVERSION_ERROR),
            )

    def get_convert_rate(self, from_currency: CurrencyCode, to_currency: CurrencyCode) -> Optional[float]:
        """
        Get the conversion rate between two currencies.

        Returns:
            Rate as float, 1.0 for identical codes, or None when unavailable
        """
        if from_currency == to_currency:
            return 1.0
        try:
            return self._resolve_rate(from_currency, to_currency).rate
        except Exception as e:
            log.error("%s: failed to get conversion rate for %s-%s: %s", self.name, from_currency, to_currency, e)
            return None

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def _health_check_pair(self) -> Tuple[CurrencyCode, CurrencyCode]:
        other = "EUR" if self.base != "EUR" else "USD"
        return self.base, other

    def is_healthy(self) -> bool:
        """Check the upstream once with a single rate lookup."""
        from_currency, to_currency = self._health_check_pair()
        return self.get_convert_rate(from_currency, to_currency) is not None
