# src/currencyx/domain/models.py
"""
Domain Models - Requests, Result Envelopes and Currency Metadata

This module contains the value objects passed into and returned from every
exchange and the service:
- Conversion and rates requests
- Conversion and rates result envelopes (the "rate envelope")
- Currency metadata records
- Health reporting records

Files that USE this module:
- currencyx.adapters.exchanges.* (build envelopes, read requests)
- currencyx.application.currency_service (passes requests/results through)
- currencyx.domain.currencies (CurrencyInfo records)
- tests.* (tests build requests and inspect results)

Files that this module USES:
- currencyx.domain.errors (ErrorType for ResultError.type)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import asdict, dataclass, field  # Data classes and dict conversion
from typing import Any, Dict, Optional, Sequence, Tuple, Union  # Type hints

from currencyx.domain.errors import ErrorType

CurrencyCode = str


@dataclass(frozen=True)
class ConvertParams:
    """Request to convert ``amount`` from one currency to another."""
    amount: float
    from_currency: CurrencyCode
    to_currency: CurrencyCode


@dataclass(frozen=True)
class ExchangeRatesParams:
    """
    Request for rates relative to ``base``.

    Attributes:
        base: Base currency; None keeps the exchange's current base
        symbols: Currencies to quote; None means the exchange's full set
    """
    base: Optional[CurrencyCode] = None
    symbols: Optional[Sequence[CurrencyCode]] = None


@dataclass(frozen=True)
class ResultError:
    """Error details carried by a failed envelope."""
    info: str
    type: Optional[Union[ErrorType, str]] = None
    code: Optional[int] = None


@dataclass(frozen=True)
class ConversionQuery:
    """Echo of the conversion input."""
    from_currency: CurrencyCode
    to_currency: CurrencyCode
    amount: float


@dataclass(frozen=True)
class ConversionInfo:
    timestamp: int
    rate: Optional[float] = None


@dataclass(frozen=True)
class ConversionResult:
    """
    Result envelope of a conversion.

    ``success`` is True exactly when ``error`` is None and ``result`` is set;
    build it with BaseExchange.build_conversion_result to keep that true.
    """
    success: bool
    query: ConversionQuery
    info: ConversionInfo
    date: str
    result: Optional[float] = None
    error: Optional[ResultError] = None

    def to_dict(self) -> Dict[str, Any]:
        data = _plain(asdict(self))
        # wire shape uses the short keys
        data["query"] = {
            "from": self.query.from_currency,
            "to": self.query.to_currency,
            "amount": self.query.amount,
        }
        return data


@dataclass(frozen=True)
class ExchangeRatesResult:
    """
    Result envelope of a rates request.

    ``success`` is True exactly when ``error`` is None and ``rates`` is non-empty.
    """
    success: bool
    timestamp: int
    date: str
    base: CurrencyCode
    rates: Dict[CurrencyCode, float] = field(default_factory=dict)
    error: Optional[ResultError] = None

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


@dataclass(frozen=True)
class RateResolution:
    """Outcome of resolving one from→to rate inside an exchange."""
    rate: Optional[float] = None
    error: Optional[ResultError] = None


@dataclass(frozen=True)
class CurrencyInfo:
    """
    Static display/formatting metadata for one currency.

    Attributes:
        code: ISO 4217 alphabetic code (e.g. "USD")
        numeric_code: ISO 4217 numeric code (e.g. "840")
        name: English name
        symbol: Display symbol
        round: Smallest cash unit
        decimal: Number of minor-unit digits
        delimiter: Decimal delimiter
        short_format: Template such as "${{amount}}"
        explicit_format: Template such as "${{amount}} USD"
        countries: ISO 3166 alpha-2 codes of countries using it
    """
    code: CurrencyCode
    numeric_code: str
    name: str
    symbol: str
    round: float
    decimal: int
    delimiter: str
    short_format: str
    explicit_format: str
    countries: Tuple[str, ...]


@dataclass(frozen=True)
class HealthCheckResult:
    healthy: bool
    latency_ms: Optional[int] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class ExchangeHealth:
    name: str
    healthy: bool
    current: bool


@dataclass(frozen=True)
class FormattedConversion:
    """Locale-formatted original and converted amounts plus the rate used."""
    original: str
    converted: str
    rate: float


def _plain(value: Any) -> Any:
    """Replace enum members with their string values for JSON output."""
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, ErrorType):
        return value.value
    return value
