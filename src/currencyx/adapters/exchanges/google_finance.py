# src/currencyx/adapters/exchanges/google_finance.py
"""
Google Finance Exchange - Quote Page Scraper

Google Finance has no rates API; each currency pair has its own quote page
and the rate is embedded in the markup. One page is fetched per pair and the
rate is pulled out by the RateExtractor pattern ladder. There is no batch
endpoint, so a rates request fetches every symbol separately and keeps the
ones that resolved.

Files that USE this module:
- currencyx.config.exchanges (google() factory)
- tests.test_google_finance_exchange (unit tests)

Files that this module USES:
- currencyx.adapters.exchanges.base (BaseExchange)
- currencyx.adapters.exchanges.extraction (RateExtractor, DEFAULT_PATTERNS)
- currencyx.config.settings (default URL and timeout)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Standard library for logging messages
from typing import Dict, Optional, Sequence  # Type hints

import requests  # HTTP library for fetching quote pages

from currencyx.adapters.exchanges.base import BaseExchange
from currencyx.adapters.exchanges.extraction import RateExtractor, RatePattern
from currencyx.config.settings import settings
from currencyx.domain.errors import ErrorType, FetchError
from currencyx.domain.models import (
    CurrencyCode,
    ExchangeRatesParams,
    ExchangeRatesResult,
    RateResolution,
    ResultError,
)

log = logging.getLogger(__name__)  # Create logger for this module

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class GoogleFinanceExchange(BaseExchange):
    """Exchange that scrapes per-pair Google Finance quote pages."""

    def __init__(
        self,
        base: CurrencyCode = "USD",
        timeout: Optional[float] = None,
        base_url: Optional[str] = None,
        patterns: Optional[Sequence[RatePattern]] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize Google Finance exchange.

        Args:
            base: Base currency for rates requests
            timeout: HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            base_url: Site root (defaults to settings.google_finance_url)
            patterns: Extraction ladder (defaults to DEFAULT_PATTERNS)
            user_agent: Browser User-Agent sent with every request
        """
        super().__init__(base)
        self.timeout = timeout or settings.http_timeout_seconds
        self.base_url = (base_url or settings.google_finance_url).rstrip("/")
        self.extractor = RateExtractor(patterns)
        self.headers = {
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
            "Accept-Language": "en-US,en;q=0.9",
        }

    @property
    def name(self) -> str:
        return "google"

    def quote_url(self, from_currency: CurrencyCode, to_currency: CurrencyCode) -> str:
        return f"{self.base_url}/quote/{from_currency}-{to_currency}"

    def _fetch_html(self, url: str) -> str:
        """
        Fetch a quote page.

        Raises:
            FetchError: If the request times out, fails or returns a non-2xx status
        """
        try:
            log.debug("Fetching quote page %s", url)
            resp = requests.get(url, headers=self.headers, timeout=self.timeout)
            resp.raise_for_status()
            return resp.text
        except requests.exceptions.Timeout:
            log.warning("Quote page timeout after %s seconds for %s", self.timeout, url)
            raise FetchError(f"Quote page timeout after {self.timeout}s for {url}")
        except requests.exceptions.RequestException as e:
            log.warning("Quote page request failed for %s: %s", url, e)
            raise FetchError(f"Quote page request failed for {url}: {e}") from e

    def fetch_rate(self, from_currency: CurrencyCode, to_currency: CurrencyCode) -> Optional[float]:
        """
        Fetch and extract one from→to rate.

        Returns:
            Positive rate, or None when the page could not be fetched or held no usable rate
        """
        try:
            html = self._fetch_html(self.quote_url(from_currency, to_currency))
        except FetchError:
            return None
        return self.extractor.extract(html, from_currency, to_currency)

    def _resolve_rate(self, from_currency: CurrencyCode, to_currency: CurrencyCode) -> RateResolution:
        return RateResolution(rate=self.fetch_rate(from_currency, to_currency))

    def get_exchange_rates(self, params: Optional[ExchangeRatesParams] = None) -> ExchangeRatesResult:
        """
        Get rates relative to the base currency, one quote page per symbol.

        A symbol equal to the base is 1.0 without a request. Symbols whose
        page fails or holds no rate are left out of the result.

        Args:
            params: Optional base and symbols (symbols default to all known currencies)

        Returns:
            ExchangeRatesResult envelope
        """
        params = params or ExchangeRatesParams()
        if params.base:
            self.set_base(params.base)
        base = self.base
        symbols = list(params.symbols) if params.symbols is not None else self.currencies

        rates: Dict[CurrencyCode, float] = {}
        try:
            for symbol in symbols:
                if symbol in rates:
                    continue
                if symbol == base:
                    rates[symbol] = 1.0
                    continue
                rate = self.fetch_rate(base, symbol)
                if rate is None:
                    log.debug("No %s-%s rate, omitting %s", base, symbol, symbol)
                    continue
                rates[symbol] = rate
        except Exception as e:
            log.error("Google Finance rates request failed unexpectedly: %s", e, exc_info=True)
            return self.build_rates_result(base, {}, ResultError(info=str(e), type=ErrorType.FETCH_ERROR))

        if not rates:
            return self.build_rates_result(
                base,
                rates,
                ResultError(info=f"No exchange rates found for base {base}", type=ErrorType.RATE_NOT_FOUND),
            )
        return self.build_rates_result(base, rates)
