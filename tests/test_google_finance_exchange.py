# tests/test_google_finance_exchange.py
"""
Google Finance Exchange Tests - Quote Page Scraping

Tests quote page requests, per-symbol rates aggregation and the mapping of
fetch and extraction failures onto result envelopes.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- currencyx.adapters.exchanges.google_finance (GoogleFinanceExchange under test)
- unittest.mock (Mock for HTTP mocking)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock, patch  # Mock objects and patching for testing without real HTTP calls
import requests  # HTTP library (used for mocking responses)

from currencyx.adapters.exchanges.extraction import RegexRatePattern
from currencyx.adapters.exchanges.google_finance import GoogleFinanceExchange
from currencyx.domain.errors import ErrorType
from currencyx.domain.models import ConvertParams, ExchangeRatesParams


def quote_page(from_currency, to_currency, price):
    return (
        "<html><body>"
        f'<div data-source="{from_currency}" data-target="{to_currency}" data-last-price="{price}"></div>'
        "</body></html>"
    )


def pages(prices):
    """Build a requests.get side effect serving quote pages keyed by 'FROM-TO'."""

    def _get(url, headers=None, timeout=None):
        pair = url.rsplit("/", 1)[-1]
        resp = Mock()
        if pair not in prices:
            resp.raise_for_status.side_effect = requests.exceptions.HTTPError("404 Not Found")
            return resp
        src, dst = pair.split("-")
        resp.raise_for_status.return_value = None
        resp.text = quote_page(src, dst, prices[pair])
        return resp

    return _get


class TestGoogleFinanceInit:
    def test_defaults(self):
        exchange = GoogleFinanceExchange()
        assert exchange.name == "google"
        assert exchange.base == "USD"
        assert exchange.timeout > 0
        assert exchange.supports_health_info is False
        assert "Mozilla" in exchange.headers["User-Agent"]

    def test_quote_url(self):
        exchange = GoogleFinanceExchange(base_url="https://finance.test/")
        assert exchange.quote_url("EUR", "USD") == "https://finance.test/quote/EUR-USD"


class TestGoogleFinanceConvert:
    @patch("currencyx.adapters.exchanges.google_finance.requests.get")
    def test_convert(self, mock_get):
        mock_get.side_effect = pages({"EUR-USD": "1.0861"})
        exchange = GoogleFinanceExchange(timeout=4)

        result = exchange.convert(ConvertParams(amount=200, from_currency="EUR", to_currency="USD"))

        assert result.success is True
        assert result.info.rate == pytest.approx(1.0861)
        assert result.result == pytest.approx(217.22)
        args, kwargs = mock_get.call_args
        assert args[0].endswith("/quote/EUR-USD")
        assert kwargs["timeout"] == 4
        assert "User-Agent" in kwargs["headers"]

    @patch("currencyx.adapters.exchanges.google_finance.requests.get")
    def test_unrecognised_page_is_rate_not_found(self, mock_get):
        mock_response = Mock()
        mock_response.raise_for_status.return_value = None
        mock_response.text = "<html><body><p>We're sorry, something went wrong.</p></body></html>"
        mock_get.return_value = mock_response

        result = GoogleFinanceExchange().convert(ConvertParams(amount=1, from_currency="EUR", to_currency="USD"))

        assert result.success is False
        assert result.error.type == ErrorType.RATE_NOT_FOUND

    @patch("currencyx.adapters.exchanges.google_finance.requests.get")
    def test_timeout_is_rate_not_found(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()

        result = GoogleFinanceExchange().convert(ConvertParams(amount=1, from_currency="EUR", to_currency="USD"))

        assert result.success is False
        assert result.error.type == ErrorType.RATE_NOT_FOUND

    @patch("currencyx.adapters.exchanges.google_finance.requests.get")
    def test_same_currency_makes_no_request(self, mock_get):
        result = GoogleFinanceExchange().convert(ConvertParams(amount=7, from_currency="JPY", to_currency="JPY"))

        assert result.success is True
        assert result.result == 7
        mock_get.assert_not_called()

    @patch("currencyx.adapters.exchanges.google_finance.requests.get")
    def test_custom_patterns(self, mock_get):
        mock_response = Mock()
        mock_response.raise_for_status.return_value = None
        mock_response.text = '<meta itemprop="price" content="0.9123">'
        mock_get.return_value = mock_response
        pattern = RegexRatePattern(name="microdata", template=r'itemprop="price" content="%(number)s"')

        exchange = GoogleFinanceExchange(patterns=[pattern])

        assert exchange.get_convert_rate("USD", "EUR") == pytest.approx(0.9123)


class TestGoogleFinanceRates:
    @patch("currencyx.adapters.exchanges.google_finance.requests.get")
    def test_base_symbol_needs_no_request(self, mock_get):
        result = GoogleFinanceExchange().get_exchange_rates(ExchangeRatesParams(base="USD", symbols=["USD"]))

        assert result.success is True
        assert result.rates == {"USD": 1}
        mock_get.assert_not_called()

    @patch("currencyx.adapters.exchanges.google_finance.requests.get")
    def test_one_request_per_symbol(self, mock_get):
        mock_get.side_effect = pages({"USD-EUR": "0.92", "USD-GBP": "0.79"})

        result = GoogleFinanceExchange().get_exchange_rates(ExchangeRatesParams(symbols=["EUR", "USD", "GBP"]))

        assert result.success is True
        assert result.base == "USD"
        assert result.rates == {"EUR": 0.92, "USD": 1.0, "GBP": 0.79}
        assert mock_get.call_count == 2

    @patch("currencyx.adapters.exchanges.google_finance.requests.get")
    def test_failed_symbol_is_omitted(self, mock_get):
        mock_get.side_effect = pages({"EUR-USD": "1.08"})
        exchange = GoogleFinanceExchange()

        result = exchange.get_exchange_rates(ExchangeRatesParams(base="EUR", symbols=["USD", "XYZ"]))

        assert exchange.base == "EUR"
        assert result.success is True
        assert result.rates == {"USD": 1.08}
        assert result.error is None

    @patch("currencyx.adapters.exchanges.google_finance.requests.get")
    def test_nothing_resolved_is_rate_not_found(self, mock_get):
        mock_get.side_effect = pages({})

        result = GoogleFinanceExchange().get_exchange_rates(ExchangeRatesParams(symbols=["EUR", "GBP"]))

        assert result.success is False
        assert result.rates == {}
        assert result.error.type == ErrorType.RATE_NOT_FOUND

    @patch("currencyx.adapters.exchanges.google_finance.requests.get")
    def test_default_symbols_are_known_currencies(self, mock_get):
        mock_get.side_effect = pages({"USD-EUR": "0.92"})
        exchange = GoogleFinanceExchange()

        result = exchange.get_exchange_rates()

        assert result.rates == {"USD": 1.0, "EUR": 0.92}
        assert mock_get.call_count == len(exchange.currencies) - 1

    @patch.object(GoogleFinanceExchange, "fetch_rate")
    def test_unexpected_error_is_fetch_error(self, mock_fetch):
        mock_fetch.side_effect = KeyError("boom")

        result = GoogleFinanceExchange().get_exchange_rates(ExchangeRatesParams(symbols=["EUR"]))

        assert result.success is False
        assert result.error.type == ErrorType.FETCH_ERROR


class TestGoogleFinanceHealth:
    @patch("currencyx.adapters.exchanges.google_finance.requests.get")
    def test_is_healthy_checks_base_pair(self, mock_get):
        mock_get.side_effect = pages({"USD-EUR": "0.92"})
        assert GoogleFinanceExchange().is_healthy() is True
        assert mock_get.call_count == 1

    @patch("currencyx.adapters.exchanges.google_finance.requests.get")
    def test_is_unhealthy_when_unreachable(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("offline")
        assert GoogleFinanceExchange().is_healthy() is False
