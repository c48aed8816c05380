# tests/test_fixer_exchange.py
"""
Fixer Exchange Tests - Base-relative API and Cross-rate Derivation

Tests API interactions, error mapping, base-relative, inverse and cross-rate
resolution against synthetic rate tables, and the health check.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- currencyx.adapters.exchanges.fixer (FixerExchange under test)
- unittest.mock (Mock for API mocking)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock, patch  # Mock objects and patching for testing without real API calls
import requests  # HTTP library (used for mocking responses)

from currencyx.adapters.exchanges.fixer import FixerExchange
from currencyx.domain.errors import ConfigurationError, ErrorType
from currencyx.domain.models import ConvertParams, ExchangeRatesParams

RATES_FROM_USD = {"EUR": 0.9, "GBP": 0.8, "JPY": 150.0}


def fixer_response(table, base="USD"):
    """Build a requests.get side effect answering from a base-relative table."""

    def _get(url, params=None, timeout=None):
        requested = params.get("symbols")
        symbols = requested.split(",") if requested else list(table)
        resp = Mock()
        resp.raise_for_status.return_value = None
        resp.json.return_value = {
            "success": True,
            "timestamp": 1700000000,
            "base": params.get("base", base),
            "date": "2023-11-14",
            "rates": {s: table[s] for s in symbols if s in table},
        }
        return resp

    return _get


def _reporting_base(reported, rates):
    """requests.get side effect whose payload names a fixed base, whatever was asked."""
    resp = Mock()
    resp.raise_for_status.return_value = None
    resp.json.return_value = {"success": True, "base": reported, "rates": rates}
    return lambda url, params=None, timeout=None: resp


class TestFixerInit:
    def test_defaults(self):
        exchange = FixerExchange(access_key="key")
        assert exchange.name == "fixer"
        assert exchange.base == "EUR"
        assert exchange.timeout > 0
        assert exchange.base_url.startswith("http")
        assert not exchange.base_url.endswith("/")
        assert exchange.supports_health_info is True

    @pytest.mark.parametrize("key", ["", None, "   "])
    def test_missing_key_raises(self, key):
        with pytest.raises(ConfigurationError, match="requires an access key"):
            FixerExchange(access_key=key)

    def test_set_key(self):
        exchange = FixerExchange(access_key="old")
        assert exchange.set_key("new") is exchange
        assert exchange.access_key == "new"
        with pytest.raises(ConfigurationError):
            exchange.set_key("")


class TestFixerRates:
    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_request_parameters(self, mock_get):
        mock_get.side_effect = fixer_response(RATES_FROM_USD)
        exchange = FixerExchange(access_key="secret", base="USD", base_url="http://fixer.test/api", timeout=3)

        result = exchange.get_exchange_rates(ExchangeRatesParams(symbols=["EUR", "GBP"]))

        assert result.success is True
        assert result.rates == {"EUR": 0.9, "GBP": 0.8}
        assert result.base == "USD"
        args, kwargs = mock_get.call_args
        assert args[0] == "http://fixer.test/api/latest"
        assert kwargs["params"] == {"access_key": "secret", "base": "USD", "symbols": "EUR,GBP"}
        assert kwargs["timeout"] == 3

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_base_symbol_needs_no_request(self, mock_get):
        exchange = FixerExchange(access_key="key", base="EUR")

        result = exchange.get_exchange_rates(ExchangeRatesParams(base="USD", symbols=["USD"]))

        assert result.success is True
        assert result.rates == {"USD": 1}
        assert exchange.base == "USD"
        mock_get.assert_not_called()

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_base_symbol_mixed_with_others(self, mock_get):
        mock_get.side_effect = fixer_response(RATES_FROM_USD)
        exchange = FixerExchange(access_key="key", base="USD")

        result = exchange.get_exchange_rates(ExchangeRatesParams(symbols=["USD", "EUR"]))

        assert result.rates == {"USD": 1.0, "EUR": 0.9}
        assert mock_get.call_args.kwargs["params"]["symbols"] == "EUR"

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_no_symbols_asks_for_everything(self, mock_get):
        mock_get.side_effect = fixer_response(RATES_FROM_USD)
        exchange = FixerExchange(access_key="key", base="USD")

        result = exchange.get_exchange_rates()

        assert "symbols" not in mock_get.call_args.kwargs["params"]
        assert result.rates == RATES_FROM_USD

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_api_error(self, mock_get):
        mock_response = Mock()
        mock_response.raise_for_status.return_value = None
        mock_response.json.return_value = {
            "success": False,
            "error": {"code": 101, "type": "invalid_access_key", "info": "You have not supplied a valid API Access Key."},
        }
        mock_get.return_value = mock_response

        result = FixerExchange(access_key="bad", base="USD").get_exchange_rates(
            ExchangeRatesParams(symbols=["EUR"])
        )

        assert result.success is False
        assert result.rates == {}
        assert result.error.type == ErrorType.API_ERROR
        assert result.error.code == 101
        assert "valid API Access Key" in result.error.info

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_timeout_is_fetch_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()

        result = FixerExchange(access_key="key", timeout=2).get_exchange_rates(ExchangeRatesParams(symbols=["USD"]))

        assert result.success is False
        assert result.error.type == ErrorType.FETCH_ERROR
        assert "timeout" in result.error.info

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_http_error_is_fetch_error(self, mock_get):
        mock_response = Mock()
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("503 Server Error")
        mock_get.return_value = mock_response

        result = FixerExchange(access_key="key").get_exchange_rates(ExchangeRatesParams(symbols=["USD"]))

        assert result.error.type == ErrorType.FETCH_ERROR

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_invalid_json_is_fetch_error(self, mock_get):
        mock_response = Mock()
        mock_response.raise_for_status.return_value = None
        mock_response.json.side_effect = ValueError("Invalid JSON")
        mock_get.return_value = mock_response

        result = FixerExchange(access_key="key").get_exchange_rates(ExchangeRatesParams(symbols=["USD"]))

        assert result.error.type == ErrorType.FETCH_ERROR
        assert "invalid JSON" in result.error.info

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_unusable_rates_are_dropped(self, mock_get):
        mock_get.side_effect = fixer_response({"EUR": 0, "GBP": "n/a", "JPY": -1})

        result = FixerExchange(access_key="key", base="USD").get_exchange_rates(
            ExchangeRatesParams(symbols=["EUR", "GBP", "JPY"])
        )

        assert result.success is False
        assert result.rates == {}
        assert result.error.type == ErrorType.RATE_NOT_FOUND

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_empty_symbols_is_rate_not_found(self, mock_get):
        result = FixerExchange(access_key="key", base="USD").get_exchange_rates(ExchangeRatesParams(symbols=[]))

        assert result.success is False
        assert result.rates == {}
        assert result.error.type == ErrorType.RATE_NOT_FOUND
        mock_get.assert_not_called()

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_other_reported_base_drops_local_entries(self, mock_get):
        mock_get.side_effect = _reporting_base("EUR", {"GBP": 0.85})

        result = FixerExchange(access_key="key", base="USD").get_exchange_rates(
            ExchangeRatesParams(symbols=["USD", "GBP"])
        )

        assert result.success is True
        assert result.base == "EUR"
        assert result.rates == {"GBP": 0.85}


class TestFixerConversion:
    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_from_base(self, mock_get):
        mock_get.side_effect = fixer_response(RATES_FROM_USD)
        exchange = FixerExchange(access_key="key", base="USD")

        result = exchange.convert(ConvertParams(amount=100, from_currency="USD", to_currency="EUR"))

        assert result.success is True
        assert result.info.rate == pytest.approx(0.9)
        assert result.result == pytest.approx(90.0)
        assert mock_get.call_count == 1

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_to_base_is_inverse(self, mock_get):
        mock_get.side_effect = fixer_response(RATES_FROM_USD)
        exchange = FixerExchange(access_key="key", base="USD")

        assert exchange.get_convert_rate("EUR", "USD") == pytest.approx(1 / 0.9)

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_cross_rate_uses_one_batched_call(self, mock_get):
        mock_get.side_effect = fixer_response(RATES_FROM_USD)
        exchange = FixerExchange(access_key="key", base="USD")

        rate = exchange.get_convert_rate("EUR", "GBP")

        assert rate == pytest.approx(0.8 / 0.9)
        assert mock_get.call_count == 1
        assert mock_get.call_args.kwargs["params"]["symbols"] == "EUR,GBP"

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_cross_rate_is_reciprocal(self, mock_get):
        mock_get.side_effect = fixer_response(RATES_FROM_USD)
        exchange = FixerExchange(access_key="key", base="USD")

        assert exchange.get_convert_rate("EUR", "GBP") == pytest.approx(1 / exchange.get_convert_rate("GBP", "EUR"))

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_cross_rates_compose(self, mock_get):
        mock_get.side_effect = fixer_response(RATES_FROM_USD)
        exchange = FixerExchange(access_key="key", base="USD")

        eur_gbp = exchange.get_convert_rate("EUR", "GBP")
        gbp_jpy = exchange.get_convert_rate("GBP", "JPY")
        eur_jpy = exchange.get_convert_rate("EUR", "JPY")

        assert eur_gbp * gbp_jpy == pytest.approx(eur_jpy)

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_missing_leg_is_rate_not_found(self, mock_get):
        mock_get.side_effect = fixer_response(RATES_FROM_USD)
        exchange = FixerExchange(access_key="key", base="USD")

        result = exchange.convert(ConvertParams(amount=10, from_currency="EUR", to_currency="XYZ"))

        assert result.success is False
        assert result.error.type == ErrorType.RATE_NOT_FOUND

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_zero_leg_never_divides(self, mock_get):
        mock_get.side_effect = fixer_response({"EUR": 0.0, "GBP": 0.8})
        exchange = FixerExchange(access_key="key", base="USD")

        result = exchange.convert(ConvertParams(amount=10, from_currency="EUR", to_currency="GBP"))

        assert result.success is False
        assert result.error.type == ErrorType.RATE_NOT_FOUND

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_same_currency_makes_no_request(self, mock_get):
        exchange = FixerExchange(access_key="key", base="USD")

        result = exchange.convert(ConvertParams(amount=42, from_currency="GBP", to_currency="GBP"))

        assert result.success is True
        assert result.result == 42
        mock_get.assert_not_called()

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_network_failure_is_fetch_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("refused")
        exchange = FixerExchange(access_key="key", base="USD")

        result = exchange.convert(ConvertParams(amount=10, from_currency="USD", to_currency="EUR"))

        assert result.success is False
        assert result.error.type == ErrorType.FETCH_ERROR

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_other_reported_base_is_rate_not_found(self, mock_get):
        mock_get.side_effect = _reporting_base("EUR", {"GBP": 0.85})
        exchange = FixerExchange(access_key="key", base="USD")

        result = exchange.convert(ConvertParams(amount=100, from_currency="USD", to_currency="GBP"))

        assert result.success is False
        assert result.result is None
        assert result.error.type == ErrorType.RATE_NOT_FOUND


class TestFixerHealth:
    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_healthy(self, mock_get):
        mock_get.side_effect = fixer_response({"USD": 1.08}, base="EUR")
        exchange = FixerExchange(access_key="key", base="USD")

        info = exchange.get_health_info()

        assert info.healthy is True
        assert info.latency_ms >= 0
        assert info.error is None
        assert mock_get.call_args.kwargs["params"]["base"] == "EUR"
        assert mock_get.call_args.kwargs["params"]["symbols"] == "USD"
        assert exchange.is_healthy() is True

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_unhealthy_on_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()

        info = FixerExchange(access_key="key").get_health_info()

        assert info.healthy is False
        assert "timeout" in info.error

    @patch("currencyx.adapters.exchanges.fixer.requests.get")
    def test_unhealthy_without_usd_rate(self, mock_get):
        mock_get.side_effect = fixer_response({}, base="EUR")

        assert FixerExchange(access_key="key").is_healthy() is False
