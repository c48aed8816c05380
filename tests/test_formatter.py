# tests/test_formatter.py
"""
Formatter Tests - Locale-aware Currency Formatting

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- currencyx.adapters.formatting.formatter (format_currency under test)
- unittest.mock (patching settings)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from unittest.mock import patch  # Patching the default locale

from currencyx.adapters.formatting.formatter import fallback_format, format_currency


class TestFormatCurrency:
    def test_us_dollars(self):
        assert format_currency(1234.5, "USD", "en_US") == "$1,234.50"

    def test_hyphenated_locale(self):
        assert format_currency(1234.5, "USD", "en-US") == "$1,234.50"

    def test_zero_decimal_currency(self):
        assert format_currency(1500, "JPY", "en_US") == "¥1,500"

    def test_german_grouping(self):
        formatted = format_currency(1234.5, "EUR", "de_DE")
        assert formatted.startswith("1.234,50")
        assert "€" in formatted

    def test_default_locale_from_settings(self):
        with patch("currencyx.adapters.formatting.formatter.settings") as mock_settings:
            mock_settings.default_locale = "en_US"
            assert format_currency(10, "GBP") == "£10.00"

    def test_unknown_currency_falls_back(self):
        assert format_currency(12.5, "XYZ", "en_US") == "XYZ 12.50"

    @pytest.mark.parametrize("locale", ["zz_ZZ", "!!"])
    def test_unknown_locale_falls_back(self, locale):
        assert format_currency(5, "USD", locale) == "USD 5.00"

    def test_fallback_format(self):
        assert fallback_format(-3.1, "EUR") == "EUR -3.10"
