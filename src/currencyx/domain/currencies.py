# src/currencyx/domain/currencies.py
"""
Currency Metadata Table

Static lookup of the common ISO 4217 currencies the exchanges recognise:
symbol, numeric code, minor-unit digits, display templates and the countries
using each currency. Read-only; nothing here touches the network.

Files that USE this module:
- currencyx.adapters.exchanges.base (currencies property and lookup passthrough)
- tests.test_currencies (unit tests)

Files that this module USES:
- currencyx.domain.models (CurrencyInfo record)
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from currencyx.domain.models import CurrencyCode, CurrencyInfo

# code, numeric code, name, symbol, round, decimal, delimiter, short format, countries
_TABLE: Tuple[tuple, ...] = (
    ("USD", "840", "United States dollar", "$", 0.01, 2, ".", "${{amount}}", ("US",)),
    ("EUR", "978", "Euro", "€", 0.01, 2, ".", "€{{amount}}",
     ("AT", "BE", "CY", "EE", "FI", "FR", "DE", "GR", "IE", "IT", "LV", "LT", "LU", "MT",
      "NL", "PT", "SK", "SI", "ES")),
    ("GBP", "826", "British pound", "£", 0.01, 2, ".", "£{{amount}}", ("GB",)),
    ("JPY", "392", "Japanese yen", "¥", 1, 0, "", "¥{{amount}}", ("JP",)),
    ("AUD", "036", "Australian dollar", "A$", 0.01, 2, ".", "A${{amount}}", ("AU",)),
    ("CAD", "124", "Canadian dollar", "C$", 0.01, 2, ".", "C${{amount}}", ("CA",)),
    ("CHF", "756", "Swiss franc", "CHF", 0.01, 2, ".", "CHF {{amount}}", ("CH", "LI")),
    ("CNY", "156", "Chinese yuan", "¥", 0.01, 2, ".", "¥{{amount}}", ("CN",)),
    ("SEK", "752", "Swedish krona", "kr", 0.01, 2, ".", "{{amount}} kr", ("SE",)),
    ("NZD", "554", "New Zealand dollar", "NZ$", 0.01, 2, ".", "NZ${{amount}}", ("NZ",)),
    ("MXN", "484", "Mexican peso", "$", 0.01, 2, ".", "${{amount}}", ("MX",)),
    ("SGD", "702", "Singapore dollar", "S$", 0.01, 2, ".", "S${{amount}}", ("SG",)),
    ("HKD", "344", "Hong Kong dollar", "HK$", 0.01, 2, ".", "HK${{amount}}", ("HK",)),
    ("NOK", "578", "Norwegian krone", "kr", 0.01, 2, ".", "{{amount}} kr", ("NO",)),
    ("KRW", "410", "South Korean won", "₩", 1, 0, "", "₩{{amount}}", ("KR",)),
    ("TRY", "949", "Turkish lira", "₺", 0.01, 2, ".", "₺{{amount}}", ("TR",)),
    ("RUB", "643", "Russian ruble", "₽", 0.01, 2, ".", "₽{{amount}}", ("RU",)),
    ("INR", "356", "Indian rupee", "₹", 0.01, 2, ".", "₹{{amount}}", ("IN",)),
    ("BRL", "986", "Brazilian real", "R$", 0.01, 2, ".", "R${{amount}}", ("BR",)),
    ("ZAR", "710", "South African rand", "R", 0.01, 2, ".", "R{{amount}}", ("ZA",)),
)

COMMON_CURRENCIES: Tuple[CurrencyInfo, ...] = tuple(
    CurrencyInfo(
        code=code,
        numeric_code=numeric_code,
        name=name,
        symbol=symbol,
        round=round_unit,
        decimal=decimal,
        delimiter=delimiter,
        short_format=short_format,
        explicit_format=f"{short_format} {code}",
        countries=countries,
    )
    for code, numeric_code, name, symbol, round_unit, decimal, delimiter, short_format, countries in _TABLE
)


def get_currency_list() -> List[CurrencyInfo]:
    return list(COMMON_CURRENCIES)


def get_common_currency_codes() -> List[CurrencyCode]:
    """Return all known codes in table order."""
    return [c.code for c in COMMON_CURRENCIES]


def lookup(code: CurrencyCode) -> Optional[CurrencyInfo]:
    """
    Find currency metadata by ISO code.

    Args:
        code: ISO 4217 code, compared exactly (e.g. "USD")

    Returns:
        CurrencyInfo or None if the code is not in the table
    """
    for info in COMMON_CURRENCIES:
        if info.code == code:
            return info
    return None


def filter_by_name(name: str) -> List[CurrencyInfo]:
    """Case-insensitive substring match on the currency name."""
    needle = name.lower()
    return [c for c in COMMON_CURRENCIES if needle in c.name.lower()]


def filter_by_country(iso2: str) -> List[CurrencyInfo]:
    """Return every currency used in the country with the given alpha-2 code."""
    iso2 = iso2.upper()
    return [c for c in COMMON_CURRENCIES if iso2 in c.countries]


def get_by_country(iso2: str) -> Optional[CurrencyInfo]:
    matches = filter_by_country(iso2)
    return matches[0] if matches else None


def get_by_symbol(symbol: str) -> Optional[CurrencyInfo]:
    """First currency with this symbol; symbols such as "$" are shared."""
    return next((c for c in COMMON_CURRENCIES if c.symbol == symbol), None)


def get_by_numeric_code(numeric_code: str) -> Optional[CurrencyInfo]:
    return next((c for c in COMMON_CURRENCIES if c.numeric_code == numeric_code), None)
