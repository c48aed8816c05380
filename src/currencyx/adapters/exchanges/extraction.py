# src/currencyx/adapters/exchanges/extraction.py
"""
Quote Page Rate Extraction

Pulls a numeric exchange rate out of free-form quote page markup. The page has
no stable schema, so extraction runs an ordered ladder of candidate patterns,
most specific first. The first candidate that parses as a positive finite
number wins; a page with no usable candidate yields None, which is distinct
from a rate of 0.

A pattern is any object with a ``name`` and a
``candidates(document, from_currency, to_currency)`` method yielding raw
strings. New markup shapes are supported by adding a pattern to the ladder
passed to RateExtractor; callers never change.

Files that USE this module:
- currencyx.adapters.exchanges.google_finance (GoogleFinanceExchange uses RateExtractor)
- tests.test_extraction (unit tests)

Files that this module USES:
- None (pure parsing helpers)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Standard library for logging messages
import math  # Finite-number checks
import re  # Regular expressions for finding rate patterns in markup
from dataclasses import dataclass  # Decorator for creating data classes
from functools import cached_property  # Parse the soup once per document
from typing import Iterable, Iterator, Optional, Protocol, Sequence, Tuple  # Type hints

from bs4 import BeautifulSoup  # HTML parsing library for extracting data from web pages

log = logging.getLogger(__name__)  # Create logger for this module

# Digits, grouped by any of GROUPING_CHARS, with an optional fraction
NUMBER = r"(?P<rate>\d(?:[\d,'\u00a0\u202f\u2019 ]*\d)?(?:\.\d+)?)"

# Characters used as thousands separators in rendered numbers
GROUPING_CHARS = (",", " ", "\u00a0", "\u202f", "'", "\u2019")


def parse_rate(text: Optional[str]) -> Optional[float]:
    """
    Parse a rate from a text fragment.

    Removes grouping separators and converts to float.

    Args:
        text: Text containing a number, e.g. "1,234.56"

    Returns:
        Positive finite float, or None if the text is empty, not a number,
        zero, negative, infinite or NaN
    """
    if text is None:
        return None

    cleaned = str(text).strip()
    for ch in GROUPING_CHARS:
        cleaned = cleaned.replace(ch, "")
    if not cleaned:
        return None

    try:
        value = float(cleaned)
    except ValueError:
        return None

    if not math.isfinite(value) or value <= 0:
        return None
    return value


class QuoteDocument:
    """Markup of one quote page; the parsed tree is built on first use."""

    def __init__(self, html: str):
        self.html = html

    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "html.parser")


class RatePattern(Protocol):
    name: str

    def candidates(self, document: QuoteDocument, from_currency: str, to_currency: str) -> Iterable[str]:
        ...


@dataclass(frozen=True)
class RegexRatePattern:
    """
    Regular expression over the raw markup.

    ``template`` uses %(src)s, %(dst)s and %(number)s placeholders; the
    currency codes are escaped before substitution and %(number)s provides
    the named ``rate`` group.
    """
    name: str
    template: str
    flags: int = re.IGNORECASE

    def compile(self, from_currency: str, to_currency: str) -> re.Pattern:
        expr = self.template % {
            "src": re.escape(from_currency),
            "dst": re.escape(to_currency),
            "number": NUMBER,
        }
        return re.compile(expr, self.flags)

    def candidates(self, document: QuoteDocument, from_currency: str, to_currency: str) -> Iterator[str]:
        for match in self.compile(from_currency, to_currency).finditer(document.html):
            yield match.group("rate")


@dataclass(frozen=True)
class AttributeRatePattern:
    """Attribute of the element tagged with data-source/data-target for the pair."""
    name: str
    attribute: str = "data-last-price"

    def candidates(self, document: QuoteDocument, from_currency: str, to_currency: str) -> Iterator[str]:
        tags = document.soup.find_all(attrs={"data-source": from_currency, "data-target": to_currency})
        for tag in tags:
            value = tag.get(self.attribute)
            if value:
                yield value


@dataclass(frozen=True)
class SelectorRatePattern:
    """Text of elements matching a CSS selector."""
    name: str
    selector: str

    def candidates(self, document: QuoteDocument, from_currency: str, to_currency: str) -> Iterator[str]:
        for tag in document.soup.select(self.selector):
            yield tag.get_text(strip=True)


DEFAULT_PATTERNS: Tuple[RatePattern, ...] = (
    AttributeRatePattern(name="data-last-price"),
    RegexRatePattern(
        name="data-source-target",
        template=r'data-source="%(src)s"[^>]*data-target="%(dst)s"[^>]*>(?:\s*<[^>]+>)*\s*%(number)s',
    ),
    RegexRatePattern(
        name="json-price",
        template=r'"%(src)s-%(dst)s"[^}]*"price"\s*:\s*"?%(number)s',
    ),
    SelectorRatePattern(name="quote-price", selector="div.YMlKec.fxKbKc"),
    RegexRatePattern(
        name="pair-dash",
        template=r"%(src)s\s*-\s*%(dst)s[^0-9]*%(number)s",
    ),
    RegexRatePattern(
        name="pair-slash",
        template=r"%(src)s\s*/\s*%(dst)s[^0-9]*%(number)s",
    ),
)


class RateExtractor:
    """Runs the pattern ladder over quote page markup."""

    def __init__(self, patterns: Optional[Sequence[RatePattern]] = None):
        """
        Initialize extractor.

        Args:
            patterns: Ordered patterns to try (defaults to DEFAULT_PATTERNS)
        """
        self.patterns: Tuple[RatePattern, ...] = tuple(patterns) if patterns is not None else DEFAULT_PATTERNS

    def extract(self, html: str, from_currency: str, to_currency: str) -> Optional[float]:
        """
        Extract the from→to rate from quote page markup.

        Args:
            html: Page markup
            from_currency: Source currency code
            to_currency: Target currency code

        Returns:
            Positive rate, or None if no pattern produced a usable value
        """
        if not html:
            return None

        document = QuoteDocument(html)
        for pattern in self.patterns:
            try:
                for candidate in pattern.candidates(document, from_currency, to_currency):
                    rate = parse_rate(candidate)
                    if rate is not None:
                        log.debug("Pattern %s matched %s-%s rate: %s", pattern.name, from_currency, to_currency, rate)
                        return rate
                    log.debug("Pattern %s candidate %r is not a usable rate", pattern.name, candidate)
            except Exception as e:
                log.warning("Pattern %s failed on %s-%s page: %s", pattern.name, from_currency, to_currency, e)

        log.warning("Could not extract %s-%s rate from quote page", from_currency, to_currency)
        return None
