# price_scraper/pricing/price_extractor.py

"""Currency-aware price token extraction from short page text."""

import logging
import re

from price_scraper.pricing.currency_registry import (
    DEFAULT_REGISTRY,
    CurrencyRegistry,
)

logger = logging.getLogger("price_scraper.pricing")


class PriceExtractor:
    """Find a price token for one expected currency in a text fragment.

    Only the expected currency's symbols are tried. A price shown in any
    other currency is ignored rather than returned, since the service
    does no currency conversion.
    """

    MAX_TEXT_LENGTH = 50    # longer fragments are treated as prose
    MAX_PART_LENGTH = 20    # embedded-symbol parts must be shorter

    _DIGIT_RE = re.compile(r"\d")

    def __init__(
        self, registry: CurrencyRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self.registry = registry

    def extract(self, text: str | None, expected_currency: str) -> str:
        """Return a symbol-bearing price token, or ``""`` if none matches."""
        if not text:
            return ""
        text = text.strip()
        if len(text) > self.MAX_TEXT_LENGTH:
            return ""

        for symbol in self.registry.symbols_for(expected_currency):
            if symbol not in text:
                continue
            if text.startswith(symbol):
                token = self._prefixed_token(text, symbol)
            else:
                token = self._embedded_token(text, symbol)
            if token:
                return token

        return ""

    @staticmethod
    def _prefixed_token(text: str, symbol: str) -> str:
        """First whitespace-delimited word, if it holds more than the symbol."""
        first_word = text.split()[0]
        if len(first_word) > len(symbol):
            return first_word
        return ""

    def _embedded_token(self, text: str, symbol: str) -> str:
        """Handle suffix or mid-text symbols such as ``'1,299 INR'``."""
        for part in text.split(symbol):
            part = part.strip()
            if (
                self._DIGIT_RE.search(part)
                and len(part) < self.MAX_PART_LENGTH
            ):
                return symbol + part
        return ""
