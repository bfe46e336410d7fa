# price_scraper/pricing/currency_registry.py

"""Static currency lookup tables for retailer domains and countries."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

DEFAULT_CURRENCY = "USD"

# Evaluated by first substring match, so longer domains that contain a
# shorter one (amazon.com.au / amazon.com) must come first.
_DOMAIN_RULES: tuple[tuple[str, str], ...] = (
    # Australian retailers
    ("amazon.com.au", "AUD"),
    ("ebay.com.au", "AUD"),
    ("jbhifi.com.au", "AUD"),
    ("harveynorman.com.au", "AUD"),
    ("bunnings.com.au", "AUD"),
    ("woolworths.com.au", "AUD"),
    ("coles.com.au", "AUD"),
    ("kmart.com.au", "AUD"),
    ("target.com.au", "AUD"),
    # UK retailers
    ("amazon.co.uk", "GBP"),
    ("argos.co.uk", "GBP"),
    ("currys.co.uk", "GBP"),
    ("johnlewis.com", "GBP"),
    ("tesco.com", "GBP"),
    ("asda.com", "GBP"),
    ("very.co.uk", "GBP"),
    ("ao.com", "GBP"),
    ("screwfix.com", "GBP"),
    # Canadian retailers
    ("amazon.ca", "CAD"),
    ("walmart.ca", "CAD"),
    ("bestbuy.ca", "CAD"),
    ("canadiantire.ca", "CAD"),
    ("thebay.com", "CAD"),
    ("costco.ca", "CAD"),
    ("homedepot.ca", "CAD"),
    ("loblaws.ca", "CAD"),
    # Indian retailers
    ("amazon.in", "INR"),
    ("flipkart.com", "INR"),
    ("myntra.com", "INR"),
    ("snapdeal.com", "INR"),
    ("paytmmall.com", "INR"),
    ("tatacliq.com", "INR"),
    ("shopclues.com", "INR"),
    ("croma.com", "INR"),
    ("reliance.com", "INR"),
    # US retailers
    ("amazon.com", "USD"),
    ("walmart.com", "USD"),
    ("target.com", "USD"),
    ("bestbuy.com", "USD"),
    ("ebay.com", "USD"),
    ("newegg.com", "USD"),
    ("costco.com", "USD"),
    ("homedepot.com", "USD"),
    ("lowes.com", "USD"),
    ("macys.com", "USD"),
)

_COUNTRY_CURRENCIES: dict[str, str] = {
    "US": "USD",
    "IN": "INR",
    "UK": "GBP",
    "CA": "CAD",
    "AU": "AUD",
}

_CURRENCY_SYMBOLS: dict[str, tuple[str, ...]] = {
    "USD": ("$",),
    "INR": ("₹", "Rs", "Rs.", "INR"),
    "GBP": ("£",),
    "CAD": ("C$", "$", "CAD"),
    "AUD": ("A$", "$", "AUD"),
}


@dataclass(frozen=True)
class CurrencyRegistry:
    """Read-only currency tables shared by every request.

    Domain detection is an ordered rule list rather than a dict so that
    overlapping substrings resolve the same way on every run.
    """

    domain_rules: tuple[tuple[str, str], ...] = _DOMAIN_RULES
    country_currencies: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(
            dict(_COUNTRY_CURRENCIES)
        )
    )
    currency_symbols: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType(
            dict(_CURRENCY_SYMBOLS)
        )
    )

    def currency_for_domain(self, url: str) -> str | None:
        """Return the currency of the first domain rule found in *url*."""
        for domain, currency in self.domain_rules:
            if domain in url:
                return currency
        return None

    def currency_for_country(self, country_code: str) -> str:
        """Map a country code to its currency, defaulting to USD."""
        return self.country_currencies.get(
            (country_code or "").strip().upper(), DEFAULT_CURRENCY
        )

    def symbols_for(self, currency_code: str) -> tuple[str, ...]:
        """Return the symbol tokens for a currency in trial order."""
        return self.currency_symbols.get(currency_code, ())

    def detect_currency(self, country_code: str, url: str) -> str:
        """Pick the currency for a product page.

        The retailer domain wins over the caller's country; an unknown
        country falls back to USD.
        """
        currency = self.currency_for_domain(url)
        if currency is not None:
            return currency
        return self.currency_for_country(country_code)

    @property
    def currencies(self) -> tuple[str, ...]:
        """All recognised currency codes."""
        return tuple(self.currency_symbols)


DEFAULT_REGISTRY = CurrencyRegistry()
