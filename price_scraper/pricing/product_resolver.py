# price_scraper/pricing/product_resolver.py

"""Turn one fetched product page into a Product record."""

import json
import logging
from typing import Any, Protocol

from bs4 import BeautifulSoup

from price_scraper.config.settings import Settings
from price_scraper.models.product import (
    NAME_NOT_AVAILABLE,
    PRICE_NOT_AVAILABLE,
    Product,
)
from price_scraper.pricing.currency_registry import (
    DEFAULT_REGISTRY,
    CurrencyRegistry,
)
from price_scraper.pricing.price_extractor import PriceExtractor
from price_scraper.scrapers.page_fetcher import PageFetcher

logger = logging.getLogger("price_scraper.resolver")


class DocumentFetcher(Protocol):
    """Anything that can turn a URL into a parsed document."""

    def fetch_document(self, url: str) -> BeautifulSoup | None: ...


def load_page_selectors(path: Any = None) -> dict[str, Any]:
    """Load the product-page selectors from selectors.json."""
    with open(path or Settings.SELECTORS_PATH, encoding="utf-8") as f:
        all_selectors: dict[str, Any] = json.load(f)
    result: dict[str, Any] = all_selectors.get("product_page", {})
    return result


class ProductResolver:
    """Extracts title, price and currency from a product page.

    Price selectors are a priority list: they are tried in order and
    the first selector match whose text yields a price in the expected
    currency ends the search.
    """

    def __init__(
        self,
        registry: CurrencyRegistry = DEFAULT_REGISTRY,
        extractor: PriceExtractor | None = None,
        selectors: dict[str, Any] | None = None,
        fetcher: DocumentFetcher | None = None,
    ) -> None:
        self.registry = registry
        self.extractor = extractor or PriceExtractor(registry)
        page_selectors = (
            selectors if selectors is not None else load_page_selectors()
        )
        self.title_selector: str = page_selectors.get("title", "title")
        self.price_selectors: tuple[str, ...] = tuple(
            page_selectors.get("price", [])
        )
        self.fetcher: DocumentFetcher = fetcher or PageFetcher()

    def extract_title(self, document: BeautifulSoup) -> str:
        """Trimmed text of the first title node, or ``""``."""
        node = document.select_one(self.title_selector)
        if node is None:
            return ""
        return node.get_text().strip()

    def extract_price(
        self, document: BeautifulSoup, expected_currency: str,
    ) -> str:
        """First price found walking the selectors in priority order."""
        for selector in self.price_selectors:
            for node in document.select(selector):
                price = self.extractor.extract(
                    node.get_text(), expected_currency
                )
                if price:
                    logger.debug(
                        "Price %s matched selector %s", price, selector
                    )
                    return price
        return ""

    def resolve(
        self, url: str, document: BeautifulSoup, country_code: str,
    ) -> Product:
        """Build the Product for *url* from an already parsed page.

        Returns :meth:`Product.empty` when neither a title nor a price
        could be found.
        """
        title = self.extract_title(document)
        currency = self.registry.detect_currency(country_code, url)
        price = self.extract_price(document, currency)

        if not title and not price:
            logger.info("Could not extract product info from %s", url)
            return Product.empty()
        if not price:
            logger.warning(
                "Found product but no price from %s (title: '%s')",
                url,
                title,
            )
            price = PRICE_NOT_AVAILABLE
        elif not title:
            logger.warning(
                "Found price but no title from %s (price: '%s')",
                url,
                price,
            )
            title = NAME_NOT_AVAILABLE
        else:
            logger.info(
                "Extracted from %s (title: '%s', price: '%s')",
                url,
                title,
                price,
            )

        return Product(
            product_name=title,
            price=price,
            currency=currency,
            link=url,
        )

    def resolve_url(self, url: str, country_code: str) -> Product:
        """Fetch *url* once and resolve it; failures give an empty Product."""
        document = self.fetcher.fetch_document(url)
        if document is None:
            return Product.empty()
        return self.resolve(url, document, country_code)
