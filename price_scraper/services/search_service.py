# price_scraper/services/search_service.py

"""End-to-end price search: discovery, resolution and ordering."""

import asyncio
import logging
from dataclasses import dataclass, field

from price_scraper.config.settings import Settings
from price_scraper.models.product import Product
from price_scraper.pricing.product_resolver import ProductResolver
from price_scraper.scrapers.google_search import GoogleSearchClient
from price_scraper.services.result_aggregator import ResultAggregator

logger = logging.getLogger("price_scraper.service")


@dataclass
class SearchResult:
    """Container for one completed price search."""

    query: str
    country: str
    products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    candidate_count: int = 0
    dropped_count: int = 0


def normalise_country(country: str | None) -> str:
    """Uppercase *country*, substituting the default when blank."""
    cleaned = (country or "").strip().upper()
    return cleaned or Settings.DEFAULT_COUNTRY


class SearchService:
    """Coordinates link discovery and the per-page pipeline."""

    def __init__(
        self,
        search_client: GoogleSearchClient | None = None,
        resolver: ProductResolver | None = None,
        aggregator: ResultAggregator | None = None,
    ) -> None:
        self.search_client = search_client or GoogleSearchClient()
        self.resolver = resolver or ProductResolver()
        self.aggregator = aggregator or ResultAggregator()

    async def search(
        self, query: str, country: str | None = None,
    ) -> SearchResult:
        """Search retailers in *country* for *query*.

        No candidate links (missing credentials, exhausted quota) is a
        normal outcome and produces an empty result.
        """
        country_code = normalise_country(country)
        result = SearchResult(query=query, country=country_code)
        logger.info(
            "Search request: %s (country: %s)", query, country_code
        )

        links: list[str] = await asyncio.to_thread(
            self.search_client.discover_candidate_links,
            query,
            country_code,
        )
        result.candidate_count = len(links)
        if not links:
            logger.warning(
                "No candidate links found for '%s' (%s)",
                query,
                country_code,
            )
            return result

        result.products = await self.aggregator.aggregate(
            links, country_code, self.resolver.resolve_url
        )
        result.dropped_count = len(set(links)) - len(result.products)
        logger.info("Returning %d results", len(result.products))
        return result
