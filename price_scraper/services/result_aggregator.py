# price_scraper/services/result_aggregator.py

"""Resolve candidate links into a price-ordered product list."""

import asyncio
import logging
from collections.abc import Callable, Iterable

from price_scraper.config.settings import Settings
from price_scraper.filters.deduplicator import LinkDeduplicator
from price_scraper.filters.product_validator import ProductValidator
from price_scraper.models.product import Product
from price_scraper.pricing.price_normalizer import numeric_value

logger = logging.getLogger("price_scraper.aggregator")

ResolverFn = Callable[[str, str], Product]


def sort_by_price(products: list[Product]) -> list[Product]:
    """Stable ascending sort on the normalised price."""
    return sorted(products, key=lambda p: numeric_value(p.price))


class ResultAggregator:
    """Runs the resolver over each unique link and orders the results.

    Resolver calls are blocking, so each runs in a worker thread. At
    most ``max_concurrency`` run at once; the default of 1 processes
    links strictly one after another. Results are gathered in discovery
    order and then sorted by price, so completion order never matters.
    """

    def __init__(self, max_concurrency: int | None = None) -> None:
        self.max_concurrency = max(
            1, max_concurrency or Settings.MAX_CONCURRENT_FETCHES
        )

    async def _resolve_all(
        self,
        links: list[str],
        country_code: str,
        resolver_fn: ResolverFn,
    ) -> list[Product]:
        """Resolve every link; a failing link becomes an empty Product."""
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def run_one(link: str) -> Product:
            async with semaphore:
                logger.info("Scraping product page: %s", link)
                product: Product = await asyncio.to_thread(
                    resolver_fn, link, country_code
                )
                return product

        outcomes = await asyncio.gather(
            *(run_one(link) for link in links),
            return_exceptions=True,
        )

        products: list[Product] = []
        for link, outcome in zip(links, outcomes):
            if isinstance(outcome, Product):
                products.append(outcome)
            elif isinstance(outcome, Exception):
                logger.error(
                    "Resolver error for %s: %s",
                    link,
                    outcome,
                    exc_info=outcome,
                )
                products.append(Product.empty())
            else:
                # Cancellation and interpreter exits end the whole batch
                logger.error(
                    "Resolver aborted for %s: %r", link, outcome
                )
                raise outcome
        return products

    async def aggregate(
        self,
        urls: Iterable[str],
        country_code: str,
        resolver_fn: ResolverFn,
    ) -> list[Product]:
        """Deduplicate, resolve, drop empty results and sort by price.

        Products with equal prices keep their discovery order.
        """
        links, _ = LinkDeduplicator.deduplicate(urls)
        if not links:
            return []

        resolved = await self._resolve_all(
            links, country_code, resolver_fn
        )
        kept, dropped = ProductValidator.validate(resolved)

        for product in kept:
            if product.has_price:
                logger.info(
                    "Found product: %s - %s",
                    product.product_name,
                    product.price,
                )
            else:
                logger.info(
                    "Found product (no price): %s",
                    product.product_name,
                )

        ordered = sort_by_price(kept)
        logger.info(
            "Aggregated %d products from %d links (%d dropped)",
            len(ordered),
            len(links),
            dropped,
        )
        return ordered
