# price_scraper/filters/product_validator.py

"""Product validation: drop pages that produced nothing usable."""

import logging

from price_scraper.models.product import Product

logger = logging.getLogger("price_scraper.filters")


class ProductValidator:
    """Keep only products that carry a name."""

    @staticmethod
    def validate(
        products: list[Product],
    ) -> tuple[list[Product], int]:
        """Drop products with an empty or whitespace-only name.

        A product without a price is still valid; it carries the
        "Price not available" marker instead. Returns the valid
        products and the count of dropped items.
        """
        valid: list[Product] = []
        dropped = 0

        for product in products:
            if not product.product_name.strip():
                logger.debug(
                    "Dropped empty product (link=%s)", product.link
                )
                dropped += 1
                continue
            valid.append(product)

        if dropped:
            logger.info(
                "Validation dropped %d empty products", dropped
            )

        return valid, dropped
