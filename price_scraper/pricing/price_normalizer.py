# price_scraper/pricing/price_normalizer.py

"""Convert displayed price strings into sortable numbers."""

import math
import re

from price_scraper.models.product import PRICE_NOT_AVAILABLE

# Sorts priceless and unparseable products after every real price
PRICE_SENTINEL: float = math.inf

_NON_NUMERIC_RE = re.compile(r"[^\d.]")


def numeric_value(price: str | None) -> float:
    """Turn a price like ``'₹82,999.00'`` into ``82999.0``.

    Empty strings, the "Price not available" marker and anything that
    does not parse as a float all map to :data:`PRICE_SENTINEL`.
    """
    if not price or price == PRICE_NOT_AVAILABLE:
        return PRICE_SENTINEL

    cleaned = _NON_NUMERIC_RE.sub("", price)
    try:
        return float(cleaned)
    except ValueError:
        return PRICE_SENTINEL
