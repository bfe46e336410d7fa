# price_scraper/filters/deduplicator.py

"""Candidate link deduplication."""

import logging
from collections.abc import Iterable

logger = logging.getLogger("price_scraper.filters")


class LinkDeduplicator:
    """Remove repeated candidate URLs while keeping discovery order."""

    @staticmethod
    def deduplicate(
        links: Iterable[str],
    ) -> tuple[list[str], int]:
        """Drop exact repeats of a URL string, first occurrence wins.

        Blank entries are dropped as well. Returns the unique links and
        the count of removed entries.
        """
        seen: set[str] = set()
        kept: list[str] = []
        removed = 0

        for link in links:
            if not link or link in seen:
                removed += 1
                continue
            seen.add(link)
            kept.append(link)

        if removed:
            logger.info(
                "Deduplication removed %d repeated links", removed
            )

        return kept, removed
