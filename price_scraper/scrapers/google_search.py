# price_scraper/scrapers/google_search.py

"""Candidate product link discovery via the Google Custom Search JSON API."""

import json
from typing import Any

from curl_cffi import requests as curl_requests

from price_scraper.filters.deduplicator import LinkDeduplicator
from price_scraper.scrapers.base_client import BaseClient

_STATUS_HINTS: dict[int, str] = {
    403: "check that the Custom Search API is enabled and the key is valid",
    429: "daily quota exceeded (100 free searches per day)",
}


class GoogleSearchClient(BaseClient):
    """Finds retailer product pages for a query in one country.

    One combined ``site:a OR site:b`` query is followed by one query per
    major retailer to widen coverage. Every failure path yields an empty
    list; running out of quota is not an error for the caller.
    """

    def __init__(self) -> None:
        super().__init__("search")

    # ── Country tables ───────────────────────────────────

    def _country_key(self, country: str) -> str:
        """Normalise *country*; unknown codes use the default tables."""
        key = (country or "").strip().upper()
        if key in self.settings.RETAILER_SITES:
            return key
        return self.settings.DEFAULT_COUNTRY

    def retailers_for(self, country: str) -> list[str]:
        """Allow-listed retailer domains for *country*."""
        return self.settings.RETAILER_SITES[self._country_key(country)]

    def geo_for(self, country: str) -> str:
        """Google ``gl`` geolocation parameter for *country*."""
        return self.settings.SEARCH_GEO[self._country_key(country)]

    @staticmethod
    def build_combined_query(query: str, retailers: list[str]) -> str:
        """``'<q> site:a OR <q> site:b ...'`` over all retailers."""
        return " OR ".join(
            f"{query} site:{retailer}" for retailer in retailers
        )

    # ── API calls ────────────────────────────────────────

    def _has_credentials(self) -> bool:
        return bool(
            self.settings.GOOGLE_API_KEY and self.settings.GOOGLE_CSE_ID
        )

    def _on_http_error(self, resp: curl_requests.Response) -> None:
        """Log the response body and a hint for well-known statuses."""
        hint = _STATUS_HINTS.get(resp.status_code)
        if hint:
            self.logger.error(
                "[search] Error %d: %s", resp.status_code, hint
            )
        self.logger.debug("[search] Response body: %s", resp.text)

    def _search(
        self, search_query: str, country: str, num: int,
    ) -> list[dict[str, Any]]:
        """Run one Custom Search request and return its ``items``."""
        params: dict[str, Any] = {
            "key": self.settings.GOOGLE_API_KEY,
            "cx": self.settings.GOOGLE_CSE_ID,
            "q": search_query,
            "num": num,
            "gl": self.geo_for(country),
            "hl": "en",
        }
        self.logger.info("[search] Search query: %s", search_query)

        resp = self._fetch_get(
            self.settings.GOOGLE_SEARCH_URL,
            {"Accept": "application/json"},
            timeout=self.settings.SEARCH_TIMEOUT,
            params=params,
        )
        if resp is None:
            return []

        try:
            data: dict[str, Any] = json.loads(resp.text)
        except ValueError as exc:
            self.logger.warning(
                "[search] Error decoding API response: %s", exc
            )
            return []

        items: list[dict[str, Any]] = data.get("items", []) or []
        for item in items:
            self.logger.debug(
                "[search] Result: %s - %s",
                item.get("title", ""),
                item.get("link", ""),
            )
        return items

    def _filter_retailer_links(
        self, items: list[dict[str, Any]], retailers: list[str],
    ) -> list[str]:
        """Keep links that belong to an allow-listed retailer."""
        links: list[str] = []
        for item in items:
            link = str(item.get("link", "") or "")
            if any(retailer in link for retailer in retailers):
                links.append(link)
        return links

    # ── Public API ───────────────────────────────────────

    def search_combined(self, query: str, country: str) -> list[str]:
        """One OR-query across every allow-listed retailer."""
        retailers = self.retailers_for(country)
        items = self._search(
            self.build_combined_query(query, retailers),
            country,
            self.settings.COMBINED_RESULTS,
        )
        links = self._filter_retailer_links(items, retailers)
        self.logger.info(
            "[search] Found %d retailer links from combined search",
            len(links),
        )
        return links

    def search_individual(self, query: str, country: str) -> list[str]:
        """One ``site:`` query per major retailer, throttled."""
        key = self._country_key(country)
        retailers = self.retailers_for(country)
        links: list[str] = []

        for site in self.settings.INDIVIDUAL_SEARCH_SITES[key]:
            items = self._search(
                f"{query} site:{site}",
                country,
                self.settings.INDIVIDUAL_RESULTS,
            )
            links.extend(self._filter_retailer_links(items, retailers))
            self._wait(self.settings.SEARCH_DELAY)

        unique, _ = LinkDeduplicator.deduplicate(links)
        return unique

    def discover_candidate_links(
        self, query: str, country: str,
    ) -> list[str]:
        """Combined plus per-retailer discovery, deduplicated in order."""
        if not self._has_credentials():
            self.logger.warning(
                "[search] GOOGLE_API_KEY / GOOGLE_CSE_ID not configured"
            )
            return []

        try:
            links = self.search_combined(query, country)
            links += self.search_individual(query, country)
        except Exception as exc:
            self.logger.error(
                "[search] Discovery failed: %s", exc, exc_info=True
            )
            return []

        unique, _ = LinkDeduplicator.deduplicate(links)
        self.logger.info(
            "[search] %d candidate links for '%s' (%s)",
            len(unique),
            query,
            country,
        )
        return unique
