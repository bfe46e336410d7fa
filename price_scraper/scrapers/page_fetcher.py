# price_scraper/scrapers/page_fetcher.py

"""Fetch a retailer product page and parse it for extraction."""

from urllib.parse import urlparse

from bs4 import BeautifulSoup

from price_scraper.scrapers.base_client import BaseClient


class PageFetcher(BaseClient):
    """Downloads one product page per call and returns its parsed tree."""

    def __init__(self) -> None:
        super().__init__("fetcher")

    def fetch_document(self, url: str) -> BeautifulSoup | None:
        """GET *url* and parse it with lxml.

        Returns ``None`` on timeout, transport error, non-200 status or
        a body that cannot be parsed.
        """
        headers = self._build_headers()
        parsed = urlparse(url)
        if parsed.scheme and parsed.netloc:
            headers["Referer"] = f"{parsed.scheme}://{parsed.netloc}/"

        resp = self._fetch_get(
            url, headers, timeout=self.settings.PAGE_TIMEOUT
        )
        if resp is None:
            return None

        try:
            return BeautifulSoup(resp.text, "lxml")
        except Exception as exc:
            self.logger.warning(
                "[fetcher] Error parsing HTML for %s: %s",
                url,
                exc,
                exc_info=True,
            )
            return None
