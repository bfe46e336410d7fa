# tests/test_google_search.py

"""Tests for GoogleSearchClient discovery using mocked HTTP responses."""

import json
import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from price_scraper.scrapers.google_search import GoogleSearchClient


def _api_response(links: list[str], status_code: int = 200) -> MagicMock:
    """Build a fake Custom Search response listing *links*."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = json.dumps(
        {"items": [{"title": f"Result {i}", "link": link}
                   for i, link in enumerate(links)]}
    )
    return resp


def _make_client(mock_session: MagicMock) -> GoogleSearchClient:
    """Client with credentials set and the session replaced."""
    client = GoogleSearchClient()
    client.session = mock_session
    client.settings.GOOGLE_API_KEY = "test-key"
    client.settings.GOOGLE_CSE_ID = "test-cx"
    return client


@patch("price_scraper.scrapers.base_client.curl_requests.Session")
class TestDiscoverCandidateLinks(unittest.TestCase):
    """discover_candidate_links end to end."""

    def test_filters_and_deduplicates(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """Only allow-listed retailer links survive, each once."""
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        mock_session.get.return_value = _api_response([
            "https://www.amazon.com/dp/B0D1",
            "https://www.reddit.com/r/iphone/comments/1",
            "https://www.walmart.com/ip/555",
        ])

        client = _make_client(mock_session)
        links = client.discover_candidate_links("iphone 16", "US")

        self.assertEqual(
            links,
            [
                "https://www.amazon.com/dp/B0D1",
                "https://www.walmart.com/ip/555",
            ],
        )
        # One combined search plus one per individual US retailer
        expected_calls = 1 + len(
            client.settings.INDIVIDUAL_SEARCH_SITES["US"]
        )
        self.assertEqual(mock_session.get.call_count, expected_calls)

    def test_combined_results_come_first(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """Combined links precede individual-search links."""
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        side_effects: list[Any] = [
            _api_response(["https://www.bestbuy.com/site/1"]),
            _api_response(["https://www.amazon.com/dp/2"]),
        ] + [_api_response([]) for _ in range(5)]
        mock_session.get.side_effect = side_effects

        client = _make_client(mock_session)
        links = client.discover_candidate_links("tv", "US")

        self.assertEqual(
            links,
            [
                "https://www.bestbuy.com/site/1",
                "https://www.amazon.com/dp/2",
            ],
        )

    def test_missing_credentials_returns_empty(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """Without an API key nothing is requested."""
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session

        client = GoogleSearchClient()
        client.session = mock_session
        client.settings.GOOGLE_API_KEY = ""
        client.settings.GOOGLE_CSE_ID = ""

        self.assertEqual(client.discover_candidate_links("tv", "US"), [])
        mock_session.get.assert_not_called()

    def test_quota_exceeded_returns_empty(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """HTTP 429 on every call yields no links, not an error."""
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        mock_session.get.return_value = _api_response([], status_code=429)

        client = _make_client(mock_session)
        self.assertEqual(client.discover_candidate_links("tv", "US"), [])

    def test_transport_error_returns_empty(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """Connection errors are swallowed per call."""
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        mock_session.get.side_effect = ConnectionError("refused")

        client = _make_client(mock_session)
        self.assertEqual(client.discover_candidate_links("tv", "IN"), [])

    def test_invalid_json_returns_empty(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """A non-JSON body is treated as no results."""
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        bad = MagicMock()
        bad.status_code = 200
        bad.text = "<html>not json</html>"
        mock_session.get.return_value = bad

        client = _make_client(mock_session)
        self.assertEqual(client.discover_candidate_links("tv", "US"), [])


@patch("price_scraper.scrapers.base_client.curl_requests.Session")
class TestRequestParameters(unittest.TestCase):
    """Query strings and country parameters."""

    def test_country_geo_and_allow_list(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """Indian searches use gl=in and only Indian retailers."""
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        mock_session.get.return_value = _api_response([
            "https://www.amazon.in/dp/1",
            "https://www.amazon.com/dp/1",
        ])

        client = _make_client(mock_session)
        links = client.discover_candidate_links("iphone", "IN")

        self.assertEqual(links, ["https://www.amazon.in/dp/1"])
        params = mock_session.get.call_args_list[0].kwargs["params"]
        self.assertEqual(params["gl"], "in")
        self.assertEqual(params["num"], 10)
        self.assertEqual(params["key"], "test-key")
        self.assertEqual(params["cx"], "test-cx")
        self.assertIn("site:flipkart.com", params["q"])

    def test_individual_searches_use_site_filter(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """Per-retailer searches ask for five results each."""
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        mock_session.get.return_value = _api_response([])

        client = _make_client(mock_session)
        client.search_individual("kettle", "UK")

        queries = [
            c.kwargs["params"]["q"]
            for c in mock_session.get.call_args_list
        ]
        self.assertEqual(
            queries,
            [
                f"kettle site:{site}"
                for site in client.settings.INDIVIDUAL_SEARCH_SITES["UK"]
            ],
        )
        for c in mock_session.get.call_args_list:
            self.assertEqual(c.kwargs["params"]["num"], 5)
            self.assertEqual(c.kwargs["params"]["gl"], "uk")

    def test_unknown_country_uses_default_tables(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """Unsupported countries search the US retailers."""
        mock_session_cls.return_value = MagicMock()
        client = GoogleSearchClient()
        self.assertEqual(
            client.retailers_for("DE"),
            client.settings.RETAILER_SITES["US"],
        )
        self.assertEqual(client.geo_for("DE"), "us")

    def test_build_combined_query(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """Each retailer gets its own OR clause."""
        self.assertEqual(
            GoogleSearchClient.build_combined_query(
                "tv", ["a.com", "b.com"]
            ),
            "tv site:a.com OR tv site:b.com",
        )


if __name__ == "__main__":
    unittest.main()
