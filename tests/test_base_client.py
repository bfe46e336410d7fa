# tests/test_base_client.py

"""Tests for BaseClient single-attempt request handling."""

import threading
import unittest
from unittest.mock import MagicMock, patch

from curl_cffi import requests as curl_requests

from price_scraper.scrapers.base_client import BaseClient


class _StubClient(BaseClient):
    """Concrete client exposing protected members for testing."""

    def __init__(self) -> None:
        super().__init__("stub")
        self.http_errors: list[int] = []

    def _on_http_error(self, resp: curl_requests.Response) -> None:
        self.http_errors.append(resp.status_code)

    def fetch_get(
        self, url: str, headers: dict[str, str],
    ) -> curl_requests.Response | None:
        """Public wrapper for _fetch_get."""
        return self._fetch_get(url, headers, timeout=5)


@patch("price_scraper.scrapers.base_client.curl_requests.Session")
class TestFetchGet(unittest.TestCase):
    """BaseClient._fetch_get behaviour."""

    def test_success_returns_response(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """A 200 response is returned as-is."""
        resp = MagicMock(status_code=200)
        mock_session_cls.return_value.get.return_value = resp

        client = _StubClient()
        self.assertIs(client.fetch_get("https://example.com", {}), resp)
        self.assertEqual(client.http_errors, [])

    def test_non_200_calls_hook(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """A failed status is passed to the error hook."""
        mock_session_cls.return_value.get.return_value = MagicMock(
            status_code=429
        )

        client = _StubClient()
        self.assertIsNone(client.fetch_get("https://example.com", {}))
        self.assertEqual(client.http_errors, [429])

    def test_exception_is_not_retried(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """Transport errors give None after exactly one attempt."""
        mock_get = mock_session_cls.return_value.get
        mock_get.side_effect = ConnectionError("reset")

        client = _StubClient()
        self.assertIsNone(client.fetch_get("https://example.com", {}))
        self.assertEqual(mock_get.call_count, 1)

    def test_session_impersonates_browser(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """The curl_cffi session uses the configured browser profile."""
        client = _StubClient()
        mock_session_cls.assert_called_once_with(
            impersonate=client.settings.IMPERSONATE_BROWSER
        )

    def test_each_thread_gets_its_own_session(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """A worker thread never reuses the constructing thread's session."""
        mock_session_cls.side_effect = lambda **_kw: MagicMock()
        client = _StubClient()
        main_session = client.session

        seen: list[object] = []
        worker = threading.Thread(
            target=lambda: seen.extend([client.session, client.session])
        )
        worker.start()
        worker.join()

        self.assertIsNot(seen[0], main_session)
        self.assertIs(seen[0], seen[1])
        self.assertIs(client.session, main_session)

    def test_close_closes_every_session(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """close() releases the sessions of all threads."""
        mock_session_cls.side_effect = lambda **_kw: MagicMock()
        client = _StubClient()
        sessions = [client.session]
        worker = threading.Thread(
            target=lambda: sessions.append(client.session)
        )
        worker.start()
        worker.join()

        client.close()

        for session in sessions:
            session.close.assert_called_once()  # type: ignore[attr-defined]

    def test_build_headers(self, mock_session_cls: MagicMock) -> None:
        """Default headers carry the desktop User-Agent."""
        client = _StubClient()
        headers = client._build_headers()
        self.assertEqual(headers["User-Agent"], client.settings.USER_AGENT)
        self.assertIn("Accept-Language", headers)


if __name__ == "__main__":
    unittest.main()
