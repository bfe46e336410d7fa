# price_scraper/scrapers/base_client.py

"""Shared HTTP plumbing for the search and page-fetch clients."""

import logging
import threading
import time
from typing import Any

from curl_cffi import requests as curl_requests

from price_scraper.config.settings import Settings


class BaseClient:
    """Base for clients that talk to external sites.

    Requests are made exactly once: a timeout, transport error or
    non-200 status is logged and reported as ``None`` so that one bad
    URL never stops the caller's batch.

    curl_cffi sessions must not be shared between threads, so each
    thread that calls the client gets its own session.
    """

    def __init__(self, client_name: str) -> None:
        self.client_name = client_name
        self.logger = logging.getLogger(
            f"price_scraper.{client_name}"
        )
        self.settings = Settings()
        self._local = threading.local()
        self._sessions: list[curl_requests.Session] = []
        self._sessions_lock = threading.Lock()
        self.session = self._new_session()

    def _new_session(self) -> curl_requests.Session:
        session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        with self._sessions_lock:
            self._sessions.append(session)
        return session

    @property
    def session(self) -> curl_requests.Session:
        """Session owned by the calling thread, created on first use."""
        session: curl_requests.Session | None = getattr(
            self._local, "session", None
        )
        if session is None:
            session = self._new_session()
            self._local.session = session
        return session

    @session.setter
    def session(self, session: curl_requests.Session) -> None:
        self._local.session = session

    def close(self) -> None:
        """Close every session opened by any thread."""
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
        self._local = threading.local()

    def _wait(self, delay: float) -> None:
        """Sleep between consecutive outbound calls."""
        time.sleep(delay)

    def _fetch_get(
        self,
        url: str,
        headers: dict[str, str],
        timeout: int,
        params: dict[str, Any] | None = None,
    ) -> curl_requests.Response | None:
        """Single GET; ``None`` on any failure."""
        try:
            resp = self.session.get(
                url,
                headers=headers,
                params=params,
                timeout=timeout,
            )
        except Exception as exc:
            self.logger.warning(
                "[%s] Request error for %s: %s",
                self.client_name,
                url,
                exc,
                exc_info=True,
            )
            return None

        if resp.status_code != 200:
            self.logger.warning(
                "[%s] HTTP %d for %s",
                self.client_name,
                resp.status_code,
                url,
            )
            self._on_http_error(resp)
            return None
        return resp

    def _on_http_error(self, resp: curl_requests.Response) -> None:
        """Hook for subclasses that can explain specific status codes."""

    def _build_headers(self) -> dict[str, str]:
        """Default browser-like headers plus the desktop User-Agent."""
        return {
            **self.settings.DEFAULT_HEADERS,
            "User-Agent": self.settings.USER_AGENT,
        }
