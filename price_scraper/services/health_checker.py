# price_scraper/services/health_checker.py

"""Retailer connectivity health checker."""

import asyncio
import logging
import time
from dataclasses import dataclass

from curl_cffi import requests as curl_requests

from price_scraper.config.settings import Settings

logger = logging.getLogger("price_scraper.health")

_HEALTH_TIMEOUT = 10  # seconds per retailer
_SLOW_MS = 5000


@dataclass
class HealthResult:
    """Result of a single retailer health check."""

    source_id: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def retailer_sources(country: str) -> list[dict[str, str]]:
    """Homepage probe targets for the allow-listed retailers of *country*."""
    key = country.upper()
    if key not in Settings.RETAILER_SITES:
        key = Settings.DEFAULT_COUNTRY
    return [
        {"id": domain, "url": f"https://www.{domain}/"}
        for domain in Settings.RETAILER_SITES[key]
    ]


def probe_source(source: dict[str, str]) -> HealthResult:
    """Probe a single retailer homepage for connectivity."""
    source_id = source["id"]
    headers = {
        **Settings.DEFAULT_HEADERS,
        "User-Agent": Settings.USER_AGENT,
    }

    start = time.monotonic()
    try:
        with curl_requests.Session(
            impersonate=Settings.IMPERSONATE_BROWSER
        ) as session:
            resp = session.get(
                source["url"],
                headers=headers,
                timeout=_HEALTH_TIMEOUT,
            )
        elapsed_ms = (time.monotonic() - start) * 1000

        if resp.status_code != 200:
            return HealthResult(
                source_id=source_id,
                status="down",
                latency_ms=elapsed_ms,
                message=f"HTTP {resp.status_code}",
            )

        if elapsed_ms > _SLOW_MS:
            return HealthResult(
                source_id=source_id,
                status="slow",
                latency_ms=elapsed_ms,
                message="High latency",
            )

        return HealthResult(
            source_id=source_id,
            status="ok",
            latency_ms=elapsed_ms,
            message="",
        )

    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            source_id=source_id,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )


class HealthChecker:
    """Runs concurrent health probes against one country's retailers."""

    def __init__(self, country: str = Settings.DEFAULT_COUNTRY) -> None:
        self.sources = retailer_sources(country)

    async def check_all(self) -> list[HealthResult]:
        """Probe every retailer concurrently."""
        tasks = [
            asyncio.to_thread(probe_source, src)
            for src in self.sources
        ]
        results: list[HealthResult] = list(
            await asyncio.gather(*tasks)
        )
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.source_id,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
