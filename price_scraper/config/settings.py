# price_scraper/config/settings.py

"""Central configuration for the price_scraper service."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the price_scraper service."""

    # --- Scraping ---
    SEARCH_DELAY: float = 0.1           # Seconds between search API calls
    SEARCH_TIMEOUT: int = 15            # Seconds before a search call times out
    PAGE_TIMEOUT: int = 10              # Seconds before a page fetch times out
    MAX_CONCURRENT_FETCHES: int = 1     # 1 = strictly sequential page fetches

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    USER_AGENT: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/91.0.4472.124 Safari/537.36"
    )
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": (
            "text/html,application/xhtml+xml,"
            "application/xml;q=0.9,image/avif,"
            "image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        "Upgrade-Insecure-Requests": "1",
    }

    # --- Google Custom Search ---
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GOOGLE_CSE_ID: str = os.getenv("GOOGLE_CSE_ID", "")
    GOOGLE_SEARCH_URL: str = (
        "https://www.googleapis.com/customsearch/v1"
    )
    COMBINED_RESULTS: int = 10          # num= for the combined query
    INDIVIDUAL_RESULTS: int = 5         # num= for per-retailer queries

    # --- Server ---
    PORT: int = int(os.getenv("PORT", "8080"))
    SERVICE_NAME: str = "price-scraper"
    SERVICE_VERSION: str = "1.0.0"

    # --- Countries & retailers ---
    DEFAULT_COUNTRY: str = "US"
    SUPPORTED_COUNTRIES: list[dict[str, str]] = [
        {"code": "US", "label": "United States"},
        {"code": "CA", "label": "Canada"},
        {"code": "UK", "label": "United Kingdom"},
        {"code": "AU", "label": "Australia"},
        {"code": "IN", "label": "India"},
    ]
    SEARCH_GEO: dict[str, str] = {
        "US": "us",
        "IN": "in",
        "UK": "uk",
        "CA": "ca",
        "AU": "au",
    }
    # Allow-list for the combined query and for result filtering
    RETAILER_SITES: dict[str, list[str]] = {
        "US": [
            "amazon.com",
            "walmart.com",
            "bestbuy.com",
            "target.com",
            "ebay.com",
            "apple.com",
            "bhphotovideo.com",
        ],
        "IN": [
            "amazon.in",
            "flipkart.com",
            "myntra.com",
            "paytmmall.com",
            "snapdeal.com",
            "apple.com",
        ],
        "UK": [
            "amazon.co.uk",
            "currys.co.uk",
            "argos.co.uk",
            "very.co.uk",
            "apple.com",
            "johnlewis.com",
        ],
        "CA": [
            "amazon.ca",
            "bestbuy.ca",
            "walmart.ca",
            "canadiantire.ca",
            "apple.com",
        ],
        "AU": [
            "amazon.com.au",
            "jbhifi.com.au",
            "officeworks.com.au",
            "apple.com",
            "bigw.com.au",
        ],
    }
    # One "<query> site:<domain>" search per entry
    INDIVIDUAL_SEARCH_SITES: dict[str, list[str]] = {
        "US": [
            "amazon.com",
            "apple.com",
            "walmart.com",
            "bestbuy.com",
            "target.com",
        ],
        "IN": ["amazon.in", "flipkart.com", "apple.com", "myntra.com"],
        "UK": [
            "amazon.co.uk",
            "apple.com",
            "currys.co.uk",
            "argos.co.uk",
        ],
        "CA": ["amazon.ca", "apple.com", "bestbuy.ca", "walmart.ca"],
        "AU": [
            "amazon.com.au",
            "apple.com",
            "jbhifi.com.au",
            "officeworks.com.au",
        ],
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    SELECTORS_PATH: Path = (
        BASE_DIR / "price_scraper" / "config" / "selectors.json"
    )
    LOGS_DIR: Path = BASE_DIR / "logs"
