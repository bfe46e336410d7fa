# price_scraper/server/app.py

"""HTTP API exposing the price search over JSON."""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from price_scraper.config.settings import Settings
from price_scraper.services.search_service import SearchService

logger = logging.getLogger("price_scraper.server")


class SearchRequest(BaseModel):
    """Body of ``POST /search``."""

    country: str | None = None
    query: str | None = None


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _api_docs() -> dict[str, Any]:
    """Static self-description served at ``GET /``."""
    return {
        "service": "Product Price Scraper API",
        "version": Settings.SERVICE_VERSION,
        "description": (
            "Search for product prices using Google Custom Search API "
            "with automatic currency detection based on country and "
            "retailer"
        ),
        "endpoints": {
            "GET /health": "Health check endpoint",
            "POST /search": {
                "description": "Search for product prices",
                "input": {
                    "country": (
                        "Country code (US, IN, UK, CA, AU) - "
                        "defaults to US"
                    ),
                    "query": "Product search query",
                },
                "example_request": {
                    "country": "US",
                    "query": "iPhone 16 Pro, 128GB",
                },
                "example_response": [
                    {
                        "link": "https://amazon.com/...",
                        "price": "$999",
                        "currency": "USD",
                        "productName": "Apple iPhone 16 Pro",
                    },
                ],
            },
        },
        "supported_countries": [
            c["code"] for c in Settings.SUPPORTED_COUNTRIES
        ],
        "data_source": "Google Custom Search API",
        "note": "Requires GOOGLE_API_KEY and GOOGLE_CSE_ID",
    }


def create_app(service: SearchService | None = None) -> FastAPI:
    """Build the FastAPI application around a search service."""
    app = FastAPI(
        title="Product Price Scraper API",
        version=Settings.SERVICE_VERSION,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.state.search_service = service or SearchService()

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).strftime(
                "%Y-%m-%dT%H:%M:%SZ"
            ),
            "service": Settings.SERVICE_NAME,
        }

    @app.get("/")
    async def root() -> dict[str, Any]:
        return _api_docs()

    @app.post("/search")
    async def search(request: Request) -> Any:
        """Run a price search; an empty list means nothing was found."""
        try:
            body = await request.json()
            payload = SearchRequest.model_validate(body)
        except (ValueError, ValidationError):
            return _error(
                "Invalid request body. Expected JSON with "
                "'country' and 'query' fields.",
                400,
            )

        query = (payload.query or "").strip()
        if not query:
            return _error(
                "Query is required and cannot be empty.", 400
            )

        country = (payload.country or "").strip() or Settings.DEFAULT_COUNTRY

        search_service: SearchService = app.state.search_service
        result = await search_service.search(query, country)
        return [p.to_dict() for p in result.products]

    return app


def run_server(port: int | None = None) -> None:
    """Serve the API with uvicorn until interrupted."""
    import uvicorn

    listen_port = port or Settings.PORT
    logger.info(
        "Product Price Scraper API starting on port %d", listen_port
    )
    # log_config=None keeps the run handlers from setup_logging()
    uvicorn.run(
        create_app(), host="0.0.0.0", port=listen_port, log_config=None
    )
