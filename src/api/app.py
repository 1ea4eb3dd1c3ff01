# src/api/app.py

"""HTTP entrypoint: ``GET /feedback`` and ``GET /listings``."""

import logging
from typing import Any

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from src.config.credentials import EbayConfig
from src.config.logging_config import setup_logging
from src.exceptions import (
    EbayFeedError,
    MissingConfigError,
    UpstreamAPIError,
    UpstreamHTTPError,
)
from src.models.page import FeedResult
from src.services.feed_service import FeedService

logger = logging.getLogger("ebay_feed.api")

_NO_STORE = {"Cache-Control": "no-store"}


def _flag(value: str | None) -> bool:
    """Interpret ``?force=1`` style query flags."""
    if value is None:
        return False
    return value.strip().lower() in ("", "1", "true", "yes", "on")


def _cache_header(result: FeedResult) -> str:
    if result.stale:
        return "STALE"
    if result.from_cache:
        return "HIT"
    return "MISS"


def error_status(exc: Exception) -> int:
    """HTTP status reported for an exception that reached the handler."""
    if isinstance(exc, (UpstreamHTTPError, UpstreamAPIError)):
        return 502
    return 500


def _error_response(exc: Exception, endpoint: str) -> JSONResponse:
    status = error_status(exc)
    if isinstance(exc, EbayFeedError):
        logger.error("[API] %s failed (%d): %s", endpoint, status, exc)
        message = str(exc)
    else:
        logger.error(
            "[API] Unexpected error in %s: %s", endpoint, exc, exc_info=True
        )
        message = str(exc) or "Unhandled error"
    return JSONResponse(
        {"error": message}, status_code=status, headers=_NO_STORE
    )


def create_app(service: FeedService | None = None) -> FastAPI:
    """Build the FastAPI application around one :class:`FeedService`.

    Without *service*, credentials are read from the environment once,
    here, and shared by every request.
    """
    setup_logging()
    app = FastAPI(
        title="eBay Seller Feed",
        description=(
            "Seller feedback and active listings from the eBay Trading, "
            "Finding and Browse APIs, with a stale-on-error cache."
        ),
        version="1.0.0",
    )

    if service is None:
        service = FeedService(EbayConfig.from_env())
        try:
            logger.info("Listing strategy: %s", service.strategy.value)
        except MissingConfigError as exc:
            logger.warning("Listing strategy unresolved at startup: %s", exc)
    app.state.service = service

    @app.get("/feedback")
    @app.get("/ebay-feedback", include_in_schema=False)
    def feedback(
        limit: str | None = Query(None, description="Entries, max 50"),
        seller: str | None = Query(None),
        username: str | None = Query(None),
        force: str | None = Query(None, description="Bypass the cache"),
    ) -> JSONResponse:
        """Distinct seller feedback entries as a bare JSON array."""
        logger.info(
            "/feedback called with limit=%s seller=%s force=%s",
            limit,
            seller or username,
            force,
        )
        try:
            result = service.get_feedback(
                limit=limit,
                seller=seller or username or "",
                force=_flag(force),
            )
        except Exception as exc:
            return _error_response(exc, "/feedback")

        return JSONResponse(
            result.to_dicts(),
            headers={**_NO_STORE, "X-Cache": _cache_header(result)},
        )

    @app.get("/listings")
    @app.get("/ebay-listings", include_in_schema=False)
    def listings(
        limit: str | None = Query(None, description="Items or 'all'"),
        q: str | None = Query(None),
        keywords: str | None = Query(None),
        seller: str | None = Query(None),
        username: str | None = Query(None),
        force: str | None = Query(None, description="Bypass the cache"),
        debug: str | None = Query(None, description="Attach raw payload"),
    ) -> JSONResponse:
        """Active listings shaped for the carousel: ``{products: [...]}``."""
        logger.info(
            "/listings called with limit=%s q=%s seller=%s force=%s",
            limit,
            q or keywords,
            seller or username,
            force,
        )
        try:
            result = service.get_listings(
                limit=limit,
                keywords=q or keywords or "",
                seller=seller or username or "",
                force=_flag(force),
                debug=_flag(debug),
            )
        except Exception as exc:
            return _error_response(exc, "/listings")

        body: dict[str, Any] = {
            "products": result.to_dicts(),
            "count": len(result.items),
            "source": result.strategy,
        }
        if result.from_cache:
            body["fromCache"] = True
        if result.stale:
            body["stale"] = True
        if result.cached_at is not None:
            body["cachedAt"] = result.cached_at
        if result.raw is not None:
            body["raw"] = result.raw
        return JSONResponse(
            body, headers={**_NO_STORE, "X-Cache": _cache_header(result)}
        )

    return app

