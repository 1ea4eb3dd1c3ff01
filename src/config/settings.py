# src/config/settings.py

"""Central configuration for the ebay_feed service."""

import os
import tempfile
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the ebay_feed service."""

    # --- HTTP ---
    REQUEST_TIMEOUT: int = 30           # Seconds before a request times out
    ERROR_BODY_LIMIT: int = 500         # Upstream body chars kept in errors

    # --- Feedback (Trading GetFeedback) ---
    FEEDBACK_DEFAULT_LIMIT: int = 30
    FEEDBACK_MAX_LIMIT: int = 50
    FEEDBACK_PAGE_SIZE: int = 25        # Trading API practical page size
    FEEDBACK_MAX_PAGES: int = 10        # Hard stop on page number
    FEEDBACK_TYPE: str = "FeedbackReceivedAsSeller"

    # --- Listings (Trading / Finding / Browse) ---
    LISTINGS_DEFAULT_LIMIT: int = 24
    LISTINGS_MAX_LIMIT: int = 600       # Hard cap returned to client
    LISTINGS_MAX_PAGES: int = 50
    TRADING_PAGE_SIZE: int = 200
    FINDING_PAGE_SIZE: int = 100
    BROWSE_PAGE_SIZE: int = 200

    # --- Caching ---
    CACHE_TTL: float = 1800.0           # Listing/feedback payload TTL (secs)
    TOKEN_EXPIRY_MARGIN: float = 60.0   # Refresh bearer this early (secs)
    CACHE_DIR: Path = Path(
        os.getenv("EBAY_CACHE_DIR") or tempfile.gettempdir()
    )
    LISTINGS_CACHE_FILE: str = "ebay_feed_listings.json"
    FEEDBACK_CACHE_FILE: str = "ebay_feed_feedback.json"

    # --- Carousel ---
    CAROUSEL_DESIRED_COUNT: int = 30
    CAROUSEL_MAX_DOTS: int = 12
    CAROUSEL_INTERVAL: float = 5.0

    # --- Logging ---
    CONSOLE_LOG_LEVEL: str = os.getenv("EBAY_LOG_LEVEL", "WARNING")

    # --- eBay endpoints ---
    TRADING_COMPAT_LEVEL: str = "1203"
    FINDING_SERVICE_VERSION: str = "1.13.0"
    OAUTH_SCOPE: str = "https://api.ebay.com/oauth/api_scope"
    ENDPOINTS: dict[str, dict[str, str]] = {
        "production": {
            "trading": "https://api.ebay.com/ws/api.dll",
            "finding": (
                "https://svcs.ebay.com/services/search/FindingService/v1"
            ),
            "browse": (
                "https://api.ebay.com/buy/browse/v1/item_summary/search"
            ),
            "oauth": "https://api.ebay.com/identity/v1/oauth2/token",
        },
        "sandbox": {
            "trading": "https://api.sandbox.ebay.com/ws/api.dll",
            "finding": (
                "https://svcs.sandbox.ebay.com/services/search/"
                "FindingService/v1"
            ),
            "browse": (
                "https://api.sandbox.ebay.com/buy/browse/v1/"
                "item_summary/search"
            ),
            "oauth": (
                "https://api.sandbox.ebay.com/identity/v1/oauth2/token"
            ),
        },
    }
    ITEM_URL_TEMPLATE: str = "https://www.ebay.com/itm/{item_id}"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- HTTP server ---
    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8000
