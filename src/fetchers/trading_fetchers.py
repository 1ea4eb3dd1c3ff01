# src/fetchers/trading_fetchers.py

"""Trading API fetchers: seller feedback and the seller's active listings."""

from collections.abc import Callable, Hashable
from xml.sax.saxutils import escape

from src.config.settings import Settings
from src.fetchers.base_fetcher import BaseFetcher
from src.filters.deduplicator import feedback_key, listing_key
from src.models.listing import ListingItem
from src.models.page import PageResult, Record
from src.parsers import trading_parser

_NAMESPACE = "urn:ebay:apis:eBLBaseComponents"


class TradingFetcher(BaseFetcher):
    """Builds Trading API headers and request envelopes."""

    api_name = "Trading"

    def _headers(self, call_name: str) -> dict[str, str]:
        config = self.config
        headers = {
            "Content-Type": "text/xml",
            "X-EBAY-API-CALL-NAME": call_name,
            "X-EBAY-API-SITEID": config.site_id,
            "X-EBAY-API-COMPATIBILITY-LEVEL": Settings.TRADING_COMPAT_LEVEL,
        }
        # Auth'n'Auth tokens work without keys; send them when present
        if config.dev_id:
            headers["X-EBAY-API-DEV-NAME"] = config.dev_id
        if config.app_id:
            headers["X-EBAY-API-APP-NAME"] = config.app_id
        if config.cert_id:
            headers["X-EBAY-API-CERT-NAME"] = config.cert_id
        return headers

    def _envelope(self, call_name: str, inner: str) -> str:
        token = escape(self.config.user_token)
        return (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            f'<{call_name}Request xmlns="{_NAMESPACE}">'
            "<RequesterCredentials>"
            f"<eBayAuthToken>{token}</eBayAuthToken>"
            "</RequesterCredentials>"
            f"{inner}"
            f"</{call_name}Request>"
        )


class TradingFeedbackFetcher(TradingFetcher):
    """GetFeedback: feedback received by the seller, newest first."""

    source_name = "trading_feedback"
    max_pages = Settings.FEEDBACK_MAX_PAGES
    max_page_size = Settings.FEEDBACK_PAGE_SIZE

    def dedup_key(self) -> Callable[[Record], Hashable] | None:
        return feedback_key  # type: ignore[return-value]

    def build_request(self, page: int) -> str:
        user = (
            f"<UserID>{escape(self.seller)}</UserID>" if self.seller else ""
        )
        return self._envelope(
            "GetFeedback",
            f"{user}"
            "<Pagination>"
            f"<EntriesPerPage>{self.page_size}</EntriesPerPage>"
            f"<PageNumber>{page}</PageNumber>"
            "</Pagination>"
            "<DetailLevel>ReturnAll</DetailLevel>"
            f"<FeedbackType>{escape(self.config.feedback_type)}</FeedbackType>",
        )

    def fetch_page(self, page: int) -> PageResult:
        resp = self._post(
            self.config.endpoint("trading"),
            page,
            self.build_request(page),
            self._headers("GetFeedback"),
        )
        return trading_parser.parse_feedback_page(resp.text)


class TradingListingsFetcher(TradingFetcher):
    """GetMyeBaySelling: the token owner's active listings."""

    source_name = "trading_listings"
    max_page_size = Settings.TRADING_PAGE_SIZE

    def dedup_key(self) -> Callable[[Record], Hashable] | None:
        return listing_key  # type: ignore[return-value]

    def build_request(self, page: int) -> str:
        return self._envelope(
            "GetMyeBaySelling",
            "<ActiveList>"
            "<Include>true</Include>"
            "<Pagination>"
            f"<EntriesPerPage>{self.page_size}</EntriesPerPage>"
            f"<PageNumber>{page}</PageNumber>"
            "</Pagination>"
            "</ActiveList>"
            "<DetailLevel>ReturnAll</DetailLevel>"
            "<WarningLevel>High</WarningLevel>",
        )

    def fetch_page(self, page: int) -> PageResult:
        resp = self._post(
            self.config.endpoint("trading"),
            page,
            self.build_request(page),
            self._headers("GetMyeBaySelling"),
        )
        result = trading_parser.parse_listings_page(resp.text)
        result.items = [
            item for item in result.items
            if isinstance(item, ListingItem)
            and self._matches_keywords(item.title)
        ]
        return result
