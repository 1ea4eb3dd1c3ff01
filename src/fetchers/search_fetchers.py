# src/fetchers/search_fetchers.py

"""Finding and Browse API fetchers for a seller's active listings."""

from collections.abc import Callable, Hashable
from typing import Any

from src.auth.token_manager import TokenManager
from src.config.credentials import EbayConfig
from src.config.settings import Settings
from src.exceptions import MissingConfigError
from src.fetchers.base_fetcher import BaseFetcher
from src.filters.deduplicator import listing_key
from src.models.page import PageResult, Record
from src.parsers import browse_parser, finding_parser


class FindingListingsFetcher(BaseFetcher):
    """findItemsAdvanced filtered to one seller, JSON response format."""

    source_name = "finding"
    api_name = "Finding"
    max_page_size = Settings.FINDING_PAGE_SIZE

    def dedup_key(self) -> Callable[[Record], Hashable] | None:
        return listing_key  # type: ignore[return-value]

    def build_params(self, page: int) -> dict[str, Any]:
        if not (self.keywords or self.config.category_ids):
            raise MissingConfigError(
                "Finding API needs q/keywords or EBAY_CATEGORY_IDS"
            )
        params: dict[str, Any] = {
            "OPERATION-NAME": finding_parser.OPERATION,
            "SERVICE-VERSION": Settings.FINDING_SERVICE_VERSION,
            "SECURITY-APPNAME": self.config.app_id,
            "RESPONSE-DATA-FORMAT": "JSON",
            "REST-PAYLOAD": "",
            "GLOBAL-ID": self.config.global_id,
            "paginationInput.entriesPerPage": self.page_size,
            "paginationInput.pageNumber": page,
            "outputSelector(0)": "PictureURLLarge",
        }
        if self.keywords:
            params["keywords"] = self.keywords
        if self.config.category_ids:
            params["categoryId"] = self.config.category_ids
        if self.seller:
            params["itemFilter(0).name"] = "Seller"
            params["itemFilter(0).value"] = self.seller
        return params

    def fetch_page(self, page: int) -> PageResult:
        resp = self._get(
            self.config.endpoint("finding"), page, params=self.build_params(page)
        )
        return finding_parser.parse_listings_page(self._json(resp))


class BrowseListingsFetcher(BaseFetcher):
    """item_summary/search with a ``sellers:{...}`` filter, OAuth bearer."""

    source_name = "browse"
    api_name = "Browse"
    max_page_size = Settings.BROWSE_PAGE_SIZE

    def dedup_key(self) -> Callable[[Record], Hashable] | None:
        return listing_key  # type: ignore[return-value]

    def __init__(
        self,
        config: EbayConfig,
        token_manager: TokenManager,
        session: Any = None,
        keywords: str = "",
        seller: str = "",
    ) -> None:
        super().__init__(config, session, keywords, seller)
        self.token_manager = token_manager

    def build_params(self, page: int) -> dict[str, Any]:
        if not (self.keywords or self.config.category_ids):
            raise MissingConfigError(
                "Browse API needs q/keywords or EBAY_CATEGORY_IDS"
            )
        params: dict[str, Any] = {
            "limit": self.page_size,
            "offset": (page - 1) * self.page_size,
        }
        if self.keywords:
            params["q"] = self.keywords
        if self.config.category_ids:
            params["category_ids"] = self.config.category_ids
        if self.seller:
            params["filter"] = f"sellers:{{{self.seller}}}"
        return params

    def fetch_page(self, page: int) -> PageResult:
        params = self.build_params(page)
        headers = {
            "Authorization": (
                f"Bearer {self.token_manager.get_access_token()}"
            ),
            "X-EBAY-C-MARKETPLACE-ID": self.config.marketplace_id,
            "Accept": "application/json",
        }
        resp = self._get(
            self.config.endpoint("browse"), page, params=params, headers=headers
        )
        return browse_parser.parse_listings_page(self._json(resp))
