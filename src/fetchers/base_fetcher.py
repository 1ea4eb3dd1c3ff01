# src/fetchers/base_fetcher.py

"""Abstract base class for all eBay fetchers."""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.credentials import EbayConfig
from src.config.settings import Settings
from src.exceptions import ResponseParseError, UpstreamHTTPError
from src.models.page import PageResult, Record
from src.services.paginator import paginate


class BaseFetcher(ABC):
    """One upstream API operation behind a ``fetch_page`` interface.

    Subclasses build the request for a page number and normalize the
    answer; :meth:`fetch` drives them through :func:`paginate`.
    """

    source_name: str = ""
    api_name: str = "eBay"
    max_pages: int = Settings.LISTINGS_MAX_PAGES
    max_page_size: int = Settings.TRADING_PAGE_SIZE

    def __init__(
        self,
        config: EbayConfig,
        session: Any = None,
        keywords: str = "",
        seller: str = "",
    ) -> None:
        self.config = config
        self.keywords = keywords.strip()
        self.seller = seller.strip() or config.seller
        self.logger = logging.getLogger(f"ebay_feed.{self.source_name}")
        self.session = session or curl_requests.Session()
        self.page_size: int = self.max_page_size
        self.first_raw: Any = None
        self._request_timeout: int = Settings.REQUEST_TIMEOUT

    def _check_status(self, resp: Any, page: int) -> None:
        """Raise ``UpstreamHTTPError`` for any non-2xx answer."""
        self.logger.info(
            "[%s p%d] status=%d bodyLen=%d",
            self.source_name,
            page,
            resp.status_code,
            len(resp.text or ""),
        )
        if not 200 <= resp.status_code < 300:
            raise UpstreamHTTPError(
                resp.status_code, resp.text, api=self.api_name
            )

    def _get(
        self,
        url: str,
        page: int,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        resp = self.session.get(
            url,
            params=params,
            headers=headers,
            timeout=self._request_timeout,
        )
        self._check_status(resp, page)
        return resp

    def _post(
        self,
        url: str,
        page: int,
        body: str,
        headers: dict[str, str],
    ) -> Any:
        resp = self.session.post(
            url,
            data=body.encode("utf-8"),
            headers=headers,
            timeout=self._request_timeout,
        )
        self._check_status(resp, page)
        return resp

    def _json(self, resp: Any) -> Any:
        """Decode a JSON body; a decode failure is fatal."""
        try:
            return resp.json()
        except (ValueError, json.JSONDecodeError) as exc:
            raise ResponseParseError(
                f"Non-JSON {self.api_name} API response: "
                f"{(resp.text or '')[: Settings.ERROR_BODY_LIMIT]}"
            ) from exc

    def _matches_keywords(self, title: str) -> bool:
        """Local keyword filter for APIs without server-side search."""
        if not self.keywords:
            return True
        lowered = title.lower()
        return all(w in lowered for w in self.keywords.lower().split())

    def dedup_key(self) -> Callable[[Record], Hashable] | None:
        """Key used to suppress duplicates across pages, if any."""
        return None

    def _remember_first(self, page: int, result: PageResult) -> None:
        if page == 1:
            self.first_raw = result.raw

    def fetch(self, limit: int) -> list[Record]:
        """Fetch up to *limit* normalized records, page by page."""
        self.page_size = max(1, min(limit, self.max_page_size))
        self.logger.info(
            "[%s] fetching up to %d records (page size %d)",
            self.source_name,
            limit,
            self.page_size,
        )
        return paginate(
            self.fetch_page,
            limit=limit,
            page_size=self.page_size,
            max_pages=self.max_pages,
            key=self.dedup_key(),
            on_page=self._remember_first,
        )

    @abstractmethod
    def fetch_page(self, page: int) -> PageResult:
        """Fetch and normalize one page (1-based)."""
        ...
