# src/services/feed_service.py

"""Wires credentials, fetchers and the payload cache for one request."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from curl_cffi import requests as curl_requests

from src.auth.token_manager import TokenManager
from src.config.credentials import ApiStrategy, EbayConfig
from src.config.settings import Settings
from src.exceptions import MissingConfigError
from src.fetchers.base_fetcher import BaseFetcher
from src.fetchers.search_fetchers import (
    BrowseListingsFetcher,
    FindingListingsFetcher,
)
from src.fetchers.trading_fetchers import (
    TradingFeedbackFetcher,
    TradingListingsFetcher,
)
from src.models.feedback import FeedbackEntry
from src.models.listing import ListingItem
from src.models.page import FeedResult, Record
from src.storage.payload_cache import PayloadCache

logger = logging.getLogger("ebay_feed.service")


def clamp_limit(
    value: int | str | None, default: int, maximum: int
) -> int:
    """Parse a ``limit`` query value and clamp it to ``1..maximum``.

    ``None``/empty gives *default*; ``"all"`` gives *maximum*; anything
    unparsable falls back to *default*.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return min(default, maximum)
    if isinstance(value, str):
        text = value.strip().lower()
        if text == "all":
            return maximum
        try:
            value = int(text)
        except ValueError:
            return min(default, maximum)
    return max(1, min(int(value), maximum))


class FeedService:
    """Fetch feedback and listings with read-through, stale-on-error caching.

    One instance is meant to live for the whole process: it owns the
    HTTP session, the OAuth token cache and the two payload caches.
    """

    def __init__(
        self,
        config: EbayConfig,
        session: Any = None,
        cache_dir: Path | None = None,
        ttl: float = Settings.CACHE_TTL,
        token_manager: TokenManager | None = None,
    ) -> None:
        self.config = config
        self.session = session or curl_requests.Session()
        directory = Path(cache_dir) if cache_dir else Settings.CACHE_DIR
        self.listings_cache = PayloadCache(
            directory / Settings.LISTINGS_CACHE_FILE, ttl=ttl
        )
        self.feedback_cache = PayloadCache(
            directory / Settings.FEEDBACK_CACHE_FILE, ttl=ttl
        )
        self.token_manager = token_manager or TokenManager(
            client_id=config.client_id,
            client_secret=config.client_secret,
            token_url=config.endpoint("oauth"),
            session=self.session,
        )
        self._strategy: ApiStrategy | None = None

    @property
    def strategy(self) -> ApiStrategy:
        """Listing strategy, resolved on first use and then fixed."""
        if self._strategy is None:
            self._strategy = self.config.resolve_strategy()
        return self._strategy

    # ── Fetcher construction ─────────────────────────────

    def listings_fetcher(
        self, keywords: str = "", seller: str = ""
    ) -> BaseFetcher:
        """Build the fetcher for the resolved listing strategy."""
        strategy = self.strategy
        if strategy is ApiStrategy.TRADING:
            return TradingListingsFetcher(
                self.config, self.session, keywords, seller
            )
        if strategy is ApiStrategy.BROWSE:
            return BrowseListingsFetcher(
                self.config,
                self.token_manager,
                self.session,
                keywords,
                seller,
            )
        return FindingListingsFetcher(
            self.config, self.session, keywords, seller
        )

    def feedback_fetcher(self, seller: str = "") -> TradingFeedbackFetcher:
        self.config.require(ApiStrategy.TRADING)
        return TradingFeedbackFetcher(
            self.config, self.session, seller=seller
        )

    # ── Public operations ────────────────────────────────

    def get_feedback(
        self,
        limit: int | str | None = None,
        seller: str = "",
        force: bool = False,
    ) -> FeedResult:
        """Distinct seller feedback, at most ``limit`` entries."""
        count = clamp_limit(
            limit,
            Settings.FEEDBACK_DEFAULT_LIMIT,
            Settings.FEEDBACK_MAX_LIMIT,
        )
        fetcher = self.feedback_fetcher(seller)
        key = f"feedback:{fetcher.seller}:{count}"
        return self._serve(
            cache=self.feedback_cache,
            key=key,
            fetcher=fetcher,
            limit=count,
            force=force,
            from_dict=FeedbackEntry.from_dict,
            strategy=ApiStrategy.TRADING.value,
        )

    def get_listings(
        self,
        limit: int | str | None = None,
        keywords: str = "",
        seller: str = "",
        force: bool = False,
        debug: bool = False,
    ) -> FeedResult:
        """Active listings, at most ``limit`` items.

        With *debug* (Finding/Browse only) the first decoded upstream
        page is attached to the result; debug requests bypass the cache.
        """
        count = clamp_limit(
            limit,
            Settings.LISTINGS_DEFAULT_LIMIT,
            Settings.LISTINGS_MAX_LIMIT,
        )
        fetcher = self.listings_fetcher(keywords, seller)
        key = (
            f"listings:{self.strategy.value}:{fetcher.seller}:"
            f"{fetcher.keywords.lower()}:{count}"
        )
        want_raw = debug and self.strategy is not ApiStrategy.TRADING
        result = self._serve(
            cache=self.listings_cache,
            key=key,
            fetcher=fetcher,
            limit=count,
            force=force or want_raw,
            from_dict=ListingItem.from_dict,
            strategy=self.strategy.value,
        )
        if want_raw and not result.stale:
            result.raw = fetcher.first_raw
        return result

    # ── Cache orchestration ──────────────────────────────

    def _serve(
        self,
        cache: PayloadCache,
        key: str,
        fetcher: BaseFetcher,
        limit: int,
        force: bool,
        from_dict: Callable[[dict[str, Any]], Record],
        strategy: str,
    ) -> FeedResult:
        """Fresh cache hit, else live fetch, else stale cache, else raise."""
        cached = cache.load()
        if cached is not None and not force and cache.is_fresh(cached, key):
            logger.info("Serving '%s' from cache", key)
            return FeedResult(
                items=[from_dict(d) for d in cached.items][:limit],
                strategy=strategy,
                from_cache=True,
                cached_at=cached.cached_at,
            )

        try:
            records = fetcher.fetch(limit)
        except MissingConfigError:
            raise
        except Exception as exc:
            if cached is None:
                logger.error(
                    "Live fetch for '%s' failed and no cache exists: %s",
                    key,
                    exc,
                    exc_info=True,
                )
                raise
            logger.warning(
                "Live fetch for '%s' failed (%s); serving stale cache "
                "from %.0f",
                key,
                exc,
                cached.cached_at,
            )
            return FeedResult(
                items=[from_dict(d) for d in cached.items][:limit],
                strategy=strategy,
                stale=True,
                cached_at=cached.cached_at,
            )

        records = records[:limit]
        try:
            cache.store(key, [r.to_dict() for r in records])
        except OSError as exc:
            logger.error(
                "Could not write cache %s: %s", cache.path, exc,
                exc_info=True,
            )
        return FeedResult(items=records, strategy=strategy)
