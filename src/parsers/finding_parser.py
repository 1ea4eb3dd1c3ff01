# src/parsers/finding_parser.py

"""Parse Finding API JSON responses (findItemsAdvanced)."""

import logging
from typing import Any

from src.exceptions import ResponseParseError, UpstreamAPIError
from src.models.listing import ListingItem
from src.models.page import PageResult

logger = logging.getLogger("ebay_feed.parsers.finding")

OPERATION = "findItemsAdvanced"


def _first(value: Any, default: Any = None) -> Any:
    """Unwrap the single-element lists the Finding API uses everywhere."""
    if isinstance(value, list):
        return value[0] if value else default
    return default if value is None else value


def _error_message(block: Any) -> str:
    error = _first(_first(block, {}).get("error"), {})
    return str(_first(error.get("message"), "") or "unknown error")


def parse_listings_page(data: Any) -> PageResult:
    """Normalize one ``findItemsAdvancedResponse`` page.

    Items without a title are dropped. A non-``Success`` ack or an
    ``errorMessage`` block raises ``UpstreamAPIError``.
    """
    if not isinstance(data, dict):
        raise ResponseParseError("Finding API: expected a JSON object")

    if "errorMessage" in data:
        raise UpstreamAPIError(
            f"Finding API error: {_error_message(data['errorMessage'])}"
        )

    response = _first(data.get(f"{OPERATION}Response"))
    if not isinstance(response, dict):
        raise ResponseParseError(
            f"Finding API: missing {OPERATION}Response"
        )

    ack = str(_first(response.get("ack"), ""))
    if ack not in ("Success", "Warning"):
        message = (
            _error_message(response["errorMessage"])
            if "errorMessage" in response
            else "unknown error"
        )
        raise UpstreamAPIError(
            f"Finding API not success (ack={ack or 'missing'}): {message}"
        )
    if ack == "Warning":
        logger.warning("Finding %s returned Ack=Warning", OPERATION)

    search = _first(response.get("searchResult"), {}) or {}
    raw_items: list[dict[str, Any]] = search.get("item") or []

    items: list[ListingItem] = []
    for raw in raw_items:
        title = str(_first(raw.get("title"), "") or "").strip()
        item_id = str(_first(raw.get("itemId"), "") or "")
        if not title:
            logger.debug("Dropped listing without title (id=%s)", item_id)
            continue
        status = _first(raw.get("sellingStatus"), {}) or {}
        price = _first(status.get("currentPrice"), {}) or {}
        condition = _first(raw.get("condition"), {}) or {}
        items.append(
            ListingItem(
                id=item_id,
                title=title,
                price=str(price.get("__value__", "")),
                currency=str(price.get("@currencyId", "")),
                url=str(_first(raw.get("viewItemURL"), "") or ""),
                image=str(
                    _first(raw.get("pictureURLLarge"))
                    or _first(raw.get("galleryURL"), "")
                    or ""
                ),
                condition=_first(condition.get("conditionDisplayName")),
                location=_first(raw.get("location")),
            )
        )

    pagination = _first(response.get("paginationOutput"), {}) or {}
    try:
        total_pages: int | None = int(_first(pagination.get("totalPages")))
    except (TypeError, ValueError):
        total_pages = None

    return PageResult(
        items=list(items),
        raw_count=len(raw_items),
        total_pages=total_pages,
        raw=data,
    )
