# src/parsers/browse_parser.py

"""Parse Browse API JSON responses (item_summary/search)."""

import logging
from typing import Any

from src.exceptions import ResponseParseError, UpstreamAPIError
from src.models.listing import ListingItem
from src.models.page import PageResult

logger = logging.getLogger("ebay_feed.parsers.browse")


def _location(raw: dict[str, Any]) -> str | None:
    loc = raw.get("itemLocation") or {}
    parts = [
        loc.get(k) for k in ("city", "stateOrProvince", "country")
    ]
    text = ", ".join(str(p) for p in parts if p)
    return text or None


def _image(raw: dict[str, Any]) -> str:
    image = (raw.get("image") or {}).get("imageUrl")
    if image:
        return str(image)
    thumbs = raw.get("thumbnailImages") or []
    if thumbs:
        return str(thumbs[0].get("imageUrl", ""))
    return ""


def parse_listings_page(data: Any) -> PageResult:
    """Normalize one ``item_summary/search`` page.

    ``has_more`` follows the presence of the ``next`` link.
    """
    if not isinstance(data, dict):
        raise ResponseParseError("Browse API: expected a JSON object")

    raw_items: list[dict[str, Any]] = data.get("itemSummaries") or []
    errors = data.get("errors") or []
    if errors and not raw_items:
        first = errors[0]
        raise UpstreamAPIError(
            f"Browse API error {first.get('errorId', '')}: "
            f"{first.get('longMessage') or first.get('message', '')}"
        )

    items: list[ListingItem] = []
    for raw in raw_items:
        title = str(raw.get("title") or "").strip()
        item_id = str(raw.get("legacyItemId") or raw.get("itemId") or "")
        if not title:
            logger.debug("Dropped listing without title (id=%s)", item_id)
            continue
        price = raw.get("price") or {}
        items.append(
            ListingItem(
                id=item_id,
                title=title,
                price=str(price.get("value", "")),
                currency=str(price.get("currency", "")),
                url=str(raw.get("itemWebUrl") or ""),
                image=_image(raw),
                condition=raw.get("condition"),
                location=_location(raw),
            )
        )

    return PageResult(
        items=list(items),
        raw_count=len(raw_items),
        has_more=bool(data.get("next")),
        raw=data,
    )
