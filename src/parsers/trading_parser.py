# src/parsers/trading_parser.py

"""Parse Trading API XML responses (GetFeedback, GetMyeBaySelling)."""

import logging

from bs4 import BeautifulSoup, Tag

from src.exceptions import ResponseParseError, UpstreamAPIError
from src.models.feedback import FeedbackEntry, Rating
from src.models.listing import ListingItem
from src.models.page import PageResult

logger = logging.getLogger("ebay_feed.parsers.trading")


def _text(parent: object, name: str) -> str:
    """Return the stripped text of the first *name* child, or ``""``."""
    if not isinstance(parent, Tag):
        return ""
    child = parent.find(name)
    if not isinstance(child, Tag):
        return ""
    return child.get_text(strip=True)


def _to_int(value: str) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _load(xml_text: str, call_name: str) -> Tag:
    """Parse *xml_text* and return the ``<CallNameResponse>`` element.

    Raises ``ResponseParseError`` when the root element is missing and
    ``UpstreamAPIError`` when eBay acknowledged the call as a failure.
    """
    soup = BeautifulSoup(xml_text or "", "xml")
    root = soup.find(f"{call_name}Response")
    if not isinstance(root, Tag):
        raise ResponseParseError(
            f"Trading {call_name}: response has no "
            f"<{call_name}Response> element"
        )

    ack = _text(root, "Ack")
    if ack in ("Failure", "PartialFailure"):
        errors = root.find("Errors")
        message = (
            _text(errors, "LongMessage")
            or _text(errors, "ShortMessage")
            or "unknown error"
        )
        code = _text(errors, "ErrorCode")
        raise UpstreamAPIError(
            f"Trading {call_name} Ack={ack}"
            + (f" [{code}]" if code else "")
            + f": {message}"
        )
    if ack == "Warning":
        logger.warning(
            "Trading %s returned Ack=Warning: %s",
            call_name,
            _text(root.find("Errors"), "LongMessage"),
        )
    return root


def parse_feedback_page(xml_text: str) -> PageResult:
    """Normalize one GetFeedback page into ``FeedbackEntry`` records.

    Details without ``CommentText`` are dropped.
    """
    root = _load(xml_text, "GetFeedback")
    array = root.find("FeedbackDetailArray")
    details: list[Tag] = []
    if isinstance(array, Tag):
        details = [
            d for d in array.find_all("FeedbackDetail", recursive=False)
            if isinstance(d, Tag)
        ]

    entries: list[FeedbackEntry] = []
    for detail in details:
        comment = _text(detail, "CommentText")
        if not comment:
            logger.debug(
                "Dropped feedback without comment (item=%s)",
                _text(detail, "ItemID"),
            )
            continue
        entries.append(
            FeedbackEntry(
                comment=comment,
                user=_text(detail, "CommentingUser"),
                date=_text(detail, "CommentTime"),
                rating=Rating.parse(_text(detail, "CommentType")),
                item_title=_text(detail, "ItemTitle"),
                item_id=_text(detail, "ItemID"),
            )
        )

    total_pages = _to_int(
        _text(root.find("PaginationResult"), "TotalNumberOfPages")
    )
    return PageResult(
        items=list(entries),
        raw_count=len(details),
        total_pages=total_pages,
    )


def _price(item: Tag) -> tuple[str, str]:
    """Return ``(amount, currencyID)`` for an ``<Item>``.

    ``SellingStatus/CurrentPrice`` wins; otherwise a non-zero
    ``BuyItNowPrice``, then ``StartPrice``.
    """
    candidates: list[Tag | None] = []
    status = item.find("SellingStatus")
    if isinstance(status, Tag):
        found = status.find("CurrentPrice")
        candidates.append(found if isinstance(found, Tag) else None)
    for name in ("BuyItNowPrice", "StartPrice"):
        found = item.find(name, recursive=False)
        candidates.append(found if isinstance(found, Tag) else None)

    for tag in candidates:
        if tag is None:
            continue
        amount = tag.get_text(strip=True)
        try:
            if float(amount) <= 0:
                continue
        except ValueError:
            continue
        currency = tag.get("currencyID") or ""
        return amount, str(currency)
    return "", ""


def _image(item: Tag) -> str:
    pictures = item.find("PictureDetails")
    if not isinstance(pictures, Tag):
        return ""
    return _text(pictures, "GalleryURL") or _text(pictures, "PictureURL")


def parse_listings_page(xml_text: str) -> PageResult:
    """Normalize one GetMyeBaySelling ``ActiveList`` page.

    Items without a title are dropped.
    """
    root = _load(xml_text, "GetMyeBaySelling")
    active = root.find("ActiveList")
    raw_items: list[Tag] = []
    total_pages: int | None = None
    if isinstance(active, Tag):
        array = active.find("ItemArray")
        if isinstance(array, Tag):
            raw_items = [
                i for i in array.find_all("Item", recursive=False)
                if isinstance(i, Tag)
            ]
        total_pages = _to_int(
            _text(active.find("PaginationResult"), "TotalNumberOfPages")
        )

    items: list[ListingItem] = []
    for raw in raw_items:
        item_id = _text(raw, "ItemID")
        title = _text(raw, "Title")
        if not title:
            logger.debug("Dropped listing without title (id=%s)", item_id)
            continue
        price, currency = _price(raw)
        listing_details = raw.find("ListingDetails")
        condition = _text(raw, "ConditionDisplayName") or None
        location = _text(raw, "Location") or None
        items.append(
            ListingItem(
                id=item_id,
                title=title,
                price=price,
                currency=currency,
                url=_text(listing_details, "ViewItemURL"),
                image=_image(raw),
                condition=condition,
                location=location,
            )
        )

    return PageResult(
        items=list(items),
        raw_count=len(raw_items),
        total_pages=total_pages,
    )
