# src/models/page.py

"""Result containers for one upstream page and one service call."""

from dataclasses import dataclass, field
from typing import Any

from src.models.feedback import FeedbackEntry
from src.models.listing import ListingItem

Record = ListingItem | FeedbackEntry


@dataclass
class PageResult:
    """One normalized upstream page.

    ``raw_count`` is the number of entries eBay sent before any record
    was dropped; the paginator compares it against the page size.
    """

    items: list[Record] = field(default_factory=lambda: list[Record]())
    raw_count: int = 0
    total_pages: int | None = None
    has_more: bool = True
    raw: Any = None


@dataclass
class FeedResult:
    """Records returned to a caller, plus where they came from."""

    items: list[Record] = field(default_factory=lambda: list[Record]())
    strategy: str = ""
    from_cache: bool = False
    stale: bool = False
    cached_at: float | None = None
    raw: Any = None

    def to_dicts(self) -> list[dict[str, Any]]:
        """Serialise every record for a JSON body."""
        return [item.to_dict() for item in self.items]
