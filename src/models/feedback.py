# src/models/feedback.py

"""Seller feedback data model."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Rating(Enum):
    """eBay feedback comment type."""

    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"

    @classmethod
    def parse(cls, value: str | None) -> "Rating | None":
        """Map an upstream ``CommentType`` string, ignoring case."""
        if not value:
            return None
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        return None


@dataclass
class FeedbackEntry:
    """A single feedback comment left for the seller."""

    comment: str
    user: str = ""
    date: str = ""
    rating: Rating | None = None
    item_title: str = ""
    item_id: str = ""

    @property
    def key(self) -> tuple[str, str, str]:
        """Dedup identity: eBay exposes no stable feedback ID."""
        return (
            self.comment.strip(),
            self.user.strip(),
            self.date.strip(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise using the field names the carousel reads."""
        return {
            "comment": self.comment,
            "user": self.user,
            "date": self.date,
            "rating": self.rating.value if self.rating else "",
            "itemTitle": self.item_title,
            "itemID": self.item_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FeedbackEntry":
        """Rebuild an entry from :meth:`to_dict` or backend JSON."""
        return cls(
            comment=str(data.get("comment") or ""),
            user=str(data.get("user") or data.get("fromUser") or ""),
            date=str(data.get("date") or ""),
            rating=Rating.parse(data.get("rating")),
            item_title=str(data.get("itemTitle") or ""),
            item_id=str(data.get("itemID") or ""),
        )
