# src/models/listing.py

"""Active listing data model shared by all listing fetchers."""

from dataclasses import dataclass
from typing import Any

from src.config.settings import Settings


@dataclass
class ListingItem:
    """Represents one active eBay listing from any upstream API."""

    id: str
    title: str
    price: str = ""
    currency: str = "USD"
    url: str = ""
    image: str = ""
    condition: str | None = None
    location: str | None = None

    def __post_init__(self) -> None:
        if not self.url and self.id:
            self.url = Settings.ITEM_URL_TEMPLATE.format(item_id=self.id)
        if not self.currency:
            self.currency = "USD"

    def to_dict(self) -> dict[str, Any]:
        """Serialise for JSON responses and the payload cache."""
        return {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "currency": self.currency,
            "url": self.url,
            "image": self.image,
            "img": self.image,
            "condition": self.condition,
            "location": self.location,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ListingItem":
        """Rebuild an item from :meth:`to_dict` output."""
        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            price=str(data.get("price", "")),
            currency=str(data.get("currency", "") or "USD"),
            url=str(data.get("url", "")),
            image=str(data.get("image") or data.get("img") or ""),
            condition=data.get("condition"),
            location=data.get("location"),
        )
