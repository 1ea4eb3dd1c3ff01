# src/filters/deduplicator.py

"""Feedback and listing deduplication."""

import logging
from collections.abc import Callable, Hashable
from typing import TypeVar

from src.models.feedback import FeedbackEntry
from src.models.listing import ListingItem

logger = logging.getLogger("ebay_feed.filters")

T = TypeVar("T")


def feedback_key(entry: FeedbackEntry) -> Hashable:
    """Composite identity: (comment, user, date), whitespace-trimmed."""
    return entry.key


def listing_key(item: ListingItem) -> Hashable:
    """Listings are identified by their eBay item ID."""
    return item.id or item.url


class Deduplicator:
    """Keep the first record per key, preserving order.

    A single instance may be fed several batches (one per page); keys
    seen in earlier batches are remembered.
    """

    def __init__(self, key: Callable[[T], Hashable]) -> None:
        self._key = key
        self._seen: set[Hashable] = set()
        self.removed = 0

    def filter(self, records: list[T]) -> list[T]:
        """Return the records of *records* not seen before."""
        kept: list[T] = []
        for record in records:
            k = self._key(record)
            if k in self._seen:
                logger.debug("Dropped duplicate record %r", k)
                self.removed += 1
                continue
            self._seen.add(k)
            kept.append(record)
        return kept
