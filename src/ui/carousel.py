# src/ui/carousel.py

"""Feedback carousel state, independent of any widget toolkit."""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any, TypeVar

from src.config.settings import Settings
from src.filters.deduplicator import Deduplicator, feedback_key
from src.models.feedback import FeedbackEntry

logger = logging.getLogger("ebay_feed.ui")

T = TypeVar("T")

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%b %d, %Y", "%d %b %Y")


def parse_date(value: str) -> datetime | None:
    """Parse an ISO-ish feedback date; naive values are taken as UTC."""
    text = (value or "").strip()
    if not text:
        return None
    parsed: datetime | None = None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date(value: str) -> str:
    """``Mar 5, 2026`` for parseable dates, otherwise the raw value."""
    parsed = parse_date(value)
    if parsed is None:
        return value
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def prepare_reviews(
    raw: Iterable[dict[str, Any] | FeedbackEntry],
    desired: int = Settings.CAROUSEL_DESIRED_COUNT,
) -> list[FeedbackEntry]:
    """Clean backend feedback for display.

    Trims fields, drops empty comments, removes duplicates by
    ``(comment, user, date)`` even though the backend already does,
    caps at *desired*, then sorts newest first with unparsable dates
    last (ties keep their order).
    """
    dedup = Deduplicator(feedback_key)
    unique: list[FeedbackEntry] = []
    for item in raw:
        entry = (
            item
            if isinstance(item, FeedbackEntry)
            else FeedbackEntry.from_dict(item)
        )
        entry = FeedbackEntry(
            comment=entry.comment.strip(),
            user=entry.user.strip(),
            date=entry.date.strip(),
            rating=entry.rating,
            item_title=entry.item_title,
            item_id=entry.item_id,
        )
        if not entry.comment:
            continue
        if not dedup.filter([entry]):
            continue
        unique.append(entry)
        if len(unique) >= desired:
            break

    def sort_key(entry: FeedbackEntry) -> tuple[bool, float]:
        parsed = parse_date(entry.date)
        if parsed is None:
            return (True, 0.0)
        return (False, -parsed.timestamp())

    logger.debug("Prepared %d reviews for the carousel", len(unique))
    return sorted(unique, key=sort_key)


def pad_slides(slides: list[T], desired: int) -> list[T]:
    """Repeat *slides* cyclically until there are *desired* of them."""
    if not slides or len(slides) >= desired:
        return list(slides)
    padded = list(slides)
    i = 0
    while len(padded) < desired:
        padded.append(slides[i % len(slides)])
        i += 1
    return padded


class Carousel:
    """Active-slide index with wrap-around navigation.

    Only the first ``max_dots`` slides get a dot; prev/next and the
    auto-advance timer still cycle through every slide.
    """

    def __init__(
        self,
        slides: list[FeedbackEntry],
        max_dots: int = Settings.CAROUSEL_MAX_DOTS,
        interval: float = Settings.CAROUSEL_INTERVAL,
    ) -> None:
        self.slides = slides
        self.max_dots = max_dots
        self.interval = interval
        self.index = 0

    def __len__(self) -> int:
        return len(self.slides)

    @property
    def current(self) -> FeedbackEntry | None:
        if not self.slides:
            return None
        return self.slides[self.index]

    @property
    def dot_count(self) -> int:
        return min(len(self.slides), self.max_dots)

    @property
    def auto_advance(self) -> bool:
        """The timer only runs with more than one slide."""
        return len(self.slides) > 1

    def next(self) -> int:
        if self.slides:
            self.index = (self.index + 1) % len(self.slides)
        return self.index

    def prev(self) -> int:
        if self.slides:
            self.index = (self.index - 1 + len(self.slides)) % len(
                self.slides
            )
        return self.index

    def go_to(self, index: int) -> int:
        """Jump to *index* (a dot click), clamped to the last slide."""
        if self.slides:
            self.index = max(0, min(index, len(self.slides) - 1))
        return self.index

    def active_dot(self) -> int | None:
        """Index of the highlighted dot, or ``None`` past the dot cap."""
        if self.index < self.dot_count:
            return self.index
        return None
