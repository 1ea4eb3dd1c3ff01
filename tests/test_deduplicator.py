# tests/test_deduplicator.py

"""Tests for feedback and listing deduplication."""

import unittest

from src.filters.deduplicator import (
    Deduplicator,
    feedback_key,
    listing_key,
)
from src.models.feedback import FeedbackEntry
from src.models.listing import ListingItem


def _fb(comment: str, user: str = "bob", date: str = "2026-01-01") -> FeedbackEntry:
    return FeedbackEntry(comment=comment, user=user, date=date)


class TestDeduplicator(unittest.TestCase):
    """Composite-key deduplication."""

    def test_empty_list(self) -> None:
        dedup = Deduplicator(feedback_key)
        self.assertEqual(dedup.filter([]), [])
        self.assertEqual(dedup.removed, 0)

    def test_exact_duplicate_removed(self) -> None:
        dedup = Deduplicator(feedback_key)
        kept = dedup.filter([_fb("Great"), _fb("Great")])
        self.assertEqual(len(kept), 1)
        self.assertEqual(dedup.removed, 1)

    def test_whitespace_ignored_in_key(self) -> None:
        kept = Deduplicator(feedback_key).filter(
            [_fb("Great"), _fb("  Great ", user=" bob")]
        )
        self.assertEqual(len(kept), 1)

    def test_different_user_kept(self) -> None:
        dedup = Deduplicator(feedback_key)
        kept = dedup.filter([_fb("Great", user="bob"), _fb("Great", user="amy")])
        self.assertEqual(len(kept), 2)
        self.assertEqual(dedup.removed, 0)

    def test_different_date_kept(self) -> None:
        kept = Deduplicator(feedback_key).filter(
            [_fb("Great"), _fb("Great", date="2026-02-01")]
        )
        self.assertEqual(len(kept), 2)

    def test_first_occurrence_wins_and_order_kept(self) -> None:
        a = _fb("A")
        b = _fb("B")
        a2 = FeedbackEntry(
            comment="A", user="bob", date="2026-01-01", item_id="2"
        )
        self.assertEqual(Deduplicator(feedback_key).filter([a, b, a2]), [a, b])

    def test_instance_remembers_previous_batches(self) -> None:
        dedup = Deduplicator(feedback_key)
        self.assertEqual(len(dedup.filter([_fb("A"), _fb("B")])), 2)
        self.assertEqual(dedup.filter([_fb("B"), _fb("C")]), [_fb("C")])
        self.assertEqual(dedup.removed, 1)

    def test_listing_key_uses_item_id(self) -> None:
        dedup = Deduplicator(listing_key)
        kept = dedup.filter(
            [
                ListingItem(id="1", title="Owl"),
                ListingItem(id="1", title="Owl (relisted)"),
                ListingItem(id="2", title="Owl"),
            ]
        )
        self.assertEqual([i.id for i in kept], ["1", "2"])
        self.assertEqual(dedup.removed, 1)


if __name__ == "__main__":
    unittest.main()
