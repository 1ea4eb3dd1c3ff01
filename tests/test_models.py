# tests/test_models.py

"""Tests for the ListingItem and FeedbackEntry data models."""

import unittest

from src.models.feedback import FeedbackEntry, Rating
from src.models.listing import ListingItem
from src.models.page import FeedResult


class TestListingItem(unittest.TestCase):
    """ListingItem defaults and serialisation."""

    def test_default_url_from_id(self) -> None:
        item = ListingItem(id="123", title="Owl")
        self.assertEqual(item.url, "https://www.ebay.com/itm/123")

    def test_explicit_url_kept(self) -> None:
        item = ListingItem(id="123", title="Owl", url="https://x/1")
        self.assertEqual(item.url, "https://x/1")

    def test_empty_currency_defaults_to_usd(self) -> None:
        item = ListingItem(id="1", title="Owl", currency="")
        self.assertEqual(item.currency, "USD")

    def test_to_dict_carries_img_alias(self) -> None:
        data = ListingItem(id="1", title="Owl", image="https://i/1.jpg").to_dict()
        self.assertEqual(data["image"], "https://i/1.jpg")
        self.assertEqual(data["img"], "https://i/1.jpg")
        self.assertIsNone(data["condition"])

    def test_from_dict_restores_item(self) -> None:
        item = ListingItem(
            id="9", title="Robot", price="4.50", currency="EUR",
            image="https://i/9.jpg", condition="New", location="Berlin",
        )
        self.assertEqual(ListingItem.from_dict(item.to_dict()), item)


class TestFeedbackEntry(unittest.TestCase):
    """FeedbackEntry keys and serialisation."""

    def test_key_trims(self) -> None:
        entry = FeedbackEntry(comment=" Great ", user="bob ", date=" d")
        self.assertEqual(entry.key, ("Great", "bob", "d"))

    def test_to_dict_field_names(self) -> None:
        entry = FeedbackEntry(
            comment="Great", user="bob", date="2026-01-01",
            rating=Rating.NEUTRAL, item_title="Owl", item_id="42",
        )
        self.assertEqual(
            entry.to_dict(),
            {
                "comment": "Great",
                "user": "bob",
                "date": "2026-01-01",
                "rating": "Neutral",
                "itemTitle": "Owl",
                "itemID": "42",
            },
        )

    def test_from_dict_accepts_from_user(self) -> None:
        entry = FeedbackEntry.from_dict({"comment": "Hi", "fromUser": "amy"})
        self.assertEqual(entry.user, "amy")
        self.assertIsNone(entry.rating)

    def test_rating_parse_case_insensitive(self) -> None:
        self.assertIs(Rating.parse("positive"), Rating.POSITIVE)
        self.assertIsNone(Rating.parse("Withdrawn"))
        self.assertIsNone(Rating.parse(None))


class TestFeedResult(unittest.TestCase):

    def test_to_dicts(self) -> None:
        result = FeedResult(items=[FeedbackEntry(comment="Hi")])
        self.assertEqual(result.to_dicts()[0]["comment"], "Hi")
        self.assertFalse(result.from_cache)
        self.assertFalse(result.stale)


if __name__ == "__main__":
    unittest.main()
