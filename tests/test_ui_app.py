# tests/test_ui_app.py

"""Smoke tests for the feedback carousel TUI using Textual's Pilot."""

import unittest
from unittest.mock import MagicMock

from textual.widgets import Static

from src.models.feedback import FeedbackEntry
from src.models.page import FeedResult
from src.services.feed_service import FeedService
from src.ui.app import FeedbackCarouselApp


def _service(*comments: str) -> MagicMock:
    service = MagicMock(spec=FeedService)
    service.get_feedback.return_value = FeedResult(
        items=[
            FeedbackEntry(
                comment=c, user=f"user{i}", date=f"2026-05-{i + 1:02d}"
            )
            for i, c in enumerate(comments)
        ],
        strategy="trading",
    )
    return service


class TestFeedbackCarouselApp(unittest.IsolatedAsyncioTestCase):
    """Smoke tests for the Textual carousel."""

    async def test_app_composes_without_crash(self) -> None:
        app = FeedbackCarouselApp(_service("Great"))
        async with app.run_test() as pilot:
            app.query_one("#quote", Static)
            app.query_one("#meta", Static)
            app.query_one("#dots", Static)
            app.query_one("#status", Static)
            await pilot.pause()

    async def test_reviews_loaded_newest_first(self) -> None:
        service = _service("first", "second", "third")
        app = FeedbackCarouselApp(service, desired=30)
        async with app.run_test() as pilot:
            await pilot.pause()
            self.assertEqual(len(app.carousel), 3)
            self.assertEqual(app.carousel.current.comment, "third")  # type: ignore[union-attr]
        service.get_feedback.assert_called_once_with(30, "", False)

    async def test_arrow_keys_navigate(self) -> None:
        app = FeedbackCarouselApp(_service("a", "b", "c"))
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("right")
            self.assertEqual(app.carousel.index, 1)
            await pilot.press("left", "left")
            self.assertEqual(app.carousel.index, 2)

    async def test_number_keys_jump_to_slide(self) -> None:
        app = FeedbackCarouselApp(_service("a", "b", "c", "d"))
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("3")
            self.assertEqual(app.carousel.index, 2)
            self.assertEqual(app.carousel.active_dot(), 2)
            await pilot.press("9")
            self.assertEqual(app.carousel.index, 3)

    async def test_reload_forces_fetch(self) -> None:
        service = _service("a")
        app = FeedbackCarouselApp(service)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("r")
            await pilot.pause()
        self.assertEqual(service.get_feedback.call_count, 2)
        self.assertTrue(service.get_feedback.call_args.args[2])

    async def test_pad_fills_carousel(self) -> None:
        app = FeedbackCarouselApp(_service("a", "b"), desired=5, pad=True)
        async with app.run_test() as pilot:
            await pilot.pause()
            self.assertEqual(len(app.carousel), 5)
            self.assertEqual(app.carousel.dot_count, 5)

    async def test_load_error_leaves_empty_carousel(self) -> None:
        service = MagicMock(spec=FeedService)
        service.get_feedback.side_effect = RuntimeError("offline")
        app = FeedbackCarouselApp(service)
        async with app.run_test() as pilot:
            await pilot.pause()
            self.assertEqual(len(app.carousel), 0)
            self.assertIsNone(app.carousel.current)


if __name__ == "__main__":
    unittest.main()
