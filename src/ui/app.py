# src/ui/app.py

"""Terminal feedback carousel for the ebay_feed service."""

import asyncio
import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Footer, Header, Static

from src.config.settings import Settings
from src.services.feed_service import FeedService
from src.ui.carousel import Carousel, format_date, pad_slides, prepare_reviews

logger = logging.getLogger("ebay_feed.ui")


class FeedbackCarouselApp(App[object]):
    """Rotating view of the seller's latest feedback."""

    CSS = """
    #card { padding: 1 2; border: round $accent; height: auto; }
    #quote { text-style: italic; }
    #meta { color: $text-muted; }
    #dots { content-align: center middle; height: 1; }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("left", "prev", "Prev"),
        Binding("right", "next", "Next"),
        Binding("r", "reload", "Reload"),
        *(
            Binding(str(n), f"go_to({n - 1})", f"Slide {n}", show=False)
            for n in range(1, 10)
        ),
    ]

    def __init__(
        self,
        service: FeedService,
        desired: int = Settings.CAROUSEL_DESIRED_COUNT,
        pad: bool = False,
    ) -> None:
        super().__init__()
        self.service = service
        self.desired = desired
        self.pad = pad
        self.carousel = Carousel([])

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Static("Loading reviews...", id="quote"),
            Static("", id="meta"),
            id="card",
        )
        yield Static("", id="dots")
        yield Static("", id="status")
        yield Footer()

    async def on_mount(self) -> None:
        await self.load_reviews()
        self.set_interval(self.carousel.interval, self._tick)

    async def load_reviews(self, force: bool = False) -> None:
        """Fetch feedback in a worker thread and rebuild the slides."""
        status = self.query_one("#status", Static)
        try:
            result = await asyncio.to_thread(
                self.service.get_feedback, self.desired, "", force
            )
        except Exception as exc:
            logger.error("Error loading reviews: %s", exc, exc_info=True)
            status.update(f"Error loading reviews: {exc}")
            self.carousel = Carousel([])
            self.render_slide()
            return

        slides = prepare_reviews(result.items, self.desired)
        if self.pad:
            slides = pad_slides(slides, self.desired)
        self.carousel = Carousel(slides)
        note = " (stale)" if result.stale else ""
        status.update(f"{len(slides)} reviews{note}")
        self.render_slide()

    def render_slide(self) -> None:
        """Show the active slide and its dot row."""
        quote = self.query_one("#quote", Static)
        meta = self.query_one("#meta", Static)
        dots = self.query_one("#dots", Static)

        review = self.carousel.current
        if review is None:
            quote.update("No reviews yet.")
            meta.update("")
            dots.update("")
            return

        quote.update(f"“{review.comment}”")
        nice_date = format_date(review.date)
        meta_text = Text()
        meta_text.append(review.user or "eBay buyer", style="bold")
        if nice_date:
            meta_text.append(f" · {nice_date}")
        meta.update(meta_text)

        active = self.carousel.active_dot()
        row = Text()
        for i in range(self.carousel.dot_count):
            row.append(
                "● " if i == active else "○ ",
                style="bold" if i == active else "dim",
            )
        dots.update(row)

    def _tick(self) -> None:
        if self.carousel.auto_advance:
            self.carousel.next()
            self.render_slide()

    def action_next(self) -> None:
        self.carousel.next()
        self.render_slide()

    def action_prev(self) -> None:
        self.carousel.prev()
        self.render_slide()

    def action_go_to(self, index: int) -> None:
        """Number keys jump to the matching dot."""
        self.carousel.go_to(index)
        self.render_slide()

    async def action_reload(self) -> None:
        await self.load_reviews(force=True)
