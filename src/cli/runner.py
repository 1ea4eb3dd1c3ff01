# src/cli/runner.py

"""Headless CLI commands built on the feed service."""

import json
import logging
from typing import Any

from rich.console import Console
from rich.table import Table

from src.exceptions import EbayFeedError
from src.models.feedback import FeedbackEntry
from src.models.listing import ListingItem
from src.models.page import FeedResult
from src.services.feed_service import FeedService

logger = logging.getLogger("ebay_feed.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _print_feedback_table(entries: list[FeedbackEntry]) -> None:
    table = Table(
        title="Seller Feedback",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Rating", justify="center")
    table.add_column("Comment", max_width=60)
    table.add_column("User", style="magenta")
    table.add_column("Date", style="dim")

    styles = {"Positive": "green", "Neutral": "yellow", "Negative": "red"}
    for idx, e in enumerate(entries, 1):
        rating = e.rating.value if e.rating else ""
        table.add_row(
            str(idx),
            f"[{styles.get(rating, 'white')}]{rating or '—'}[/]",
            e.comment,
            e.user or "eBay buyer",
            e.date,
        )
    Console().print(table)


def _print_listings_table(items: list[ListingItem]) -> None:
    table = Table(
        title="Active Listings",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", max_width=60)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Condition", justify="center")
    table.add_column("URL", overflow="fold", style="dim")

    for idx, item in enumerate(items, 1):
        price = f"{item.currency} {item.price}" if item.price else "N/A"
        table.add_row(
            str(idx),
            item.title[:60],
            price,
            item.condition or "—",
            item.url,
        )
    Console().print(table)


def _report_origin(result: FeedResult) -> None:
    if result.stale:
        _err.print(
            "[yellow]Live fetch failed; showing stale cached data[/yellow]"
        )
    elif result.from_cache:
        _err.print("[dim]Served from cache[/dim]")


def _emit(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def run_feedback(
    service: FeedService,
    limit: str | None,
    seller: str,
    force: bool,
    output_format: str,
) -> int:
    """Print seller feedback. Returns a process exit code."""
    try:
        result = service.get_feedback(limit=limit, seller=seller, force=force)
    except EbayFeedError as exc:
        logger.error("CLI feedback failed: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return 1
    except Exception as exc:
        logger.error("CLI feedback crashed: %s", exc, exc_info=True)
        _err.print(f"[red]feedback failed: {exc}[/red]")
        return 1

    _report_origin(result)
    if output_format == "table":
        _print_feedback_table(
            [e for e in result.items if isinstance(e, FeedbackEntry)]
        )
    else:
        _emit(result.to_dicts())
    return 0


def run_listings(
    service: FeedService,
    limit: str | None,
    keywords: str,
    seller: str,
    force: bool,
    output_format: str,
) -> int:
    """Print active listings. Returns a process exit code."""
    try:
        result = service.get_listings(
            limit=limit, keywords=keywords, seller=seller, force=force
        )
    except EbayFeedError as exc:
        logger.error("CLI listings failed: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return 1
    except Exception as exc:
        logger.error("CLI listings crashed: %s", exc, exc_info=True)
        _err.print(f"[red]listings failed: {exc}[/red]")
        return 1

    _report_origin(result)
    if output_format == "table":
        _print_listings_table(
            [i for i in result.items if isinstance(i, ListingItem)]
        )
    else:
        _emit({"products": result.to_dicts()})
    return 0


def run_cache_clear(service: FeedService) -> int:
    """Remove both payload cache files."""
    removed = [
        str(cache.path)
        for cache in (service.listings_cache, service.feedback_cache)
        if cache.clear()
    ]
    if removed:
        _err.print(f"[dim]Removed {', '.join(removed)}[/dim]")
    else:
        _err.print("[dim]No cache files present[/dim]")
    return 0
