# main.py

"""Entry point for ebay_feed: HTTP server, carousel TUI or one-shot CLI."""

import argparse
import logging
import sys

from src.config.credentials import EbayConfig
from src.config.logging_config import setup_logging
from src.config.settings import Settings
from src.exceptions import MissingConfigError
from src.services.feed_service import FeedService

logger = logging.getLogger("ebay_feed.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="ebay_feed",
        description="eBay seller feedback and listings feed.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    fmt = argparse.ArgumentParser(add_help=False)
    fmt.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    fmt.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Bypass the cache and fetch live.",
    )
    fmt.add_argument("--seller", default="", help="Override EBAY_SELLER.")

    fb = sub.add_parser(
        "feedback", parents=[fmt], help="Print seller feedback."
    )
    fb.add_argument(
        "-n",
        "--limit",
        default=None,
        help=f"Entries to return (max {Settings.FEEDBACK_MAX_LIMIT}).",
    )

    ls = sub.add_parser(
        "listings", parents=[fmt], help="Print active listings."
    )
    ls.add_argument(
        "-n",
        "--limit",
        default=None,
        help=f"Items to return or 'all' (max {Settings.LISTINGS_MAX_LIMIT}).",
    )
    ls.add_argument(
        "-q", "--keywords", default="", help="Free-text search."
    )

    srv = sub.add_parser("serve", help="Run the HTTP API.")
    srv.add_argument("--host", default=Settings.SERVER_HOST)
    srv.add_argument("--port", type=int, default=Settings.SERVER_PORT)

    car = sub.add_parser("carousel", help="Show the feedback carousel.")
    car.add_argument(
        "--pad",
        action="store_true",
        default=False,
        help="Repeat reviews until the carousel is full.",
    )

    sub.add_parser("clear-cache", help="Delete the payload cache files.")
    return parser


def _run_server(host: str, port: int) -> None:
    """Serve the FastAPI app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "src.api.app:create_app", factory=True, host=host, port=port
    )


def _run_carousel(service: FeedService, pad: bool) -> None:
    """Launch the Textual feedback carousel."""
    from src.ui.app import FeedbackCarouselApp

    try:
        FeedbackCarouselApp(service, pad=pad).run()
    except Exception:
        logger.critical("Fatal error during carousel run", exc_info=True)
        raise
    finally:
        logger.info("ebay_feed carousel shutting down")


def main() -> None:
    """Route to the selected sub-command."""
    log_file = setup_logging()
    logger.info("ebay_feed starting, log file: %s", log_file)

    args = _build_parser().parse_args()

    if args.command == "serve":
        _run_server(args.host, args.port)
        return

    from src.cli.runner import (
        run_cache_clear,
        run_feedback,
        run_listings,
    )

    try:
        service = FeedService(EbayConfig.from_env())
    except MissingConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(2)

    if args.command == "feedback":
        code = run_feedback(
            service, args.limit, args.seller, args.force, args.output_format
        )
    elif args.command == "listings":
        code = run_listings(
            service,
            args.limit,
            args.keywords,
            args.seller,
            args.force,
            args.output_format,
        )
    elif args.command == "clear-cache":
        code = run_cache_clear(service)
    else:
        _run_carousel(service, args.pad)
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()
