# src/services/paginator.py

"""Sequential page loop shared by every fetcher."""

import logging
from collections.abc import Callable, Hashable

from src.filters.deduplicator import Deduplicator
from src.filters.record_validator import RecordValidator
from src.models.page import PageResult, Record

logger = logging.getLogger("ebay_feed.paginator")


def paginate(
    fetch_page: Callable[[int], PageResult],
    limit: int,
    page_size: int,
    max_pages: int,
    key: Callable[[Record], Hashable] | None = None,
    on_page: Callable[[int, PageResult], None] | None = None,
) -> list[Record]:
    """Fetch pages 1, 2, ... until one stop condition holds.

    Stops when ``limit`` records are accumulated, a page holds fewer raw
    entries than ``page_size``, the upstream total page count is reached
    (or the page reports ``has_more=False``), or page ``max_pages`` has
    been fetched. Exceptions from *fetch_page* propagate unchanged.

    Returns at most ``limit`` validated (and, with *key*, deduplicated)
    records in page order.
    """
    if limit <= 0:
        return []

    dedup = Deduplicator(key) if key is not None else None
    out: list[Record] = []
    page = 1

    while True:
        result = fetch_page(page)
        if on_page is not None:
            on_page(page, result)

        records, _ = RecordValidator.validate(result.items)
        if dedup is not None:
            records = dedup.filter(records)
        out.extend(records[: limit - len(out)])

        logger.info(
            "Page %d: %d raw, %d kept, %d accumulated",
            page,
            result.raw_count,
            len(records),
            len(out),
        )

        if len(out) >= limit:
            break
        if result.raw_count < page_size:
            logger.debug("Short page %d, no more pages", page)
            break
        if result.total_pages is not None and page >= result.total_pages:
            logger.debug("Reached upstream total of %d pages", page)
            break
        if not result.has_more:
            break
        if page >= max_pages:
            logger.warning(
                "Stopped at page ceiling %d with %d/%d records",
                max_pages,
                len(out),
                limit,
            )
            break
        page += 1

    if dedup is not None and dedup.removed:
        logger.info(
            "Deduplication removed %d duplicate records", dedup.removed
        )
    return out
