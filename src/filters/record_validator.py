# src/filters/record_validator.py

"""Record validation: drop records without a display field."""

import logging

from src.models.feedback import FeedbackEntry
from src.models.page import Record

logger = logging.getLogger("ebay_feed.filters")


class RecordValidator:
    """Drop records whose primary display field is empty."""

    @staticmethod
    def display_text(record: Record) -> str:
        """Return the field a client renders: comment or title."""
        if isinstance(record, FeedbackEntry):
            return record.comment
        return record.title

    @staticmethod
    def validate(records: list[Record]) -> tuple[list[Record], int]:
        """Drop records with empty/whitespace comment or title.

        Returns the valid records and the count of dropped items.
        """
        valid: list[Record] = []
        dropped = 0

        for record in records:
            if not RecordValidator.display_text(record).strip():
                logger.debug(
                    "Dropped %s with empty display text",
                    type(record).__name__,
                )
                dropped += 1
                continue
            valid.append(record)

        if dropped:
            logger.info(
                "Validation dropped %d invalid records", dropped
            )

        return valid, dropped
