# src/storage/payload_cache.py

"""Single-file JSON cache holding the last successful payload."""

import json
import logging
import os
import tempfile
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.config.settings import Settings

logger = logging.getLogger("ebay_feed.cache")


@dataclass
class CachePayload:
    """The persisted records and when they were captured."""

    key: str
    items: list[dict[str, Any]] = field(
        default_factory=lambda: list[dict[str, Any]]()
    )
    cached_at: float = 0.0

    def age(self, now: float) -> float:
        return now - self.cached_at


class PayloadCache:
    """Read-through cache backed by one JSON file.

    There is no locking: concurrent writers race and the last write
    wins. A missing or unreadable file is treated as an empty cache.
    """

    def __init__(
        self,
        path: Path,
        ttl: float = Settings.CACHE_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.path = Path(path)
        self.ttl = ttl
        self._clock = clock

    def load(self) -> CachePayload | None:
        """Return the persisted payload, or ``None`` on a miss."""
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.warning(
                "Ignoring unreadable cache file %s: %s", self.path, exc
            )
            return None

        if not isinstance(data, dict) or not isinstance(
            data.get("items"), list
        ):
            logger.warning("Ignoring malformed cache file %s", self.path)
            return None

        return CachePayload(
            key=str(data.get("key", "")),
            items=list(data["items"]),
            cached_at=float(data.get("cachedAt", 0.0)),
        )

    def is_fresh(self, payload: CachePayload, key: str) -> bool:
        """True if *payload* answers *key* and is younger than the TTL."""
        return (
            payload.key == key
            and payload.age(self._clock()) < self.ttl
        )

    def store(self, key: str, items: list[dict[str, Any]]) -> CachePayload:
        """Overwrite the cache file with *items*."""
        payload = CachePayload(
            key=key, items=list(items), cached_at=self._clock()
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=self.path.name, suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(
                    {
                        "key": payload.key,
                        "items": payload.items,
                        "cachedAt": payload.cached_at,
                    },
                    f,
                    ensure_ascii=False,
                )
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info(
            "Cached %d records under '%s' in %s",
            len(items),
            key,
            self.path,
        )
        return payload

    def clear(self) -> bool:
        """Delete the cache file. Returns True if one existed."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        logger.info("Cache file %s removed", self.path)
        return True
