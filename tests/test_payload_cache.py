# tests/test_payload_cache.py

"""Tests for the single-file JSON payload cache."""

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from src.storage.payload_cache import PayloadCache


class _Clock:

    def __init__(self, now: float = 5000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestPayloadCache(unittest.TestCase):
    """PayloadCache unit tests."""

    def setUp(self) -> None:
        self.tmp_dir = Path(tempfile.mkdtemp())
        self.path = self.tmp_dir / "cache.json"
        self.clock = _Clock()
        self.cache = PayloadCache(self.path, ttl=1800.0, clock=self.clock)

    def tearDown(self) -> None:
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def test_missing_file_is_a_miss(self) -> None:
        self.assertIsNone(self.cache.load())

    def test_store_then_load(self) -> None:
        self.cache.store("feedback:curio:30", [{"comment": "Hi"}])

        payload = self.cache.load()

        assert payload is not None
        self.assertEqual(payload.key, "feedback:curio:30")
        self.assertEqual(payload.items, [{"comment": "Hi"}])
        self.assertEqual(payload.cached_at, 5000.0)

    def test_file_layout(self) -> None:
        self.cache.store("k", [{"id": "1"}])
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(
            data, {"key": "k", "items": [{"id": "1"}], "cachedAt": 5000.0}
        )

    def test_fresh_within_ttl(self) -> None:
        payload = self.cache.store("k", [])
        self.clock.now += 1799
        self.assertTrue(self.cache.is_fresh(payload, "k"))

    def test_expired_after_ttl(self) -> None:
        payload = self.cache.store("k", [])
        self.clock.now += 1800
        self.assertFalse(self.cache.is_fresh(payload, "k"))

    def test_other_key_not_fresh(self) -> None:
        payload = self.cache.store("k", [])
        self.assertFalse(self.cache.is_fresh(payload, "other"))

    def test_store_overwrites(self) -> None:
        self.cache.store("a", [{"n": 1}])
        self.cache.store("b", [{"n": 2}])
        payload = self.cache.load()
        assert payload is not None
        self.assertEqual(payload.key, "b")
        self.assertEqual(list(self.tmp_dir.iterdir()), [self.path])

    def test_corrupt_file_is_a_miss(self) -> None:
        self.path.write_text("{not json", encoding="utf-8")
        self.assertIsNone(self.cache.load())

    def test_wrong_shape_is_a_miss(self) -> None:
        self.path.write_text('{"key": "k", "items": 3}', encoding="utf-8")
        self.assertIsNone(self.cache.load())

    def test_creates_parent_directory(self) -> None:
        nested = PayloadCache(self.tmp_dir / "a" / "b" / "c.json")
        nested.store("k", [])
        self.assertTrue((self.tmp_dir / "a" / "b" / "c.json").exists())

    def test_clear(self) -> None:
        self.assertFalse(self.cache.clear())
        self.cache.store("k", [])
        self.assertTrue(self.cache.clear())
        self.assertIsNone(self.cache.load())


if __name__ == "__main__":
    unittest.main()
