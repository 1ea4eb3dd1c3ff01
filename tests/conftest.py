# tests/conftest.py

"""Shared pytest fixtures for all ebay_feed tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path) -> Generator[None, None, None]:
    """Keep run logs and default cache files out of the working tree."""
    with patch.object(Settings, "LOGS_DIR", tmp_path / "logs"), \
            patch.object(Settings, "CACHE_DIR", tmp_path / "cache"):
        yield
