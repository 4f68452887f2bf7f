"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from notiontree.core.settings import load_settings


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Rebuild cached settings after each test so env overrides never leak."""
    yield
    load_settings.cache_clear()
