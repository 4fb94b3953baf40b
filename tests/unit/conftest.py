"""Unit-specific fixtures (no network I/O)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from modfinder.cache import RecordCache

if TYPE_CHECKING:
    from modfinder.fetcher import FetchSuccess


@pytest.fixture()
async def cache(fake_source_cls, listing: FetchSuccess) -> RecordCache:
    """Record cache already holding the sample listing."""
    c = RecordCache(fake_source_cls(listing))
    await c.refresh()
    return c
