"""In-memory package record cache with last-good fallback.

All refresh failures are caught internally and degrade gracefully: the
previously published snapshot keeps being served and the failure is logged.
Infrastructure errors never cross the RecordCache class boundary.

Publishing a refresh is a single attribute assignment of a new, immutable
``Snapshot``. Readers grab the current snapshot once and keep working against
it, so they see either the old listing or the new one in full, never a mix.
Refreshes are serialized with a lock, so a scheduled refresh and an admin
reload never fetch at the same time and the later one always publishes last.
Readers never take the lock.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog

from modfinder.fetcher import FetchFailure
from modfinder.models.snapshot import Snapshot

if TYPE_CHECKING:
    from modfinder.fetcher import RemoteSource
    from modfinder.models.package import PackageRecord

log = structlog.get_logger()


class RecordCache:
    """Process-wide snapshot of the registry listing, starts out empty."""

    def __init__(self, source: RemoteSource) -> None:
        self._source = source
        self._snapshot = Snapshot()
        self._fallback: tuple[PackageRecord, ...] = ()
        self._refresh_lock = asyncio.Lock()

    def current(self) -> tuple[PackageRecord, ...]:
        """Records of the latest published snapshot. Never blocks."""
        return self._snapshot.records

    def snapshot(self) -> Snapshot:
        return self._snapshot

    async def refresh(self) -> tuple[PackageRecord, ...]:
        """Fetch the listing and publish it. Returns the last good records on failure.

        A call made while another refresh is running waits for it, then fetches
        again.
        """
        async with self._refresh_lock:
            return await self._refresh()

    async def _refresh(self) -> tuple[PackageRecord, ...]:
        try:
            result = await self._source.fetch()
        except Exception:
            log.warning("registry_refresh_failed", code="UNEXPECTED", exc_info=True)
            return self._fallback

        if isinstance(result, FetchFailure):
            log.warning(
                "registry_refresh_failed",
                code=str(result.code),
                error=result.message,
                serving_version=self._snapshot.version,
                serving_records=len(self._fallback),
            )
            return self._fallback

        snapshot = Snapshot(
            records=result.records,
            version=self._snapshot.version + 1,
            fetched_at=datetime.now(UTC),
        )
        self._fallback = snapshot.records
        self._snapshot = snapshot
        log.info(
            "registry_refreshed",
            records=len(snapshot.records),
            version=snapshot.version,
            fetched_at=snapshot.fetched_at.isoformat(),
        )
        return snapshot.records
