"""Background refresh loop for the record cache.

Fixed delay, not fixed rate: the next refresh starts ``interval`` after the
previous one finished, however long that one took. The first refresh runs
immediately.
"""

from __future__ import annotations

import asyncio
import contextlib
from datetime import timedelta
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from modfinder.cache import RecordCache

log = structlog.get_logger()


class RefreshScheduler:
    def __init__(self, cache: RecordCache, interval: timedelta = timedelta(minutes=30)) -> None:
        self._cache = cache
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="registry-refresh")
        log.info("refresh_scheduler_started", interval_seconds=self._interval.total_seconds())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        log.info("refresh_scheduler_stopped")

    async def _run(self) -> None:
        while True:
            try:
                await self._cache.refresh()
            except Exception:
                log.error("refresh_iteration_failed", exc_info=True)
            await asyncio.sleep(self._interval.total_seconds())
