"""Application wiring.

``create_app_state`` owns the lifecycle: the record cache and its refresh
loop are created at startup and torn down at exit, nothing else is.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from modfinder.cache import RecordCache
from modfinder.config import Settings
from modfinder.dispatcher import Dispatcher
from modfinder.fetcher import RegistryFetcher, build_http_client
from modfinder.logging_config import configure_logging
from modfinder.lookup import PackageLookup
from modfinder.resolver import Resolver
from modfinder.scheduler import RefreshScheduler

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    import httpx

    from modfinder.dispatcher import MessagingGateway
    from modfinder.fetcher import RemoteSource

log = structlog.get_logger()


@dataclass
class AppState:
    settings: Settings
    cache: RecordCache
    resolver: Resolver
    lookup: PackageLookup
    scheduler: RefreshScheduler
    dispatcher: Dispatcher
    http_client: httpx.AsyncClient | None = None


@contextlib.asynccontextmanager
async def create_app_state(
    gateway: MessagingGateway,
    settings: Settings | None = None,
    *,
    source: RemoteSource | None = None,
) -> AsyncIterator[AppState]:
    """Build the bot, start the refresh loop, and tear everything down on exit.

    *source* replaces the HTTP registry fetcher (no client is created then).
    """
    settings = settings or Settings()
    configure_logging(settings.logging)

    async with contextlib.AsyncExitStack() as stack:
        http_client = None
        if source is None:
            http_client = await stack.enter_async_context(build_http_client(settings.registry))
            source = RegistryFetcher(http_client, settings.registry)

        cache = RecordCache(source)
        lookup = PackageLookup(cache, settings.bot, settings.summary)
        state = AppState(
            settings=settings,
            cache=cache,
            resolver=Resolver(cache),
            lookup=lookup,
            scheduler=RefreshScheduler(cache, settings.registry.refresh_interval),
            dispatcher=Dispatcher(gateway, cache, lookup, settings.bot),
            http_client=http_client,
        )

        state.scheduler.start()
        log.info("app_started", index_url=settings.registry.index_url)
        try:
            yield state
        finally:
            await state.scheduler.stop()
            await state.dispatcher.drain()
            log.info("app_stopped")
