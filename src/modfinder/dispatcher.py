"""Turns inbound chat messages into lookups and replies.

Every ``{{Mod Name}}`` token in a message becomes its own task, so the
gateway's event delivery never waits on a lookup or a cache reload. There is
no backpressure unless ``max_concurrent_lookups`` is set.
"""

from __future__ import annotations

import asyncio
import re
from typing import TYPE_CHECKING, Protocol

import structlog

from modfinder.config import BotSettings
from modfinder.models.replies import TextReply

if TYPE_CHECKING:
    from modfinder.cache import RecordCache
    from modfinder.lookup import PackageLookup
    from modfinder.models.messages import InboundMessage
    from modfinder.models.replies import Reply

log = structlog.get_logger()

# Two opening braces, letters/digits/underscores/spaces, two closing braces.
TRIGGER_PATTERN = re.compile(r"\{\{([A-Za-z0-9_ ]+)\}\}")

RELOAD_CONFIRMATION = "Reloaded mod cache."


class MessagingGateway(Protocol):
    async def reply(self, message: InboundMessage, reply: Reply) -> None:
        """Send *reply* in answer to *message* without mentioning its author."""
        ...


def extract_queries(text: str) -> list[str]:
    """Trimmed inner text of every trigger token, blank ones dropped."""
    queries = (m.group(1).strip() for m in TRIGGER_PATTERN.finditer(text))
    return [q for q in queries if q]


class Dispatcher:
    def __init__(
        self,
        gateway: MessagingGateway,
        cache: RecordCache,
        lookup: PackageLookup,
        settings: BotSettings | None = None,
    ) -> None:
        self._gateway = gateway
        self._cache = cache
        self._lookup = lookup
        self._settings = settings or BotSettings()
        self._tasks: set[asyncio.Task[None]] = set()
        self._limit = (
            asyncio.Semaphore(self._settings.max_concurrent_lookups)
            if self._settings.max_concurrent_lookups
            else None
        )

    def is_reload_command(self, query: str) -> bool:
        return query.replace(" ", "").lower() == self._settings.reload_command.lower()

    def on_message(self, message: InboundMessage) -> list[asyncio.Task[None]]:
        """Schedule one task per trigger token and return immediately."""
        spawned = []
        for query in extract_queries(message.content):
            task = asyncio.create_task(self._handle(message, query))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            spawned.append(task)
        return spawned

    async def drain(self) -> None:
        """Wait for every in-flight task."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def _handle(self, message: InboundMessage, query: str) -> None:
        try:
            if self.is_reload_command(query):
                await self._reload(message)
            elif self._limit is not None:
                async with self._limit:
                    await self._answer(message, query)
            else:
                await self._answer(message, query)
        except Exception:
            log.error(
                "lookup_failed",
                query=query,
                channel_id=message.channel_id,
                message_id=message.message_id,
                exc_info=True,
            )

    async def _reload(self, message: InboundMessage) -> None:
        if not message.can_manage_messages:
            log.debug("reload_denied", author_id=message.author_id, channel_id=message.channel_id)
            return
        records = await self._cache.refresh()
        log.info("reload_requested", author_id=message.author_id, records=len(records))
        await self._gateway.reply(message, TextReply(content=RELOAD_CONFIRMATION))

    async def _answer(self, message: InboundMessage, query: str) -> None:
        reply = await asyncio.to_thread(self._lookup.describe, query)
        log.debug("lookup_answered", query=query, reply=type(reply).__name__)
        await self._gateway.reply(message, reply)
