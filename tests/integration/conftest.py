"""Integration test fixtures.

Provides a fully wired AppState backed by a scripted remote source and a
gateway that records every reply. Sample listings come from tests/conftest.py.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest
import structlog

from modfinder.config import LoggingSettings, Settings
from modfinder.state import create_app_state

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

    from modfinder.fetcher import FetchSuccess
    from modfinder.models.messages import InboundMessage
    from modfinder.models.replies import Reply
    from modfinder.state import AppState
    from tests.conftest import FakeSource


class RecordingGateway:
    def __init__(self) -> None:
        self.sent: list[tuple[InboundMessage, Reply]] = []

    async def reply(self, message: InboundMessage, reply: Reply) -> None:
        self.sent.append((message, reply))


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """create_app_state configures structlog globally; undo it after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture()
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture()
def settings() -> Settings:
    return Settings(logging=LoggingSettings(level="DEBUG", format="text"))


@pytest.fixture()
async def app_state(
    gateway: RecordingGateway,
    settings: Settings,
    fake_source_cls: type[FakeSource],
    listing: FetchSuccess,
) -> AsyncIterator[AppState]:
    """AppState whose first refresh has already been published."""
    async with create_app_state(gateway, settings, source=fake_source_cls(listing)) as state:
        async with asyncio.timeout(2):
            while state.cache.snapshot().version == 0:
                await asyncio.sleep(0.001)
        yield state
