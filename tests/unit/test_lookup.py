"""Unit tests for modfinder.lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modfinder.cache import RecordCache
from modfinder.config import BotSettings
from modfinder.fetcher import FetchSuccess
from modfinder.lookup import PackageLookup
from modfinder.models.package import PackageRecord
from modfinder.models.replies import NotFoundSummary, Summary

if TYPE_CHECKING:
    from tests.conftest import FakeSource


class TestDescribe:
    async def test_exact_name(self, cache: RecordCache) -> None:
        reply = PackageLookup(cache).describe("moss cloak")
        assert isinstance(reply, Summary)
        assert reply.title == "Moss Cloak"

    async def test_single_word(self, cache: RecordCache) -> None:
        reply = PackageLookup(cache).describe("spear")
        assert isinstance(reply, Summary)
        assert reply.title == "Silk Spear"
        assert reply.version == "1.2.0"
        assert reply.website_label == "Github"
        assert reply.dependencies == ("Author - Moss Cloak",)

    async def test_near_miss_is_autocorrected(self, cache: RecordCache) -> None:
        reply = PackageLookup(cache).describe("Mos Cloak")
        assert isinstance(reply, Summary)
        assert reply.title == "Moss Cloak"

    async def test_further_miss_gets_suggestion(self, cache: RecordCache) -> None:
        reply = PackageLookup(cache).describe("Greater Moss Cloak Delux")
        assert isinstance(reply, NotFoundSummary)
        assert reply.description == (
            "Could not find a mod named Greater Moss Cloak Delux. "
            "Did you mean Greater Moss Cloak Deluxe?"
        )

    async def test_autocorrect_distance_configurable(self, cache: RecordCache) -> None:
        lookup = PackageLookup(cache, BotSettings(autocorrect_distance=4))
        reply = lookup.describe("Greater Moss Cloak Delux")
        assert isinstance(reply, Summary)
        assert reply.title == "Greater Moss Cloak Deluxe"

    async def test_nothing_close(self, cache: RecordCache) -> None:
        reply = PackageLookup(cache).describe("Completely Unrelated Thing")
        assert isinstance(reply, NotFoundSummary)
        assert reply.suggestion is None
        assert reply.description == "Could not find a mod named Completely Unrelated Thing."

    async def test_record_without_versions_is_not_found(self, cache: RecordCache) -> None:
        reply = PackageLookup(cache).describe("Hollow Tools")
        assert isinstance(reply, NotFoundSummary)
        # the fuzzy search still finds it, it just has nothing to show
        assert reply.suggestion == "Hollow Tools"

    async def test_empty_cache(self, fake_source_cls: type[FakeSource]) -> None:
        cache = RecordCache(fake_source_cls(FetchSuccess(records=())))
        reply = PackageLookup(cache).describe("moss cloak")
        assert isinstance(reply, NotFoundSummary)
        assert reply.suggestion is None

    async def test_uses_latest_snapshot(
        self, fake_source_cls: type[FakeSource], moss_cloak: PackageRecord
    ) -> None:
        source = fake_source_cls(FetchSuccess(records=()), FetchSuccess(records=(moss_cloak,)))
        cache = RecordCache(source)
        lookup = PackageLookup(cache)
        await cache.refresh()
        assert isinstance(lookup.describe("moss cloak"), NotFoundSummary)
        await cache.refresh()
        assert isinstance(lookup.describe("moss cloak"), Summary)
