"""From a raw query to the reply the bot should send."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from modfinder import resolver
from modfinder.config import BotSettings, SummarySettings
from modfinder.normalizer import normalize
from modfinder.summary import build_not_found, build_summary

if TYPE_CHECKING:
    from collections.abc import Sequence

    from modfinder.cache import RecordCache
    from modfinder.models.package import PackageRecord
    from modfinder.models.replies import NotFoundSummary, Summary

log = structlog.get_logger()


class PackageLookup:
    def __init__(
        self,
        cache: RecordCache,
        bot_settings: BotSettings | None = None,
        summary_settings: SummarySettings | None = None,
    ) -> None:
        self._cache = cache
        self._bot = bot_settings or BotSettings()
        self._summary = summary_settings or SummarySettings()

    def describe(self, query: str) -> Summary | NotFoundSummary:
        """Summary for *query*, a close match's summary, or a not-found reply.

        Runs against a single snapshot from start to finish.
        """
        records = self._cache.current()

        if resolver.exists(query, records):
            summary = self._summary_for(query, records)
            if summary is not None:
                return summary

        closest = resolver.get_closest_title(query, records)
        if closest.title and closest.distance <= self._bot.autocorrect_distance:
            summary = self._summary_for(closest.title, records)
            if summary is not None:
                log.debug(
                    "lookup_autocorrected",
                    query=query,
                    title=closest.title,
                    distance=closest.distance,
                )
                return summary

        return build_not_found(query, closest, self._summary)

    def _summary_for(self, name: str, records: Sequence[PackageRecord]) -> Summary | None:
        record = resolver.find_by_title(normalize(name), records)
        if record is None:
            return None
        return build_summary(record, self._summary)
