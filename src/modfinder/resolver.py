"""Package name resolution.

The module-level functions are pure business logic: they receive a sequence
of records and return matches, with no knowledge of the cache, the gateway or
any I/O. ``Resolver`` binds them to a ``RecordCache``, taking one snapshot at
the start of each call so a refresh halfway through a lookup cannot mix two
listings.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from modfinder.distance import bounded_distance
from modfinder.models.replies import ClosestPackage, ClosestTitle
from modfinder.normalizer import fuzzy_key, normalize, tokens

if TYPE_CHECKING:
    from collections.abc import Sequence

    from modfinder.cache import RecordCache
    from modfinder.models.package import PackageRecord

# Largest accepted distance relative to the longer normalized string.
MAX_NORMALIZED_DISTANCE = 0.25


def exists(query: str, records: Sequence[PackageRecord]) -> bool:
    """Whether *query* names a package exactly, ignoring case and punctuation.

    Checked per record, first hit wins:
      1. ``name``
      2. ``full_name``
      3. ``full_name`` without its ``Owner-`` prefix
      4. name of the first listed version
      5. any single word of ``name`` (so "cloak" finds "Moss_Cloak")
    """
    want = normalize(query)
    if not want:
        return False

    for record in records:
        if normalize(record.name) == want or normalize(record.full_name) == want:
            return True

        _, dash, suffix = record.full_name.partition("-")
        if dash and normalize(suffix) == want:
            return True

        first = record.first_version
        if first is not None and normalize(first.name) == want:
            return True

        if any(normalize(tok) == want for tok in tokens(record.name)):
            return True
    return False


def find_by_title(title: str | None, records: Sequence[PackageRecord]) -> PackageRecord | None:
    """Return the first record whose name or description matches *title*.

    A record matches on case-insensitive equality with its name, equality of
    the normalized forms, or the title appearing inside its name or
    description. Records are tried in listing order.
    """
    if title is None:
        return None
    want = fuzzy_key(title)
    if not want:
        return None
    want_normalized = normalize(title)

    for record in records:
        name = record.name
        if fuzzy_key(name) == want:
            return record
        if want_normalized and normalize(name) == want_normalized:
            return record
        if want in name.lower() or want in record.description.lower():
            return record
    return None


def get_closest_package(
    query: str | None, records: Sequence[PackageRecord]
) -> ClosestPackage | None:
    """Fuzzy match *query* against every record's candidate names.

    Scans name, full_name and first-version name of every record, keeping
    the smallest edit distance (shorter candidate wins a tie). The winner is
    only returned if it is plausibly what the user meant:

    - a one-character query must equal a whole word of the candidate;
    - otherwise the distance may be at most a quarter of the longer
      normalized string.
    """
    if query is None or not records:
        return None
    want = fuzzy_key(query)
    want_normalized = normalize(want)
    if not want_normalized:
        return None

    best_record: PackageRecord | None = None
    best_candidate: str | None = None
    best_distance = sys.maxsize

    for record in records:
        for raw in record.candidate_names():
            candidate = fuzzy_key(raw)
            d = bounded_distance(want, candidate, best_distance)
            if d < best_distance or (
                d == best_distance
                and best_candidate is not None
                and len(candidate) < len(best_candidate)
            ):
                best_distance = d
                best_record = record
                best_candidate = candidate

    if best_record is None or best_candidate is None:
        return None

    if len(want_normalized) == 1:
        if any(tok.lower() == want_normalized for tok in tokens(best_candidate)):
            return ClosestPackage(best_distance, best_record)
        return None

    longest = max(len(want_normalized), len(normalize(best_candidate)), 1)
    if best_distance / longest <= MAX_NORMALIZED_DISTANCE:
        return ClosestPackage(best_distance, best_record)
    return None


def get_closest_title(query: str | None, records: Sequence[PackageRecord]) -> ClosestTitle:
    """Like :func:`get_closest_package`, but returns a display name.

    The name is the record's first non-blank candidate (``name`` preferred),
    not necessarily the candidate that won. ``(0, "")`` means no match.
    """
    closest = get_closest_package(query, records)
    if closest is None:
        return ClosestTitle(0, "")
    names = closest.record.candidate_names()
    if not names:
        return ClosestTitle(0, "")
    return ClosestTitle(closest.distance, names[0])


class Resolver:
    """Resolution against whatever snapshot the cache is serving right now."""

    def __init__(self, cache: RecordCache) -> None:
        self._cache = cache

    def exists(self, query: str) -> bool:
        return exists(query, self._cache.current())

    def find_by_title(self, title: str | None) -> PackageRecord | None:
        return find_by_title(title, self._cache.current())

    def get_closest_package(self, query: str | None) -> ClosestPackage | None:
        return get_closest_package(query, self._cache.current())

    def get_closest_title(self, query: str | None) -> ClosestTitle:
        return get_closest_title(query, self._cache.current())
