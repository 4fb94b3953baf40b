"""Bounded Levenshtein distance.

Callers only care about distances up to some bound (the best candidate seen
so far, or an acceptance threshold), so the computation gives up as soon as
every cell of a row is past that bound.
"""

from __future__ import annotations


def bounded_distance(a: str, b: str, max_distance: int) -> int:
    """Return the edit distance between *a* and *b*, capped at ``max_distance + 1``.

    Insertions, deletions and substitutions each cost 1. Only two rows of
    ``len(shorter) + 1`` cells are kept. The result is the true distance when
    that is ``<= max_distance`` and ``max_distance + 1`` otherwise, regardless
    of argument order.
    """
    if len(a) < len(b):
        a, b = b, a
    too_far = max_distance + 1
    if not b:
        return min(len(a), too_far)

    previous = list(range(len(b) + 1))
    current = [0] * (len(b) + 1)

    for i, ca in enumerate(a, start=1):
        current[0] = i
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current[j] = min(current[j - 1] + 1, previous[j] + 1, previous[j - 1] + cost)

        # Row minima never decrease, so nothing below can come back under the bound.
        if min(current) > max_distance:
            return too_far
        previous, current = current, previous

    return previous[-1] if previous[-1] <= max_distance else too_far
