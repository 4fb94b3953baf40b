"""Canonical keys for exact name comparison.

``normalize`` is the equality key everywhere an exact match is attempted.
Fuzzy distance does not use it: it works on trimmed, lowercased
raw text so spaces and separators still count as edits.
"""

from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def normalize(s: str) -> str:
    """Drop everything but ASCII letters and digits, then lowercase."""
    return _NON_ALNUM.sub("", s).lower()


def tokens(s: str) -> list[str]:
    """Split *s* on runs of non-alphanumerics, dropping empty pieces."""
    return [t for t in _NON_ALNUM.split(s) if t]


def fuzzy_key(s: str) -> str:
    """Trimmed, lowercased text used for distance comparisons."""
    return s.strip().lower()
