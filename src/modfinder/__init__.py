"""Thunderstore mod lookup bot: fuzzy name resolution over a refreshed listing."""

from __future__ import annotations

__version__ = "0.1.0"
