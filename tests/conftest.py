"""Shared fixtures: a small package listing and a scriptable remote source."""

from __future__ import annotations

from typing import Any

import pytest

from modfinder.errors import ErrorCode
from modfinder.fetcher import FetchFailure, FetchResult, FetchSuccess
from modfinder.models.package import PackageRecord

MOSS_CLOAK: dict[str, Any] = {
    "name": "Moss_Cloak",
    "full_name": "Author-Moss_Cloak",
    "owner": "Author",
    "description": "A cloak woven from moss.",
    "icon": "https://cdn.example.com/moss_cloak.png",
    "is_deprecated": False,
    "package_url": "https://thunderstore.io/c/hollow-knight-silksong/p/Author/Moss_Cloak/",
    "versions": [
        {
            "name": "Moss_Cloak",
            "version_number": "1.0.0",
            "is_active": True,
            "date_created": "2024-01-01T00:00:00Z",
            "download_url": "https://thunderstore.io/package/download/Author/Moss_Cloak/1.0.0/",
            "dependencies": [],
        }
    ],
}

SILK_SPEAR: dict[str, Any] = {
    "name": "Silk_Spear",
    "full_name": "Weaver-Silk_Spear",
    "namespace": "Weaver",
    "description": "A spear spun from silk.",
    "icon": "https://cdn.example.com/silk_spear.png",
    "is_deprecated": False,
    "package_url": "https://thunderstore.io/c/hollow-knight-silksong/p/Weaver/Silk_Spear/",
    "versions": [
        {
            "name": "Silk_Spear",
            "version_number": "2.0.0",
            "is_active": False,
            "date_created": "2024-06-01T00:00:00Z",
        },
        {
            "name": "Silk_Spear",
            "version_number": "1.2.0",
            "description": "A sharper spear spun from silk.",
            "is_active": True,
            "date_created": "2024-03-01T12:00:00+00:00",
            "download_url": "https://thunderstore.io/package/download/Weaver/Silk_Spear/1.2.0/",
            "website_url": "https://github.com/weaver/silk-spear",
            "dependencies": ["BepInEx-BepInExPack-5.4.2100", "Author-Moss_Cloak-1.0.0"],
        },
        {
            "name": "Silk_Spear",
            "version_number": "1.0.0",
            "date_created": "2024-01-01T00:00:00Z",
        },
    ],
}

GREATER_MOSS_CLOAK: dict[str, Any] = {
    "name": "Greater_Moss_Cloak_Deluxe",
    "full_name": "Author-Greater_Moss_Cloak_Deluxe",
    "owner": "Author",
    "description": "More moss.",
    "package_url": "https://thunderstore.io/c/hollow-knight-silksong/p/Author/Greater_Moss_Cloak_Deluxe/",
    "versions": [
        {
            "name": "Greater_Moss_Cloak_Deluxe",
            "version_number": "0.1.0",
            "date_created": "2024-02-01T00:00:00Z",
        }
    ],
}

HOLLOW_TOOLS: dict[str, Any] = {
    "name": "Hollow_Tools",
    "full_name": "Team_Cherry-Hollow_Tools",
    "description": "Placeholder listing without any versions.",
    "versions": [],
}


@pytest.fixture()
def moss_cloak() -> PackageRecord:
    return PackageRecord.model_validate(MOSS_CLOAK)


@pytest.fixture()
def sample_records() -> tuple[PackageRecord, ...]:
    return tuple(
        PackageRecord.model_validate(item)
        for item in (MOSS_CLOAK, SILK_SPEAR, GREATER_MOSS_CLOAK, HOLLOW_TOOLS)
    )


class FakeSource:
    """Remote source that replays scripted results, repeating the last one.

    An ``Exception`` instance in the script is raised instead of returned.
    """

    def __init__(self, *results: FetchResult | Exception) -> None:
        self._results = list(results)
        self.calls = 0

    async def fetch(self) -> FetchResult:
        self.calls += 1
        result = self._results.pop(0) if len(self._results) > 1 else self._results[0]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture()
def fake_source_cls() -> type[FakeSource]:
    return FakeSource


@pytest.fixture()
def unavailable() -> FetchFailure:
    return FetchFailure(code=ErrorCode.REGISTRY_UNAVAILABLE, message="connection refused")


@pytest.fixture()
def listing(sample_records: tuple[PackageRecord, ...]) -> FetchSuccess:
    return FetchSuccess(records=sample_records)
