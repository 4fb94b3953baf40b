"""Turns a resolved package record into a reply.

``build_summary`` picks the version to describe and flattens it into a
``Summary``; ``build_not_found`` phrases the miss, with a suggestion when the
fuzzy search produced one.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from modfinder.config import SummarySettings
from modfinder.models.replies import ClosestTitle, NotFoundSummary, Summary

if TYPE_CHECKING:
    from collections.abc import Sequence

    from modfinder.models.package import PackageRecord, VersionRecord

DEPRECATION_NOTICE = (
    "This mod is deprecated. Alternative packages should be used whenever possible."
)

_OLDEST = datetime.min.replace(tzinfo=UTC)


def _created_at(version: VersionRecord) -> datetime:
    """Parse ``date_created``; missing or unparsable sorts before everything."""
    if not version.date_created:
        return _OLDEST
    try:
        parsed = datetime.fromisoformat(version.date_created)
    except ValueError:
        return _OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def select_version(versions: Sequence[VersionRecord]) -> VersionRecord | None:
    """The newest active version, or the last listed one if none is active."""
    if not versions:
        return None
    active = [v for v in versions if v.active]
    if not active:
        return versions[-1]
    # max() keeps the earliest of equal maxima
    return max(active, key=_created_at)


def format_dependency(identifier: str) -> str:
    """``Owner-Mod_Name-1.0.0`` -> ``Owner - Mod Name``."""
    parts = identifier.strip().replace("_", " ").split("-")
    if len(parts) >= 3:
        return f"{parts[-3]} - {parts[-2]}"
    return parts[-1]


def _site_label(url: str) -> str:
    host = urlsplit(url).hostname or ""
    return "Github" if "github.com" in host else "Website"


def build_summary(record: PackageRecord, settings: SummarySettings | None = None) -> Summary | None:
    """Flatten *record* into a reply, or ``None`` if it has no versions."""
    settings = settings or SummarySettings()
    version = select_version(record.versions)
    if version is None:
        return None

    description = version.description or record.description
    deprecated = record.is_deprecated
    if deprecated:
        description = f"~~{description}~~\n\n{DEPRECATION_NOTICE}"

    title = version.name.replace("_", " ")
    if deprecated:
        title += ("- " if title.endswith(" ") else " - ") + "Deprecated"

    dependencies = [
        d
        for d in version.dependencies
        if d.strip() and not d.startswith(tuple(settings.ignored_dependency_prefixes))
    ]
    shown = dependencies[: settings.max_dependencies]

    website = version.website_url or None
    author = record.publisher

    return Summary(
        title=title,
        description=description,
        version=version.version_number or version.name,
        deprecated=deprecated,
        page_url=record.package_url,
        download_url=version.download_link,
        website_url=website,
        website_label=_site_label(website) if website else None,
        dependencies=tuple(format_dependency(d) for d in shown),
        more_dependencies=len(dependencies) > len(shown),
        author=author.replace("_", " ") if author else "Unknown",
        icon_url=version.icon or record.icon,
        color=settings.embed_color,
    )


def build_not_found(
    query: str, closest: ClosestTitle, settings: SummarySettings | None = None
) -> NotFoundSummary:
    settings = settings or SummarySettings()
    suggestion = closest.title.replace("_", " ") if closest.title else None
    return NotFoundSummary(query=query, suggestion=suggestion, color=settings.embed_color)
