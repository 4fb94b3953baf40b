"""Registry fetcher: downloads the gzipped Thunderstore package listing.

The index URL serves a gzipped JSON string that points at a second gzipped
resource; that one decompresses to a JSON array of package objects.

``RegistryFetcher.fetch`` never raises. Every failure on the way (network,
HTTP status, gzip, JSON) comes back as a ``FetchFailure`` and the record
cache decides what to serve instead.
"""

from __future__ import annotations

import asyncio
import gzip
import json
import re
import zlib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import httpx
import structlog
from pydantic import ValidationError

from modfinder.errors import ErrorCode, ModFinderError
from modfinder.models.package import PackageRecord

if TYPE_CHECKING:
    from modfinder.config import RegistrySettings

log = structlog.get_logger()

_QUOTED_URL = re.compile(r'"(https?://[^"]+)"')
_GZIP_MAGIC = b"\x1f\x8b"


@dataclass(frozen=True)
class FetchSuccess:
    records: tuple[PackageRecord, ...]
    skipped: int = 0


@dataclass(frozen=True)
class FetchFailure:
    code: ErrorCode
    message: str


FetchResult = FetchSuccess | FetchFailure


class RemoteSource(Protocol):
    async def fetch(self) -> FetchResult: ...


def build_http_client(settings: RegistrySettings) -> httpx.AsyncClient:
    """Shared client for registry downloads."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
    )


def _gunzip(payload: bytes) -> bytes:
    # httpx has already decoded it if the server sent Content-Encoding: gzip
    if not payload.startswith(_GZIP_MAGIC):
        return payload
    try:
        return gzip.decompress(payload)
    except (OSError, EOFError, zlib.error) as exc:
        raise ModFinderError(
            ErrorCode.REGISTRY_DECODE_FAILED, f"Could not decompress payload: {exc}"
        ) from exc


def extract_listing_url(payload: bytes) -> str:
    """Pull the listing URL out of the decompressed index payload.

    The index is normally a bare JSON string; any text holding a double-quoted
    http(s) URL is accepted as well.
    """
    text = _gunzip(payload).decode("utf-8", errors="replace").strip()
    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        value = None
    if isinstance(value, str) and value.startswith(("http://", "https://")):
        return value

    match = _QUOTED_URL.search(text)
    if match is None:
        raise ModFinderError(
            ErrorCode.REGISTRY_POINTER_INVALID,
            "Index payload does not contain a listing URL",
            recoverable=False,
        )
    return match.group(1)


def parse_listing(payload: bytes) -> tuple[tuple[PackageRecord, ...], int]:
    """Decompress and parse the listing. Returns (records, skipped_count).

    Entries that are not JSON objects or fail validation are skipped rather
    than failing the whole listing.
    """
    try:
        items = json.loads(_gunzip(payload))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ModFinderError(
            ErrorCode.REGISTRY_DECODE_FAILED, f"Listing is not valid JSON: {exc}"
        ) from exc
    if not isinstance(items, list):
        raise ModFinderError(
            ErrorCode.REGISTRY_DECODE_FAILED,
            f"Listing must be a JSON array, got {type(items).__name__}",
        )

    records: list[PackageRecord] = []
    skipped = 0
    for item in items:
        if not isinstance(item, dict):
            skipped += 1
            continue
        try:
            records.append(PackageRecord.model_validate(item))
        except ValidationError:
            skipped += 1
    return tuple(records), skipped


class RegistryFetcher:
    """Remote source backed by the Thunderstore package-listing index."""

    def __init__(self, client: httpx.AsyncClient, settings: RegistrySettings) -> None:
        self._client = client
        self._settings = settings

    async def fetch(self) -> FetchResult:
        try:
            index = await self._get(self._settings.index_url)
            listing_url = await asyncio.to_thread(extract_listing_url, index)
            listing = await self._get(listing_url)
            records, skipped = await asyncio.to_thread(parse_listing, listing)
        except ModFinderError as exc:
            return FetchFailure(code=exc.code, message=exc.message)

        if skipped:
            log.warning("registry_records_skipped", skipped=skipped, kept=len(records))
        return FetchSuccess(records=records, skipped=skipped)

    async def _get(self, url: str) -> bytes:
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise ModFinderError(
                ErrorCode.REGISTRY_UNAVAILABLE, f"Request to {url} failed: {exc!r}"
            ) from exc

        if response.status_code >= 400:
            raise ModFinderError(
                ErrorCode.REGISTRY_HTTP_ERROR,
                f"HTTP {response.status_code} from {url}",
                recoverable=response.status_code >= 500,
            )
        return response.content
