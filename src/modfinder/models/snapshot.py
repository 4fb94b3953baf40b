from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from modfinder.models.package import PackageRecord


class Snapshot(BaseModel):
    """One published generation of the package listing.

    Replaced as a whole on every successful refresh, never mutated.
    """

    model_config = ConfigDict(frozen=True)

    records: tuple[PackageRecord, ...] = ()
    version: int = 0  # 0 = nothing fetched yet
    fetched_at: datetime | None = None
