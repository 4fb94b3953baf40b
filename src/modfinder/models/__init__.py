from __future__ import annotations

from modfinder.models.messages import InboundMessage
from modfinder.models.package import PackageRecord, VersionRecord, first_present
from modfinder.models.replies import (
    ClosestPackage,
    ClosestTitle,
    EmbedField,
    NotFoundSummary,
    Reply,
    Summary,
    TextReply,
)
from modfinder.models.snapshot import Snapshot

__all__ = [
    # package listing
    "PackageRecord",
    "VersionRecord",
    "first_present",
    # cache
    "Snapshot",
    # replies
    "ClosestPackage",
    "ClosestTitle",
    "EmbedField",
    "Summary",
    "NotFoundSummary",
    "TextReply",
    "Reply",
    # gateway
    "InboundMessage",
]
