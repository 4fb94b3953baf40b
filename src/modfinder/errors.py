"""Error codes for the registry fetch path.

``ModFinderError`` is raised inside the fetcher and converted into a
``FetchFailure`` at its boundary; it never reaches the cache's callers or the
chat gateway.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    REGISTRY_UNAVAILABLE = "REGISTRY_UNAVAILABLE"
    REGISTRY_HTTP_ERROR = "REGISTRY_HTTP_ERROR"
    REGISTRY_DECODE_FAILED = "REGISTRY_DECODE_FAILED"
    REGISTRY_POINTER_INVALID = "REGISTRY_POINTER_INVALID"


class ModFinderError(Exception):
    def __init__(self, code: ErrorCode, message: str, recoverable: bool = True) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"
