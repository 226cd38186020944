"""Storage contracts: portable definitions, no R2/S3 bindings."""

from __future__ import annotations

from typing import Final, TypedDict

SERVER_ONLY: Final = True

StorageKey = str


class SignedUrlResponse(TypedDict):
    key: StorageKey
    url: str
    expiresAt: str  # noqa: N815
