"""Database contracts: schema types and table names, no drivers."""

from __future__ import annotations

from typing import Final, TypedDict

# Server-side only; never import from client bundles.
SERVER_ONLY: Final = True

UserID = str


class User(TypedDict):
    id: UserID
    email: str
    createdAt: str  # noqa: N815


Tables: Final = {
    "users": "users",
}
