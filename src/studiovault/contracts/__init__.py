"""Shared contracts mirroring the monorepo's ``packages/*`` declarations.

Runtime-agnostic: types, constants and two pure helpers.  Nothing here
touches the filesystem or spawns processes.
"""

from studiovault.contracts.database import SERVER_ONLY, Tables, User, UserID
from studiovault.contracts.storage import SignedUrlResponse, StorageKey
from studiovault.contracts.types import ID, ApiResponse
from studiovault.contracts.utils import assert_never, slugify

__all__ = [
    "ID",
    "SERVER_ONLY",
    "ApiResponse",
    "SignedUrlResponse",
    "StorageKey",
    "Tables",
    "User",
    "UserID",
    "assert_never",
    "slugify",
]
