"""Patching domain: idempotent config patcher and JSONC edit helpers."""

from studiovault.patching.engine import (
    OnMissing,
    Patch,
    PatchOutcome,
    PatchResult,
    apply_patch,
)
from studiovault.patching.jsonc import (
    insert_members,
    loads_jsonc,
    remove_top_level_key,
    strip_jsonc,
    top_level_members,
)

__all__ = [
    "OnMissing",
    "Patch",
    "PatchOutcome",
    "PatchResult",
    "apply_patch",
    "insert_members",
    "loads_jsonc",
    "remove_top_level_key",
    "strip_jsonc",
    "top_level_members",
]
