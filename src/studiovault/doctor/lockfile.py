"""Extract pinned package versions from raw lockfile text."""

from __future__ import annotations

import re
from functools import lru_cache


@lru_cache(maxsize=16)
def _version_pattern(package: str) -> re.Pattern[str]:
    # The optional scope group catches "@types/react@", "@scope/react@" so they
    # can be discarded; the lookbehind rejects "preact@" and similar.
    return re.compile(
        rf"(?<![\w.@\-])(@[\w.\-]+/)?{re.escape(package)}@(\d+\.\d+\.\d+)"
    )


def extract_versions(lock_text: str, package: str) -> list[str]:
    """Return the distinct ``<package>@X.Y.Z`` entries, in first-seen order.

    Works on any pnpm lockfile layout (``react@19.1.0:``,
    ``/react@18.2.0:``, ``react-dom@19.1.0(react@19.1.0)``) without parsing
    the YAML.
    """
    seen: dict[str, None] = {}
    for match in _version_pattern(package).finditer(lock_text):
        if match.group(1):
            continue
        seen.setdefault(f"{package}@{match.group(2)}", None)
    return list(seen)
