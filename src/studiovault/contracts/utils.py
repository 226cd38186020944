"""Runtime-agnostic helpers."""

from __future__ import annotations

import re
from typing import NoReturn

_WHITESPACE_RE = re.compile(r"\s+")
_INVALID_RE = re.compile(r"[^a-z0-9\-]")


def slugify(value: str) -> str:
    """Trim, lowercase, turn whitespace runs into ``-`` and drop anything else."""
    slug = _WHITESPACE_RE.sub("-", value.strip().lower())
    return _INVALID_RE.sub("", slug)


def assert_never(value: object) -> NoReturn:
    """Fail on a value an exhaustive branch should never see."""
    msg = f"Unexpected value: {value!r}"
    raise AssertionError(msg)
