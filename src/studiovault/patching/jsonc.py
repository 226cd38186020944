"""Format-preserving edits of JSON-with-comments documents.

All helpers here operate on raw text and leave comments and formatting
outside the edited span intact.  When the structure they expect is not
found they return the input unchanged, which callers treat as format drift.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

_WHITESPACE = frozenset(" \t\r\n\ufeff")


@dataclass(frozen=True)
class Member:
    """A top-level ``"key": value`` pair located by character offsets."""

    key: str
    key_start: int
    value_start: int
    value_end: int


# ---------------------------------------------------------------------------
# Scanning primitives
# ---------------------------------------------------------------------------


def _skip_insignificant(text: str, i: int) -> int:
    """Advance past whitespace and ``//`` / ``/* */`` comments."""
    n = len(text)
    while i < n:
        if text[i] in _WHITESPACE:
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end + 1
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        else:
            break
    return i


def _string_end(text: str, i: int) -> int:
    """Index just past the string literal opening at *i*, or -1 if unterminated."""
    j = i + 1
    n = len(text)
    while j < n:
        ch = text[j]
        if ch == "\\":
            j += 2
            continue
        if ch == '"':
            return j + 1
        j += 1
    return -1


def _container_end(text: str, i: int) -> int:
    """Index just past the bracket matching the ``{`` or ``[`` at *i*, or -1."""
    depth = 0
    j = i
    n = len(text)
    while j < n:
        ch = text[j]
        if ch == '"':
            j = _string_end(text, j)
            if j == -1:
                return -1
            continue
        if text.startswith("//", j) or text.startswith("/*", j):
            j = _skip_insignificant(text, j)
            continue
        if ch in "{[":
            depth += 1
        elif ch in "}]":
            depth -= 1
            if depth == 0:
                return j + 1
        j += 1
    return -1


def _value_end(text: str, i: int) -> int:
    if i >= len(text):
        return -1
    ch = text[i]
    if ch == '"':
        return _string_end(text, i)
    if ch in "{[":
        return _container_end(text, i)
    # Scalar: number, true, false, null.
    j = i
    while j < len(text) and text[j] not in ",}]" and text[j] not in _WHITESPACE:
        if text.startswith("//", j) or text.startswith("/*", j):
            break
        j += 1
    return j if j > i else -1


def _object_start(text: str) -> int:
    """Offset of the top-level opening brace, or -1 when the document is not an object."""
    i = _skip_insignificant(text, 0)
    if i < len(text) and text[i] == "{":
        return i
    return -1


def top_level_members(text: str) -> list[Member] | None:
    """Locate every member of the top-level object.

    Returns *None* when the text is not a well-formed JSONC object, so
    callers can tell drift apart from an empty object.
    """
    start = _object_start(text)
    if start == -1:
        return None

    n = len(text)
    members: list[Member] = []
    i = _skip_insignificant(text, start + 1)
    while i < n and text[i] != "}":
        if text[i] != '"':
            return None
        key_end = _string_end(text, i)
        if key_end == -1:
            return None
        try:
            key = json.loads(text[i:key_end])
        except ValueError:
            return None
        colon = _skip_insignificant(text, key_end)
        if colon >= n or text[colon] != ":":
            return None
        value_start = _skip_insignificant(text, colon + 1)
        value_end = _value_end(text, value_start)
        if value_end == -1:
            return None
        members.append(Member(key, i, value_start, value_end))
        i = _skip_insignificant(text, value_end)
        if i < n and text[i] == ",":
            i = _skip_insignificant(text, i + 1)
    if i >= n:
        return None
    return members


# ---------------------------------------------------------------------------
# Edits
# ---------------------------------------------------------------------------


def insert_members(text: str, members: Sequence[str], *, indent: str = "  ") -> str:
    """Insert *members* right after the opening brace of the top-level object.

    Each member is raw JSONC text such as ``'"name": "value"'`` without a
    trailing comma; multi-line members must carry their own inner indentation.
    Leading comments before the brace are skipped.  Returns *text* unchanged
    when the document does not start with an object.
    """
    start = _object_start(text)
    if start == -1 or not members:
        logger.debug("No top-level object found; insertion skipped")
        return text

    snippet = ",\n".join(f"{indent}{m}" for m in members)
    rest = text[start + 1 :]
    if rest.lstrip().startswith("}"):
        # Empty object: no separator after the inserted members.
        return f"{text[: start + 1]}\n{snippet}{rest}"
    return f"{text[: start + 1]}\n{snippet},{rest}"


def remove_top_level_key(text: str, key: str) -> str:
    """Remove the top-level member *key* together with its separating comma.

    Braces inside the value are matched, respecting string literals and
    comments.  Returns *text* unchanged when the key is absent or the
    document cannot be scanned.
    """
    members = top_level_members(text)
    if not members:
        return text

    for index, member in enumerate(members):
        if member.key != key:
            continue
        if index > 0:
            # Drop from the comma that precedes the key to the end of the value.
            prev_end = members[index - 1].value_end
            comma = _skip_insignificant(text, prev_end)
            if comma >= len(text) or text[comma] != ",":
                return text
            return text[:comma] + text[member.value_end :]
        # First member: drop the key, its value and the comma that follows.
        after = _skip_insignificant(text, member.value_end)
        if after < len(text) and text[after] == ",":
            following = _skip_insignificant(text, after + 1)
            return text[: member.key_start] + text[following:]
        return text[: member.key_start] + text[member.value_end :]
    return text


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def strip_jsonc(text: str) -> str:
    """Return *text* with comments and trailing commas removed."""
    out: list[str] = []
    n = len(text)
    i = 0
    while i < n:
        ch = text[i]
        if ch == '"':
            end = _string_end(text, i)
            if end == -1:
                out.append(text[i:])
                break
            out.append(text[i:end])
            i = end
        elif text.startswith("//", i) or text.startswith("/*", i):
            out.append(" ")
            i = _skip_insignificant(text, i)
        elif ch == ",":
            nxt = _skip_insignificant(text, i + 1)
            if nxt < n and text[nxt] in "}]":
                i += 1
                continue
            out.append(ch)
            i += 1
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def loads_jsonc(text: str) -> Any:
    """Parse JSON with comments and trailing commas.

    Raises :class:`json.JSONDecodeError` (a ``ValueError``) on invalid input.
    """
    return json.loads(strip_jsonc(text).lstrip("\ufeff"))
