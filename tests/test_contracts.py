"""Tests for studiovault.contracts."""

from __future__ import annotations

import pytest

from studiovault.contracts import (
    SERVER_ONLY,
    ApiResponse,
    SignedUrlResponse,
    Tables,
    User,
    assert_never,
    slugify,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Hello World", "hello-world"),
        ("  Trim Me  ", "trim-me"),
        ("multi   space\ttab", "multi-space-tab"),
        ("StudioVault API Worker: api", "studiovault-api-worker-api"),
        ("Ünïcode & symbols!", "ncode--symbols"),
        ("already-a-slug", "already-a-slug"),
        ("", ""),
    ],
)
def test_slugify(value: str, expected: str) -> None:
    assert slugify(value) == expected


def test_slugify_is_idempotent() -> None:
    once = slugify("Some Mixed Input 42")
    assert slugify(once) == once


def test_assert_never_raises() -> None:
    with pytest.raises(AssertionError, match="Unexpected value: 'mystery'"):
        assert_never("mystery")


def test_api_response_shape() -> None:
    assert ApiResponse.__required_keys__ == frozenset({"success"})
    assert ApiResponse.__optional_keys__ == frozenset({"data", "error"})


def test_record_shapes() -> None:
    assert User.__required_keys__ == frozenset({"id", "email", "createdAt"})
    assert SignedUrlResponse.__required_keys__ == frozenset({"key", "url", "expiresAt"})


def test_server_only_tables() -> None:
    assert SERVER_ONLY is True
    assert Tables == {"users": "users"}
