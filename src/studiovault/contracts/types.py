"""Shared type contracts. Types only."""

from typing import Generic, NotRequired, TypedDict, TypeVar

T = TypeVar("T")

ID = str


class ApiResponse(TypedDict, Generic[T]):
    """Body returned by every HTTP worker: ``{success, data?, error?}``."""

    success: bool
    data: NotRequired[T]
    error: NotRequired[str]
