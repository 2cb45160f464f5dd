"""Typed cache payload structures."""

from __future__ import annotations

from typing import Literal, NotRequired, TypedDict


class CacheEntryPayload(TypedDict):
    """Persisted verdict for a single check fingerprint."""

    verdict: Literal["pass", "fail"]
    reason: str
    expires_at: float
    kind: NotRequired[str]


class CachePayload(TypedDict):
    """Top-level cache payload persisted to disk."""

    version: int
    entries: dict[str, CacheEntryPayload]
