"""Shared type aliases for Tripwire."""

from .cache import CacheEntryPayload, CachePayload
from .common import JsonObject, JsonScalar, JsonValue, NetworkErrorKind, VerdictKind

__all__ = [
    "CacheEntryPayload",
    "CachePayload",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "NetworkErrorKind",
    "VerdictKind",
]
