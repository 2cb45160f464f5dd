"""Verdict cache."""

from .store import CacheEntry, CacheStore, load_cache, new_cache

__all__ = ["CacheEntry", "CacheStore", "load_cache", "new_cache"]
