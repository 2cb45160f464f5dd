"""Persistent verdict cache keyed by descriptor fingerprint.

The cache is a single JSON document. Every ``put`` takes an exclusive file
lock, re-reads the document so concurrent build invocations do not lose
each other's entries, merges, drops expired entries and rewrites the file
atomically. Reads are served from the in-memory snapshot taken at open
time plus this process's own writes.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Literal

from filelock import FileLock, Timeout

from tripwire.constants.cache import (
    CACHE_LOCK_SUFFIX,
    CACHE_LOCK_TIMEOUT_SECONDS,
    CACHE_TEMP_PREFIX,
    CACHE_TEMP_SUFFIX,
    CACHE_VERSION,
)
from tripwire.io import read_json_object, write_json_atomic
from tripwire.model import Verdict
from tripwire.types import CacheEntryPayload, CachePayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A cached, still-valid verdict."""

    fingerprint: str
    verdict: Literal["pass", "fail"]
    reason: str
    expires_at: float

    def to_verdict(self) -> Verdict:
        if self.verdict == "pass":
            return Verdict.passed()
        return Verdict.failed(self.reason)


def new_cache() -> CachePayload:
    """Return an empty cache payload."""
    return {
        "version": CACHE_VERSION,
        "entries": {},
    }


def load_cache(cache_path: Path) -> CachePayload:
    """Load the cache file if valid, otherwise return an empty payload."""
    payload = read_json_object(cache_path)
    if payload is None or payload.get("version") != CACHE_VERSION:
        return new_cache()

    return {
        "version": CACHE_VERSION,
        "entries": _normalize_entries(payload.get("entries")),
    }


def _normalize_entries(raw_entries: object) -> dict[str, CacheEntryPayload]:
    """Keep well-formed entries; unknown fields on them are carried through untouched."""
    if not isinstance(raw_entries, dict):
        return {}

    entries: dict[str, CacheEntryPayload] = {}
    for key, value in raw_entries.items():
        if not isinstance(key, str) or not isinstance(value, dict):
            continue

        verdict = value.get("verdict")
        reason = value.get("reason", "")
        expires_at = value.get("expires_at")

        if verdict not in ("pass", "fail"):
            continue
        if not isinstance(reason, str):
            continue
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            continue
        if not math.isfinite(expires_at):
            continue

        entries[key] = dict(value)  # type: ignore[assignment]
    return entries


class CacheStore:
    """Fingerprint → verdict store with per-entry expiry.

    ``path=None`` keeps everything in memory, which still deduplicates
    identical checks within one invocation.
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        clock: Callable[[], float] = time.time,
        lock_timeout: float = CACHE_LOCK_TIMEOUT_SECONDS,
    ) -> None:
        self._path = path
        self._clock = clock
        self._lock_timeout = lock_timeout
        self._entries: dict[str, CacheEntryPayload] = {}
        self._memory_lock = threading.Lock()
        self._write_lock = threading.Lock()
        self.warnings: list[str] = []

    @classmethod
    def open(
        cls,
        path: Path | None,
        *,
        clock: Callable[[], float] = time.time,
        lock_timeout: float = CACHE_LOCK_TIMEOUT_SECONDS,
    ) -> CacheStore:
        """Open the store, loading existing entries from ``path`` when present."""
        store = cls(path, clock=clock, lock_timeout=lock_timeout)
        if path is not None:
            store._entries = load_cache(path)["entries"]
            logger.debug("Loaded %d cache entries from %s", len(store._entries), path)
        return store

    @property
    def path(self) -> Path | None:
        return self._path

    def get(self, fingerprint: str) -> CacheEntry | None:
        """Return the entry for ``fingerprint`` unless it is missing or expired."""
        with self._memory_lock:
            payload = self._entries.get(fingerprint)
        if payload is None:
            return None
        if not self._clock() < payload["expires_at"]:
            return None
        return CacheEntry(
            fingerprint=fingerprint,
            verdict=payload["verdict"],
            reason=payload.get("reason", ""),
            expires_at=float(payload["expires_at"]),
        )

    def put(self, fingerprint: str, verdict: Verdict, ttl: timedelta, *, kind: str | None = None) -> None:
        """Record ``verdict`` for ``ttl``. Indeterminate verdicts are never stored."""
        if not verdict.cacheable:
            logger.debug("Not caching %s verdict for %s", verdict.kind, fingerprint)
            return
        seconds = ttl.total_seconds()
        if seconds <= 0:
            return

        payload: CacheEntryPayload = {
            "verdict": "pass" if verdict.is_pass else "fail",
            "reason": verdict.reason,
            "expires_at": self._clock() + seconds,
        }
        if kind is not None:
            payload["kind"] = kind

        with self._memory_lock:
            self._entries[fingerprint] = payload

        if self._path is not None:
            self._persist(fingerprint, payload)

    def _persist(self, fingerprint: str, payload: CacheEntryPayload) -> None:
        assert self._path is not None
        lock_path = self._path.with_name(self._path.name + CACHE_LOCK_SUFFIX)
        try:
            with self._write_lock:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with FileLock(str(lock_path), timeout=self._lock_timeout):
                    on_disk = load_cache(self._path)
                    on_disk["entries"][fingerprint] = payload
                    now = self._clock()
                    on_disk["entries"] = {
                        key: entry for key, entry in on_disk["entries"].items() if entry["expires_at"] > now
                    }
                    write_json_atomic(
                        path=self._path,
                        payload=on_disk,
                        temp_prefix=CACHE_TEMP_PREFIX,
                        temp_suffix=CACHE_TEMP_SUFFIX,
                    )
        except (OSError, Timeout) as exc:
            warning = f"Verdict cache at {self._path} is not writable; continuing without persistence ({exc})"
            self.warnings.append(warning)
            logger.warning(warning)
            return

        with self._memory_lock:
            for key, entry in on_disk["entries"].items():
                self._entries.setdefault(key, entry)
