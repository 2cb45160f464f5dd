"""Constants used by the verdict cache."""

from __future__ import annotations

CACHE_VERSION: int = 1
CACHE_FILENAME: str = "tripwire-cache.json"
CACHE_DIRNAME: str = "tripwire-cache"
CACHE_LOCK_SUFFIX: str = ".lock"
CACHE_TEMP_PREFIX: str = ".cache-"
CACHE_TEMP_SUFFIX: str = ".tmp"
CACHE_LOCK_TIMEOUT_SECONDS: float = 5.0

DEFAULT_CACHE_TTL_SECONDS: int = 3600
CACHE_TTL_ENV_VAR: str = "TRIPWIRE_HTTP_CACHE_TTL_SECONDS"
