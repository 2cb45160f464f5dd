"""Config data model for Tripwire runs."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path

from tripwire.constants.cache import CACHE_DIRNAME, CACHE_FILENAME, DEFAULT_CACHE_TTL_SECONDS
from tripwire.constants.config import (
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_MAX_FILE_MB,
    DEFAULT_SOURCE_GLOBS,
    DEFAULT_WORKERS,
)
from tripwire.constants.http import DEFAULT_GENERIC_REGISTRY_URL, DEFAULT_HTTP_TIMEOUT_SECONDS, GITHUB_API_URL
from tripwire.types import JsonObject


@dataclass(frozen=True)
class TripwireConfig:
    """Resolved run config."""

    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    cache_dir: Path | None = None
    cache_enabled: bool = True
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    github_api_url: str = GITHUB_API_URL
    github_token: str | None = None
    generic_registry_url: str = DEFAULT_GENERIC_REGISTRY_URL
    workers: int = DEFAULT_WORKERS
    source_globs: tuple[str, ...] = DEFAULT_SOURCE_GLOBS
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    max_file_mb: int = DEFAULT_MAX_FILE_MB
    checks: tuple[JsonObject, ...] = ()
    config_path: Path | None = None

    @property
    def cache_path(self) -> Path:
        """Location of the persisted verdict cache."""
        directory = self.cache_dir if self.cache_dir is not None else Path(tempfile.gettempdir()) / CACHE_DIRNAME
        return directory / CACHE_FILENAME
