"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "tripwire.yaml"
SKIP_ENV_VAR: str = "TRIPWIRE_SKIP"

DEFAULT_WORKERS: int = 4
MAX_WORKERS: int = 32
DEFAULT_MAX_FILE_MB: int = 2

DEFAULT_SOURCE_GLOBS: tuple[str, ...] = ("**/*.py",)
DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (
    ".git",
    ".hg",
    ".mypy_cache",
    ".pytest_cache",
    ".tox",
    ".venv",
    "__pycache__",
    "build",
    "dist",
    "node_modules",
    "target",
    "venv",
)

ALLOWED_TOP_LEVEL_KEYS: frozenset[str] = frozenset(
    {"cache", "http", "workers", "source_globs", "exclude_dirs", "max_file_mb", "checks"}
)
ALLOWED_CACHE_KEYS: frozenset[str] = frozenset({"ttl_seconds", "dir", "enabled"})
ALLOWED_HTTP_KEYS: frozenset[str] = frozenset({"timeout_seconds", "github_api_url", "generic_registry_url"})
