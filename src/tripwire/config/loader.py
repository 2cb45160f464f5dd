"""Config loading and normalization for Tripwire runs."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from tripwire.config.environment import resolve_cache_ttl, resolve_github_token
from tripwire.config.model import TripwireConfig
from tripwire.constants.cache import DEFAULT_CACHE_TTL_SECONDS
from tripwire.constants.config import (
    ALLOWED_CACHE_KEYS,
    ALLOWED_HTTP_KEYS,
    ALLOWED_TOP_LEVEL_KEYS,
    CONFIG_FILENAME,
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_MAX_FILE_MB,
    DEFAULT_SOURCE_GLOBS,
    DEFAULT_WORKERS,
    MAX_WORKERS,
)
from tripwire.constants.http import DEFAULT_GENERIC_REGISTRY_URL, DEFAULT_HTTP_TIMEOUT_SECONDS, GITHUB_API_URL
from tripwire.exceptions import ConfigError


def load_config(
    root: Path,
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> TripwireConfig:
    """Load config from ``tripwire.yaml`` (or an explicit path) and apply environment overrides."""
    env = os.environ if environ is None else environ
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return _apply_environment(TripwireConfig(), env)

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    _reject_unknown_keys(raw, ALLOWED_TOP_LEVEL_KEYS, "config")
    cache_raw = _ensure_mapping(raw.get("cache"), "cache")
    http_raw = _ensure_mapping(raw.get("http"), "http")
    _reject_unknown_keys(cache_raw, ALLOWED_CACHE_KEYS, "cache")
    _reject_unknown_keys(http_raw, ALLOWED_HTTP_KEYS, "http")

    ttl_seconds = cache_raw.get("ttl_seconds", DEFAULT_CACHE_TTL_SECONDS)
    if isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, int) or ttl_seconds < 0:
        raise ConfigError("cache.ttl_seconds must be a non-negative integer")

    cache_enabled = cache_raw.get("enabled", True)
    if not isinstance(cache_enabled, bool):
        raise ConfigError("cache.enabled must be a boolean")

    cache_dir_raw = cache_raw.get("dir")
    cache_dir: Path | None = None
    if cache_dir_raw is not None:
        if not isinstance(cache_dir_raw, str) or not cache_dir_raw.strip():
            raise ConfigError("cache.dir must be a non-empty string")
        cache_dir = (path.parent / Path(cache_dir_raw).expanduser()).resolve()

    timeout_seconds = http_raw.get("timeout_seconds", DEFAULT_HTTP_TIMEOUT_SECONDS)
    if isinstance(timeout_seconds, bool) or not isinstance(timeout_seconds, (int, float)) or timeout_seconds <= 0:
        raise ConfigError("http.timeout_seconds must be a positive number")

    workers = raw.get("workers", DEFAULT_WORKERS)
    if isinstance(workers, bool) or not isinstance(workers, int) or not 1 <= workers <= MAX_WORKERS:
        raise ConfigError(f"workers must be an integer between 1 and {MAX_WORKERS}")

    max_file_mb = raw.get("max_file_mb", DEFAULT_MAX_FILE_MB)
    if isinstance(max_file_mb, bool) or not isinstance(max_file_mb, int) or max_file_mb <= 0:
        raise ConfigError("max_file_mb must be a positive integer")

    checks_raw = raw.get("checks", [])
    if checks_raw is None:
        checks_raw = []
    if not isinstance(checks_raw, list) or not all(isinstance(entry, dict) for entry in checks_raw):
        raise ConfigError("checks must be a list of mappings")

    config = TripwireConfig(
        cache_ttl_seconds=ttl_seconds,
        cache_dir=cache_dir,
        cache_enabled=cache_enabled,
        http_timeout_seconds=float(timeout_seconds),
        github_api_url=_ensure_url(http_raw.get("github_api_url", GITHUB_API_URL), "http.github_api_url"),
        generic_registry_url=_ensure_url(
            http_raw.get("generic_registry_url", DEFAULT_GENERIC_REGISTRY_URL),
            "http.generic_registry_url",
            require_placeholder=True,
        ),
        workers=workers,
        source_globs=tuple(_ensure_string_list(raw.get("source_globs", list(DEFAULT_SOURCE_GLOBS)), "source_globs")),
        exclude_dirs=tuple(
            _ensure_string_list(raw.get("exclude_dirs", list(DEFAULT_EXCLUDE_DIRS)), "exclude_dirs")
        ),
        max_file_mb=max_file_mb,
        checks=tuple(checks_raw),
        config_path=path,
    )
    return _apply_environment(config, env)


def _apply_environment(config: TripwireConfig, environ: Mapping[str, str]) -> TripwireConfig:
    return replace(
        config,
        cache_ttl_seconds=resolve_cache_ttl(environ, config.cache_ttl_seconds),
        github_token=resolve_github_token(environ),
    )


def _reject_unknown_keys(raw: dict[str, Any], allowed: frozenset[str], section: str) -> None:
    unknown = sorted(str(key) for key in raw if key not in allowed)
    if unknown:
        raise ConfigError(f"Unknown {section} key(s): {', '.join(unknown)}. Allowed: {', '.join(sorted(allowed))}")


def _ensure_mapping(value: Any, key_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key_name} must be a mapping")
    return value


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return [item for item in value if item.strip()]


def _ensure_url(value: Any, key_name: str, *, require_placeholder: bool = False) -> str:
    if not isinstance(value, str) or not value.startswith(("https://", "http://")):
        raise ConfigError(f"{key_name} must be an http(s) URL")
    if require_placeholder and "{package}" not in value:
        raise ConfigError(f"{key_name} must contain a {{package}} placeholder")
    return value
