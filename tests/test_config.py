"""Tests for config loading and environment overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from tripwire.config import TripwireConfig, load_config, resolve_cache_ttl, resolve_github_token, skip_requested
from tripwire.exceptions import ConfigError


def _write_config(root: Path, text: str) -> Path:
    path = root / "tripwire.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={})

    assert config == TripwireConfig()
    assert config.cache_ttl_seconds == 3600
    assert config.cache_path.name == "tripwire-cache.json"


def test_load_config_reads_all_sections(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        "\n".join(
            [
                "cache:",
                "  ttl_seconds: 600",
                "  dir: build/cache",
                "  enabled: true",
                "http:",
                "  timeout_seconds: 2.5",
                "  github_api_url: https://ghe.example.test/api/v3",
                "  generic_registry_url: https://registry.example.test/{package}",
                "workers: 8",
                "source_globs: ['**/*.py', '**/*.rs']",
                "exclude_dirs: [vendor]",
                "max_file_mb: 1",
                "checks:",
                "  - kind: issue",
                "    ref: org/repo#1",
            ]
        ),
    )

    config = load_config(tmp_path, environ={})

    assert config.cache_ttl_seconds == 600
    assert config.cache_dir == (tmp_path / "build" / "cache").resolve()
    assert config.cache_path == (tmp_path / "build" / "cache" / "tripwire-cache.json").resolve()
    assert config.http_timeout_seconds == 2.5
    assert config.github_api_url == "https://ghe.example.test/api/v3"
    assert config.generic_registry_url == "https://registry.example.test/{package}"
    assert config.workers == 8
    assert config.source_globs == ("**/*.py", "**/*.rs")
    assert config.exclude_dirs == ("vendor",)
    assert config.max_file_mb == 1
    assert config.checks == ({"kind": "issue", "ref": "org/repo#1"},)
    assert config.config_path == (tmp_path / "tripwire.yaml").resolve()


def test_explicit_config_path(tmp_path: Path) -> None:
    path = tmp_path / "ci" / "tripwire-ci.yaml"
    path.parent.mkdir()
    path.write_text("workers: 1\n", encoding="utf-8")

    config = load_config(tmp_path, path, environ={})

    assert config.workers == 1


def test_explicit_config_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path, tmp_path / "missing.yaml", environ={})


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    assert load_config(tmp_path, environ={}).workers == 4


@pytest.mark.parametrize(
    ("text", "message"),
    [
        pytest.param("- a\n- b\n", "mapping", id="not-a-mapping"),
        pytest.param("bogus: 1\n", "Unknown config key", id="unknown-top-level"),
        pytest.param("cache:\n  size: 1\n", "Unknown cache key", id="unknown-cache-key"),
        pytest.param("http:\n  retries: 3\n", "Unknown http key", id="unknown-http-key"),
        pytest.param("cache:\n  ttl_seconds: -1\n", "ttl_seconds", id="negative-ttl"),
        pytest.param("cache:\n  enabled: maybe\n", "enabled", id="non-bool-enabled"),
        pytest.param("http:\n  timeout_seconds: 0\n", "timeout_seconds", id="zero-timeout"),
        pytest.param("http:\n  github_api_url: ftp://x\n", "github_api_url", id="bad-url"),
        pytest.param(
            "http:\n  generic_registry_url: https://registry.example.test/x\n",
            "placeholder",
            id="missing-placeholder",
        ),
        pytest.param("workers: 0\n", "workers", id="zero-workers"),
        pytest.param("workers: 100\n", "workers", id="too-many-workers"),
        pytest.param("max_file_mb: 0\n", "max_file_mb", id="zero-max-file"),
        pytest.param("source_globs: '*.py'\n", "source_globs", id="globs-not-list"),
        pytest.param("checks: {kind: date}\n", "checks", id="checks-not-list"),
        pytest.param("cache: [1]\n", "cache must be a mapping", id="cache-not-mapping"),
        pytest.param("workers: [\n", "Invalid YAML", id="invalid-yaml"),
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str, message: str) -> None:
    _write_config(tmp_path, text)

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path, environ={})


def test_environment_ttl_overrides_config(tmp_path: Path) -> None:
    _write_config(tmp_path, "cache:\n  ttl_seconds: 600\n")

    config = load_config(tmp_path, environ={"TRIPWIRE_HTTP_CACHE_TTL_SECONDS": "120"})

    assert config.cache_ttl_seconds == 120


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        pytest.param(None, 3600, id="absent"),
        pytest.param("60", 60, id="valid"),
        pytest.param(" 90 ", 90, id="whitespace"),
        pytest.param("0", 0, id="zero-disables"),
        pytest.param("soon", 3600, id="non-integer"),
        pytest.param("-5", 3600, id="negative"),
    ],
)
def test_resolve_cache_ttl(raw: str | None, expected: int) -> None:
    environ = {} if raw is None else {"TRIPWIRE_HTTP_CACHE_TTL_SECONDS": raw}

    assert resolve_cache_ttl(environ, 3600) == expected


def test_github_token_lookup_order() -> None:
    assert resolve_github_token({"TRIPWIRE_GITHUB_TOKEN": "a", "GITHUB_TOKEN": "b"}) == "a"
    assert resolve_github_token({"TRIPWIRE_GITHUB_TOKEN": " ", "GITHUB_TOKEN": "b"}) == "b"
    assert resolve_github_token({}) is None


def test_token_is_applied_from_environment(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={"GITHUB_TOKEN": "ghp_example"})

    assert config.github_token == "ghp_example"


def test_skip_requested() -> None:
    assert skip_requested({"TRIPWIRE_SKIP": "1"})
    assert skip_requested({"TRIPWIRE_SKIP": ""})
    assert not skip_requested({})
