"""Constants for outbound HTTP requests."""

from __future__ import annotations

DEFAULT_HTTP_TIMEOUT_SECONDS: float = 5.0
MAX_REDIRECTS: int = 5
USER_AGENT_PREFIX: str = "tripwire"

GITHUB_API_URL: str = "https://api.github.com"
GITHUB_ACCEPT_HEADER: str = "application/vnd.github+json"
GITHUB_TOKEN_ENV_VARS: tuple[str, ...] = ("TRIPWIRE_GITHUB_TOKEN", "GITHUB_TOKEN")

CRATES_API_URL: str = "https://crates.io/api/v1/crates/{package}"
DEFAULT_GENERIC_REGISTRY_URL: str = "https://pypi.org/pypi/{package}/json"

# Response bodies longer than this are truncated in diagnostic messages.
ERROR_BODY_MAX_LENGTH: int = 200
