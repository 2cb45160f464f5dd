"""Environment overrides applied on top of the config file."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from tripwire.constants.cache import CACHE_TTL_ENV_VAR
from tripwire.constants.config import SKIP_ENV_VAR
from tripwire.constants.http import GITHUB_TOKEN_ENV_VARS

logger = logging.getLogger(__name__)


def resolve_cache_ttl(environ: Mapping[str, str], fallback: int) -> int:
    """Return the TTL from the environment, or ``fallback`` when absent or invalid."""
    raw = environ.get(CACHE_TTL_ENV_VAR)
    if raw is None:
        return fallback
    try:
        seconds = int(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer number of seconds", CACHE_TTL_ENV_VAR, raw)
        return fallback
    if seconds < 0:
        logger.warning("Ignoring %s=%r: must not be negative", CACHE_TTL_ENV_VAR, raw)
        return fallback
    return seconds


def resolve_github_token(environ: Mapping[str, str]) -> str | None:
    """Return the first non-empty token from the known token variables."""
    for name in GITHUB_TOKEN_ENV_VARS:
        value = environ.get(name, "").strip()
        if value:
            return value
    return None


def skip_requested(environ: Mapping[str, str]) -> bool:
    """Whether checks should be skipped entirely for this invocation."""
    return SKIP_ENV_VAR in environ
