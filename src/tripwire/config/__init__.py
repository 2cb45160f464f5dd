"""Configuration loading for Tripwire runs.

This package facade re-exports all public names so that
``from tripwire.config import ...`` works for callers.
"""

from __future__ import annotations

from tripwire.config.environment import resolve_cache_ttl, resolve_github_token, skip_requested
from tripwire.config.loader import load_config
from tripwire.config.model import TripwireConfig

__all__ = [
    "TripwireConfig",
    "load_config",
    "resolve_cache_ttl",
    "resolve_github_token",
    "skip_requested",
]
