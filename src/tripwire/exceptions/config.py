"""Configuration-related exceptions."""

from __future__ import annotations

from tripwire.exceptions.base import TripwireError


class ConfigError(TripwireError, ValueError):
    """Raised when tripwire configuration is invalid."""
