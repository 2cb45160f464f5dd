"""Root exception type."""

from __future__ import annotations


class TripwireError(Exception):
    """Base class for all Tripwire errors."""
