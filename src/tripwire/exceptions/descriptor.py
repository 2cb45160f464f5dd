"""Descriptor validation exceptions."""

from __future__ import annotations

from tripwire.exceptions.base import TripwireError


class DescriptorError(TripwireError, ValueError):
    """Raised when a check descriptor is malformed."""
