"""Shared exception hierarchy for Tripwire."""

from __future__ import annotations

from .base import TripwireError
from .config import ConfigError
from .descriptor import DescriptorError
from .network import NetworkError

__all__ = ["ConfigError", "DescriptorError", "NetworkError", "TripwireError"]
