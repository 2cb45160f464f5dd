"""Network-related exceptions."""

from __future__ import annotations

from tripwire.exceptions.base import TripwireError
from tripwire.types import NetworkErrorKind


class NetworkError(TripwireError):
    """Raised when an HTTP request cannot be completed."""

    def __init__(self, kind: NetworkErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind: NetworkErrorKind = kind

    def __str__(self) -> str:
        return f"{self.kind}: {super().__str__()}"
