"""Checker interface shared by all check kinds."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import ClassVar

from tripwire.constants.checks import VALID_CHECK_KINDS
from tripwire.http import HttpClient
from tripwire.model import CheckDescriptor, Verdict


class Checker(ABC):
    """Abstract base class for checker implementations.

    Checkers hold only immutable settings. The HTTP client is passed in on
    every call so that no checker owns network state.
    """

    kind: ClassVar[str]
    descriptor_type: ClassVar[type[CheckDescriptor]]

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Validate checker subclasses declare a known `kind` and descriptor type."""
        super().__init_subclass__(**kwargs)
        # Private intermediate bases share behaviour without declaring a kind.
        if inspect.isabstract(cls) or cls.__name__.startswith("_"):
            return

        kind = getattr(cls, "kind", None)
        if not isinstance(kind, str) or kind not in VALID_CHECK_KINDS:
            raise TypeError(f"{cls.__name__} must define `kind` as one of {sorted(VALID_CHECK_KINDS)} (got {kind!r})")
        descriptor_type = getattr(cls, "descriptor_type", None)
        if not isinstance(descriptor_type, type) or getattr(descriptor_type, "kind", None) != kind:
            raise TypeError(f"{cls.__name__}.descriptor_type must be a descriptor class with kind {kind!r}")

    @abstractmethod
    def evaluate(self, descriptor: CheckDescriptor, *, http: HttpClient) -> Verdict:
        """Resolve the descriptor to a verdict."""

    @abstractmethod
    def ttl(self, descriptor: CheckDescriptor) -> timedelta | None:
        """How long a resolved verdict may be cached; None means never."""


class NetworkChecker(Checker, ABC):
    """Checker whose resolved verdicts are cached for a fixed TTL."""

    def __init__(self, *, ttl_seconds: int) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)

    def ttl(self, descriptor: CheckDescriptor) -> timedelta | None:
        return self._ttl
