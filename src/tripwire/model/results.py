"""Declarations, per-check outcomes and run results."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from tripwire.model.descriptors import CheckDescriptor
from tripwire.model.verdict import Verdict
from tripwire.types import JsonObject, VerdictKind


@dataclass(frozen=True)
class Declaration:
    """A descriptor plus where it was declared."""

    descriptor: CheckDescriptor
    source: str = ""
    note: str = ""


@dataclass(frozen=True)
class DeclarationError:
    """A declaration that could not be turned into a descriptor."""

    source: str
    message: str

    def format(self) -> str:
        return f"{self.source}: {self.message}" if self.source else self.message


@dataclass(frozen=True)
class CheckOutcome:
    """Verdict and diagnostic message for one declaration."""

    declaration: Declaration
    verdict: Verdict
    message: str = ""
    cached: bool = False

    @property
    def descriptor(self) -> CheckDescriptor:
        return self.declaration.descriptor

    def to_dict(self) -> JsonObject:
        return {
            "kind": self.descriptor.kind,
            "descriptor": self.descriptor.to_dict(),
            "verdict": self.verdict.kind,
            "message": self.message,
            "cached": self.cached,
            "source": self.declaration.source,
            "note": self.declaration.note,
        }


@dataclass(frozen=True)
class RunResult:
    """Aggregated result of one build invocation."""

    outcomes: tuple[CheckOutcome, ...]
    duration_seconds: float = 0.0
    warnings: tuple[str, ...] = ()
    declaration_errors: tuple[DeclarationError, ...] = ()
    cache_hits: int = 0
    cache_misses: int = 0

    @property
    def counts(self) -> dict[VerdictKind, int]:
        counter = Counter(outcome.verdict.kind for outcome in self.outcomes)
        return {
            "pass": counter.get("pass", 0),
            "fail": counter.get("fail", 0),
            "indeterminate": counter.get("indeterminate", 0),
        }

    @property
    def blocking(self) -> tuple[CheckOutcome, ...]:
        """Outcomes that must stop the build."""
        return tuple(outcome for outcome in self.outcomes if not outcome.verdict.is_pass)

    @property
    def exit_code(self) -> int:
        if self.declaration_errors:
            return 2
        return 1 if self.blocking else 0
