"""Three-way check verdict."""

from __future__ import annotations

from dataclasses import dataclass

from tripwire.types import VerdictKind


@dataclass(frozen=True)
class Verdict:
    """Outcome of evaluating one descriptor.

    ``pass`` means the condition still holds. ``fail`` means it no longer
    does and the build must stop. ``indeterminate`` means the check could not
    be resolved; the build also stops, with a message that says so.
    """

    kind: VerdictKind
    reason: str = ""

    @classmethod
    def passed(cls) -> Verdict:
        return cls(kind="pass")

    @classmethod
    def failed(cls, reason: str) -> Verdict:
        return cls(kind="fail", reason=reason)

    @classmethod
    def indeterminate(cls, reason: str) -> Verdict:
        return cls(kind="indeterminate", reason=reason)

    @property
    def is_pass(self) -> bool:
        return self.kind == "pass"

    @property
    def is_fail(self) -> bool:
        return self.kind == "fail"

    @property
    def is_indeterminate(self) -> bool:
        return self.kind == "indeterminate"

    @property
    def cacheable(self) -> bool:
        """Only resolved outcomes may be cached."""
        return self.kind in ("pass", "fail")
