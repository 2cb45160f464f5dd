"""Immutable descriptors for the conditions a build asserts on.

Each descriptor validates itself at construction time and raises
``DescriptorError`` when malformed, so anything that reaches the
orchestrator is well formed. The ``fingerprint`` is the cache key: the
check-kind tag is prefixed to a canonical JSON rendering of the fields
before hashing, which keeps kinds with identical fields apart.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, dataclass
from datetime import date
from typing import ClassVar

from tripwire.constants.checks import (
    CHECK_KIND_DATE,
    CHECK_KIND_ISSUE,
    CHECK_KIND_PULL_REQUEST,
    CHECK_KIND_PYTHON,
    CHECK_KIND_REGISTRY,
    ISSUE_REF_PATTERN,
    REGISTRY_CRATES,
    REPO_PATTERN,
    VALID_REGISTRIES,
)
from tripwire.exceptions import DescriptorError
from tripwire.types import JsonObject
from tripwire.utils import parse_constraint


class CheckDescriptor:
    """Shared behaviour for all descriptor variants."""

    kind: ClassVar[str]

    def fields(self) -> JsonObject:
        """Return the descriptor fields as a JSON-safe mapping."""
        return asdict(self)  # type: ignore[call-overload]

    def fingerprint(self) -> str:
        """Return a stable cache key for this descriptor."""
        canonical = json.dumps(self.fields(), sort_keys=True, separators=(",", ":"))
        blob = f"{self.kind}\n{canonical}".encode("utf-8")
        return f"{self.kind}:{hashlib.sha256(blob).hexdigest()}"

    def describe(self) -> str:
        """Return a short human-readable label."""
        raise NotImplementedError

    def to_dict(self) -> JsonObject:
        """Serialize for reports."""
        return {"kind": self.kind, **self.fields()}


@dataclass(frozen=True)
class DateBound(CheckDescriptor):
    """Fails once the given calendar date is reached."""

    kind: ClassVar[str] = CHECK_KIND_DATE

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        for name in ("year", "month", "day"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise DescriptorError(f"date {name} must be an integer, got {value!r}")
        try:
            date(self.year, self.month, self.day)
        except ValueError as exc:
            raise DescriptorError(f"{self.year:04d}-{self.month:02d}-{self.day:02d} is not a valid date: {exc}") from exc

    @classmethod
    def parse(cls, text: str) -> DateBound:
        """Build from an ISO ``YYYY-MM-DD`` string."""
        try:
            parsed = date.fromisoformat(text.strip())
        except ValueError as exc:
            raise DescriptorError(f"{text!r} is not a valid YYYY-MM-DD date") from exc
        return cls(year=parsed.year, month=parsed.month, day=parsed.day)

    @property
    def bound(self) -> date:
        return date(self.year, self.month, self.day)

    def describe(self) -> str:
        return self.bound.isoformat()


@dataclass(frozen=True)
class _TrackerRef(CheckDescriptor):
    """A numbered item on a hosted repository."""

    owner: str
    repo: str
    number: int

    def __post_init__(self) -> None:
        if not isinstance(self.owner, str) or not isinstance(self.repo, str):
            raise DescriptorError("owner and repo must be strings")
        if not REPO_PATTERN.match(f"{self.owner}/{self.repo}"):
            raise DescriptorError(f"{self.owner!r}/{self.repo!r} is not a valid owner/repo reference")
        if isinstance(self.number, bool) or not isinstance(self.number, int) or self.number <= 0:
            raise DescriptorError(f"{self.kind} number must be a positive integer, got {self.number!r}")

    @classmethod
    def parse(cls, text: str) -> _TrackerRef:
        """Build from an ``owner/repo#number`` reference."""
        match = ISSUE_REF_PATTERN.match(text.strip())
        if match is None:
            raise DescriptorError(f"{text!r} must be of the form owner/repo#number")
        return cls(owner=match["owner"], repo=match["repo"], number=int(match["number"]))

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    def describe(self) -> str:
        return f"{self.slug}#{self.number}"


@dataclass(frozen=True)
class IssueRef(_TrackerRef):
    """Fails once the referenced issue is closed."""

    kind: ClassVar[str] = CHECK_KIND_ISSUE


@dataclass(frozen=True)
class PullRequestRef(_TrackerRef):
    """Fails once the referenced pull request is closed or merged."""

    kind: ClassVar[str] = CHECK_KIND_PULL_REQUEST


@dataclass(frozen=True)
class RegistryConstraint(CheckDescriptor):
    """Fails once the latest published version stops satisfying ``constraint``."""

    kind: ClassVar[str] = CHECK_KIND_REGISTRY

    package_name: str
    constraint: str
    registry: str = REGISTRY_CRATES

    def __post_init__(self) -> None:
        if not isinstance(self.package_name, str) or not self.package_name.strip():
            raise DescriptorError("package name must be a non-empty string")
        if any(char.isspace() or char == "/" for char in self.package_name):
            raise DescriptorError(f"package name {self.package_name!r} contains invalid characters")
        if self.registry not in VALID_REGISTRIES:
            raise DescriptorError(f"registry must be one of {sorted(VALID_REGISTRIES)}, got {self.registry!r}")
        _validate_constraint(self.constraint)

    def describe(self) -> str:
        return f"{self.package_name} ({self.registry}) {self.constraint}"


@dataclass(frozen=True)
class PythonVersionConstraint(CheckDescriptor):
    """Fails once the running interpreter stops satisfying ``constraint``."""

    kind: ClassVar[str] = CHECK_KIND_PYTHON

    constraint: str

    def __post_init__(self) -> None:
        _validate_constraint(self.constraint)

    def describe(self) -> str:
        return f"python {self.constraint}"


def _validate_constraint(constraint: object) -> None:
    if not isinstance(constraint, str):
        raise DescriptorError(f"version constraint must be a string, got {constraint!r}")
    try:
        parse_constraint(constraint)
    except ValueError as exc:
        raise DescriptorError(str(exc)) from exc
