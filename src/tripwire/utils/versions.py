"""Semantic-version parsing and range matching.

Constraints use the crates.io flavour of range syntax: comma-separated
clauses with ``>``, ``>=``, ``<``, ``<=``, ``=``, ``==``, ``!=``, ``^``,
``~`` and ``~=``. A bare version (``1.2.3``) is a caret requirement, as in
Cargo manifests. Partial versions such as ``>=1.0`` are accepted.
"""

from __future__ import annotations

import re
from re import Pattern

from semantic_version import SimpleSpec, Version

_WHITESPACE_PATTERN: Pattern[str] = re.compile(r"\s+")
_OPERATOR_PATTERN: Pattern[str] = re.compile(r"^(?:<=|>=|==|!=|~=|<|>|=|\^|~)")
_WILDCARD_CLAUSE: str = ">=0.0.0"


def normalize_constraint(text: str) -> str:
    """Return the constraint in the canonical form understood by ``SimpleSpec``."""
    if not text.strip():
        raise ValueError("version constraint is empty")

    clauses: list[str] = []
    for raw_clause in text.split(","):
        clause = _WHITESPACE_PATTERN.sub("", raw_clause)
        if not clause:
            raise ValueError(f"version constraint {text!r} contains an empty clause")
        if clause == "*":
            clause = _WILDCARD_CLAUSE
        elif not _OPERATOR_PATTERN.match(clause):
            clause = f"^{clause}"
        clauses.append(clause)
    return ",".join(clauses)


def parse_constraint(text: str) -> SimpleSpec:
    """Parse a version constraint, raising ``ValueError`` when malformed."""
    normalized = normalize_constraint(text)
    try:
        return SimpleSpec(normalized)
    except ValueError as exc:
        raise ValueError(f"invalid version constraint {text!r}: {exc}") from exc


def parse_version(text: str) -> Version:
    """Parse a strict ``MAJOR.MINOR.PATCH[-pre][+build]`` version."""
    try:
        return Version(text.strip())
    except ValueError as exc:
        raise ValueError(f"{text!r} is not a valid semantic version") from exc


def satisfies(version: Version, constraint: SimpleSpec) -> bool:
    """Return True when ``version`` falls inside ``constraint``."""
    return bool(constraint.match(version))
