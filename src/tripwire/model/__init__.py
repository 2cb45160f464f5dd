"""Core data models for Tripwire."""

from .descriptors import (
    CheckDescriptor,
    DateBound,
    IssueRef,
    PullRequestRef,
    PythonVersionConstraint,
    RegistryConstraint,
)
from .results import CheckOutcome, Declaration, DeclarationError, RunResult
from .verdict import Verdict

__all__ = [
    "CheckDescriptor",
    "CheckOutcome",
    "DateBound",
    "Declaration",
    "DeclarationError",
    "IssueRef",
    "PullRequestRef",
    "PythonVersionConstraint",
    "RegistryConstraint",
    "RunResult",
    "Verdict",
]
