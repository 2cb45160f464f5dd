"""Checks against the running Python interpreter version."""

from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import timedelta

from semantic_version import Version

from tripwire.checkers.base import Checker
from tripwire.constants.checks import CHECK_KIND_PYTHON
from tripwire.http import HttpClient
from tripwire.model import CheckDescriptor, PythonVersionConstraint, Verdict
from tripwire.utils import parse_constraint, satisfies


def _running_python_version() -> Version:
    info = sys.version_info
    return Version(major=info.major, minor=info.minor, patch=info.micro)


class PythonVersionChecker(Checker):
    """Pass while the interpreter running the build satisfies the constraint."""

    kind = CHECK_KIND_PYTHON
    descriptor_type = PythonVersionConstraint

    def __init__(self, *, current_version: Callable[[], Version] = _running_python_version) -> None:
        self._current_version = current_version

    def evaluate(self, descriptor: CheckDescriptor, *, http: HttpClient) -> Verdict:
        assert isinstance(descriptor, PythonVersionConstraint)
        try:
            constraint = parse_constraint(descriptor.constraint)
        except ValueError as exc:
            return Verdict.indeterminate(str(exc))

        current = self._current_version()
        if satisfies(current, constraint):
            return Verdict.passed()
        return Verdict.failed(
            f"the active Python version is {current}, which no longer satisfies {descriptor.constraint}"
        )

    def ttl(self, descriptor: CheckDescriptor) -> timedelta | None:
        return None
