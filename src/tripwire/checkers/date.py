"""Deadline checks against the local calendar date."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, timedelta

from tripwire.checkers.base import Checker
from tripwire.constants.checks import CHECK_KIND_DATE
from tripwire.http import HttpClient
from tripwire.model import CheckDescriptor, DateBound, Verdict


class DateChecker(Checker):
    """Fail once today has reached the bound date."""

    kind = CHECK_KIND_DATE
    descriptor_type = DateBound

    def __init__(self, *, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def evaluate(self, descriptor: CheckDescriptor, *, http: HttpClient) -> Verdict:
        assert isinstance(descriptor, DateBound)
        today = self._today()
        if today >= descriptor.bound:
            return Verdict.failed(f"{descriptor.bound.isoformat()} is now in the past (today is {today.isoformat()})")
        return Verdict.passed()

    def ttl(self, descriptor: CheckDescriptor) -> timedelta | None:
        return None
