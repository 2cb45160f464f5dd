"""Checker construction from resolved config."""

from __future__ import annotations

from tripwire.checkers.base import Checker
from tripwire.checkers.date import DateChecker
from tripwire.checkers.github import IssueChecker, PullRequestChecker
from tripwire.checkers.registry import RegistryVersionChecker
from tripwire.checkers.toolchain import PythonVersionChecker
from tripwire.config import TripwireConfig

CHECKER_CLASSES: tuple[type[Checker], ...] = (
    DateChecker,
    IssueChecker,
    PullRequestChecker,
    RegistryVersionChecker,
    PythonVersionChecker,
)


def build_checkers(config: TripwireConfig) -> dict[str, Checker]:
    """Build one checker per check kind, keyed by kind."""
    ttl = config.cache_ttl_seconds
    checkers: list[Checker] = [
        DateChecker(),
        IssueChecker(ttl_seconds=ttl, api_url=config.github_api_url, token=config.github_token),
        PullRequestChecker(ttl_seconds=ttl, api_url=config.github_api_url, token=config.github_token),
        RegistryVersionChecker(ttl_seconds=ttl, generic_url=config.generic_registry_url),
        PythonVersionChecker(),
    ]
    return {checker.kind: checker for checker in checkers}
