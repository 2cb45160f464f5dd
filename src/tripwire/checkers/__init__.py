"""Checker package for Tripwire."""

from .base import Checker, NetworkChecker
from .catalog import CHECKER_CLASSES, build_checkers
from .date import DateChecker
from .github import IssueChecker, PullRequestChecker
from .registry import RegistryVersionChecker
from .toolchain import PythonVersionChecker

__all__ = [
    "CHECKER_CLASSES",
    "Checker",
    "DateChecker",
    "IssueChecker",
    "NetworkChecker",
    "PullRequestChecker",
    "PythonVersionChecker",
    "RegistryVersionChecker",
    "build_checkers",
]
