"""Declaration discovery and check orchestration for Tripwire."""

from __future__ import annotations

from typing import Any

from .declarations import descriptor_from_mapping, find_marker, parse_marker
from .discovery import DiscoveryResult, collect_declarations, discover_source_files

__all__ = [
    "DiscoveryResult",
    "Orchestrator",
    "collect_declarations",
    "descriptor_from_mapping",
    "discover_source_files",
    "find_marker",
    "parse_marker",
    "run_checks",
]


def __getattr__(name: str) -> Any:
    """Lazily expose orchestration APIs to avoid import cycles at package import time."""
    if name in {"Orchestrator", "run_checks"}:
        from .orchestrator import Orchestrator, run_checks

        exports = {"Orchestrator": Orchestrator, "run_checks": run_checks}
        return exports[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
