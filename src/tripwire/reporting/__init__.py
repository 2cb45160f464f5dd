"""Reporting package for Tripwire outputs."""

from __future__ import annotations

from typing import Any

__all__ = ["StdoutReporter", "build_report", "write_report"]


def __getattr__(name: str) -> Any:
    """Lazily expose reporting APIs to avoid import cycles at package import time."""
    if name in {"build_report", "write_report"}:
        from .json_report import build_report, write_report

        exports = {"build_report": build_report, "write_report": write_report}
        return exports[name]
    if name == "StdoutReporter":
        from .stdout import StdoutReporter

        return StdoutReporter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
