"""Machine-readable JSON report for check runs."""

from __future__ import annotations

from pathlib import Path

from tripwire import __version__
from tripwire.constants.reporting import REPORT_TEMP_PREFIX, REPORT_TEMP_SUFFIX, SCHEMA_VERSION
from tripwire.io import write_json_atomic
from tripwire.model import RunResult
from tripwire.types import JsonObject


def build_report(result: RunResult) -> JsonObject:
    """Build a deterministic report payload; outcomes keep declaration order."""
    return {
        "schema_version": SCHEMA_VERSION,
        "tool_version": __version__,
        "exit_code": result.exit_code,
        "duration_seconds": round(result.duration_seconds, 3),
        "counts": dict(result.counts),
        "cache": {"hits": result.cache_hits, "misses": result.cache_misses},
        "outcomes": [outcome.to_dict() for outcome in result.outcomes],
        "declaration_errors": [
            {"source": error.source, "message": error.message} for error in result.declaration_errors
        ],
        "warnings": list(result.warnings),
    }


def write_report(path: Path, result: RunResult) -> JsonObject:
    """Write the JSON report for ``result`` to ``path`` and return the payload."""
    payload = build_report(result)
    write_json_atomic(
        path=path,
        payload=payload,
        temp_prefix=REPORT_TEMP_PREFIX,
        temp_suffix=REPORT_TEMP_SUFFIX,
    )
    return payload
