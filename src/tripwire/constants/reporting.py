"""Constants for report files and stdout formatting."""

from __future__ import annotations

SCHEMA_VERSION: str = "1.0.0"
REPORT_TEMP_PREFIX: str = ".tmp-"
REPORT_TEMP_SUFFIX: str = ".json"

ANSI_RED: str = "\033[31m"
ANSI_YELLOW: str = "\033[33m"
ANSI_GREEN: str = "\033[32m"
ANSI_RESET: str = "\033[0m"

VERDICT_LABELS: dict[str, str] = {
    "pass": "PASS",
    "fail": "FAIL",
    "indeterminate": "UNRESOLVED",
}
VERDICT_COLORS: dict[str, str] = {
    "pass": ANSI_GREEN,
    "fail": ANSI_RED,
    "indeterminate": ANSI_YELLOW,
}
