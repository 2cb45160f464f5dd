"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "TRIPWIRE"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ TRIPWIRE",
    "     // build-time checks against the outside world",
)
CHECK_SUMMARY_TITLE: str = "Check summary"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} build gate"))
