"""Shared utility helpers."""

from __future__ import annotations

from .versions import normalize_constraint, parse_constraint, parse_version, satisfies

__all__ = ["normalize_constraint", "parse_constraint", "parse_version", "satisfies"]
