"""Check kinds, registries, and declaration syntax."""

from __future__ import annotations

import re
from re import Pattern

CHECK_KIND_DATE: str = "date"
CHECK_KIND_ISSUE: str = "issue"
CHECK_KIND_PULL_REQUEST: str = "pull_request"
CHECK_KIND_REGISTRY: str = "registry"
CHECK_KIND_PYTHON: str = "python"

VALID_CHECK_KINDS: frozenset[str] = frozenset(
    {
        CHECK_KIND_DATE,
        CHECK_KIND_ISSUE,
        CHECK_KIND_PULL_REQUEST,
        CHECK_KIND_REGISTRY,
        CHECK_KIND_PYTHON,
    }
)

REGISTRY_CRATES: str = "crates"
REGISTRY_GENERIC: str = "generic"
VALID_REGISTRIES: frozenset[str] = frozenset({REGISTRY_CRATES, REGISTRY_GENERIC})

# Inline marker verbs and the descriptor kind each one declares.
MARKER_VERBS: dict[str, str] = {
    "date": CHECK_KIND_DATE,
    "after": CHECK_KIND_DATE,
    "issue": CHECK_KIND_ISSUE,
    "pull": CHECK_KIND_PULL_REQUEST,
    "pr": CHECK_KIND_PULL_REQUEST,
    "crates": CHECK_KIND_REGISTRY,
    "package": CHECK_KIND_REGISTRY,
    "python": CHECK_KIND_PYTHON,
}
MARKER_REGISTRIES: dict[str, str] = {
    "crates": REGISTRY_CRATES,
    "package": REGISTRY_GENERIC,
}

MARKER_PATTERN: Pattern[str] = re.compile(r"\btripwire:\s*(?P<verb>[a-z_]+)\s+(?P<args>.+?)\s*$")
MARKER_TRAILERS: tuple[str, ...] = ("*/", "-->", "#}", "%}")
# Text after this separator on a marker line is kept as the declaration note.
MARKER_NOTE_SEPARATOR: str = " -- "

ISSUE_REF_PATTERN: Pattern[str] = re.compile(r"^(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)#(?P<number>\d+)$")
REPO_PATTERN: Pattern[str] = re.compile(r"^(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)$")
