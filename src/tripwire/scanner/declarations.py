"""Turn inline markers and manifest entries into descriptors."""

from __future__ import annotations

from datetime import date
from typing import Any

from tripwire.constants.checks import (
    CHECK_KIND_DATE,
    CHECK_KIND_ISSUE,
    CHECK_KIND_PULL_REQUEST,
    CHECK_KIND_PYTHON,
    CHECK_KIND_REGISTRY,
    MARKER_NOTE_SEPARATOR,
    MARKER_PATTERN,
    MARKER_REGISTRIES,
    MARKER_TRAILERS,
    MARKER_VERBS,
    REGISTRY_CRATES,
    REPO_PATTERN,
)
from tripwire.exceptions import DescriptorError
from tripwire.model import (
    CheckDescriptor,
    DateBound,
    IssueRef,
    PullRequestRef,
    PythonVersionConstraint,
    RegistryConstraint,
)

_MANIFEST_KEYS: dict[str, frozenset[str]] = {
    CHECK_KIND_DATE: frozenset({"date"}),
    CHECK_KIND_ISSUE: frozenset({"repo", "number", "ref"}),
    CHECK_KIND_PULL_REQUEST: frozenset({"repo", "number", "ref"}),
    CHECK_KIND_REGISTRY: frozenset({"package", "constraint", "registry"}),
    CHECK_KIND_PYTHON: frozenset({"constraint"}),
}
_COMMON_KEYS: frozenset[str] = frozenset({"kind", "note"})


def find_marker(line: str) -> tuple[str, str, str] | None:
    """Return ``(verb, args, note)`` when ``line`` carries a ``tripwire:`` marker.

    Anything after ``" -- "`` is free-form prose and becomes the note.
    """
    match = MARKER_PATTERN.search(line)
    if match is None:
        return None

    args = match["args"]
    for trailer in MARKER_TRAILERS:
        if args.endswith(trailer):
            args = args[: -len(trailer)].rstrip()
    args, _, note = args.partition(MARKER_NOTE_SEPARATOR)
    return match["verb"], args.strip(), note.strip()


def parse_marker(verb: str, args: str) -> CheckDescriptor:
    """Build a descriptor from a marker verb and its argument text."""
    kind = MARKER_VERBS.get(verb)
    if kind is None:
        raise DescriptorError(f"unknown tripwire check {verb!r}; expected one of {', '.join(sorted(MARKER_VERBS))}")

    text = _unquote(args)
    if kind == CHECK_KIND_DATE:
        return DateBound.parse(text)
    if kind == CHECK_KIND_ISSUE:
        return IssueRef.parse(text)
    if kind == CHECK_KIND_PULL_REQUEST:
        return PullRequestRef.parse(text)
    if kind == CHECK_KIND_PYTHON:
        return PythonVersionConstraint(constraint=text)

    package, _, constraint = text.partition(" ")
    if not constraint.strip():
        raise DescriptorError(f"{verb} check needs a package name and a version constraint, got {text!r}")
    return RegistryConstraint(
        package_name=_unquote(package),
        constraint=_unquote(constraint),
        registry=MARKER_REGISTRIES[verb],
    )


def descriptor_from_mapping(entry: dict[str, Any]) -> CheckDescriptor:
    """Build a descriptor from one ``checks:`` manifest entry."""
    kind = entry.get("kind")
    if kind not in _MANIFEST_KEYS:
        raise DescriptorError(f"kind must be one of {sorted(_MANIFEST_KEYS)}, got {kind!r}")

    unknown = sorted(str(key) for key in entry if key not in _MANIFEST_KEYS[kind] | _COMMON_KEYS)
    if unknown:
        raise DescriptorError(f"unknown key(s) for {kind} check: {', '.join(unknown)}")

    if kind == CHECK_KIND_DATE:
        value = entry.get("date")
        # YAML turns unquoted ISO dates into date objects.
        if isinstance(value, date):
            return DateBound(year=value.year, month=value.month, day=value.day)
        if not isinstance(value, str):
            raise DescriptorError("date check needs a `date` in YYYY-MM-DD form")
        return DateBound.parse(value)

    if kind in (CHECK_KIND_ISSUE, CHECK_KIND_PULL_REQUEST):
        ref_type = IssueRef if kind == CHECK_KIND_ISSUE else PullRequestRef
        if "ref" in entry:
            return ref_type.parse(_require_str(entry, "ref", kind))
        match = REPO_PATTERN.match(_require_str(entry, "repo", kind))
        if match is None:
            raise DescriptorError(f"{kind} check `repo` must be of the form owner/name")
        return ref_type(owner=match["owner"], repo=match["repo"], number=entry.get("number"))  # type: ignore[arg-type]

    if kind == CHECK_KIND_PYTHON:
        return PythonVersionConstraint(constraint=_require_str(entry, "constraint", kind))

    return RegistryConstraint(
        package_name=_require_str(entry, "package", kind),
        constraint=_require_str(entry, "constraint", kind),
        registry=entry.get("registry", REGISTRY_CRATES),
    )


def _require_str(entry: dict[str, Any], key: str, kind: str) -> str:
    value = entry.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool) and key == "constraint":
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        raise DescriptorError(f"{kind} check needs a non-empty `{key}` string")
    return value


def _unquote(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1].strip()
    return text
