"""Source-file discovery and declaration collection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from tripwire.config import TripwireConfig
from tripwire.exceptions import DescriptorError
from tripwire.model import Declaration, DeclarationError
from tripwire.scanner.declarations import descriptor_from_mapping, find_marker, parse_marker

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    """Declarations found in a workspace, plus anything that could not be parsed."""

    declarations: list[Declaration] = field(default_factory=list)
    errors: list[DeclarationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    scanned_files: int = 0


def discover_source_files(
    root: Path,
    source_globs: tuple[str, ...],
    exclude_dirs: tuple[str, ...],
    max_file_mb: int,
) -> list[Path]:
    """Discover candidate source files by configured glob patterns."""
    discovered: set[Path] = set()
    size_limit_bytes = max_file_mb * 1024 * 1024
    resolved_root = root.resolve()
    excluded = set(exclude_dirs)

    for pattern in source_globs:
        for path in resolved_root.glob(pattern):
            if not path.is_file():
                continue
            relative_parts = path.relative_to(resolved_root).parts[:-1]
            if excluded.intersection(relative_parts):
                continue
            try:
                if path.stat().st_size > size_limit_bytes:
                    logger.debug("Skipping %s: larger than %d MB", path, max_file_mb)
                    continue
            except OSError:
                continue
            discovered.add(path)

    return sorted(discovered, key=lambda path: path.relative_to(resolved_root).as_posix())


def collect_declarations(root: Path, config: TripwireConfig) -> DiscoveryResult:
    """Collect manifest entries from config and inline markers from source files."""
    result = DiscoveryResult()
    resolved_root = root.resolve()

    manifest_label = config.config_path.name if config.config_path is not None else "config"
    for index, entry in enumerate(config.checks):
        source = f"{manifest_label}:checks[{index}]"
        try:
            descriptor = descriptor_from_mapping(entry)
        except DescriptorError as exc:
            result.errors.append(DeclarationError(source=source, message=str(exc)))
            continue
        note = entry.get("note")
        result.declarations.append(
            Declaration(descriptor=descriptor, source=source, note=note if isinstance(note, str) else "")
        )

    files = discover_source_files(resolved_root, config.source_globs, config.exclude_dirs, config.max_file_mb)
    result.scanned_files = len(files)
    for path in files:
        _collect_markers(path, resolved_root, result)

    return result


def _collect_markers(path: Path, root: Path, result: DiscoveryResult) -> None:
    relative = path.relative_to(root).as_posix()
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        warning = f"Failed to read {relative}: {exc}"
        result.warnings.append(warning)
        logger.warning(warning)
        return

    for line_number, line in enumerate(text.splitlines(), start=1):
        marker = find_marker(line)
        if marker is None:
            continue
        source = f"{relative}:{line_number}"
        verb, args, note = marker
        try:
            descriptor = parse_marker(verb, args)
        except DescriptorError as exc:
            result.errors.append(DeclarationError(source=source, message=str(exc)))
            continue
        result.declarations.append(Declaration(descriptor=descriptor, source=source, note=note))
