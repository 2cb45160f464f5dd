"""CLI entrypoint for the Tripwire build step."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from tripwire import __version__
from tripwire.config import load_config, skip_requested
from tripwire.constants.branding import CLI_DESCRIPTION
from tripwire.constants.config import MAX_WORKERS, SKIP_ENV_VAR
from tripwire.exceptions import ConfigError, TripwireError
from tripwire.reporting.json_report import write_report
from tripwire.reporting.stdout import StdoutReporter
from tripwire.scanner import collect_declarations, run_checks


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="tripwire",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Evaluate every declared check and fail the build on any that trip")
    check.add_argument("-r", "--root", type=Path, default=Path("."), help="Project root path (default: .)")
    check.add_argument("-c", "--config", type=Path, help="Explicit config file")
    check.add_argument("-n", "--no-cache", action="store_true", help="Do not read or write the on-disk cache")
    check.add_argument("-w", "--workers", type=int, default=None, help="Parallel check workers (default: from config)")
    check.add_argument("--json-out", type=Path, default=None, help="Also write a JSON report to this path")
    check.add_argument("--no-stdout", action="store_true", help="Silence stdout output")
    check.add_argument("--no-color", action="store_true", help="Disable colored output")
    check.add_argument("-v", "--verbose", action="store_true", help="Show passing checks, cache stats and diagnostics")

    validate = subparsers.add_parser("validate", help="Validate configuration and declarations without network access")
    validate.add_argument("-r", "--root", type=Path, default=Path("."), help="Project root path (default: .)")
    validate.add_argument("-c", "--config", type=Path, help="Explicit config file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    if args.command == "validate":
        return _handle_validate(args)

    if args.command != "check":
        parser.error(f"Unsupported command: {args.command}")

    if skip_requested(os.environ):
        print(f"{SKIP_ENV_VAR} is set; skipping all checks.")
        return 0

    if args.workers is not None and not 1 <= args.workers <= MAX_WORKERS:
        print(f"Configuration error: --workers must be between 1 and {MAX_WORKERS}", file=sys.stderr)
        return 2

    try:
        result = run_checks(
            root=args.root,
            config_path=args.config,
            no_cache=args.no_cache,
            workers=args.workers,
        )
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except TripwireError as exc:
        print(f"Check error: {exc}", file=sys.stderr)
        return 1

    if args.json_out is not None:
        try:
            write_report(args.json_out, result)
        except OSError as exc:
            print(f"Failed to write JSON report to {args.json_out}: {exc}", file=sys.stderr)
            return 2

    if not args.no_stdout:
        use_color = not args.no_color and sys.stdout.isatty()
        reporter = StdoutReporter(result, color=use_color, verbose=args.verbose)
        print(reporter.render())

    return result.exit_code


def _handle_validate(args: argparse.Namespace) -> int:
    """Load config and parse every declaration, reporting problems without evaluating anything."""
    try:
        config = load_config(args.root, args.config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    discovery = collect_declarations(args.root, config)
    if discovery.errors:
        for error in discovery.errors:
            print(f"Invalid declaration: {error.format()}", file=sys.stderr)
        return 2

    print(f"Configuration is valid. {len(discovery.declarations)} declared check(s).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
