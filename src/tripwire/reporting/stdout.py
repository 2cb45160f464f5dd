"""Human-readable stdout reporter for check runs."""

from __future__ import annotations

from tripwire.constants.branding import ASCII_LOGO_LINES, CHECK_SUMMARY_TITLE
from tripwire.constants.reporting import ANSI_RESET, VERDICT_COLORS, VERDICT_LABELS
from tripwire.model import CheckOutcome, RunResult
from tripwire.types import VerdictKind


def _colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI_RESET}"


def _verdict_label(kind: VerdictKind, *, color: bool) -> str:
    label = VERDICT_LABELS.get(kind, kind.upper())
    shade = VERDICT_COLORS.get(kind, "")
    return _colorize(label, shade) if color and shade else label


class StdoutReporter:
    """Formats run results as human-readable stdout output."""

    def __init__(self, result: RunResult, *, color: bool = True, verbose: bool = False) -> None:
        self._result = result
        self._color = color
        self._verbose = verbose

    def render(self) -> str:
        """Render the full stdout report as a single string."""
        sections = [self._render_header(), self._render_problems(), self._render_details()]
        return "\n".join(section for section in sections if section)

    def _render_header(self) -> str:
        r = self._result
        counts = r.counts
        sep = "  " + "─" * 38

        lines = [
            "",
            f"  {ASCII_LOGO_LINES[0]}",
            f"  {ASCII_LOGO_LINES[1]}",
            f"  {CHECK_SUMMARY_TITLE}",
            sep,
            "",
            f"  Checks      {len(r.outcomes)}",
            (
                f"  Verdicts    {counts['pass']} {_verdict_label('pass', color=self._color)} · "
                f"{counts['fail']} {_verdict_label('fail', color=self._color)} · "
                f"{counts['indeterminate']} {_verdict_label('indeterminate', color=self._color)}"
            ),
        ]
        if r.declaration_errors:
            lines.append(f"  Invalid     {len(r.declaration_errors)} declaration(s)")
        if r.warnings:
            lines.append(f"  Warnings    {len(r.warnings)}")
        lines.append(f"  Duration    {r.duration_seconds:.3f}s")
        if self._verbose:
            lines.append(f"  Cache       {r.cache_hits} hits / {r.cache_misses} misses")

        state: VerdictKind = "fail" if r.exit_code else "pass"
        lines.append(f"  Result      {_verdict_label(state, color=self._color)} (exit {r.exit_code})")
        lines.append("")
        return "\n".join(lines)

    def _render_problems(self) -> str:
        r = self._result
        if not r.declaration_errors and not r.blocking:
            return ""

        lines: list[str] = []
        for error in r.declaration_errors:
            lines.append(f"  {_verdict_label('fail', color=self._color)}  invalid declaration {error.format()}")
        for outcome in r.blocking:
            lines.append(self._format_outcome(outcome))
            if outcome.declaration.note:
                lines.append(f"      note: {outcome.declaration.note}")
        if self._verbose:
            lines.extend(f"  warning: {warning}" for warning in r.warnings)
        lines.append("")
        return "\n".join(lines)

    def _render_details(self) -> str:
        """List passing checks too when verbose."""
        if not self._verbose:
            return ""
        passing = [outcome for outcome in self._result.outcomes if outcome.verdict.is_pass]
        if not passing:
            return ""
        return "\n".join([*(self._format_outcome(outcome) for outcome in passing), ""])

    def _format_outcome(self, outcome: CheckOutcome) -> str:
        label = _verdict_label(outcome.verdict.kind, color=self._color)
        location = f"{outcome.declaration.source}  " if outcome.declaration.source else ""
        cached = " (cached)" if self._verbose and outcome.cached else ""
        detail = outcome.message or f"{outcome.descriptor.kind} {outcome.descriptor.describe()}"
        return f"  {label}  {location}{detail}{cached}"
