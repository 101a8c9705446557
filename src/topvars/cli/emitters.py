# topmark:header:start
#
#   project      : TopVars
#   file         : emitters.py
#   file_relpath : src/topvars/cli/emitters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render lint results for the console.

Text output is meant for humans and may be colored; JSON and NDJSON are
stable, colorless machine formats:

* text: ``path:line:column: level message [rule-id]`` per diagnostic, then a
  summary line;
* json: one document ``{"files": [...], "summary": {...}}``;
* ndjson: one object per diagnostic (and per unreadable file), then one summary
  object.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from topvars.diagnostic.model import DiagnosticLevel, compute_diagnostic_stats

if TYPE_CHECKING:
    from topvars.cli.console import ClickConsole
    from topvars.diagnostic.model import Diagnostic
    from topvars.linter import LintResult


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


@dataclass(frozen=True)
class RunSummary:
    """Counts over all linted files."""

    files: int
    errors: int
    warnings: int
    infos: int
    unreadable: int

    @property
    def problems(self) -> int:
        """Return the total number of diagnostics."""
        return self.errors + self.warnings + self.infos

    @classmethod
    def from_results(cls, results: Sequence[LintResult]) -> RunSummary:
        """Aggregate the diagnostics of ``results``."""
        stats = compute_diagnostic_stats(d for r in results for d in r.diagnostics)
        return cls(
            files=len(results),
            errors=stats.n_error,
            warnings=stats.n_warning,
            infos=stats.n_info,
            unreadable=sum(1 for r in results if r.status.is_error),
        )

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping."""
        return {
            "files": self.files,
            "problems": self.problems,
            "errors": self.errors,
            "warnings": self.warnings,
            "infos": self.infos,
            "unreadable": self.unreadable,
        }

    def render(self) -> str:
        """Return the one-line human summary."""
        return (
            f"{_plural(self.problems, 'problem')} "
            f"({_plural(self.errors, 'error')}, {_plural(self.warnings, 'warning')}) "
            f"in {_plural(self.files, 'file')}"
        )


def format_diagnostic(result: LintResult, diag: Diagnostic, console: ClickConsole) -> str:
    """Return the text line for one diagnostic."""
    where: str = str(result.path) if result.path is not None else "<source>"
    if diag.span is not None:
        where = f"{where}:{diag.span.line}:{diag.span.column}"
    level: str = diag.level.value
    if console.enable_color:
        level = diag.level.color(level)
    line = f"{where}: {level} {diag.message}"
    if diag.rule_id:
        line += f" [{diag.rule_id}]"
    return line


def emit_text(
    console: ClickConsole,
    results: Sequence[LintResult],
    *,
    verbosity: int = 0,
    summary_only: bool = False,
) -> RunSummary:
    """Print results as text and return the run summary.

    Args:
        console (ClickConsole): Output console.
        results (Sequence[LintResult]): Results in file order.
        verbosity (int): ``-1`` prints only error-level diagnostics and no
            summary; ``>= 1`` also lists files without problems.
        summary_only (bool): Print only the summary line (and read errors).

    Returns:
        RunSummary: Counts over all results.
    """
    summary = RunSummary.from_results(results)
    for result in results:
        if result.status.is_error:
            console.error(
                f"{result.path}: cannot read file ({result.status.value}): {result.error}"
            )
            continue
        if summary_only:
            continue
        shown = 0
        for diag in result.diagnostics:
            if verbosity < 0 and diag.level is not DiagnosticLevel.ERROR:
                continue
            console.print(format_diagnostic(result, diag, console))
            shown += 1
        if shown == 0 and verbosity > 0:
            console.print(f"{result.path}: {console.styled('ok', fg='green')}")

    if verbosity >= 0:
        text = summary.render()
        if summary.errors:
            text = console.styled(text, fg="bright_red", bold=True)
        elif summary.warnings:
            text = console.styled(text, fg="yellow")
        console.print(text)
    return summary


def emit_json(console: ClickConsole, results: Sequence[LintResult]) -> RunSummary:
    """Print one JSON document for the whole run and return the run summary."""
    summary = RunSummary.from_results(results)
    payload: dict[str, Any] = {
        "files": [r.to_dict() for r in results],
        "summary": summary.to_dict(),
    }
    console.print(json.dumps(payload, indent=2))
    return summary


def emit_ndjson(console: ClickConsole, results: Sequence[LintResult]) -> RunSummary:
    """Print one JSON object per line and return the run summary."""
    summary = RunSummary.from_results(results)
    for result in results:
        path: str | None = str(result.path) if result.path is not None else None
        if result.status.is_error:
            record: dict[str, Any] = {
                "kind": "file_error",
                "path": path,
                "status": result.status.value,
                "error": result.error,
            }
            console.print(json.dumps(record))
            continue
        for diag in result.diagnostics:
            console.print(json.dumps({"kind": "diagnostic", "path": path, **diag.to_dict()}))
    console.print(json.dumps({"kind": "summary", **summary.to_dict()}))
    return summary
