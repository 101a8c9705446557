# topmark:header:start
#
#   project      : TopVars
#   file         : model.py
#   file_relpath : src/topvars/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core diagnostic types and helpers for TopVars.

Diagnostics are the output of a lint run: rule violations anchored at a source
location, plus host-level notes (e.g. syntax errors in the parsed file).

Sections:
    * DiagnosticLevel: severity levels with associated terminal colors.
    * Diagnostic: immutable structured diagnostic payload.
    * DiagnosticStats: aggregated per-level counts.
    * DiagnosticLog: mutable per-file collection with helpers for adding and
      summarizing diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, cast

from yachalk import chalk

from topvars.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from topvars.config.logging import TopvarsLogger
    from topvars.syntax.model import SourceSpan


logger: TopvarsLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics.

    Levels map to terminal colors and are ordered by importance: ERROR > WARNING > INFO.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Intended for human-readable output only; machine formats do not use colors.
        """
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level, message and optional location.

    Attributes:
        level (DiagnosticLevel): Severity assigned by the host.
        message (str): Human-readable message.
        rule_id (str | None): Identifier of the reporting rule; None for host notes.
        span (SourceSpan | None): Location of the offending node, if any.
    """

    level: DiagnosticLevel
    message: str
    rule_id: str | None = None
    span: SourceSpan | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of this diagnostic."""
        out: dict[str, Any] = {
            "level": self.level.value,
            "message": self.message,
            "rule": self.rule_id,
        }
        if self.span is not None:
            out.update(
                line=self.span.line,
                column=self.span.column,
                end_line=self.span.end_line,
                end_column=self.span.end_column,
            )
        return out


@dataclass(frozen=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity level."""

    n_info: int
    n_warning: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of diagnostics."""
        return self.n_info + self.n_warning + self.n_error


@dataclass
class DiagnosticLog:
    """Mutable, per-file collection of diagnostics.

    Diagnostics are kept in insertion order, which for rule violations is the
    order in which the walker visited the offending nodes.
    """

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def add(self, diagnostic: Diagnostic) -> None:
        """Append a diagnostic to the log.

        Args:
            diagnostic (Diagnostic): The diagnostic object.
        """
        self.items.append(diagnostic)
        logger.trace(
            "Adding [%s] %s: %r", diagnostic.level.value, diagnostic.span, diagnostic.message
        )

    def add_warning(self, message: str) -> None:
        """Add a ``warning`` host diagnostic (no rule, no location)."""
        self.add(Diagnostic(DiagnosticLevel.WARNING, message))

    def stats(self) -> DiagnosticStats:
        """Return per-level counts for diagnostics in this log."""
        return compute_diagnostic_stats(self.items)

    def has_error(self) -> bool:
        """Return True if the log contains error diagnostics."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.items)

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by severity."""
        return diagnostics_counts_to_dict(self.items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def compute_diagnostic_stats(diagnostics: Iterable[Diagnostic]) -> DiagnosticStats:
    """Return per-level counts for a sequence of diagnostics.

    Args:
        diagnostics: the diagnostics to count.

    Returns:
        Per-level counts.
    """
    items: list[Diagnostic] = list(diagnostics)
    n_info: int = sum(1 for d in items if d.level == DiagnosticLevel.INFO)
    n_warn: int = sum(1 for d in items if d.level == DiagnosticLevel.WARNING)
    n_err: int = sum(1 for d in items if d.level == DiagnosticLevel.ERROR)
    return DiagnosticStats(n_info=n_info, n_warning=n_warn, n_error=n_err)


def diagnostics_counts_to_dict(diagnostics: Iterable[Diagnostic]) -> dict[str, int]:
    """Return a JSON-friendly mapping of counts by severity for any iterable."""
    stats: DiagnosticStats = compute_diagnostic_stats(diagnostics)
    return {
        "info": stats.n_info,
        "warning": stats.n_warning,
        "error": stats.n_error,
    }
