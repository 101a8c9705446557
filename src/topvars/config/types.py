# topmark:header:start
#
#   project      : TopVars
#   file         : types.py
#   file_relpath : src/topvars/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared type aliases and small value types for TopVars configuration."""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeAlias

from topvars.diagnostic.model import DiagnosticLevel

TomlTable: TypeAlias = dict[str, Any]
TomlTableMap: TypeAlias = dict[str, TomlTable]


class Severity(str, Enum):
    """Severity a rule is configured with.

    ``OFF`` disables the rule; the other members map to a `DiagnosticLevel`.
    """

    OFF = "off"
    WARNING = "warning"
    ERROR = "error"

    @property
    def level(self) -> DiagnosticLevel | None:
        """Return the diagnostic level for this severity, None when the rule is off."""
        return {
            Severity.OFF: None,
            Severity.WARNING: DiagnosticLevel.WARNING,
            Severity.ERROR: DiagnosticLevel.ERROR,
        }[self]

    @classmethod
    def parse(cls, value: object) -> Severity:
        """Parse a severity from a (case-insensitive) string.

        Raises:
            ValueError: If ``value`` is not a known severity.
        """
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        allowed = ", ".join(m.value for m in cls)
        raise ValueError(f"invalid severity {value!r}; allowed values: {allowed}")
