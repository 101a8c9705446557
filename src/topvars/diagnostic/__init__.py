# topmark:header:start
#
#   project      : TopVars
#   file         : __init__.py
#   file_relpath : src/topvars/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic primitives and helpers.

Design:
    - Diagnostics are immutable `Diagnostic` instances.
    - Each lint result owns a `DiagnosticLog`, filled in report order.
"""

from __future__ import annotations

from topvars.diagnostic.model import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticLog,
    DiagnosticStats,
    compute_diagnostic_stats,
    diagnostics_counts_to_dict,
)

__all__ = [
    "Diagnostic",
    "DiagnosticLevel",
    "DiagnosticLog",
    "DiagnosticStats",
    "compute_diagnostic_stats",
    "diagnostics_counts_to_dict",
]
