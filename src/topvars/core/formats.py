# topmark:header:start
#
#   project      : TopVars
#   file         : formats.py
#   file_relpath : src/topvars/core/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared output format definitions used across TopVars frontends.

Machine formats (JSON, NDJSON) are intended to be stable and colorless.
"""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Attributes:
        TEXT: Human-friendly text output; may include ANSI color if enabled.
        JSON: A single JSON document (machine-readable).
        NDJSON: One JSON object per line (newline-delimited JSON; machine-readable).
    """

    TEXT = "text"
    JSON = "json"
    NDJSON = "ndjson"


def is_machine_format(fmt: OutputFormat | None) -> bool:
    """Return True for formats intended for machine consumption."""
    return fmt in {OutputFormat.JSON, OutputFormat.NDJSON}
