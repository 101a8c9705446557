# topmark:header:start
#
#   project      : TopVars
#   file         : keys.py
#   file_relpath : src/topvars/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for TopVars configuration.

Keys defined here are the *external configuration API* as it appears in
``topvars.toml`` and in ``[tool.topvars]`` inside ``pyproject.toml``. Renaming
or removing a key is a breaking change. Rule option keys (``kind``,
``constAllowed``, ...) belong to each rule's option schema, not to this module.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by TopVars configuration."""

    # [files]
    SECTION_FILES: Final[str] = "files"

    KEY_INCLUDE: Final[str] = "include"
    KEY_EXCLUDE: Final[str] = "exclude"

    # [rules.<rule-id>]
    SECTION_RULES: Final[str] = "rules"

    KEY_SEVERITY: Final[str] = "severity"

    # pyproject.toml nesting
    PYPROJECT_TOOL: Final[str] = "tool"
    PYPROJECT_SECTION: Final[str] = "topvars"
