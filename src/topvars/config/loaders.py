# topmark:header:start
#
#   project      : TopVars
#   file         : loaders.py
#   file_relpath : src/topvars/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load and render TOML configuration sources.

This module provides I/O helpers for reading TopVars configuration from
on-disk TOML files (`topvars.toml` / `pyproject.toml`) and for rendering the
runtime defaults back to TOML text.

Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from topvars.config.keys import Toml
from topvars.config.logging import get_logger
from topvars.config.types import Severity
from topvars.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from topvars.config.logging import TopvarsLogger
    from topvars.config.types import TomlTable

logger: TopvarsLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return TopVars' **runtime defaults** as a Python dict.

    Rule sections are generated from the rule registry: every registered rule
    is listed with severity ``error`` and the defaults its schema documents.

    Returns:
        A TOML-table-compatible dict containing the runtime defaults. A new dict
        is returned on every call so callers can mutate it safely.
    """
    # Imported here: the registry imports rule modules, which import config helpers.
    from topvars.rules.registry import RuleRegistry

    rules: TomlTable = {}
    for meta in RuleRegistry.iter_meta():
        section: TomlTable = {Toml.KEY_SEVERITY: Severity.ERROR.value}
        section.update(meta.schema.defaults())
        rules[meta.rule_id] = section

    return {
        Toml.SECTION_FILES: {
            Toml.KEY_INCLUDE: [],
            Toml.KEY_EXCLUDE: [],
        },
        Toml.SECTION_RULES: rules,
    }


def to_toml(data: TomlTable) -> str:
    """Render a plain dict as TOML text with `tomlkit`."""
    return tomlkit.dumps(data)


def render_runtime_defaults_toml_text(*, for_pyproject: bool = False) -> str:
    """Render TopVars runtime defaults as TOML text.

    Args:
        for_pyproject: If True, nest the output under ``[tool.topvars]``.

    Returns:
        TOML document text.
    """
    data: TomlTable = load_defaults_dict()
    if for_pyproject:
        data = {Toml.PYPROJECT_TOOL: {Toml.PYPROJECT_SECTION: data}}
    return to_toml(data)


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (e.g., ``topvars.toml`` or ``pyproject.toml``).

    Returns:
        The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def extract_pyproject_section(data: TomlTable) -> TomlTable | None:
    """Return the ``[tool.topvars]`` table of a parsed ``pyproject.toml``, if any."""
    tool: Any = data.get(Toml.PYPROJECT_TOOL)
    if not isinstance(tool, dict):
        return None
    section: Any = tool.get(Toml.PYPROJECT_SECTION)
    return cast("TomlTable", section) if isinstance(section, dict) else None
