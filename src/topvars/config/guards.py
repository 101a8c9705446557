# topmark:header:start
#
#   project      : TopVars
#   file         : guards.py
#   file_relpath : src/topvars/config/guards.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type guards and normalization helpers for TOML parsing.

`TypeGuard`-based predicates narrow runtime values coming from TOML parsing
(plain dicts unwrapped from `tomlkit` documents) and from CLI overrides.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeGuard

from topvars.config.logging import get_logger

if TYPE_CHECKING:
    from topvars.config.logging import TopvarsLogger
    from topvars.config.types import TomlTable


logger: TopvarsLogger = get_logger(__name__)


def is_toml_table(obj: object) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping (``dict[str, Any]``)."""
    return isinstance(obj, dict)


def is_any_list(obj: object) -> TypeGuard[list[Any]]:
    """Type guard for a generic list value; item types are not validated."""
    return isinstance(obj, list)


def is_str_list(obj: object) -> TypeGuard[list[str]]:
    """Type guard for a ``list[str]`` value."""
    return is_any_list(obj) and all(isinstance(x, str) for x in obj)


def is_mapping(obj: object) -> TypeGuard[Mapping[object, object]]:
    """Type guard for a Mapping value; item types are not validated."""
    return isinstance(obj, Mapping)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Returns a new empty dict if the sub-table is missing or not a mapping.
    """
    value: Any | None = table.get(key)
    if value is None:
        return {}
    if is_toml_table(value):
        return value
    logger.debug("Ignoring non-table value for [%s]: %r", key, value)
    return {}


def get_str_list(table: TomlTable, key: str, *, where: str) -> list[str] | None:
    """Return ``table[key]`` as a list of strings, None if absent.

    Raises:
        TypeError: If the value is present but not a list of strings.
    """
    if key not in table:
        return None
    value: Any = table[key]
    if not is_str_list(value):
        raise TypeError(f"[{where}] '{key}' must be a list of strings")
    return list(value)
