# topmark:header:start
#
#   project      : TopVars
#   file         : schema.py
#   file_relpath : src/topvars/rules/schema.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Declarative option schemas for rules.

Each rule declares the shape of its options object as an `OptionsSchema`. The
host validates raw options (from TOML or the CLI) against that schema **before**
the rule is activated, so rules can consume their options without re-checking
value domains.

Supported constraints mirror the subset of JSON Schema rules need:

* the options value is an object with known keys only;
* each property is an array of strings restricted to an enumeration, with an
  optional minimum length.

Example:
    ```python
    schema = OptionsSchema(
        properties={
            "kind": ArrayOption(enum=("const", "let", "var"), min_items=1),
        }
    )
    schema.validate("my-rule", {"kind": ["let"]})  # -> {"kind": ("let",)}
    ```
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from topvars.config.guards import is_mapping
from topvars.core.errors import RuleOptionsError


@dataclass(frozen=True, slots=True)
class ArrayOption:
    """Array-of-enum option property.

    Attributes:
        enum (tuple[str, ...]): Allowed item values.
        min_items (int): Minimum number of items.
        default (tuple[str, ...] | None): Value the rule applies when the key is absent
            (documentation only; rules apply their own defaults).
        description (str): Human-readable description (used by ``topvars rules``).
    """

    enum: tuple[str, ...]
    min_items: int = 0
    default: tuple[str, ...] | None = None
    description: str = ""

    def validate(self, rule_id: str, key: str, value: object) -> tuple[str, ...]:
        """Validate ``value`` and return it as a tuple of strings.

        Raises:
            RuleOptionsError: If ``value`` is not a list of allowed strings or is
                shorter than ``min_items``.
        """
        if not isinstance(value, (list, tuple)):
            raise RuleOptionsError(
                rule_id, f"expected an array, got {type(value).__name__}", key=key
            )
        items: list[Any] = list(value)
        if len(items) < self.min_items:
            raise RuleOptionsError(
                rule_id,
                f"expected at least {self.min_items} item(s), got {len(items)}",
                key=key,
            )
        for item in items:
            if not isinstance(item, str) or item not in self.enum:
                raise RuleOptionsError(
                    rule_id,
                    f"invalid value {item!r}; allowed values: {', '.join(self.enum)}",
                    key=key,
                )
        return tuple(items)

    def to_json_schema(self) -> dict[str, Any]:
        """Return the equivalent JSON Schema fragment."""
        fragment: dict[str, Any] = {
            "type": "array",
            "minItems": self.min_items,
            "items": {"enum": list(self.enum)},
        }
        if self.default is not None:
            fragment["default"] = list(self.default)
        if self.description:
            fragment["description"] = self.description
        return fragment


@dataclass(frozen=True, slots=True)
class OptionsSchema:
    """Schema of a rule's options object.

    Attributes:
        properties (Mapping[str, ArrayOption]): Known option keys and their constraints.
    """

    properties: Mapping[str, ArrayOption] = field(default_factory=lambda: {})

    def validate(self, rule_id: str, raw: object) -> dict[str, tuple[str, ...]]:
        """Validate a raw options object.

        Args:
            rule_id (str): Rule identifier, used in error messages.
            raw (object): Raw options (``None`` means "no options").

        Returns:
            dict[str, tuple[str, ...]]: Validated options; absent keys are omitted so
            rules can apply their own defaults.

        Raises:
            RuleOptionsError: If the options do not satisfy the schema.
        """
        if raw is None:
            return {}
        if not is_mapping(raw):
            raise RuleOptionsError(rule_id, f"expected a table, got {type(raw).__name__}")

        validated: dict[str, tuple[str, ...]] = {}
        for key, value in raw.items():
            if not isinstance(key, str) or key not in self.properties:
                known = ", ".join(sorted(self.properties)) or "(none)"
                raise RuleOptionsError(
                    rule_id, f"unknown option {key!r}; known options: {known}"
                )
            validated[key] = self.properties[key].validate(rule_id, key, value)
        return validated

    def defaults(self) -> dict[str, list[str]]:
        """Return the documented default of every property that declares one."""
        return {
            key: list(prop.default)
            for key, prop in self.properties.items()
            if prop.default is not None
        }

    def to_json_schema(self) -> dict[str, Any]:
        """Return the equivalent JSON Schema object."""
        return {
            "type": "object",
            "properties": {k: v.to_json_schema() for k, v in self.properties.items()},
            "additionalProperties": False,
        }
