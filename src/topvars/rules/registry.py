# topmark:header:start
#
#   project      : TopVars
#   file         : registry.py
#   file_relpath : src/topvars/rules/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rule registry (built-in rules plus optional overlay registrations).

Notes:
    * Built-in rules are registered lazily and idempotently by
      `register_builtin_rules`; every read method calls it first.
    * `RuleRegistry.register()` / `RuleRegistry.unregister()` mutate global
      state. In tests, wrap them in try/finally to ensure cleanup.

Typical usage:
    ```python
    from topvars.rules.registry import RuleRegistry

    for meta in RuleRegistry.iter_meta():
        print(meta.rule_id, meta.description)

    rule = RuleRegistry.get("no-top-level-variables")
    ```
"""

from __future__ import annotations

from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING

from topvars.config.logging import get_logger
from topvars.core.errors import UnknownRuleError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from topvars.config.logging import TopvarsLogger
    from topvars.rules.base import Rule, RuleMeta

logger: TopvarsLogger = get_logger(__name__)


class RuleRegistry:
    """Process-global registry of rules keyed by rule id."""

    _lock = RLock()
    _rules: dict[str, Rule] = {}
    _builtins_registered: bool = False

    @classmethod
    def _ensure_builtins(cls) -> None:
        if cls._builtins_registered:
            return
        with cls._lock:
            if cls._builtins_registered:
                return
            cls._builtins_registered = True
            register_builtin_rules()

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Return all registered rule ids (sorted)."""
        cls._ensure_builtins()
        with cls._lock:
            return tuple(sorted(cls._rules))

    @classmethod
    def is_registered(cls, rule_id: str) -> bool:
        """Return True if a rule is registered under ``rule_id``."""
        cls._ensure_builtins()
        with cls._lock:
            return rule_id in cls._rules

    @classmethod
    def get(cls, rule_id: str) -> Rule:
        """Return the rule registered under ``rule_id``.

        Raises:
            UnknownRuleError: If no rule is registered under ``rule_id``.
        """
        cls._ensure_builtins()
        with cls._lock:
            rule: Rule | None = cls._rules.get(rule_id)
        if rule is None:
            raise UnknownRuleError(rule_id)
        return rule

    @classmethod
    def as_mapping(cls) -> Mapping[str, Rule]:
        """Return a read-only mapping of rule id -> rule."""
        cls._ensure_builtins()
        with cls._lock:
            return MappingProxyType(dict(cls._rules))

    @classmethod
    def iter_meta(cls) -> Iterator[RuleMeta]:
        """Iterate over rule metadata, sorted by rule id."""
        for rule_id in cls.names():
            yield cls._rules[rule_id].meta

    @classmethod
    def register(cls, rule: Rule, *, replace: bool = False) -> None:
        """Register a rule instance.

        Registering the same rule class twice is a no-op.

        Raises:
            ValueError: If another rule is already registered under the same id and
                ``replace`` is False.
        """
        with cls._lock:
            existing: Rule | None = cls._rules.get(rule.rule_id)
            if existing is not None and not replace:
                if type(existing) is type(rule):
                    return
                raise ValueError(f"Rule '{rule.rule_id}' is already registered.")
            cls._rules[rule.rule_id] = rule
            logger.debug("Registered rule '%s' (%s)", rule.rule_id, type(rule).__name__)

    @classmethod
    def unregister(cls, rule_id: str) -> bool:
        """Unregister a rule by id. Returns True if it was registered."""
        with cls._lock:
            return cls._rules.pop(rule_id, None) is not None


def register_builtin_rules() -> None:
    """Register all built-in rules (idempotent)."""
    from topvars.rules.no_top_level_variables import NoTopLevelVariables

    RuleRegistry.register(NoTopLevelVariables())


def register_rule(rule: Rule, *, replace: bool = False) -> None:
    """Register ``rule`` in the global registry (see `RuleRegistry.register`)."""
    RuleRegistry.register(rule, replace=replace)


def get_rule(rule_id: str) -> Rule:
    """Return the rule registered under ``rule_id`` (see `RuleRegistry.get`)."""
    return RuleRegistry.get(rule_id)


def iter_rules() -> Iterator[Rule]:
    """Iterate over registered rules, sorted by rule id."""
    rules: Mapping[str, Rule] = RuleRegistry.as_mapping()
    for rule_id in sorted(rules):
        yield rules[rule_id]
