# topmark:header:start
#
#   project      : TopVars
#   file         : __init__.py
#   file_relpath : src/topvars/rules/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rules and the rule host contract.

Design:
    - `topvars.rules.base` defines `Rule`, `RuleMeta` and `RuleContext`.
    - `topvars.rules.schema` defines declarative option schemas validated by the host.
    - `topvars.rules.registry` holds the process-global `RuleRegistry`.
    - Each built-in rule lives in its own module.
"""

from __future__ import annotations

from topvars.rules.base import Rule, RuleContext, RuleMeta, RuleType
from topvars.rules.registry import (
    RuleRegistry,
    get_rule,
    iter_rules,
    register_builtin_rules,
    register_rule,
)
from topvars.rules.schema import ArrayOption, OptionsSchema

__all__ = [
    "ArrayOption",
    "OptionsSchema",
    "Rule",
    "RuleContext",
    "RuleMeta",
    "RuleRegistry",
    "RuleType",
    "get_rule",
    "iter_rules",
    "register_builtin_rules",
    "register_rule",
]
