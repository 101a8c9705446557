# topmark:header:start
#
#   project      : TopVars
#   file         : errors.py
#   file_relpath : src/topvars/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Frontend-agnostic exceptions for TopVars.

These exceptions carry no Click or console dependency. The CLI translates them
into [`topvars.cli.errors`][topvars.cli.errors] exceptions, which own exit codes
and styling.
"""

from __future__ import annotations


class TopvarsError(Exception):
    """Base class for all TopVars errors."""


class ConfigError(TopvarsError):
    """Configuration is missing, malformed, or holds out-of-domain values."""


class RuleOptionsError(ConfigError):
    """Options supplied to a rule do not satisfy the rule's option schema.

    Attributes:
        rule_id (str): Identifier of the rule being activated.
        key (str | None): Offending option key, if the error concerns a single key.
    """

    def __init__(self, rule_id: str, message: str, *, key: str | None = None) -> None:
        self.rule_id = rule_id
        self.key = key
        where = f"{rule_id}.{key}" if key else rule_id
        super().__init__(f"Invalid options for rule '{where}': {message}")


class UnknownRuleError(ConfigError):
    """A rule id was referenced that is not registered."""

    def __init__(self, rule_id: str) -> None:
        self.rule_id = rule_id
        super().__init__(f"Unknown rule: '{rule_id}'")
