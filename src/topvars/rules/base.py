# topmark:header:start
#
#   project      : TopVars
#   file         : base.py
#   file_relpath : src/topvars/rules/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rule contract shared by the host and all rules.

A rule is a class deriving from `Rule` that declares static metadata
(`RuleMeta`) and, once per file, returns listeners from `Rule.create`. The
listeners receive converted syntax-model objects from the tree walker and
report problems through the `RuleContext` they were created with.

The host owns everything around a rule:

* option validation against ``meta.schema`` (before ``create`` is called);
* severity assignment (``RuleContext.level``);
* diagnostic collection (``RuleContext.report`` appends to a `DiagnosticLog`).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Protocol

from topvars.config.logging import get_logger
from topvars.diagnostic.model import Diagnostic, DiagnosticLevel, DiagnosticLog
from topvars.rules.schema import OptionsSchema

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from topvars.config.logging import TopvarsLogger
    from topvars.syntax.model import SourceSpan
    from topvars.syntax.walker import Listeners

logger: TopvarsLogger = get_logger(__name__)


class RuleType(str, Enum):
    """Category of a rule."""

    PROBLEM = "problem"
    SUGGESTION = "suggestion"
    LAYOUT = "layout"


@dataclass(frozen=True)
class RuleMeta:
    """Static description of a rule.

    Attributes:
        rule_id (str): Unique rule identifier (kebab-case).
        type (RuleType): Rule category.
        description (str): One-line description.
        messages (Mapping[str, str]): Message id -> message text.
        schema (OptionsSchema): Schema of the rule's options object.
    """

    rule_id: str
    type: RuleType
    description: str
    messages: Mapping[str, str]
    schema: OptionsSchema = field(default_factory=OptionsSchema)


class Located(Protocol):
    """Anything a diagnostic can be anchored at."""

    @property
    def span(self) -> SourceSpan:
        """Location of the node."""
        ...


class RuleContext:
    """Per-file, per-rule activation context.

    Args:
        meta (RuleMeta): Metadata of the activated rule.
        options (Mapping[str, tuple[str, ...]]): Options already validated against
            ``meta.schema``.
        level (DiagnosticLevel): Severity assigned by the host.
        log (DiagnosticLog): Sink for reported diagnostics.
        path (Path | None): Path of the file being linted, if any.
    """

    def __init__(
        self,
        *,
        meta: RuleMeta,
        options: Mapping[str, tuple[str, ...]],
        level: DiagnosticLevel = DiagnosticLevel.ERROR,
        log: DiagnosticLog | None = None,
        path: Path | None = None,
    ) -> None:
        self.meta = meta
        self.options = options
        self.level = level
        self.log = log if log is not None else DiagnosticLog()
        self.path = path

    def report(self, node: Located, message_id: str) -> None:
        """Report a problem anchored at ``node``.

        Args:
            node (Located): The offending node.
            message_id (str): Key into ``meta.messages``.

        Raises:
            KeyError: If ``message_id`` is not declared by the rule.
        """
        message: str = self.meta.messages[message_id]
        logger.trace("%s: %s at %s", self.meta.rule_id, message_id, node.span)
        self.log.add(
            Diagnostic(
                level=self.level,
                message=message,
                rule_id=self.meta.rule_id,
                span=node.span,
            )
        )


class Rule(ABC):
    """Base class for rules.

    Subclasses set the ``meta`` class attribute and implement `create`.
    """

    meta: ClassVar[RuleMeta]

    @property
    def rule_id(self) -> str:
        """Return the rule identifier."""
        return self.meta.rule_id

    @abstractmethod
    def create(self, context: RuleContext) -> Listeners:
        """Return the listeners to run for one file.

        Args:
            context (RuleContext): Activation context (validated options, report sink).

        Returns:
            Listeners: Mapping from subscribed node type to listener.
        """
        ...
