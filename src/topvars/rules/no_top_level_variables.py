# topmark:header:start
#
#   project      : TopVars
#   file         : no_top_level_variables.py
#   file_relpath : src/topvars/rules/no_top_level_variables.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rule ``no-top-level-variables``: restrict module-level variable declarations.

Top-level mutable bindings (``let``/``var``) are only allowed when they import a
module (``require(...)``). Top-level ``const`` bindings are allowed for cheap,
well-understood initializers:

1. a module import, ``require(...)``;
2. a unique symbol, ``Symbol(...)``;
3. an alias of another binding (a bare identifier);
4. any shape listed in the ``constAllowed`` option. ``Literal`` is always
   allowed; ``ArrowFunctionExpression`` and ``MemberExpression`` are allowed by
   default.

Only the outermost shape of an initializer is inspected: ``const a = [f()]`` is
judged as an ``ArrayExpression``.

Options (``[rules.no-top-level-variables]``):

```toml
kind = ["const", "let", "var"]            # declaration kinds to police
constAllowed = ["ArrowFunctionExpression", "MemberExpression"]
```
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from topvars.config.logging import get_logger
from topvars.rules.base import Rule, RuleContext, RuleMeta, RuleType
from topvars.rules.schema import ArrayOption, OptionsSchema
from topvars.syntax.model import (
    DeclarationKind,
    DeclarationStatement,
    Declarator,
    ExportNamedDeclaration,
    Expression,
    ExpressionShape,
)
from topvars.syntax.scope import ProgramScope, ScopePredicate
from topvars.syntax.walker import NodeType

if TYPE_CHECKING:
    from topvars.config.logging import TopvarsLogger
    from topvars.syntax.walker import Listeners

logger: TopvarsLogger = get_logger(__name__)

RULE_ID: Final[str] = "no-top-level-variables"

MESSAGE_ID: Final[str] = "message"
VIOLATION_MESSAGE: Final[str] = "Variables at the top level are not allowed."

OPTION_KIND: Final[str] = "kind"
OPTION_CONST_ALLOWED: Final[str] = "constAllowed"

KIND_VALUES: Final[tuple[str, ...]] = tuple(kind.value for kind in DeclarationKind)

CONST_ALLOWED_SHAPES: Final[tuple[ExpressionShape, ...]] = (
    ExpressionShape.ARRAY_EXPRESSION,
    ExpressionShape.ARROW_FUNCTION_EXPRESSION,
    ExpressionShape.LITERAL,
    ExpressionShape.MEMBER_EXPRESSION,
    ExpressionShape.OBJECT_EXPRESSION,
)
CONST_ALLOWED_VALUES: Final[tuple[str, ...]] = tuple(s.value for s in CONST_ALLOWED_SHAPES)

DEFAULT_CONST_ALLOWED: Final[frozenset[ExpressionShape]] = frozenset(
    {ExpressionShape.ARROW_FUNCTION_EXPRESSION, ExpressionShape.MEMBER_EXPRESSION}
)
ALWAYS_CONST_ALLOWED: Final[frozenset[ExpressionShape]] = frozenset({ExpressionShape.LITERAL})

MODULE_IMPORT_CALLEE: Final[str] = "require"
SYMBOL_CALLEE: Final[str] = "Symbol"


@dataclass(frozen=True, slots=True)
class DeclarationPolicy:
    """Resolved, immutable options of the rule.

    Attributes:
        kinds (frozenset[DeclarationKind]): Declaration kinds to police.
        const_allowed_shapes (frozenset[ExpressionShape]): Initializer shapes that
            exempt a ``const`` binding. Always contains ``LITERAL``.
    """

    kinds: frozenset[DeclarationKind] = frozenset(DeclarationKind)
    const_allowed_shapes: frozenset[ExpressionShape] = DEFAULT_CONST_ALLOWED | ALWAYS_CONST_ALLOWED

    def __post_init__(self) -> None:
        # Literal initializers are exempt whatever the configuration says
        if not ALWAYS_CONST_ALLOWED <= self.const_allowed_shapes:
            object.__setattr__(
                self,
                "const_allowed_shapes",
                self.const_allowed_shapes | ALWAYS_CONST_ALLOWED,
            )

    @classmethod
    def from_options(cls, options: Mapping[str, Sequence[str]] | None = None) -> DeclarationPolicy:
        """Build a policy from options already validated against `OPTIONS_SCHEMA`.

        Absent keys fall back to the defaults: every kind, and
        ``ArrowFunctionExpression`` + ``MemberExpression`` for ``constAllowed``.

        Args:
            options (Mapping[str, Sequence[str]] | None): Validated rule options.

        Returns:
            DeclarationPolicy: The resolved policy.
        """
        options = options or {}
        raw_kinds: Sequence[str] | None = options.get(OPTION_KIND)
        raw_allowed: Sequence[str] | None = options.get(OPTION_CONST_ALLOWED)

        kinds: frozenset[DeclarationKind] = (
            frozenset(DeclarationKind(k) for k in raw_kinds)
            if raw_kinds is not None
            else frozenset(DeclarationKind)
        )
        allowed: frozenset[ExpressionShape] = (
            frozenset(ExpressionShape(s) for s in raw_allowed)
            if raw_allowed is not None
            else DEFAULT_CONST_ALLOWED
        )
        return cls(kinds=kinds, const_allowed_shapes=allowed | ALWAYS_CONST_ALLOWED)


OPTIONS_SCHEMA: Final[OptionsSchema] = OptionsSchema(
    properties={
        OPTION_CONST_ALLOWED: ArrayOption(
            enum=CONST_ALLOWED_VALUES,
            min_items=0,
            default=tuple(s.value for s in sorted(DEFAULT_CONST_ALLOWED)),
            description="Initializer shapes allowed for top-level const bindings "
            "(Literal is always allowed).",
        ),
        OPTION_KIND: ArrayOption(
            enum=KIND_VALUES,
            min_items=1,
            default=KIND_VALUES,
            description="Declaration kinds to check.",
        ),
    }
)


def is_module_import_call(expression: Expression | None) -> bool:
    """Return True for ``require(...)`` calls (callee is the bare identifier ``require``)."""
    return expression is not None and expression.is_call_to(MODULE_IMPORT_CALLEE)


def is_symbol_call(expression: Expression | None) -> bool:
    """Return True for ``Symbol(...)`` calls (callee is the bare identifier ``Symbol``)."""
    return expression is not None and expression.is_call_to(SYMBOL_CALLEE)


def is_exempt_const_initializer(init: Expression | None, policy: DeclarationPolicy) -> bool:
    """Return True if a ``const`` binding initialized with ``init`` is allowed.

    A missing initializer (invalid JavaScript, but representable) is not exempt.
    """
    if init is None:
        return False
    match init.shape:
        case ExpressionShape.CALL_EXPRESSION:
            return is_module_import_call(init) or is_symbol_call(init)
        case ExpressionShape.IDENTIFIER:
            return True
        case ExpressionShape.OTHER:
            return False
        case _:
            return init.shape in policy.const_allowed_shapes


def is_exempt(declarator: Declarator, kind: DeclarationKind, policy: DeclarationPolicy) -> bool:
    """Return True if ``declarator`` (of a statement of ``kind``) is allowed at top level."""
    if kind is DeclarationKind.CONST:
        return is_exempt_const_initializer(declarator.init, policy)
    return is_module_import_call(declarator.init)


def find_violations(
    statement: DeclarationStatement, policy: DeclarationPolicy
) -> Iterator[Declarator]:
    """Yield the declarators of ``statement`` that violate ``policy``, in source order.

    Statements whose kind is not policed yield nothing.
    """
    if statement.kind not in policy.kinds:
        return
    for declarator in statement.declarators:
        if not is_exempt(declarator, statement.kind, policy):
            yield declarator


class NoTopLevelVariables(Rule):
    """Disallow module-level variables except for whitelisted initializer shapes.

    Args:
        scope (ScopePredicate | None): Top-level predicate applied to standalone
            declarations. Defaults to `ProgramScope` (tree-sitter trees).
    """

    meta = RuleMeta(
        rule_id=RULE_ID,
        type=RuleType.PROBLEM,
        description="Disallow top-level variables except imports, symbols, aliases "
        "and allowed constant shapes.",
        messages={MESSAGE_ID: VIOLATION_MESSAGE},
        schema=OPTIONS_SCHEMA,
    )

    def __init__(self, scope: ScopePredicate | None = None) -> None:
        self.scope: ScopePredicate = scope if scope is not None else ProgramScope()

    def create(self, context: RuleContext) -> Listeners:
        """Return the listeners for one file."""
        policy = DeclarationPolicy.from_options(context.options)
        logger.debug(
            "%s: kinds=%s const_allowed=%s",
            RULE_ID,
            sorted(k.value for k in policy.kinds),
            sorted(s.value for s in policy.const_allowed_shapes),
        )

        def check(statement: DeclarationStatement) -> None:
            for declarator in find_violations(statement, policy):
                context.report(declarator, MESSAGE_ID)

        def on_export_named_declaration(export: ExportNamedDeclaration) -> None:
            # An export statement only occurs at module top level
            if export.declaration is not None:
                check(export.declaration)

        def on_variable_declaration(statement: DeclarationStatement) -> None:
            if self.scope.is_top_level(statement.node):
                check(statement)

        return {
            NodeType.EXPORT_NAMED_DECLARATION: on_export_named_declaration,
            NodeType.VARIABLE_DECLARATION: on_variable_declaration,
        }
