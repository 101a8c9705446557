# topmark:header:start
#
#   project      : TopVars
#   file         : model.py
#   file_relpath : src/topvars/syntax/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Closed syntax model consumed by TopVars rules.

Rules never see concrete parser nodes. The syntax provider converts the nodes a
rule can subscribe to into the small immutable types defined here, which keeps
rules testable with hand-built fixtures.

Sections:
    * DeclarationKind: how a binding is introduced (``const``/``let``/``var``).
    * ExpressionShape: closed set of ESTree shape tags, with ``OTHER`` as the
      catch-all for every shape rules do not distinguish.
    * Expression: the outermost shape of an expression (plus the callee of a call
      and the name of an identifier).
    * Declarator / DeclarationStatement / ExportNamedDeclaration: the statement
      shapes delivered by the tree walker.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DeclarationKind(str, Enum):
    """Declaration kinds of a variable declaration statement."""

    CONST = "const"
    LET = "let"
    VAR = "var"


class ExpressionShape(str, Enum):
    """Top-level syntactic category of an expression, named after ESTree node types.

    ``OTHER`` stands for any shape not listed here (``NewExpression``,
    ``TemplateLiteral``, ``BinaryExpression``, ...).
    """

    ARRAY_EXPRESSION = "ArrayExpression"
    ARROW_FUNCTION_EXPRESSION = "ArrowFunctionExpression"
    CALL_EXPRESSION = "CallExpression"
    IDENTIFIER = "Identifier"
    LITERAL = "Literal"
    MEMBER_EXPRESSION = "MemberExpression"
    OBJECT_EXPRESSION = "ObjectExpression"
    OTHER = "Other"


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Location of a node in its source file.

    Lines and columns are 1-based; the end position is exclusive.
    """

    line: int
    column: int
    end_line: int
    end_column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


UNKNOWN_SPAN: SourceSpan = SourceSpan(line=0, column=0, end_line=0, end_column=0)


@dataclass(frozen=True, slots=True)
class Expression:
    """Outermost shape of an expression.

    Attributes:
        shape (ExpressionShape): Shape tag of the expression.
        name (str | None): Identifier name, set for ``IDENTIFIER`` only.
        callee (Expression | None): Callee, set for ``CALL_EXPRESSION`` only.
        node_type (str): Type name reported by the syntax provider (kept for
            diagnostics and debugging; rules must dispatch on ``shape``).
    """

    shape: ExpressionShape
    name: str | None = None
    callee: Expression | None = None
    node_type: str = ""

    @classmethod
    def identifier(cls, name: str) -> Expression:
        """Return an identifier reference expression."""
        return cls(ExpressionShape.IDENTIFIER, name=name, node_type="identifier")

    @classmethod
    def call(cls, callee: Expression) -> Expression:
        """Return a call expression with the given callee."""
        return cls(ExpressionShape.CALL_EXPRESSION, callee=callee, node_type="call_expression")

    @classmethod
    def of(cls, shape: ExpressionShape) -> Expression:
        """Return an expression carrying nothing but a shape tag."""
        return cls(shape)

    def is_call_to(self, name: str) -> bool:
        """Return True if this is a call whose callee is the bare identifier ``name``."""
        return (
            self.shape is ExpressionShape.CALL_EXPRESSION
            and self.callee is not None
            and self.callee.shape is ExpressionShape.IDENTIFIER
            and self.callee.name == name
        )


@dataclass(frozen=True, slots=True)
class Declarator:
    """One binding within a declaration statement.

    Attributes:
        target (str): Source text of the binding target (a name or a pattern).
        init (Expression | None): Initializing expression, if any.
        span (SourceSpan): Location of the declarator.
    """

    target: str
    init: Expression | None = None
    span: SourceSpan = UNKNOWN_SPAN


@dataclass(frozen=True, slots=True)
class DeclarationStatement:
    """A statement introducing one or more bindings of a single kind.

    Attributes:
        kind (DeclarationKind): Declaration kind.
        declarators (tuple[Declarator, ...]): Bindings in source order.
        span (SourceSpan): Location of the statement.
        node (object | None): Opaque handle to the provider's concrete node. Only
            scope predicates look at it.
    """

    kind: DeclarationKind
    declarators: tuple[Declarator, ...]
    span: SourceSpan = UNKNOWN_SPAN
    node: object | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class ExportNamedDeclaration:
    """A named-export statement.

    Attributes:
        declaration (DeclarationStatement | None): The exported variable declaration,
            or None when the payload is something else (function, class, export
            list, re-export).
        span (SourceSpan): Location of the export statement.
    """

    declaration: DeclarationStatement | None
    span: SourceSpan = UNKNOWN_SPAN
