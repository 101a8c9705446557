# topmark:header:start
#
#   project      : TopVars
#   file         : parser.py
#   file_relpath : src/topvars/syntax/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tree-sitter syntax provider for JavaScript and TypeScript.

Parsing is done with `tree-sitter-language-pack`. The helpers in this module
convert concrete tree-sitter nodes into the closed syntax model from
[`topvars.syntax.model`][topvars.syntax.model]:

* ``lexical_declaration`` / ``variable_declaration`` -> `DeclarationStatement`
* ``export_statement`` -> `ExportNamedDeclaration`
* any expression node -> `Expression` (outermost shape only)

Shape names follow ESTree, so ``member_expression`` and ``subscript_expression``
both map to ``MemberExpression`` and parentheses are transparent. Optional chains
(``ChainExpression``) and tagged templates (``TaggedTemplateExpression``) are
plain ``call_expression`` / ``member_expression`` nodes in tree-sitter; both map
to ``OTHER``.
"""

from __future__ import annotations

from enum import Enum
from functools import cache
from pathlib import Path
from typing import TYPE_CHECKING, Final

from tree_sitter_language_pack import get_parser

from topvars.config.logging import get_logger
from topvars.syntax.model import (
    DeclarationKind,
    DeclarationStatement,
    Declarator,
    ExportNamedDeclaration,
    Expression,
    ExpressionShape,
    SourceSpan,
)

if TYPE_CHECKING:
    from tree_sitter import Node, Parser, Tree

    from topvars.config.logging import TopvarsLogger

logger: TopvarsLogger = get_logger(__name__)


class Grammar(str, Enum):
    """Tree-sitter grammars used by TopVars."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"


GRAMMAR_BY_SUFFIX: Final[dict[str, Grammar]] = {
    ".js": Grammar.JAVASCRIPT,
    ".mjs": Grammar.JAVASCRIPT,
    ".cjs": Grammar.JAVASCRIPT,
    ".jsx": Grammar.JAVASCRIPT,
    ".ts": Grammar.TYPESCRIPT,
    ".mts": Grammar.TYPESCRIPT,
    ".cts": Grammar.TYPESCRIPT,
    ".tsx": Grammar.TSX,
}

DECLARATION_NODE_TYPES: Final[frozenset[str]] = frozenset(
    {"lexical_declaration", "variable_declaration"}
)
EXPORT_NODE_TYPE: Final[str] = "export_statement"
AMBIENT_NODE_TYPE: Final[str] = "ambient_declaration"

_CHAIN_LINK_FIELDS: Final[dict[str, str]] = {
    "member_expression": "object",
    "subscript_expression": "object",
    "call_expression": "function",
}

_SHAPE_BY_NODE_TYPE: Final[dict[str, ExpressionShape]] = {
    "array": ExpressionShape.ARRAY_EXPRESSION,
    "arrow_function": ExpressionShape.ARROW_FUNCTION_EXPRESSION,
    "call_expression": ExpressionShape.CALL_EXPRESSION,
    "identifier": ExpressionShape.IDENTIFIER,
    # ESTree models `undefined` as an identifier reference
    "undefined": ExpressionShape.IDENTIFIER,
    "string": ExpressionShape.LITERAL,
    "number": ExpressionShape.LITERAL,
    "true": ExpressionShape.LITERAL,
    "false": ExpressionShape.LITERAL,
    "null": ExpressionShape.LITERAL,
    "regex": ExpressionShape.LITERAL,
    "member_expression": ExpressionShape.MEMBER_EXPRESSION,
    "subscript_expression": ExpressionShape.MEMBER_EXPRESSION,
    "object": ExpressionShape.OBJECT_EXPRESSION,
}


def grammar_for_path(path: Path) -> Grammar | None:
    """Return the grammar for ``path`` based on its suffix, or None if unsupported."""
    return GRAMMAR_BY_SUFFIX.get(path.suffix.lower())


def supported_suffixes() -> tuple[str, ...]:
    """Return the file suffixes TopVars can parse, sorted."""
    return tuple(sorted(GRAMMAR_BY_SUFFIX))


@cache
def _get_parser(grammar: Grammar) -> Parser:
    """Get a (cached) tree-sitter parser for ``grammar``."""
    logger.debug("Loading tree-sitter grammar '%s'", grammar.value)
    return get_parser(grammar.value)


def parse_source(source: bytes, grammar: Grammar) -> Tree:
    """Parse ``source`` with the tree-sitter grammar ``grammar``.

    Tree-sitter always returns a tree; syntax errors surface as ``ERROR`` or
    missing nodes (see `Tree.root_node.has_error`).
    """
    return _get_parser(grammar).parse(source)


def node_text(node: Node) -> str:
    """Get text from a node as a str."""
    text = node.text
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return str(text)


def node_span(node: Node) -> SourceSpan:
    """Return the 1-based span of ``node``."""
    start_row, start_col = node.start_point
    end_row, end_col = node.end_point
    return SourceSpan(
        line=start_row + 1,
        column=start_col + 1,
        end_line=end_row + 1,
        end_column=end_col + 1,
    )


def is_tagged_template(node: Node) -> bool:
    """Return True for a tagged template, which tree-sitter parses as a call."""
    if node.type != "call_expression":
        return False
    arguments: Node | None = node.child_by_field_name("arguments")
    return arguments is not None and arguments.type == "template_string"


def is_optional_chain(node: Node) -> bool:
    """Return True if ``node`` heads a chain with an optional link (``a?.b``, ``f?.()``).

    The chain is followed through member objects and call callees; parentheses
    end it.
    """
    current: Node | None = node
    while current is not None and current.type in _CHAIN_LINK_FIELDS:
        if is_tagged_template(current):
            return False
        if any(child.type == "optional_chain" for child in current.children):
            return True
        current = current.child_by_field_name(_CHAIN_LINK_FIELDS[current.type])
    return False


def to_expression(node: Node) -> Expression:
    """Convert an expression node into its outermost `Expression` shape.

    Parenthesized expressions are unwrapped. Unknown node types map to
    ``ExpressionShape.OTHER``.
    """
    while node.type == "parenthesized_expression":
        inner: Node | None = next((c for c in node.named_children if c.type != "comment"), None)
        if inner is None:
            break
        node = inner

    shape: ExpressionShape = _SHAPE_BY_NODE_TYPE.get(node.type, ExpressionShape.OTHER)
    if is_optional_chain(node) or is_tagged_template(node):
        shape = ExpressionShape.OTHER
    if shape is ExpressionShape.IDENTIFIER:
        return Expression(shape, name=node_text(node), node_type=node.type)
    if shape is ExpressionShape.CALL_EXPRESSION:
        function: Node | None = node.child_by_field_name("function")
        callee: Expression | None = to_expression(function) if function is not None else None
        return Expression(shape, callee=callee, node_type=node.type)
    return Expression(shape, node_type=node.type)


def declaration_kind(node: Node) -> DeclarationKind | None:
    """Return the declaration kind of a declaration node.

    The kind is the first (anonymous) token of the statement: ``const``,
    ``let`` or ``var``. Returns None for anything else (e.g. ``using``).
    """
    kind_node: Node | None = node.child_by_field_name("kind")
    if kind_node is None and node.child_count:
        kind_node = node.children[0]
    if kind_node is None:
        return None
    try:
        return DeclarationKind(kind_node.type)
    except ValueError:
        logger.debug("Unsupported declaration kind '%s' at %s", kind_node.type, node_span(node))
        return None


def to_declarator(node: Node) -> Declarator:
    """Convert a ``variable_declarator`` node."""
    name: Node | None = node.child_by_field_name("name")
    value: Node | None = node.child_by_field_name("value")
    return Declarator(
        target=node_text(name) if name is not None else "",
        init=to_expression(value) if value is not None else None,
        span=node_span(node),
    )


def to_declaration(node: Node) -> DeclarationStatement | None:
    """Convert a ``lexical_declaration`` or ``variable_declaration`` node.

    Returns:
        DeclarationStatement | None: The converted statement, or None when the node
        is not a variable declaration of a supported kind.
    """
    if node.type not in DECLARATION_NODE_TYPES:
        return None
    kind: DeclarationKind | None = declaration_kind(node)
    if kind is None:
        return None
    declarators: tuple[Declarator, ...] = tuple(
        to_declarator(child) for child in node.named_children if child.type == "variable_declarator"
    )
    return DeclarationStatement(
        kind=kind,
        declarators=declarators,
        span=node_span(node),
        node=node,
    )


def is_default_export(node: Node) -> bool:
    """Return True for ``export default ...`` statements."""
    return any(child.type == "default" for child in node.children)


def to_export(node: Node) -> ExportNamedDeclaration | None:
    """Convert an ``export_statement`` node into an `ExportNamedDeclaration`.

    Returns None for ``export default`` statements, which are a different node
    shape (``ExportDefaultDeclaration`` in ESTree). A named export whose payload is
    not a variable declaration yields an export with ``declaration=None``.
    """
    if node.type != EXPORT_NODE_TYPE or is_default_export(node):
        return None
    payload: Node | None = node.child_by_field_name("declaration")
    if payload is not None and payload.type == AMBIENT_NODE_TYPE:
        # export declare const x: T;
        payload = payload.named_children[0] if payload.named_children else None
    declaration: DeclarationStatement | None = (
        to_declaration(payload) if payload is not None else None
    )
    return ExportNamedDeclaration(declaration=declaration, span=node_span(node))
