# topmark:header:start
#
#   project      : TopVars
#   file         : test_parser.py
#   file_relpath : tests/syntax/test_parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the tree-sitter syntax provider (real parses)."""

from __future__ import annotations

from pathlib import Path

from tests.conftest import mark_integration, parametrize
from topvars.syntax.model import DeclarationKind, DeclarationStatement, ExpressionShape
from topvars.syntax.parser import (
    Grammar,
    grammar_for_path,
    parse_source,
    supported_suffixes,
    to_declaration,
    to_export,
)


def first_statement(source: str, grammar: Grammar = Grammar.JAVASCRIPT) -> DeclarationStatement:
    tree = parse_source(source.encode("utf-8"), grammar)
    statement = to_declaration(tree.root_node.named_children[0])
    assert statement is not None
    return statement


@parametrize(
    ("name", "expected"),
    [
        ("a.js", Grammar.JAVASCRIPT),
        ("a.MJS", Grammar.JAVASCRIPT),
        ("a.jsx", Grammar.JAVASCRIPT),
        ("a.ts", Grammar.TYPESCRIPT),
        ("a.cts", Grammar.TYPESCRIPT),
        ("a.tsx", Grammar.TSX),
        ("a.py", None),
        ("Makefile", None),
    ],
)
def test_grammar_for_path(name: str, expected: Grammar | None) -> None:
    assert grammar_for_path(Path(name)) is expected


def test_supported_suffixes_sorted() -> None:
    suffixes = supported_suffixes()
    assert list(suffixes) == sorted(suffixes)
    assert ".js" in suffixes and ".tsx" in suffixes


@mark_integration
@parametrize(
    ("source", "kind"),
    [
        ("const a = 1;", DeclarationKind.CONST),
        ("let a = 1;", DeclarationKind.LET),
        ("var a = 1;", DeclarationKind.VAR),
    ],
)
def test_declaration_kind(source: str, kind: DeclarationKind) -> None:
    assert first_statement(source).kind is kind


@mark_integration
@parametrize(
    ("init", "shape"),
    [
        ("1", ExpressionShape.LITERAL),
        ("'x'", ExpressionShape.LITERAL),
        ("null", ExpressionShape.LITERAL),
        ("true", ExpressionShape.LITERAL),
        ("/re/g", ExpressionShape.LITERAL),
        ("b", ExpressionShape.IDENTIFIER),
        ("[1, 2]", ExpressionShape.ARRAY_EXPRESSION),
        ("{ a: 1 }", ExpressionShape.OBJECT_EXPRESSION),
        ("() => 1", ExpressionShape.ARROW_FUNCTION_EXPRESSION),
        ("a.b", ExpressionShape.MEMBER_EXPRESSION),
        ("a['b']", ExpressionShape.MEMBER_EXPRESSION),
        ("f()", ExpressionShape.CALL_EXPRESSION),
        ("b?.c", ExpressionShape.OTHER),
        ("b?.[0]", ExpressionShape.OTHER),
        ("a?.b.c", ExpressionShape.OTHER),
        ("f?.()", ExpressionShape.OTHER),
        ("a.f?.()", ExpressionShape.OTHER),
        ("(b?.c).d", ExpressionShape.MEMBER_EXPRESSION),
        ("tag`x`", ExpressionShape.OTHER),
        ("String.raw`x`", ExpressionShape.OTHER),
        ("(1)", ExpressionShape.LITERAL),
        ("new Map()", ExpressionShape.OTHER),
        ("`x`", ExpressionShape.OTHER),
        ("1 + 2", ExpressionShape.OTHER),
        ("function () {}", ExpressionShape.OTHER),
    ],
)
def test_initializer_shapes(init: str, shape: ExpressionShape) -> None:
    declarator = first_statement(f"const a = {init};").declarators[0]
    assert declarator.init is not None
    assert declarator.init.shape is shape


@mark_integration
def test_call_callee_is_converted() -> None:
    init = first_statement("const fs = require('fs');").declarators[0].init
    assert init is not None
    assert init.is_call_to("require")

    init = first_statement("const x = obj.require('fs');").declarators[0].init
    assert init is not None
    assert not init.is_call_to("require")
    assert init.callee is not None
    assert init.callee.shape is ExpressionShape.MEMBER_EXPRESSION


@mark_integration
@parametrize("source", ["const a = require?.('x');", "const a = require`x`;"])
def test_optional_and_tagged_require_are_not_calls(source: str) -> None:
    init = first_statement(source).declarators[0].init
    assert init is not None
    assert init.shape is ExpressionShape.OTHER
    assert not init.is_call_to("require")


@mark_integration
def test_declarators_without_init_and_patterns() -> None:
    statement = first_statement("let a, { b } = c, [d] = e;")

    assert [d.target for d in statement.declarators] == ["a", "{ b }", "[d]"]
    assert statement.declarators[0].init is None


@mark_integration
def test_declarator_span_is_one_based() -> None:
    statement = first_statement("\nlet foo = 1;")
    span = statement.declarators[0].span

    assert (span.line, span.column) == (2, 5)
    assert (span.end_line, span.end_column) == (2, 12)


@mark_integration
def test_typescript_declaration() -> None:
    statement = first_statement("const a: number = 1;", Grammar.TYPESCRIPT)
    init = statement.declarators[0].init
    assert init is not None
    assert init.shape is ExpressionShape.LITERAL
    assert statement.declarators[0].target == "a"


@mark_integration
def test_named_export_with_declaration() -> None:
    tree = parse_source(b"export const a = {};", Grammar.JAVASCRIPT)
    export = to_export(tree.root_node.named_children[0])

    assert export is not None
    assert export.declaration is not None
    assert export.declaration.kind is DeclarationKind.CONST


@mark_integration
def test_export_declare_unwraps_ambient_declaration() -> None:
    tree = parse_source(b"export declare const a: number;", Grammar.TYPESCRIPT)
    export = to_export(tree.root_node.named_children[0])

    assert export is not None
    assert export.declaration is not None
    assert export.declaration.kind is DeclarationKind.CONST
    assert export.declaration.declarators[0].init is None


@mark_integration
@parametrize(
    "source",
    ["export function f() {}", "export { a };", "export * from 'm';"],
)
def test_named_export_without_variable_payload(source: str) -> None:
    tree = parse_source(source.encode("utf-8"), Grammar.JAVASCRIPT)
    export = to_export(tree.root_node.named_children[0])

    assert export is not None
    assert export.declaration is None


@mark_integration
def test_default_export_is_not_named() -> None:
    tree = parse_source(b"export default 1;", Grammar.JAVASCRIPT)
    assert to_export(tree.root_node.named_children[0]) is None


@mark_integration
def test_non_declaration_node_is_ignored() -> None:
    tree = parse_source(b"foo();", Grammar.JAVASCRIPT)
    assert to_declaration(tree.root_node.named_children[0]) is None
