# topmark:header:start
#
#   project      : TopVars
#   file         : test_walker.py
#   file_relpath : tests/syntax/test_walker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the tree walker and the program scope predicate."""

from __future__ import annotations

from typing import Any

from tests.conftest import mark_integration
from topvars.syntax.model import DeclarationStatement, ExportNamedDeclaration
from topvars.syntax.parser import Grammar, parse_source
from topvars.syntax.scope import ProgramScope
from topvars.syntax.walker import NodeType, iter_nodes, walk

SOURCE = b"""\
const a = 1;
export let b = 2;
function f() {
  var c = 3;
}
"""


def collect(
    source: bytes, grammar: Grammar = Grammar.JAVASCRIPT
) -> list[tuple[NodeType, Any]]:
    events: list[tuple[NodeType, Any]] = []
    tree = parse_source(source, grammar)
    walk(
        tree,
        [
            {
                NodeType.VARIABLE_DECLARATION: lambda n: events.append(
                    (NodeType.VARIABLE_DECLARATION, n)
                ),
                NodeType.EXPORT_NAMED_DECLARATION: lambda n: events.append(
                    (NodeType.EXPORT_NAMED_DECLARATION, n)
                ),
            }
        ],
    )
    return events


@mark_integration
def test_iter_nodes_is_preorder() -> None:
    tree = parse_source(b"let a = 1;", Grammar.JAVASCRIPT)
    types = [n.type for n in iter_nodes(tree.root_node)]

    assert types[0] == "program"
    assert types.index("lexical_declaration") < types.index("variable_declarator")
    assert types.index("variable_declarator") < types.index("number")


@mark_integration
def test_walk_dispatches_in_document_order() -> None:
    events = collect(SOURCE)

    assert [t for t, _ in events] == [
        NodeType.VARIABLE_DECLARATION,
        NodeType.EXPORT_NAMED_DECLARATION,
        NodeType.VARIABLE_DECLARATION,
        NodeType.VARIABLE_DECLARATION,
    ]
    export = events[1][1]
    assert isinstance(export, ExportNamedDeclaration)
    assert export.declaration is not None
    assert export.declaration.declarators[0].target == "b"


@mark_integration
def test_program_scope() -> None:
    scope = ProgramScope()
    statements = [
        n for t, n in collect(SOURCE) if t is NodeType.VARIABLE_DECLARATION
    ]
    assert all(isinstance(s, DeclarationStatement) for s in statements)

    # const a, exported let b, nested var c
    assert [scope.is_top_level(s.node) for s in statements] == [True, False, False]


@mark_integration
def test_nested_scopes_are_not_top_level() -> None:
    source = b"""\
{ let a = 1; }
for (let i = 0; i < 1; i++) {}
class K { m() { const k = 1; } }
const g = () => { let h; };
"""
    scope = ProgramScope()
    flags = [
        scope.is_top_level(n.node)
        for t, n in collect(source)
        if t is NodeType.VARIABLE_DECLARATION
    ]

    assert flags == [False, False, False, True, False]


@mark_integration
def test_ambient_declaration_at_module_level() -> None:
    source = b"""\
declare let a: number;
declare var b;
declare global { var c: number; }
declare module "m" { let d: string; }
"""
    scope = ProgramScope()
    flags = [
        scope.is_top_level(n.node)
        for t, n in collect(source, Grammar.TYPESCRIPT)
        if t is NodeType.VARIABLE_DECLARATION
    ]

    assert flags == [True, True, False, False]


def test_scope_without_parent_is_not_top_level() -> None:
    assert not ProgramScope().is_top_level(object())


@mark_integration
def test_walk_without_listeners_is_a_no_op() -> None:
    tree = parse_source(SOURCE, Grammar.JAVASCRIPT)
    assert walk(tree, []) == 0
    assert walk(tree, [{}]) == 0


@mark_integration
def test_walk_counts_calls_across_rules() -> None:
    tree = parse_source(b"let a; let b;", Grammar.JAVASCRIPT)
    seen: list[str] = []
    listeners = [
        {NodeType.VARIABLE_DECLARATION: lambda n: seen.append("first")},
        {NodeType.VARIABLE_DECLARATION: lambda n: seen.append("second")},
    ]

    assert walk(tree, listeners) == 4
    assert seen == ["first", "second", "first", "second"]
