# topmark:header:start
#
#   project      : TopVars
#   file         : __init__.py
#   file_relpath : src/topvars/syntax/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Syntax layer: closed syntax model, tree-sitter provider, scope predicate, walker.

Design:
    - Rules consume the immutable model types from `topvars.syntax.model` only.
    - `topvars.syntax.parser` owns every tree-sitter specific detail.
    - `topvars.syntax.scope` provides the injected top-level predicate.
    - `topvars.syntax.walker` drives traversal and listener dispatch.
"""

from __future__ import annotations

from topvars.syntax.model import (
    DeclarationKind,
    DeclarationStatement,
    Declarator,
    ExportNamedDeclaration,
    Expression,
    ExpressionShape,
    SourceSpan,
)
from topvars.syntax.scope import ProgramScope, ScopePredicate
from topvars.syntax.walker import Listener, Listeners, NodeType

__all__ = [
    "DeclarationKind",
    "DeclarationStatement",
    "Declarator",
    "ExportNamedDeclaration",
    "Expression",
    "ExpressionShape",
    "Listener",
    "Listeners",
    "NodeType",
    "ProgramScope",
    "ScopePredicate",
    "SourceSpan",
]
