# topmark:header:start
#
#   project      : TopVars
#   file         : scope.py
#   file_relpath : src/topvars/syntax/scope.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scope predicates: decide whether a statement sits in module scope.

Rules depend on the `ScopePredicate` protocol only. `ProgramScope` implements it
for tree-sitter trees, where a statement is at module top level iff its parent
is the ``program`` root node. A TypeScript ``declare`` wrapper directly under
``program`` does not count as a scope.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Protocol

from topvars.syntax.parser import AMBIENT_NODE_TYPE

if TYPE_CHECKING:
    from tree_sitter import Node

PROGRAM_NODE_TYPE: Final[str] = "program"


class ScopePredicate(Protocol):
    """Structural interface for top-level scope checks."""

    def is_top_level(self, node: object) -> bool:
        """Return True if ``node`` sits directly in the module's top-level statement list."""
        ...


class ProgramScope:
    """Scope predicate for tree-sitter JavaScript/TypeScript trees.

    Anything between the statement and the ``program`` node (function body,
    statement block, class body, loop head, export wrapper, namespace) makes the
    statement non-top-level. The one exception is ``declare let x: T;``, where
    the ``ambient_declaration`` wrapper is transparent.
    """

    def is_top_level(self, node: object) -> bool:
        """Return True if the parent of ``node`` is the ``program`` root.

        Args:
            node (object): A tree-sitter node; anything without a ``parent``
                attribute is treated as not top-level.

        Returns:
            bool: Whether the statement is in module scope.
        """
        parent: Node | None = getattr(node, "parent", None)
        if parent is not None and parent.type == AMBIENT_NODE_TYPE:
            parent = parent.parent
        return parent is not None and parent.type == PROGRAM_NODE_TYPE
