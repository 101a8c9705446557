# topmark:header:start
#
#   project      : TopVars
#   file         : walker.py
#   file_relpath : src/topvars/syntax/walker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tree walker dispatching converted nodes to rule listeners.

The walker performs an iterative depth-first, pre-order traversal of a
tree-sitter tree (children in document order). For every node with a
[`NodeType`][topvars.syntax.walker.NodeType] subscription it converts the node
into the syntax model and calls the listeners in registration order.

Declarations nested in an export statement are visited twice: once as the export
payload (``EXPORT_NAMED_DECLARATION``) and once on their own
(``VARIABLE_DECLARATION``). Listeners decide what to do with each.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from topvars.config.logging import get_logger
from topvars.syntax.parser import (
    DECLARATION_NODE_TYPES,
    EXPORT_NODE_TYPE,
    to_declaration,
    to_export,
)

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

    from topvars.config.logging import TopvarsLogger

logger: TopvarsLogger = get_logger(__name__)


class NodeType(str, Enum):
    """Node shapes rules can subscribe to (named after ESTree node types)."""

    VARIABLE_DECLARATION = "VariableDeclaration"
    EXPORT_NAMED_DECLARATION = "ExportNamedDeclaration"


Listener = Callable[[Any], None]
Listeners = Mapping[NodeType, Listener]


def _convert(node: Node) -> tuple[NodeType, object] | None:
    """Return the subscription type and converted model object for ``node``."""
    if node.type in DECLARATION_NODE_TYPES:
        statement = to_declaration(node)
        return (NodeType.VARIABLE_DECLARATION, statement) if statement is not None else None
    if node.type == EXPORT_NODE_TYPE:
        export = to_export(node)
        return (NodeType.EXPORT_NAMED_DECLARATION, export) if export is not None else None
    return None


def iter_nodes(root: Node) -> Iterable[Node]:
    """Yield ``root`` and all of its descendants in document (pre-)order."""
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        for i in range(node.child_count - 1, -1, -1):
            child: Node | None = node.child(i)
            if child is not None:
                stack.append(child)


def walk(tree: Tree, listeners: Iterable[Listeners]) -> int:
    """Traverse ``tree`` and invoke ``listeners`` for every subscribed node.

    Args:
        tree (Tree): The parsed tree-sitter tree.
        listeners (Iterable[Listeners]): One listener mapping per active rule.

    Returns:
        int: The number of listener invocations (useful for tracing).
    """
    active: list[Listeners] = list(listeners)
    wanted: set[NodeType] = {node_type for mapping in active for node_type in mapping}
    calls = 0
    if not wanted:
        return calls

    for node in iter_nodes(tree.root_node):
        converted = _convert(node)
        if converted is None:
            continue
        node_type, payload = converted
        if node_type not in wanted:
            continue
        for mapping in active:
            listener: Listener | None = mapping.get(node_type)
            if listener is not None:
                listener(payload)
                calls += 1

    logger.trace("Walker dispatched %d listener call(s)", calls)
    return calls
