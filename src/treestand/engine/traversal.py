# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Traversal and ancestry queries.

Orderings are pure functions of the state: children are always visited in
sibling-index order, so repeated calls on the same state agree.
"""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Iterator

from ..ids import ROOT, NodeId
from .result import ErrorKind, Result, failure, success
from .state import TreeState, child_ids, has


class TraversalOrder(str, Enum):
    """Visiting order for traversals.

    Attributes:
        DFS: Depth-first pre-order (node, then each child subtree in order).
        BFS: Breadth-first level order.
    """

    DFS = "dfs"
    BFS = "bfs"


def iter_nodes(
    state: TreeState, start: NodeId = ROOT, order: TraversalOrder | str = TraversalOrder.DFS
) -> Iterator[NodeId]:
    """Yield start and everything below it in the requested order.

    start must exist in the state and order must be a valid TraversalOrder.
    """
    order = TraversalOrder(order)
    if order is TraversalOrder.DFS:
        stack: list[NodeId] = [start]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(child_ids(state, current)))
    else:
        queue: deque[NodeId] = deque([start])
        while queue:
            current = queue.popleft()
            yield current
            queue.extend(child_ids(state, current))


def _parse_order(order: TraversalOrder | str) -> TraversalOrder | None:
    try:
        return TraversalOrder(order)
    except ValueError:
        return None


def nodes_in_order(
    state: TreeState, start: NodeId = ROOT, order: TraversalOrder | str = TraversalOrder.DFS
) -> Result:
    """All nodes of the subtree rooted at start, start included.

    NOT_FOUND for a missing start, INVALID_OPERATION for an unknown order.

    Example:
        >>> nodes_in_order(state, ROOT, 'bfs').value
        [ROOT, 'n1', 'n2', 'n3', 'n4']
    """
    if not has(state, start):
        return failure(ErrorKind.NOT_FOUND, start, 'nodes')
    parsed = _parse_order(order)
    if parsed is None:
        return failure(ErrorKind.INVALID_OPERATION, start, 'nodes')
    return success(list(iter_nodes(state, start, parsed)))


def descendants(
    state: TreeState, node_id: NodeId, order: TraversalOrder | str = TraversalOrder.DFS
) -> Result:
    """Every node below node_id, in the requested order."""
    result = nodes_in_order(state, node_id, order)
    if not result.ok:
        return failure(result.error, node_id, 'descendants')
    return success(result.value[1:])


def _filter_nodes(
    state: TreeState, order: TraversalOrder | str, with_children: bool, operation: str
) -> Result:
    parsed = _parse_order(order)
    if parsed is None:
        return failure(ErrorKind.INVALID_OPERATION, None, operation)
    return success([
        node_id for node_id in iter_nodes(state, ROOT, parsed)
        if bool(state.child_map.get(node_id)) is with_children
    ])


def leaves(state: TreeState, order: TraversalOrder | str = TraversalOrder.DFS) -> Result:
    """Nodes without children across the whole tree (root included)."""
    return _filter_nodes(state, order, False, 'leaves')


def branches(state: TreeState, order: TraversalOrder | str = TraversalOrder.DFS) -> Result:
    """Nodes with at least one child across the whole tree (root included)."""
    return _filter_nodes(state, order, True, 'branches')


def ancestor_ids(state: TreeState, node_id: NodeId) -> list[NodeId]:
    """Walk parent links from an existing node up to the root."""
    chain: list[NodeId] = []
    current = node_id
    while current is not ROOT:
        current = state.records[current].parent_id
        chain.append(current)
    return chain


def ancestors(state: TreeState, node_id: NodeId) -> Result:
    """``[parent, grandparent, ..., ROOT]``; the root has no ancestors."""
    if not has(state, node_id):
        return failure(ErrorKind.NOT_FOUND, node_id, 'ancestors')
    return success(ancestor_ids(state, node_id))


def depth(state: TreeState, node_id: NodeId) -> Result:
    """Number of edges between node_id and the root."""
    if not has(state, node_id):
        return failure(ErrorKind.NOT_FOUND, node_id, 'depth')
    return success(len(ancestor_ids(state, node_id)))
