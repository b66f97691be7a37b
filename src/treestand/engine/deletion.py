# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Node deletion with a choice of what happens to the node's children."""

from __future__ import annotations

from enum import Enum

from ..ids import ROOT, NodeId
from .ordering import close_gap
from .reparent import move
from .result import ErrorKind, Result, failure, OK
from .state import Draft, TreeState, child_ids, has
from .traversal import iter_nodes


class DeleteStrategy(str, Enum):
    """What to do with the children of a deleted node.

    Attributes:
        REFUSE: Fail with HAS_CHILDREN if the node has children.
        CASCADE: Delete the node's whole subtree.
        REATTACH: Move the children to the node's parent first.
    """

    REFUSE = "refuse"
    CASCADE = "cascade"
    REATTACH = "reattach"


def _remove(draft: Draft, node_id: str) -> None:
    """Remove one node, closing the gap among its siblings."""
    record = draft.records[node_id]
    siblings = [
        sibling for sibling in draft.child_map.get(record.parent_id, ())
        if sibling != node_id
    ]
    close_gap(draft, siblings, record.index)
    draft.unlink(record.parent_id, node_id)
    draft.drop(node_id)


def delete(
    state: TreeState,
    node_id: NodeId,
    strategy: DeleteStrategy | str = DeleteStrategy.REFUSE,
) -> tuple[Result, TreeState]:
    """Delete a node.

    Args:
        state: Current tree state.
        node_id: The node to delete; cannot be the root.
        strategy: One of ``refuse``, ``cascade`` or ``reattach``.

    Returns:
        ``(result, state)``. On failure the input state is returned.
    """
    if node_id is ROOT:
        return failure(ErrorKind.INVALID_OPERATION, node_id, 'delete'), state
    if not has(state, node_id):
        return failure(ErrorKind.NOT_FOUND, node_id, 'delete'), state
    try:
        strategy = DeleteStrategy(strategy)
    except ValueError:
        return failure(ErrorKind.INVALID_OPERATION, node_id, 'delete'), state

    if strategy is DeleteStrategy.REFUSE:
        if state.child_map.get(node_id):
            return failure(ErrorKind.HAS_CHILDREN, node_id, 'delete'), state
        draft = Draft(state)

    elif strategy is DeleteStrategy.CASCADE:
        draft = Draft(state)
        # the subtree goes away wholesale, no renumbering inside it
        for descendant in list(iter_nodes(state, node_id))[1:]:
            draft.drop(descendant)

    else:
        parent_id = state.records[node_id].parent_id
        reattached = state
        for child in child_ids(state, node_id):
            result, reattached = move(reattached, child, parent_id)
            if not result.ok:
                return result, state
        draft = Draft(reattached)

    _remove(draft, node_id)
    return OK, draft.freeze()

