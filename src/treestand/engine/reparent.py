# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Moving nodes between parents.

A move carries the whole subtree of the node along. Moving a node under
itself or under one of its descendants would detach that subtree from the
root, so such moves are refused.
"""

from __future__ import annotations

from dataclasses import replace

from ..ids import ROOT, NodeId, parent_field
from .ordering import (
    clamp_index,
    close_gap,
    is_position,
    open_slot,
    reorder_within_parent,
)
from .result import ErrorKind, Result, failure, OK
from .state import Draft, TreeState, child_ids, has, sibling_ids
from .traversal import ancestor_ids


def move(
    state: TreeState,
    node_id: NodeId,
    new_parent_id: NodeId,
    index: int | None = None,
) -> tuple[Result, TreeState]:
    """Reparent a node, optionally at a given position.

    Args:
        state: Current tree state.
        node_id: The node to move; cannot be the root.
        new_parent_id: The new parent. If it is the current parent, this is
            a plain reorder.
        index: Position among the new siblings; None appends. Clamped.

    Returns:
        ``(result, state)``. INVALID_OPERATION for the root or for a move
        under the node's own subtree, NOT_FOUND if either id is missing,
        INVALID_DATA for a non-int index. On failure the input state is
        returned.
    """
    if node_id is ROOT:
        return failure(ErrorKind.INVALID_OPERATION, node_id, 'move'), state
    if not has(state, node_id):
        return failure(ErrorKind.NOT_FOUND, node_id, 'move'), state
    if not has(state, new_parent_id):
        return failure(ErrorKind.NOT_FOUND, new_parent_id, 'move'), state
    if not is_position(index):
        return failure(ErrorKind.INVALID_DATA, node_id, 'move'), state

    record = state.records[node_id]
    old_parent_id = record.parent_id
    if old_parent_id == new_parent_id:
        return reorder_within_parent(state, node_id, index)

    chain = [new_parent_id, *ancestor_ids(state, new_parent_id)]
    if node_id in chain:
        return failure(ErrorKind.INVALID_OPERATION, node_id, 'move'), state

    new_siblings = child_ids(state, new_parent_id)
    target = clamp_index(index, len(new_siblings))

    draft = Draft(state)
    close_gap(draft, sibling_ids(state, node_id), record.index)
    draft.unlink(old_parent_id, node_id)
    open_slot(draft, new_siblings, target)
    draft.records[node_id] = replace(
        record, parent=parent_field(new_parent_id), index=target
    )
    draft.link(new_parent_id, node_id)
    return OK, draft.freeze()


def _move_relative(
    state: TreeState, node_id: NodeId, other_id: NodeId, offset: int, operation: str
) -> tuple[Result, TreeState]:
    if node_id is ROOT:
        return failure(ErrorKind.INVALID_OPERATION, node_id, operation), state
    if not has(state, node_id):
        return failure(ErrorKind.NOT_FOUND, node_id, operation), state
    if not has(state, other_id):
        return failure(ErrorKind.NOT_FOUND, other_id, operation), state
    if other_id is ROOT:
        return failure(ErrorKind.INVALID_OPERATION, other_id, operation), state

    # other's index is read before node_id leaves its slot
    other = state.records[other_id]
    return move(state, node_id, other.parent_id, other.index + offset)


def move_before(
    state: TreeState, node_id: NodeId, other_id: NodeId
) -> tuple[Result, TreeState]:
    """Move node_id under other_id's parent, at other_id's current index."""
    return _move_relative(state, node_id, other_id, 0, 'move_before')


def move_after(
    state: TreeState, node_id: NodeId, other_id: NodeId
) -> tuple[Result, TreeState]:
    """Move node_id under other_id's parent, at other_id's current index + 1."""
    return _move_relative(state, node_id, other_id, 1, 'move_after')
