# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Sibling ordering.

Every parent's children carry the dense indices ``0..n-1``. Structural
changes keep that true with two moves: closing the gap a node leaves behind
(decrement the siblings after it) and opening a slot where a node arrives
(increment the siblings at or after the target).
"""

from __future__ import annotations

from typing import Iterable

from ..ids import ROOT, NodeId
from .result import ErrorKind, Result, failure, OK
from .state import Draft, TreeState, has, sibling_ids


def is_position(index: object) -> bool:
    """True for a requested position: None or an int (bools excluded)."""
    if index is None:
        return True
    return isinstance(index, int) and not isinstance(index, bool)


def clamp_index(index: int | None, count: int) -> int:
    """Clamp a requested insertion index into ``[0, count]``.

    None means append (``count``); negative values clamp to 0.
    """
    if index is None or index > count:
        return count
    if index < 0:
        return 0
    return index


def close_gap(draft: Draft, siblings: Iterable[str], old_index: int) -> None:
    """Decrement every sibling positioned after old_index."""
    draft.shift(
        [sibling for sibling in siblings if draft.index(sibling) > old_index], -1
    )


def open_slot(draft: Draft, siblings: Iterable[str], index: int) -> None:
    """Increment every sibling positioned at or after index."""
    draft.shift(
        [sibling for sibling in siblings if draft.index(sibling) >= index], 1
    )


def reorder_within_parent(
    state: TreeState, node_id: NodeId, new_index: int | None = None
) -> tuple[Result, TreeState]:
    """Move a node to another position among its current siblings.

    Args:
        state: Current tree state.
        node_id: The node to reposition.
        new_index: Target position; None moves the node to the end.
            Out of range values are clamped.

    Returns:
        ``(result, state)``. INVALID_DATA if new_index is not an int. On
        failure the input state is returned.
    """
    if node_id is ROOT:
        return failure(ErrorKind.INVALID_OPERATION, node_id, 'reposition'), state
    if not has(state, node_id):
        return failure(ErrorKind.NOT_FOUND, node_id, 'reposition'), state
    if not is_position(new_index):
        return failure(ErrorKind.INVALID_DATA, node_id, 'reposition'), state

    siblings = sibling_ids(state, node_id)
    target = clamp_index(new_index, len(siblings))

    draft = Draft(state)
    close_gap(draft, siblings, draft.index(node_id))
    open_slot(draft, siblings, target)
    draft.set_index(node_id, target)
    return OK, draft.freeze()
