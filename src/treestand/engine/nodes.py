# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Node creation and user data."""

from __future__ import annotations

import copy
from typing import Any, Mapping

from ..ids import ROOT, NodeId, parent_field
from .ordering import clamp_index, is_position, open_slot
from .result import ErrorKind, Result, failure, OK
from .state import Draft, NodeRecord, TreeState, child_ids, has


def create(
    state: TreeState,
    parent_id: NodeId,
    child_id: str,
    index: int | None = None,
) -> tuple[Result, TreeState]:
    """Create a node under parent_id.

    The duplicate check runs before the parent check. The new node gets
    empty data and is inserted at ``index`` (clamped into
    ``[0, len(children)]``, None appends); siblings at or after that
    position shift right.

    Args:
        state: Current tree state.
        parent_id: Parent node id (ROOT or a string id).
        child_id: Id for the new node; must be a string.
        index: Optional position among the parent's children.

    Returns:
        ``(result, state)``. On failure the input state is returned.
    """
    if has(state, child_id):
        return failure(ErrorKind.DUPLICATE_ID, child_id, 'create'), state
    if not isinstance(child_id, str):
        return failure(ErrorKind.INVALID_DATA, child_id, 'create'), state
    if not has(state, parent_id):
        return failure(ErrorKind.NOT_FOUND, parent_id, 'create'), state
    if not is_position(index):
        return failure(ErrorKind.INVALID_DATA, child_id, 'create'), state

    siblings = child_ids(state, parent_id)
    target = clamp_index(index, len(siblings))

    draft = Draft(state)
    open_slot(draft, siblings, target)
    draft.put(NodeRecord(id=child_id, parent=parent_field(parent_id), index=target))
    draft.link(parent_id, child_id)
    return OK, draft.freeze()


def set_data(
    state: TreeState, node_id: NodeId, data: Any
) -> tuple[Result, TreeState]:
    """Replace a node's user data with a deep copy of ``data``.

    Fails with INVALID_DATA unless data is a mapping. The root cannot hold
    data.
    """
    if node_id is ROOT:
        return failure(ErrorKind.INVALID_OPERATION, node_id, 'set_data'), state
    if not has(state, node_id):
        return failure(ErrorKind.NOT_FOUND, node_id, 'set_data'), state
    if not isinstance(data, Mapping):
        return failure(ErrorKind.INVALID_DATA, node_id, 'set_data'), state

    draft = Draft(state)
    record = draft.records[node_id]
    draft.put(
        NodeRecord(record.id, record.parent, record.index, copy.deepcopy(dict(data)))
    )
    return OK, draft.freeze()
