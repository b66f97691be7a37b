# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Import and export of the flat map representation.

The exported form maps each non-root node id to::

    {"id": str, "parent": str | None, "index": int, "data": dict}

The root is implicit; a ``None`` parent means the node hangs off the root.
The structure holds only dicts, lists and scalars, so it can be passed to
``json.dumps`` directly, and it is the interchange format shared with other
implementations.
"""

from __future__ import annotations

import copy
import logging
from collections import defaultdict
from typing import Any, Mapping

from ..ids import ROOT, NodeId, parent_key
from .result import ErrorKind, Result, failure, success
from .state import NodeRecord, TreeState

logger = logging.getLogger(__name__)

RECORD_FIELDS = ('id', 'parent', 'index', 'data')


def export(state: TreeState) -> dict[str, dict[str, Any]]:
    """Return the flat map representation of a tree."""
    return {
        node_id: {
            'id': record.id,
            'parent': record.parent,
            'index': record.index,
            'data': copy.deepcopy(record.data),
        }
        for node_id, record in state.records.items()
    }


def _normalize_keys(value: Any) -> Any:
    """Convert mapping keys to strings, recursively, as JSON would."""
    if isinstance(value, Mapping):
        return {str(key): _normalize_keys(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_keys(item) for item in value]
    return value


def from_mapping(data: Mapping[str, Any], validate: bool = False) -> Result:
    """Build a TreeState from an exported map.

    The node store is taken as given and the child index is rebuilt by
    grouping entries on their parent. The creation checks are not re-run:
    by default the input is trusted to come from a conformant export.

    Args:
        data: Mapping of node id to record mapping.
        validate: If True, also check that the input describes a proper
            tree (ids match keys, parents exist, dense indices, data is a
            mapping, no cycles).

    Returns:
        Result whose value is the new TreeState, or INVALID_DATA.
    """
    if not isinstance(data, Mapping):
        return failure(ErrorKind.INVALID_DATA, None, 'import')

    records: dict[str, NodeRecord] = {}
    for key, entry in data.items():
        if not isinstance(entry, Mapping):
            return failure(ErrorKind.INVALID_DATA, key, 'import')
        entry = {str(field): value for field, value in entry.items()}
        missing = [field for field in RECORD_FIELDS if field not in entry]
        if missing and missing != ['data']:
            return failure(ErrorKind.INVALID_DATA, key, 'import')
        if entry['parent'] is not None and not isinstance(entry['parent'], str):
            return failure(ErrorKind.INVALID_DATA, key, 'import')
        user_data = entry.get('data')
        records[str(key)] = NodeRecord(
            id=entry['id'],
            parent=entry['parent'],
            index=entry['index'],
            data=_normalize_keys(user_data) if user_data is not None else {},
        )

    child_map: dict[NodeId, set[str]] = defaultdict(set)
    child_map[ROOT] = set()
    for node_id, record in records.items():
        child_map.setdefault(node_id, set())
        child_map[parent_key(record.parent)].add(node_id)

    state = TreeState(
        records=records,
        child_map={key: frozenset(children) for key, children in child_map.items()},
    )
    if validate:
        problem = check_structure(state)
        if problem is not None:
            node_id, reason = problem
            logger.warning("Rejected tree import at node %r: %s", node_id, reason)
            return failure(ErrorKind.INVALID_DATA, node_id, 'import')
    return success(state)


def check_structure(state: TreeState) -> tuple[Any, str] | None:
    """Look for the first structural defect of a state.

    Returns:
        ``(node_id, reason)`` for the first problem found, or None if the
        state is a well formed tree.
    """
    records = state.records
    for key, record in records.items():
        if record.id != key:
            return key, f"id {record.id!r} does not match its key"
        if record.parent is not None and record.parent not in records:
            return key, f"parent {record.parent!r} does not exist"
        if isinstance(record.index, bool) or not isinstance(record.index, int):
            return key, f"index {record.index!r} is not an integer"
        if not isinstance(record.data, Mapping):
            return key, "data is not a mapping"
        if key not in state.child_map.get(parent_key(record.parent), ()):
            return key, "missing from its parent's child index"

    for parent_id, children in state.child_map.items():
        if parent_id is not ROOT and parent_id not in records:
            return parent_id, "child index entry for a missing node"
        for child in children:
            if child not in records or parent_key(records[child].parent) != parent_id:
                return child, f"listed under {parent_id!r} but not its child"
        indices = sorted(records[child].index for child in children)
        if indices != list(range(len(children))):
            return parent_id, f"child indices {indices} are not dense"

    # every node must reach the root within len(records) steps
    for key in records:
        current: NodeId = key
        for _ in range(len(records) + 1):
            if current is ROOT:
                break
            current = parent_key(records[current].parent)
        else:
            return key, "parent chain does not reach the root"
    return None
