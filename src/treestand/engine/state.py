# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Node store and child index.

A ``TreeState`` pairs the node store (id -> ``NodeRecord``) with the child
index (parent id -> frozenset of child ids). States are never modified in
place: mutating operations copy the two tables into a ``Draft``, edit the
draft, and freeze it into a new state. A state handed out earlier stays a
consistent snapshot.

Invariants kept by every operation:
    - ``c in child_map[p]`` iff ``records[c].parent`` resolves to ``p``.
    - For each parent, child indices are exactly ``0..n-1``.
    - ``child_map`` has an entry for ROOT and for every record.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping

from ..ids import ROOT, NodeId, parent_key
from .result import ErrorKind, Result, failure, success

_EMPTY: frozenset[str] = frozenset()


@dataclass(frozen=True)
class NodeRecord:
    """A stored node.

    Attributes:
        id: The node's unique id.
        parent: Parent id, or None when the parent is the root.
        index: Zero-based position among the parent's children.
        data: User data mapping.
    """

    id: str
    parent: str | None
    index: int
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def parent_id(self) -> NodeId:
        """The parent as a node id (ROOT instead of None)."""
        return parent_key(self.parent)


@dataclass(frozen=True)
class TreeState:
    """Immutable snapshot of a tree: node store plus child index."""

    records: Mapping[str, NodeRecord] = field(default_factory=dict)
    child_map: Mapping[NodeId, frozenset[str]] = field(
        default_factory=lambda: {ROOT: _EMPTY}
    )

    def __len__(self) -> int:
        return len(self.records) + 1


class Draft:
    """Mutable working copy of a TreeState used inside one operation."""

    __slots__ = ('records', 'child_map')

    def __init__(self, state: TreeState) -> None:
        self.records: dict[str, NodeRecord] = dict(state.records)
        self.child_map: dict[NodeId, frozenset[str]] = dict(state.child_map)

    def index(self, node_id: str) -> int:
        return self.records[node_id].index

    def set_index(self, node_id: str, index: int) -> None:
        self.records[node_id] = replace(self.records[node_id], index=index)

    def shift(self, node_ids: Iterable[str], delta: int) -> None:
        """Add delta to the index of every node in node_ids."""
        for node_id in node_ids:
            record = self.records[node_id]
            self.records[node_id] = replace(record, index=record.index + delta)

    def put(self, record: NodeRecord) -> None:
        self.records[record.id] = record
        self.child_map.setdefault(record.id, _EMPTY)

    def link(self, parent_id: NodeId, child_id: str) -> None:
        self.child_map[parent_id] = self.child_map.get(parent_id, _EMPTY) | {child_id}

    def unlink(self, parent_id: NodeId, child_id: str) -> None:
        self.child_map[parent_id] = self.child_map.get(parent_id, _EMPTY) - {child_id}

    def drop(self, node_id: str) -> None:
        """Remove a record and its child index entry (not the parent link)."""
        del self.records[node_id]
        self.child_map.pop(node_id, None)

    def ordered_children(self, parent_id: NodeId) -> list[str]:
        return sorted(
            self.child_map.get(parent_id, _EMPTY),
            key=lambda child: self.records[child].index,
        )

    def freeze(self) -> TreeState:
        return TreeState(records=self.records, child_map=self.child_map)


# ==================== Construction ====================


def init() -> TreeState:
    """Return an empty tree holding only the root."""
    return TreeState()


# ==================== Lookup ====================


def has(state: TreeState, node_id: object) -> bool:
    """True if node_id is in the tree. The root is always present."""
    if node_id is ROOT:
        return True
    return isinstance(node_id, str) and node_id in state.records


def child_ids(state: TreeState, node_id: NodeId) -> list[str]:
    """Children of an existing node sorted by index (no existence check)."""
    children = state.child_map.get(node_id, _EMPTY)
    if len(children) < 2:
        return list(children)
    records = state.records
    return sorted(children, key=lambda child: records[child].index)


def sibling_ids(state: TreeState, node_id: str) -> list[str]:
    """Siblings of an existing non-root node sorted by index."""
    parent = state.records[node_id].parent_id
    return [child for child in child_ids(state, parent) if child != node_id]


def children(state: TreeState, node_id: NodeId) -> Result:
    """Ordered children of a node."""
    if not has(state, node_id):
        return failure(ErrorKind.NOT_FOUND, node_id, 'children')
    return success(child_ids(state, node_id))


def siblings(state: TreeState, node_id: NodeId) -> Result:
    """Ordered children of the node's parent, excluding the node itself."""
    if node_id is ROOT:
        return failure(ErrorKind.INVALID_OPERATION, node_id, 'siblings')
    if not has(state, node_id):
        return failure(ErrorKind.NOT_FOUND, node_id, 'siblings')
    return success(sibling_ids(state, node_id))


def parent(state: TreeState, node_id: NodeId) -> Result:
    """Parent id of a node (ROOT for top-level nodes)."""
    if node_id is ROOT:
        return failure(ErrorKind.INVALID_OPERATION, node_id, 'parent')
    if not has(state, node_id):
        return failure(ErrorKind.NOT_FOUND, node_id, 'parent')
    return success(state.records[node_id].parent_id)


def index_of(state: TreeState, node_id: NodeId) -> Result:
    """Position of a node among its siblings."""
    if node_id is ROOT:
        return failure(ErrorKind.INVALID_OPERATION, node_id, 'index')
    if not has(state, node_id):
        return failure(ErrorKind.NOT_FOUND, node_id, 'index')
    return success(state.records[node_id].index)


def get_data(state: TreeState, node_id: NodeId) -> Result:
    """User data of a node. The root holds no data."""
    if node_id is ROOT:
        return failure(ErrorKind.INVALID_OPERATION, node_id, 'get_data')
    if not has(state, node_id):
        return failure(ErrorKind.NOT_FOUND, node_id, 'get_data')
    return success(state.records[node_id].data)


def size(state: TreeState) -> int:
    """Number of nodes, root included."""
    return len(state)
