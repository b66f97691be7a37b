# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeNode - a handle on one node of a Tree."""

from __future__ import annotations

import copy
from typing import Any, Mapping, TYPE_CHECKING

from . import engine
from .engine import DeleteStrategy, ErrorKind, TraversalOrder
from .ids import ROOT, NodeId

if TYPE_CHECKING:
    from .tree import Tree


class TreeNode:
    """A lightweight reference to a node of a Tree.

    A TreeNode stores only the node id and its tree; every call reads or
    changes the tree's current state. Two handles are equal when they refer
    to the same id in the same tree. A handle whose node has been deleted
    raises NodeNotFoundError on use.

    Example:
        >>> tree = Tree()
        >>> a = tree.root.create_child('a')
        >>> a.create_child('b').depth
        2
        >>> a.set_data({'name': 'A'}).get_data()
        {'name': 'A'}
    """

    __slots__ = ('id', 'tree')

    def __init__(self, node_id: NodeId, tree: Tree) -> None:
        """Initialize a TreeNode.

        Args:
            node_id: ROOT or a string id.
            tree: The Tree the node belongs to.
        """
        self.id = node_id
        self.tree = tree

    def __repr__(self) -> str:
        return f"TreeNode({self.id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeNode):
            return NotImplemented
        return self.id == other.id and self.tree is other.tree

    def __hash__(self) -> int:
        return hash((self.id, id(self.tree)))

    # ==================== Structure ====================

    @property
    def is_root(self) -> bool:
        """True for the tree's root node."""
        return self.id is ROOT

    @property
    def is_leaf(self) -> bool:
        """True if the node has no children.

        In non-raising mode a missing node yields its (falsy) ErrorKind.
        """
        children = self.children
        if isinstance(children, ErrorKind):
            return children
        return not children

    @property
    def parent(self) -> TreeNode | ErrorKind:
        """The parent node. The root has no parent (InvalidOperationError)."""
        parent_id = self.tree.query(engine.parent, self.id)
        if isinstance(parent_id, ErrorKind):
            return parent_id
        return TreeNode(parent_id, self.tree)

    @property
    def children(self) -> list[TreeNode] | ErrorKind:
        """Direct children in order."""
        return self.tree._wrap(self.tree.query(engine.children, self.id))

    @property
    def siblings(self) -> list[TreeNode] | ErrorKind:
        """The other children of this node's parent, in order."""
        return self.tree._wrap(self.tree.query(engine.siblings, self.id))

    @property
    def ancestors(self) -> list[TreeNode] | ErrorKind:
        """Parent, grandparent, ... up to and including the root."""
        return self.tree._wrap(self.tree.query(engine.ancestors, self.id))

    @property
    def depth(self) -> int | ErrorKind:
        """Number of edges to the root (0 for the root)."""
        return self.tree.query(engine.depth, self.id)

    @property
    def index(self) -> int | ErrorKind:
        """Position among the node's siblings."""
        return self.tree.query(engine.index_of, self.id)

    def descendants(
        self, order: TraversalOrder | str = TraversalOrder.DFS
    ) -> list[TreeNode] | ErrorKind:
        """Every node below this one, depth-first (default) or breadth-first."""
        return self.tree._wrap(self.tree.query(engine.descendants, self.id, order))

    # ==================== Data ====================

    def get_data(self) -> dict[str, Any] | ErrorKind:
        """Return a deep copy of the node's user data."""
        data = self.tree.query(engine.get_data, self.id)
        if isinstance(data, ErrorKind):
            return data
        return copy.deepcopy(data)

    def set_data(self, data: Mapping[str, Any]) -> TreeNode | ErrorKind:
        """Replace the node's user data. Returns the node for chaining.

        Raises:
            InvalidDataError: If data is not a mapping.
        """
        return self._chain(self.tree.mutate(engine.set_data, self.id, data))

    # ==================== Mutation ====================

    def create_child(self, child_id: str, index: int | None = None) -> TreeNode | ErrorKind:
        """Create a child node and return it.

        Args:
            child_id: Unique string id for the new node.
            index: Position among the children; appended if omitted.

        Raises:
            DuplicateNodeError: If child_id is already used.
            NodeNotFoundError: If this node no longer exists.
        """
        outcome = self.tree.mutate(engine.create, self.id, child_id, index)
        if isinstance(outcome, ErrorKind):
            return outcome
        return TreeNode(child_id, self.tree)

    def move_to(
        self, new_parent: TreeNode | NodeId, index: int | None = None
    ) -> TreeNode | ErrorKind:
        """Move this node (with its subtree) under new_parent.

        Raises:
            InvalidOperationError: If this is the root, or new_parent is
                this node or one of its descendants.
        """
        parent_id = self._resolve(new_parent, 'move')
        if isinstance(parent_id, ErrorKind):
            return parent_id
        return self._chain(self.tree.mutate(engine.move, self.id, parent_id, index))

    def reposition(self, index: int | None) -> TreeNode | ErrorKind:
        """Move this node to another position among its siblings."""
        return self._chain(
            self.tree.mutate(engine.reorder_within_parent, self.id, index)
        )

    def move_before(self, other: TreeNode | NodeId) -> TreeNode | ErrorKind:
        """Move this node under other's parent, at other's current index."""
        other_id = self._resolve(other, 'move_before')
        if isinstance(other_id, ErrorKind):
            return other_id
        return self._chain(self.tree.mutate(engine.move_before, self.id, other_id))

    def move_after(self, other: TreeNode | NodeId) -> TreeNode | ErrorKind:
        """Move this node under other's parent, just past other's current index."""
        other_id = self._resolve(other, 'move_after')
        if isinstance(other_id, ErrorKind):
            return other_id
        return self._chain(self.tree.mutate(engine.move_after, self.id, other_id))

    def delete(self, strategy: DeleteStrategy | str = DeleteStrategy.REFUSE) -> ErrorKind | None:
        """Delete this node.

        Args:
            strategy: What to do with the children:
                - 'refuse': fail with HasChildrenError if there are any
                - 'cascade': delete the whole subtree
                - 'reattach': move the children to this node's parent
        """
        return self.tree.mutate(engine.delete, self.id, strategy)

    # ==================== Helpers ====================

    def _chain(self, outcome: Any) -> TreeNode | ErrorKind:
        if isinstance(outcome, ErrorKind):
            return outcome
        return self

    def _resolve(self, other: TreeNode | NodeId, operation: str) -> NodeId | ErrorKind:
        """Turn a node or id argument into an id of this node's tree."""
        if isinstance(other, TreeNode):
            if other.tree is not self.tree:
                return self.tree._fail(ErrorKind.INVALID_OPERATION, other.id, operation)
            return other.id
        return other
