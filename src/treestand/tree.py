# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tree - owner of a tree's state.

A ``Tree`` holds the only mutable reference to an engine ``TreeState``.
Writers run one engine transition at a time under a lock and swap in the
new state only when the transition succeeds. Readers grab the current
state and work on it outside the lock: states are immutable, so a reader
always sees a consistent snapshot.

Example:
    Basic usage::

        tree = Tree()
        root = tree.root
        a = root.create_child('a')
        b = root.create_child('b')
        b.move_to(a)
        tree.nodes()            # [root, a, b]

        text = tree.serialize()
        copy = Tree.deserialize(text)

    Non-raising mode::

        tree = Tree(raise_on_error=False)
        tree.root.create_child('a')
        tree.root.create_child('a')   # ErrorKind.DUPLICATE_ID
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Callable, Iterator, Mapping

from . import engine
from .engine import ErrorKind, Result, TraversalOrder, TreeState
from .exceptions import error_for
from .ids import ROOT, NodeId
from .node import TreeNode

logger = logging.getLogger(__name__)


class Tree:
    """An ordered tree of uniquely identified nodes.

    Attributes:
        raise_on_error: If True (default), failed operations raise a
            TreeStandError subclass. If False, they log a warning and
            return the ErrorKind instead.
    """

    __slots__ = ('_state', '_lock', 'raise_on_error')

    def __init__(
        self,
        raise_on_error: bool = True,
        state: TreeState | None = None,
    ) -> None:
        """Initialize a Tree.

        Args:
            raise_on_error: Whether failures raise (True) or are returned
                as ErrorKind values (False).
            state: Optional initial engine state; an empty tree if omitted.
        """
        self._state = state if state is not None else engine.init()
        self._lock = threading.RLock()
        self.raise_on_error = raise_on_error

    # ==================== Import / Export ====================

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        validate: bool = False,
        raise_on_error: bool = True,
    ) -> Tree | ErrorKind:
        """Build a tree from an exported mapping.

        Args:
            data: Mapping as produced by ``export()``.
            validate: Check the input is a well formed tree before
                accepting it. By default the input is trusted.
            raise_on_error: Passed to the new tree; also decides whether an
                import failure raises or returns INVALID_DATA.
        """
        result = engine.from_mapping(data, validate=validate)
        if not result.ok:
            return _report(result, raise_on_error)
        return cls(raise_on_error=raise_on_error, state=result.value)

    @classmethod
    def deserialize(
        cls,
        text: str | bytes,
        validate: bool = False,
        raise_on_error: bool = True,
    ) -> Tree | ErrorKind:
        """Build a tree from JSON produced by ``serialize()``."""
        try:
            data = json.loads(text)
        except ValueError as exc:
            if raise_on_error:
                raise error_for(ErrorKind.INVALID_DATA, None, 'deserialize') from exc
            logger.warning("Cannot deserialize tree: %s", exc)
            return ErrorKind.INVALID_DATA
        return cls.from_mapping(data, validate=validate, raise_on_error=raise_on_error)

    def export(self) -> dict[str, dict[str, Any]]:
        """Return the flat map representation of the tree."""
        return engine.export(self.state)

    def serialize(self, **kwargs: Any) -> str:
        """Return the exported mapping encoded as JSON.

        Args:
            **kwargs: Passed to ``json.dumps`` (e.g. ``indent``).
        """
        return json.dumps(self.export(), **kwargs)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"Tree({len(self)} nodes)"

    def __len__(self) -> int:
        """Return the number of nodes, root included."""
        return engine.size(self.state)

    def __contains__(self, node_id: object) -> bool:
        return engine.has(self.state, node_id)

    def __iter__(self) -> Iterator[TreeNode]:
        """Iterate over all nodes in depth-first order."""
        return iter(self.nodes())

    # ==================== Nodes ====================

    @property
    def state(self) -> TreeState:
        """The current engine state (an immutable snapshot)."""
        with self._lock:
            return self._state

    @property
    def root(self) -> TreeNode:
        """The root node. It always exists and holds no data."""
        return TreeNode(ROOT, self)

    @property
    def size(self) -> int:
        """Number of nodes, root included."""
        return len(self)

    def has_node(self, node_id: NodeId) -> bool:
        """True if a node with this id exists. Always True for ROOT."""
        return node_id in self

    def node(self, node_id: NodeId) -> TreeNode | ErrorKind:
        """Return the node with the given id.

        Raises:
            NodeNotFoundError: If no such node exists.
        """
        if not self.has_node(node_id):
            return self._fail(ErrorKind.NOT_FOUND, node_id, 'node')
        return TreeNode(node_id, self)

    def nodes(self, order: TraversalOrder | str = TraversalOrder.DFS) -> list[TreeNode]:
        """All nodes, root first, in depth-first or breadth-first order."""
        return self._wrap(self.query(engine.nodes_in_order, ROOT, order))

    def external_nodes(self, order: TraversalOrder | str = TraversalOrder.DFS) -> list[TreeNode]:
        """Nodes without children (the root too, while the tree is empty)."""
        return self._wrap(self.query(engine.leaves, order))

    def internal_nodes(self, order: TraversalOrder | str = TraversalOrder.DFS) -> list[TreeNode]:
        """Nodes with at least one child."""
        return self._wrap(self.query(engine.branches, order))

    leaves = external_nodes
    branches = internal_nodes

    # ==================== Engine Access ====================

    def query(self, func: Callable[..., Result], *args: Any) -> Any:
        """Run an engine query against the current snapshot.

        Returns the query value, or handles the failure according to
        ``raise_on_error``.
        """
        return self._unwrap(func(self.state, *args))

    def mutate(self, func: Callable[..., tuple[Result, TreeState]], *args: Any) -> Any:
        """Run an engine transition and install the new state on success."""
        with self._lock:
            result, state = func(self._state, *args)
            if result.ok:
                self._state = state
        if result.ok:
            logger.debug("%s%r applied", func.__name__, args)
        return self._unwrap(result)

    def _unwrap(self, result: Result) -> Any:
        if result.ok:
            return result.value
        return _report(result, self.raise_on_error)

    def _fail(self, kind: ErrorKind, node_id: Any, operation: str) -> ErrorKind:
        return _report(Result(error=kind, node_id=node_id, operation=operation), self.raise_on_error)

    def _wrap(self, ids: Any) -> Any:
        if isinstance(ids, ErrorKind):
            return ids
        return [TreeNode(node_id, self) for node_id in ids]


def _report(result: Result, raise_on_error: bool) -> ErrorKind:
    """Raise the error of a failed result, or log and return its kind."""
    if raise_on_error:
        result.unwrap()
    logger.warning(
        "%s failed on node %r: %s", result.operation, result.node_id, result.error.value
    )
    return result.error
