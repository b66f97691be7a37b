# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Engine package - pure state transitions over an ordered tree.

Every function takes a ``TreeState`` and never modifies it. Mutations
return ``(Result, TreeState)``; queries return a ``Result``. Failures are
reported as ``ErrorKind`` values, never raised.

The package is organized into:
- state: node store, child index and lookups
- ordering: dense sibling index maintenance and reordering
- nodes: node creation and user data
- reparent: moves between parents, relative placement
- deletion: refuse / cascade / reattach deletion
- traversal: DFS/BFS orderings, leaves, branches, ancestry
- mapping: export and import of the flat map representation

Example:
    >>> from treestand import ROOT, engine
    >>> state = engine.init()
    >>> _, state = engine.create(state, ROOT, 'a')
    >>> _, state = engine.create(state, ROOT, 'b', 0)
    >>> engine.children(state, ROOT).value
    ['b', 'a']
"""

from .deletion import DeleteStrategy, delete
from .mapping import check_structure, export, from_mapping
from .nodes import create, set_data
from .ordering import reorder_within_parent
from .reparent import move, move_after, move_before
from .result import ErrorKind, Result
from .state import (
    NodeRecord,
    TreeState,
    children,
    get_data,
    has,
    index_of,
    init,
    parent,
    siblings,
    size,
)
from .traversal import (
    TraversalOrder,
    ancestors,
    branches,
    depth,
    descendants,
    leaves,
    nodes_in_order,
)

__all__ = [
    # State
    "TreeState",
    "NodeRecord",
    "init",
    "has",
    "size",
    "children",
    "siblings",
    "parent",
    "index_of",
    "get_data",
    # Mutations
    "create",
    "set_data",
    "reorder_within_parent",
    "move",
    "move_before",
    "move_after",
    "delete",
    "DeleteStrategy",
    # Traversal
    "TraversalOrder",
    "nodes_in_order",
    "descendants",
    "leaves",
    "branches",
    "ancestors",
    "depth",
    # Import / export
    "export",
    "from_mapping",
    "check_structure",
    # Results
    "ErrorKind",
    "Result",
]
