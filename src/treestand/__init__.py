# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeStand - Ordered in-memory trees with a portable map format.

A lightweight, zero-dependency library: every node has a unique string id,
an ordered list of children and a user data mapping, under one implicit
root. The ``engine`` package holds the pure state transitions; ``Tree`` and
``TreeNode`` are the object API on top of it.
"""

__version__ = "0.1.0"

from .engine import DeleteStrategy, ErrorKind, Result, TraversalOrder, TreeState
from .exceptions import (
    DuplicateNodeError,
    HasChildrenError,
    InvalidDataError,
    InvalidOperationError,
    NodeNotFoundError,
    TreeStandError,
)
from .ids import ROOT, NodeId, RootId
from .node import TreeNode
from .tree import Tree

__all__ = [
    # Core classes
    "Tree",
    "TreeNode",
    "TreeState",
    # Identifiers
    "ROOT",
    "RootId",
    "NodeId",
    # Options
    "DeleteStrategy",
    "TraversalOrder",
    # Results
    "ErrorKind",
    "Result",
    # Exceptions
    "TreeStandError",
    "NodeNotFoundError",
    "DuplicateNodeError",
    "InvalidOperationError",
    "InvalidDataError",
    "HasChildrenError",
]
