# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeStand exceptions.

The engine reports failures as ``ErrorKind`` values; these classes are the
raising surface used by ``Tree`` and ``TreeNode``.
"""

from __future__ import annotations

from typing import Any

from .engine.result import ErrorKind


class TreeStandError(Exception):
    """Base exception for TreeStand errors.

    Attributes:
        kind: The engine error kind this exception represents.
        node_id: The node the failure refers to.
        operation: The operation that failed, if known.
    """

    kind: ErrorKind

    def __init__(self, node_id: Any = None, operation: str | None = None) -> None:
        self.node_id = node_id
        self.operation = operation
        super().__init__(self.message())

    def message(self) -> str:
        return f"Tree error on node {self.node_id!r}"

    def __str__(self) -> str:
        return self.message()


class NodeNotFoundError(TreeStandError, KeyError):
    """Raised when a node is not found in the tree."""

    kind = ErrorKind.NOT_FOUND

    def message(self) -> str:
        return f"Node with id {self.node_id!r} not found"


class DuplicateNodeError(TreeStandError):
    """Raised when a node with the same id already exists in the tree."""

    kind = ErrorKind.DUPLICATE_ID

    def message(self) -> str:
        return f"Node with id {self.node_id!r} already exists"


class InvalidOperationError(TreeStandError):
    """Raised when an operation is not permitted on a node."""

    kind = ErrorKind.INVALID_OPERATION

    def message(self) -> str:
        return f"Invalid operation {self.operation!r} on node with id {self.node_id!r}"


class InvalidDataError(TreeStandError, ValueError):
    """Raised when data set on a node, or imported, is invalid."""

    kind = ErrorKind.INVALID_DATA

    def message(self) -> str:
        return f"Invalid data for node with id {self.node_id!r}"


class HasChildrenError(TreeStandError):
    """Raised when a node with children is deleted with the ``refuse`` strategy."""

    kind = ErrorKind.HAS_CHILDREN

    def message(self) -> str:
        return f"Node with id {self.node_id!r} has children"


_ERROR_CLASSES: dict[ErrorKind, type[TreeStandError]] = {
    cls.kind: cls
    for cls in (
        NodeNotFoundError,
        DuplicateNodeError,
        InvalidOperationError,
        InvalidDataError,
        HasChildrenError,
    )
}


def error_for(
    kind: ErrorKind, node_id: Any = None, operation: str | None = None
) -> TreeStandError:
    """Build the exception matching an engine error kind.

    Args:
        kind: The error kind returned by the engine.
        node_id: The node the failure refers to.
        operation: Name of the failed operation.

    Returns:
        An instance of the TreeStandError subclass for ``kind``.
    """
    return _ERROR_CLASSES[ErrorKind(kind)](node_id, operation)
