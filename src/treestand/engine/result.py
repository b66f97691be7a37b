# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Result values returned by engine operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Failure kinds reported by the engine.

    Attributes:
        NOT_FOUND: A referenced node id does not exist.
        DUPLICATE_ID: Creation with an id already in use.
        INVALID_OPERATION: Operation not permitted on the node (root
            mutation, or a move that would create a cycle).
        INVALID_DATA: Supplied data is not a mapping, or imported data is
            malformed.
        HAS_CHILDREN: ``refuse`` deletion of a node with children.

    Members are falsy, so a failure returned in place of a boolean or a
    node never reads as a positive answer.
    """

    NOT_FOUND = "not_found"
    DUPLICATE_ID = "duplicate_id"
    INVALID_OPERATION = "invalid_operation"
    INVALID_DATA = "invalid_data"
    HAS_CHILDREN = "has_children"

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class Result:
    """Outcome of an engine call: a value, or an error kind.

    Attributes:
        value: The answer of a query (None for mutations).
        error: The failure kind, or None on success.
        node_id: The id the failure refers to, if any.
        operation: Name of the operation that produced the result.
    """

    value: Any = None
    error: ErrorKind | None = None
    node_id: Any = None
    operation: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, raising the matching TreeStandError on failure."""
        if self.error is not None:
            from ..exceptions import error_for

            raise error_for(self.error, self.node_id, self.operation)
        return self.value


OK = Result()


def success(value: Any = None) -> Result:
    """Build a successful result."""
    if value is None:
        return OK
    return Result(value=value)


def failure(error: ErrorKind, node_id: Any = None, operation: str | None = None) -> Result:
    """Build a failed result."""
    return Result(error=error, node_id=node_id, operation=operation)
