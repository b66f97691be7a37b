# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Node identifiers.

A node id is either the root marker ``ROOT`` or a user supplied string.
The root marker is a singleton that never compares equal to a string, so
no user id can collide with it.
"""

from __future__ import annotations

from typing import Union


class RootId:
    """The implicit root of every tree.

    Only one instance exists (``ROOT``); compare with ``is``.
    """

    __slots__ = ()

    _instance: RootId | None = None

    def __new__(cls) -> RootId:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ROOT"

    def __reduce__(self) -> str:
        return "ROOT"


ROOT = RootId()

NodeId = Union[RootId, str]


def is_root(node_id: object) -> bool:
    """True if node_id is the root marker."""
    return node_id is ROOT


def parent_key(parent: str | None) -> NodeId:
    """Map a stored parent field (None for root) to a node id."""
    return ROOT if parent is None else parent


def parent_field(node_id: NodeId) -> str | None:
    """Map a node id to the value stored in a record's parent field."""
    return None if node_id is ROOT else node_id
