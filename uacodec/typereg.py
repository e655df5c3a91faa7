"""A registry that maps node ids to classes and back."""

from __future__ import annotations

import threading
from typing import Any

from .node_id import NodeID

__all__ = ["TypeRegistry"]


class TypeRegistry:
    """Maps each node id to one class.

    A class may be registered under several ids; lookups return the first.
    Safe for concurrent use.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._types: dict[str, type] = {}
        self._ids: dict[type, str] = {}

    def new(self, node_id: NodeID) -> Any:
        """Return a new instance of the class registered for ``node_id``, or None."""
        if node_id is None:
            raise ValueError("missing id in call to TypeRegistry.new")
        with self._lock:
            cls = self._types.get(str(node_id))
        return None if cls is None else cls()

    def lookup(self, value: Any) -> NodeID | None:
        """Return the first id registered for the class of ``value``, or None."""
        with self._lock:
            ident = self._ids.get(type(value))
        return None if ident is None else NodeID.parse(ident)

    def register(self, node_id: NodeID, cls: type) -> None:
        """Register ``cls`` under ``node_id``; raises ValueError if the id is taken."""
        if node_id is None:
            raise ValueError("missing id in call to TypeRegistry.register")
        key = str(node_id)
        with self._lock:
            if key in self._types:
                raise ValueError(f"{key} is already registered")
            self._types[key] = cls
            self._ids.setdefault(cls, key)