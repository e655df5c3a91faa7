"""Node ids that may carry a namespace URI and a server index."""

from __future__ import annotations

from dataclasses import dataclass

from .buffer import Buffer
from .node_id import NodeID

__all__ = ["ExpandedNodeID"]


@dataclass
class ExpandedNodeID:
    """A node id extended with an optional namespace URI and server index.

    Which optional fields are on the wire is taken from the flags in the
    encoding mask of ``node_id`` (Part 6, 5.2.2.10).
    """

    node_id: NodeID
    namespace_uri: str = ""
    server_index: int = 0

    @classmethod
    def create(
        cls,
        has_uri: bool,
        has_index: bool,
        node_id: NodeID,
        uri: str = "",
        index: int = 0,
    ) -> ExpandedNodeID:
        """Build an expanded node id, setting the flags on ``node_id``."""
        value = cls(node_id=node_id, server_index=index)
        if has_uri:
            node_id.set_uri_flag()
            value.namespace_uri = uri
        if has_index:
            node_id.set_index_flag()
        return value

    @classmethod
    def two_byte(cls, ident: int) -> ExpandedNodeID:
        return cls(node_id=NodeID.two_byte(ident))

    @classmethod
    def four_byte(cls, ns: int, ident: int) -> ExpandedNodeID:
        return cls(node_id=NodeID.four_byte(ns, ident))

    def has_namespace_uri(self) -> bool:
        return (self.node_id.mask >> 7) & 0x1 == 1

    def has_server_index(self) -> bool:
        return (self.node_id.mask >> 6) & 0x1 == 1

    def __str__(self) -> str:
        return str(self.node_id)

    def encode(self) -> bytes:
        buf = Buffer()
        buf.write(self.node_id.encode())
        if self.has_namespace_uri():
            buf.write_string(self.namespace_uri)
        if self.has_server_index():
            buf.write_uint32(self.server_index)
        return buf.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> tuple[ExpandedNodeID, int]:
        buf = Buffer(data)
        node_id, consumed = NodeID.decode(data)
        buf.read_n(consumed)
        value = cls(node_id=node_id)
        if value.has_namespace_uri():
            value.namespace_uri = buf.read_string()
        if value.has_server_index():
            value.server_index = buf.read_uint32()
        return value, buf.pos