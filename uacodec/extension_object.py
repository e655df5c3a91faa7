"""Extension objects: encoded values prefixed by their type id."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from . import codec
from .buffer import NULL_LENGTH, Buffer
from .codec import Kind
from .expanded_node_id import ExpandedNodeID
from .node_id import NodeID
from .typereg import TypeRegistry

__all__ = [
    "EXTENSION_OBJECT_EMPTY",
    "EXTENSION_OBJECT_BINARY",
    "EXTENSION_OBJECT_XML",
    "XMLElement",
    "ExtensionObject",
    "register_extension_object",
    "extension_object_type_id",
]

EXTENSION_OBJECT_EMPTY = 0
EXTENSION_OBJECT_BINARY = 1
EXTENSION_OBJECT_XML = 2

_eotypes = TypeRegistry()


class XMLElement(str):
    """An XML fragment carried as a string."""


def register_extension_object(type_id: NodeID, cls: type) -> None:
    """Register an extension object class; raises ValueError if the id is taken."""
    try:
        _eotypes.register(type_id, cls)
    except ValueError as exc:
        raise ValueError(f"Extension object {exc}") from exc


def extension_object_type_id(value: Any) -> ExpandedNodeID:
    """Return the registered type id of ``value``, or the null id."""
    node_id = _eotypes.lookup(value)
    if node_id is not None:
        return ExpandedNodeID(node_id=node_id)
    return ExpandedNodeID.two_byte(0)


def _encode_value(value: Any) -> bytes:
    if isinstance(value, XMLElement):
        return codec.encode(str(value), Kind.STRING)
    return codec.encode(value, type(value))


@dataclass
class ExtensionObject:
    """A value prefixed by the id of its encoding and its length (Part 6, 5.2.2.15)."""

    encoding_mask: int = EXTENSION_OBJECT_EMPTY
    type_id: ExpandedNodeID | None = None
    value: Any = None

    @classmethod
    def wrap(cls, value: Any) -> ExtensionObject:
        """Wrap ``value`` with its registered type id and matching mask."""
        obj = cls(type_id=extension_object_type_id(value), value=value)
        obj.update_mask()
        return obj

    def update_mask(self) -> None:
        if self.value is None:
            self.encoding_mask = EXTENSION_OBJECT_EMPTY
        elif isinstance(self.value, XMLElement):
            self.encoding_mask = EXTENSION_OBJECT_XML
        else:
            self.encoding_mask = EXTENSION_OBJECT_BINARY

    def encode(self) -> bytes:
        buf = Buffer()
        type_id = self.type_id if self.type_id is not None else ExpandedNodeID.two_byte(0)
        buf.write(type_id.encode())
        buf.write_byte(self.encoding_mask)
        if self.encoding_mask == EXTENSION_OBJECT_EMPTY:
            return buf.getvalue()
        body = _encode_value(self.value)
        buf.write_uint32(len(body))
        buf.write(body)
        return buf.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> tuple[ExtensionObject, int]:
        """Decode an extension object; unknown types leave ``value`` as None."""
        buf = Buffer(data)
        type_id, consumed = ExpandedNodeID.decode(data)
        buf.read_n(consumed)
        obj = cls(type_id=type_id, encoding_mask=buf.read_byte())
        if obj.encoding_mask == EXTENSION_OBJECT_EMPTY:
            return obj, buf.pos

        length = buf.read_uint32()
        if length in (0, NULL_LENGTH):
            return obj, buf.pos
        body = buf.read_n(length)

        if obj.encoding_mask == EXTENSION_OBJECT_XML:
            text, _ = codec.decode(body, Kind.STRING)
            obj.value = XMLElement(text)
            return obj, buf.pos

        template = _eotypes.new(type_id.node_id)
        if template is None:
            return obj, buf.pos
        obj.value, _ = codec.decode(body, type(template))
        return obj, buf.pos