"""Registry and decoding of service request and response objects."""

from __future__ import annotations

from typing import Any

from . import codec
from .buffer import CodecError
from .expanded_node_id import ExpandedNodeID
from .node_id import NodeID
from .typereg import TypeRegistry

__all__ = [
    "ServiceUnsupported",
    "register_service",
    "service_type_id",
    "decode_service",
]

_svcreg = TypeRegistry()


class ServiceUnsupported(CodecError):
    """Raised when a message carries a service type id that is not registered."""

    status = 0x800B0000

    def __init__(self, type_id: ExpandedNodeID | None = None) -> None:
        detail = f": {type_id}" if type_id is not None else ""
        super().__init__(f"service unsupported{detail}")
        self.type_id = type_id


def register_service(type_id: int, cls: type) -> None:
    """Register a service class under a namespace 0 id; raises ValueError if taken."""
    try:
        _svcreg.register(NodeID.four_byte(0, type_id), cls)
    except ValueError as exc:
        raise ValueError(f"Service {exc}") from exc


def service_type_id(value: Any) -> int:
    """Return the registered id of the service object, or 0 if it is unknown."""
    node_id = _svcreg.lookup(value)
    return 0 if node_id is None else node_id.int_id


def decode_service(data: bytes) -> tuple[ExpandedNodeID, Any]:
    """Decode a type id followed by the service object it names."""
    type_id, consumed = ExpandedNodeID.decode(data)
    template = _svcreg.new(type_id.node_id)
    if template is None:
        raise ServiceUnsupported(type_id)
    value, _ = codec.decode(data[consumed:], type(template))
    return type_id, value