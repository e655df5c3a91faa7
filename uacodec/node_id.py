"""Node identifiers for nodes in the address space of a server."""

from __future__ import annotations

import base64
import binascii
import json
import re
from dataclasses import dataclass
from enum import IntEnum

from .buffer import Buffer, CodecError
from .datatypes import GUID

__all__ = ["NodeIDType", "NodeID", "parse_node_id"]

MAX_UINT8 = 0xFF
MAX_UINT16 = 0xFFFF
MAX_UINT32 = 0xFFFFFFFF
MAX_UINT64 = 0xFFFFFFFFFFFFFFFF

_URI_FLAG = 0x80
_INDEX_FLAG = 0x40

_SIGNED_DECIMAL = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_DECIMAL = re.compile(r"[0-9]+")


class NodeIDType(IntEnum):
    """The node id type held in the low four bits of the encoding mask."""

    TWO_BYTE = 0
    FOUR_BYTE = 1
    NUMERIC = 2
    STRING = 3
    GUID = 4
    BYTE_STRING = 5


def _check_range(name: str, value: int, limit: int) -> None:
    if not 0 <= value <= limit:
        raise ValueError(f"{name} out of range [0..{limit}]: {value}")


def _parse_guid(text: str) -> GUID | None:
    try:
        return GUID.parse(text)
    except ValueError:
        return None


@dataclass
class NodeID:
    """An identifier for a node; covers every node id encoding.

    ``mask`` is the full encoding mask including the namespace URI and
    server index flags used by expanded node ids.
    """

    mask: int = NodeIDType.TWO_BYTE
    namespace: int = 0
    int_id: int = 0
    data: bytes | None = None
    gid: GUID | None = None

    # -- constructors ----------------------------------------------------

    @classmethod
    def two_byte(cls, ident: int) -> NodeID:
        """Return a two byte numeric node id in namespace 0."""
        _check_range("id", ident, MAX_UINT8)
        return cls(mask=NodeIDType.TWO_BYTE, int_id=ident)

    @classmethod
    def four_byte(cls, ns: int, ident: int) -> NodeID:
        """Return a four byte numeric node id."""
        _check_range("namespace", ns, MAX_UINT8)
        _check_range("id", ident, MAX_UINT16)
        return cls(mask=NodeIDType.FOUR_BYTE, namespace=ns, int_id=ident)

    @classmethod
    def numeric(cls, ns: int, ident: int) -> NodeID:
        """Return a numeric node id."""
        _check_range("namespace", ns, MAX_UINT16)
        _check_range("id", ident, MAX_UINT32)
        return cls(mask=NodeIDType.NUMERIC, namespace=ns, int_id=ident)

    @classmethod
    def string(cls, ns: int, ident: str) -> NodeID:
        """Return a string node id."""
        _check_range("namespace", ns, MAX_UINT16)
        return cls(mask=NodeIDType.STRING, namespace=ns, data=ident.encode("utf-8"))

    @classmethod
    def guid(cls, ns: int, ident: str) -> NodeID:
        """Return a GUID node id; an unparsable GUID leaves the id empty."""
        _check_range("namespace", ns, MAX_UINT16)
        return cls(mask=NodeIDType.GUID, namespace=ns, gid=_parse_guid(ident))

    @classmethod
    def byte_string(cls, ns: int, ident: bytes | None) -> NodeID:
        """Return an opaque (byte string) node id."""
        _check_range("namespace", ns, MAX_UINT16)
        data = None if ident is None else bytes(ident)
        return cls(mask=NodeIDType.BYTE_STRING, namespace=ns, data=data)

    @classmethod
    def parse(cls, text: str) -> NodeID:
        """Parse ``ns=<namespace>;{s,i,b,g}=<identifier>``.

        The ``s=`` prefix may be omitted for string ids. Numeric ids get the
        smallest encoding that holds the namespace and the value. Namespace
        URLs (``nsu=``) are not supported. Raises ValueError.
        """
        if text == "":
            return cls.two_byte(0)

        parts = text.split(";", 1)
        if len(parts) == 1:
            nsval, idval = "ns=0", parts[0]
        else:
            nsval, idval = parts

        if nsval.startswith("nsu="):
            raise ValueError(f"namespace urls are not supported: {text}")
        if not nsval.startswith("ns="):
            raise ValueError(f"invalid node id: {text}")
        digits = nsval[3:]
        if not _SIGNED_DECIMAL.fullmatch(digits):
            raise ValueError(f"invalid namespace id: {text}")
        ns = int(digits)
        if not -(1 << 63) <= ns < (1 << 63):
            raise ValueError(f"invalid namespace id: {text}")
        if not 0 <= ns <= MAX_UINT16:
            raise ValueError(f"namespace id out of range (0..65535): {text}")

        if idval.startswith("i="):
            digits = idval[2:]
            if not _UNSIGNED_DECIMAL.fullmatch(digits) or int(digits) > MAX_UINT64:
                raise ValueError(f"invalid numeric id: {text}")
            ident = int(digits)
            if ns == 0 and ident < 256:
                return cls.two_byte(ident)
            if ns < 256 and ident < MAX_UINT16:
                return cls.four_byte(ns, ident)
            if ident <= MAX_UINT32:
                return cls.numeric(ns, ident)
            raise ValueError(f"numeric id out of range (0..2^32-1): {text}")

        if idval.startswith("s="):
            return cls.string(ns, idval[2:])

        if idval.startswith("g="):
            node = cls.guid(ns, idval[2:])
            if node.string_id == "":
                raise ValueError(f"invalid guid node id: {text}")
            return node

        if idval.startswith("b="):
            try:
                raw = base64.b64decode(idval[2:], validate=True)
            except (binascii.Error, ValueError) as exc:
                raise ValueError(f"invalid opaque node id: {text}") from exc
            return cls.byte_string(ns, raw)

        if idval.startswith("ns="):
            raise ValueError(f"invalid node id: {text}")

        return cls.string(ns, idval)

    # -- flags and type --------------------------------------------------

    @property
    def type(self) -> int:
        """The node id type from the encoding mask."""
        return self.mask & 0xF

    @property
    def uri_flag(self) -> bool:
        return self.mask & _URI_FLAG == _URI_FLAG

    def set_uri_flag(self) -> None:
        """Set the namespace URI flag in the encoding mask."""
        self.mask |= _URI_FLAG

    @property
    def index_flag(self) -> bool:
        return self.mask & _INDEX_FLAG == _INDEX_FLAG

    def set_index_flag(self) -> None:
        """Set the server index flag in the encoding mask."""
        self.mask |= _INDEX_FLAG

    # -- identifier access ----------------------------------------------

    def set_namespace(self, value: int) -> None:
        """Set the namespace; raises ValueError if the type cannot hold it."""
        t = self.type
        if t == NodeIDType.TWO_BYTE:
            if value != 0:
                raise ValueError(f"out of range [0..0]: {value}")
            return
        limit = MAX_UINT8 if t == NodeIDType.FOUR_BYTE else MAX_UINT16
        if not 0 <= value <= limit:
            raise ValueError(f"out of range [0..{limit}]: {value}")
        self.namespace = value

    def set_int_id(self, value: int) -> None:
        """Set a numeric identifier; raises ValueError for other types or ranges."""
        limits = {
            NodeIDType.TWO_BYTE: MAX_UINT8,
            NodeIDType.FOUR_BYTE: MAX_UINT16,
            NodeIDType.NUMERIC: MAX_UINT32,
        }
        limit = limits.get(self.type)
        if limit is None:
            raise ValueError("incompatible node id type")
        if not 0 <= value <= limit:
            raise ValueError(f"out of range [0..{limit}]: {value}")
        self.int_id = value

    @property
    def string_id(self) -> str:
        """The string form of a string, GUID or opaque identifier, else ''."""
        t = self.type
        if t == NodeIDType.GUID:
            return "" if self.gid is None else str(self.gid)
        if t == NodeIDType.STRING:
            return (self.data or b"").decode("utf-8", errors="surrogateescape")
        if t == NodeIDType.BYTE_STRING:
            return base64.b64encode(self.data or b"").decode("ascii")
        return ""

    def set_string_id(self, value: str) -> None:
        """Set a string, GUID or base64 opaque identifier.

        Raises ValueError for other types or bad base64.
        """
        t = self.type
        if t == NodeIDType.GUID:
            self.gid = _parse_guid(value)
        elif t == NodeIDType.STRING:
            self.data = value.encode("utf-8")
        elif t == NodeIDType.BYTE_STRING:
            try:
                self.data = base64.b64decode(value, validate=True)
            except (binascii.Error, ValueError) as exc:
                raise ValueError(f"illegal base64 data: {value}") from exc
        else:
            raise ValueError("incompatible node id type")

    def __str__(self) -> str:
        t = self.type
        if t in (NodeIDType.TWO_BYTE, NodeIDType.FOUR_BYTE, NodeIDType.NUMERIC):
            ident = f"i={self.int_id}"
        elif t == NodeIDType.STRING:
            ident = f"s={self.string_id}"
        elif t == NodeIDType.GUID:
            ident = f"g={self.string_id}"
        elif t == NodeIDType.BYTE_STRING:
            ident = f"o={self.string_id}"
        else:
            raise ValueError(f"invalid node id type: {t}")
        if t == NodeIDType.TWO_BYTE or self.namespace == 0:
            return ident
        return f"ns={self.namespace};{ident}"

    # -- binary encoding -------------------------------------------------

    def encode(self) -> bytes:
        buf = Buffer()
        buf.write_byte(self.mask)
        t = self.type
        if t == NodeIDType.TWO_BYTE:
            buf.write_byte(self.int_id)
        elif t == NodeIDType.FOUR_BYTE:
            buf.write_byte(self.namespace)
            buf.write_uint16(self.int_id)
        elif t == NodeIDType.NUMERIC:
            buf.write_uint16(self.namespace)
            buf.write_uint32(self.int_id)
        elif t == NodeIDType.GUID:
            if self.gid is None:
                raise CodecError("guid node id has no guid")
            buf.write_uint16(self.namespace)
            buf.write(self.gid.encode())
        elif t in (NodeIDType.BYTE_STRING, NodeIDType.STRING):
            buf.write_uint16(self.namespace)
            buf.write_byte_string(self.data)
        else:
            raise CodecError(f"invalid node id type {t}")
        return buf.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> tuple[NodeID, int]:
        buf = Buffer(data)
        node = cls(mask=buf.read_byte())
        t = node.type
        if t == NodeIDType.TWO_BYTE:
            node.int_id = buf.read_byte()
        elif t == NodeIDType.FOUR_BYTE:
            node.namespace = buf.read_byte()
            node.int_id = buf.read_uint16()
        elif t == NodeIDType.NUMERIC:
            node.namespace = buf.read_uint16()
            node.int_id = buf.read_uint32()
        elif t == NodeIDType.GUID:
            node.namespace = buf.read_uint16()
            node.gid, consumed = GUID.decode(buf.getvalue())
            buf.read_n(consumed)
        elif t in (NodeIDType.BYTE_STRING, NodeIDType.STRING):
            node.namespace = buf.read_uint16()
            node.data = buf.read_bytes()
        else:
            raise CodecError(f"invalid node id type {t}")
        return node, buf.pos

    # -- JSON ------------------------------------------------------------

    def to_json(self) -> str:
        """Return the node id as a JSON string."""
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, text: str) -> NodeID | None:
        """Parse a node id from a JSON string; JSON null gives None."""
        value = json.loads(text)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError(f"node id must be a JSON string: {text}")
        return cls.parse(value)


def parse_node_id(text: str) -> NodeID:
    """Parse a node id from its string form; see :meth:`NodeID.parse`."""
    return NodeID.parse(text)