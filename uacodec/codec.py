"""Encoding and decoding of values described by wire kinds.

A wire kind is one of:

* a member of :class:`Kind` for a built-in scalar,
* an :class:`ArrayOf` for a length-prefixed array,
* a class with an ``encode()`` method and a ``decode(data)`` classmethod
  that returns ``(value, consumed)``,
* a dataclass whose fields are declared with :func:`wire_field`; its fields
  are encoded one after another in declaration order.

``None`` in place of a class or dataclass value encodes to nothing, while a
``None`` array encodes as the null array.
"""

from __future__ import annotations

import dataclasses
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

from .buffer import MAX_INT32, NULL_LENGTH, Buffer, CodecError

__all__ = ["Kind", "ArrayOf", "wire_field", "encode", "decode"]

WIRE_KIND = "uacodec.kind"


class Kind(Enum):
    """Built-in scalar types of the binary encoding."""

    BOOL = "bool"
    INT8 = "int8"
    BYTE = "byte"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"
    BYTE_STRING = "byte_string"
    DATETIME = "datetime"


@dataclass(frozen=True)
class ArrayOf:
    """A length-prefixed array whose elements have the kind ``item``."""

    item: Any


WireKind = Union[Kind, ArrayOf, type]


def wire_field(kind: WireKind, **kwargs: Any) -> Any:
    """Declare a dataclass field that is encoded with the given kind."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[WIRE_KIND] = kind
    return dataclasses.field(metadata=metadata, **kwargs)


def _read_byte_string(buf: Buffer) -> bytes | None:
    n = buf.read_uint32()
    if n == NULL_LENGTH:
        return None
    if n > MAX_INT32:
        raise CodecError(f"byte string too large: {n}")
    return buf.read_n(n)


_READERS: dict[Kind, Callable[[Buffer], Any]] = {
    Kind.BOOL: Buffer.read_bool,
    Kind.INT8: Buffer.read_int8,
    Kind.BYTE: Buffer.read_byte,
    Kind.INT16: Buffer.read_int16,
    Kind.UINT16: Buffer.read_uint16,
    Kind.INT32: Buffer.read_int32,
    Kind.UINT32: Buffer.read_uint32,
    Kind.INT64: Buffer.read_int64,
    Kind.UINT64: Buffer.read_uint64,
    Kind.FLOAT32: Buffer.read_float32,
    Kind.FLOAT64: Buffer.read_float64,
    Kind.STRING: Buffer.read_string,
    Kind.BYTE_STRING: _read_byte_string,
    Kind.DATETIME: Buffer.read_time,
}

_WRITERS: dict[Kind, Callable[[Buffer, Any], None]] = {
    Kind.BOOL: Buffer.write_bool,
    Kind.INT8: Buffer.write_int8,
    Kind.BYTE: Buffer.write_byte,
    Kind.INT16: Buffer.write_int16,
    Kind.UINT16: Buffer.write_uint16,
    Kind.INT32: Buffer.write_int32,
    Kind.UINT32: Buffer.write_uint32,
    Kind.INT64: Buffer.write_int64,
    Kind.UINT64: Buffer.write_uint64,
    Kind.FLOAT32: Buffer.write_float32,
    Kind.FLOAT64: Buffer.write_float64,
    Kind.STRING: lambda buf, v: buf.write_string(v or ""),
    Kind.BYTE_STRING: Buffer.write_byte_string,
    Kind.DATETIME: Buffer.write_time,
}


def _is_binary_codec(kind: Any) -> bool:
    return (
        isinstance(kind, type)
        and callable(getattr(kind, "encode", None))
        and callable(getattr(kind, "decode", None))
    )


def _wire_fields(kind: type):
    for f in dataclasses.fields(kind):
        field_kind = f.metadata.get(WIRE_KIND)
        if field_kind is None:
            raise CodecError(f"field {kind.__name__}.{f.name} has no wire kind")
        yield f.name, field_kind


def _write(buf: Buffer, value: Any, kind: WireKind) -> None:
    if isinstance(kind, Kind):
        try:
            _WRITERS[kind](buf, value)
        except (TypeError, struct.error) as exc:
            raise CodecError(f"cannot encode {value!r} as {kind.value}") from exc
    elif isinstance(kind, ArrayOf):
        _write_array(buf, value, kind.item)
    elif _is_binary_codec(kind):
        if value is not None:
            buf.write(value.encode())
    elif isinstance(kind, type) and dataclasses.is_dataclass(kind):
        if value is not None:
            for name, field_kind in _wire_fields(kind):
                _write(buf, getattr(value, name), field_kind)
    else:
        raise CodecError(f"unsupported type: {kind!r}")


def _write_array(buf: Buffer, value: Any, item: WireKind) -> None:
    if value is None:
        buf.write_uint32(NULL_LENGTH)
        return
    if len(value) > MAX_INT32:
        raise CodecError("array too large")
    buf.write_uint32(len(value))
    if item is Kind.BYTE:
        buf.write(bytes(value))
        return
    for element in value:
        _write(buf, element, item)


def _read(buf: Buffer, kind: WireKind) -> Any:
    if isinstance(kind, Kind):
        return _READERS[kind](buf)
    if isinstance(kind, ArrayOf):
        return _read_array(buf, kind.item)
    if _is_binary_codec(kind):
        value, consumed = kind.decode(buf.getvalue())
        buf.read_n(consumed)
        return value
    if isinstance(kind, type) and dataclasses.is_dataclass(kind):
        values = {name: _read(buf, field_kind) for name, field_kind in _wire_fields(kind)}
        return kind(**values)
    raise CodecError(f"unsupported type {kind!r}")


def _read_array(buf: Buffer, item: WireKind) -> Any:
    n = buf.read_uint32()
    if n == NULL_LENGTH:
        return None
    if n > MAX_INT32:
        raise CodecError(f"array too large: {n}")
    if item is Kind.BYTE:
        return buf.read_n(n)
    return [_read(buf, item) for _ in range(n)]


def encode(value: Any, kind: WireKind) -> bytes:
    """Encode ``value`` as the wire kind ``kind``."""
    buf = Buffer()
    _write(buf, value, kind)
    return buf.getvalue()


def decode(data: bytes, kind: WireKind) -> tuple[Any, int]:
    """Decode a value of wire kind ``kind`` from the front of ``data``.

    Returns the value and the number of bytes consumed.
    """
    buf = Buffer(data)
    value = _read(buf, kind)
    return value, buf.pos