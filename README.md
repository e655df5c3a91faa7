# uacodec

`uacodec` encodes and decodes the OPC UA binary format for built-in data types,
as set out in Part 6, section 5 of the specification. It covers integers,
floats, strings, byte strings, date/times, GUIDs, node ids, expanded node ids,
qualified names, localized texts, diagnostic infos and extension objects. It
also gives you a small declarative codec for your own structures, and
registries that map type ids to classes.

The package has no dependencies outside the standard library and needs
Python 3.10 or later.

## Installation

```
pip install uacodec
```

To install the test requirements as well:

```
pip install "uacodec[test]"
```

## Modules

| Module | Contents |
| --- | --- |
| `uacodec.buffer` | `Buffer`, `CodecError`, `UnexpectedEOF` |
| `uacodec.enums` | `AttributeID`, `TypeID`, `ReturnDiagnostics`, `NODE_CLASS_ALL`, security policy URIs, `format_security_policy_uri`, `has_return_diagnostics` |
| `uacodec.codec` | `Kind`, `ArrayOf`, `wire_field`, `encode`, `decode` |
| `uacodec.datatypes` | `GUID`, `LocalizedText`, `QualifiedName` |
| `uacodec.node_id` | `NodeIDType`, `NodeID`, `parse_node_id` |
| `uacodec.expanded_node_id` | `ExpandedNodeID` |
| `uacodec.diagnostic_info` | `DiagnosticInfo` |
| `uacodec.typereg` | `TypeRegistry` |
| `uacodec.extension_object` | `ExtensionObject`, `XMLElement`, `register_extension_object`, `extension_object_type_id` |
| `uacodec.service` | `ServiceUnsupported`, `register_service`, `service_type_id`, `decode_service` |

Every type that has its own binary form offers `encode()`, which returns
`bytes`. It also offers a classmethod `decode(data)`, which reads from the
front of `data` and returns a `(value, bytes_consumed)` pair.

## Low-level buffer

`Buffer` reads little-endian primitives from the front of its data and writes
new data at the end:

```python
from uacodec.buffer import Buffer

buf = Buffer(b"")
buf.write_uint32(0x12345678)
buf.write_string("abc")
data = buf.getvalue()

reader = Buffer(data)
assert reader.read_uint32() == 0x12345678
assert reader.read_string() == "abc"
assert reader.remaining() == 0
```

- `getvalue()` returns the bytes that have not been read yet.
- If a read needs more bytes than are left, `UnexpectedEOF` is raised and the
  read position stays where it was. `UnexpectedEOF` is a subclass of
  `CodecError`.
- `write_string("")` writes a null string. `read_string()` returns `""` for
  both a null string and an empty one.
- `read_bytes()` returns `None` for both a null byte string and an empty one.
  `write_byte_string(None)` writes a null byte string.
- Date/times are counted in 100-nanosecond ticks since 1601-01-01.
  `read_time()` returns an aware UTC `datetime`, or `None` for the zero value.
  `write_time(None)` writes the zero value, and a naive `datetime` is taken to
  be UTC.
- Floats keep the quiet-NaN bit pattern that the format defines.

## Node ids

```python
from uacodec.node_id import NodeID, parse_node_id

nid = parse_node_id("ns=1;i=2")
assert str(nid) == "ns=1;i=2"
assert NodeID.decode(nid.encode())[0] == nid
```

`NodeID.parse` (and `parse_node_id`) accept `ns=<n>;i=`, `s=`, `g=` and `b=`
identifiers. You can leave out the `s=` prefix. A numeric id comes back in the
smallest encoding that holds it: two-byte, four-byte or numeric. Namespace
URLs (`nsu=`) are not supported. Bad input raises `ValueError`.

The constructors are `NodeID.two_byte`, `four_byte`, `numeric`, `string`,
`guid` and `byte_string`. A node id exposes `type`, `namespace`, `int_id` and
`string_id`. It can be changed through `set_namespace`, `set_int_id` and
`set_string_id`, and each of these raises `ValueError` when the value is out of
range or does not fit the id type. `to_json()` gives a JSON string, and
`NodeID.from_json` turns a JSON string back into a node id. For JSON `null`,
`from_json` returns `None`.

`ExpandedNodeID.create(has_uri, has_index, node_id, uri, index)` sets the
namespace-URI and server-index flags on the node id. Those flags decide which
optional fields go on the wire.

## Structured values

```python
from uacodec.datatypes import GUID, LocalizedText, QualifiedName

text = LocalizedText.create("bar", "foo")       # text, locale
assert text.encode()[0] == 0x03

guid = GUID.parse("72962B91-FA75-4AE6-8D28-B404DC7DAF63")
assert str(guid) == "72962B91-FA75-4AE6-8D28-B404DC7DAF63"

name = QualifiedName(namespace_index=1, name="foobar")
assert QualifiedName.decode(name.encode())[0] == name
```

`LocalizedText` and `DiagnosticInfo` both have an `encoding_mask` that says
which fields are written. `update_mask()` sets the mask from the fields that
hold a value.

## Your own structures

You can describe a structure as a dataclass whose fields are declared with
`wire_field`. The fields are encoded in the order they are declared:

```python
from dataclasses import dataclass
from uacodec.codec import ArrayOf, Kind, decode, encode, wire_field
from uacodec.datatypes import QualifiedName

@dataclass
class Point:
    x: int = wire_field(Kind.UINT32, default=0)
    name: QualifiedName = wire_field(QualifiedName, default=None)
    tags: list = wire_field(ArrayOf(Kind.STRING), default=None)

data = encode(Point(1, QualifiedName(1, "p"), ["a"]), Point)
value, consumed = decode(data, Point)
```

A kind can be any of the following:

- a `Kind` member
- an `ArrayOf(...)`
- a class with `encode()` and a `decode(data)` classmethod
- another such dataclass

A `None` array is written as the null array, and a null array decodes to
`None`. A `None` nested structure is written as nothing.

## Extension objects and services

`register_extension_object(node_id, cls)` registers a class as an extension
object payload. `register_service(type_id, cls)` registers a service message
under a namespace-0 four-byte id. Once a class is registered:

- `ExtensionObject.wrap(value)` attaches the registered type id.
- `ExtensionObject.decode` and `decode_service` build the class from the type
  id on the wire, so each registered class must be constructible with no
  arguments.
- If an extension object's type is unknown, its `value` is left as `None`.
- If a service type id is unknown, `decode_service` raises
  `ServiceUnsupported`.

If you register an id a second time, `ValueError` is raised.

## What this package does not do

`uacodec` is an encoding library only. It does not provide:

- network connections, secure channels, sessions or a client or server
- a Variant or DataValue type
- a table of status codes
- the standard set of service request and response structures

You declare the service structures you need yourself, with `wire_field`, and
register them with `register_service`.