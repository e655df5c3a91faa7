from dataclasses import dataclass

import pytest

from uacodec.buffer import UnexpectedEOF
from uacodec.codec import Kind, wire_field
from uacodec.expanded_node_id import ExpandedNodeID
from uacodec.extension_object import (
    EXTENSION_OBJECT_BINARY,
    EXTENSION_OBJECT_EMPTY,
    EXTENSION_OBJECT_XML,
    ExtensionObject,
    XMLElement,
    extension_object_type_id,
    register_extension_object,
)
from uacodec.node_id import NodeID


@dataclass
class AnonymousToken:
    policy_id: str = wire_field(Kind.STRING, default="")


@dataclass
class Unregistered:
    value: int = wire_field(Kind.UINT32, default=0)


register_extension_object(NodeID.four_byte(0, 321), AnonymousToken)

ANONYMOUS_BYTES = bytes(
    [
        0x01, 0x00, 0x41, 0x01,
        0x01,
        0x0D, 0x00, 0x00, 0x00,
        0x09, 0x00, 0x00, 0x00, 0x61, 0x6E, 0x6F, 0x6E, 0x79, 0x6D, 0x6F, 0x75, 0x73,
    ]
)


def test_encode_anonymous_token():
    obj = ExtensionObject.wrap(AnonymousToken(policy_id="anonymous"))
    assert obj.encoding_mask == EXTENSION_OBJECT_BINARY
    assert obj.encode() == ANONYMOUS_BYTES


def test_decode_anonymous_token():
    decoded, consumed = ExtensionObject.decode(ANONYMOUS_BYTES)
    assert decoded == ExtensionObject.wrap(AnonymousToken(policy_id="anonymous"))
    assert consumed == len(ANONYMOUS_BYTES)


def test_empty_object():
    obj = ExtensionObject.wrap(None)
    assert obj.encoding_mask == EXTENSION_OBJECT_EMPTY
    assert obj.encode() == bytes([0x00, 0x00, 0x00])
    decoded, consumed = ExtensionObject.decode(obj.encode())
    assert decoded.value is None
    assert consumed == 3


def test_additional_header_with_type_id():
    obj = ExtensionObject(type_id=ExpandedNodeID.two_byte(255))
    assert obj.encode() == bytes([0x00, 0xFF, 0x00])


def test_xml_round_trip():
    obj = ExtensionObject.wrap(XMLElement("<a/>"))
    assert obj.encoding_mask == EXTENSION_OBJECT_XML
    data = obj.encode()
    decoded, consumed = ExtensionObject.decode(data)
    assert decoded.value == "<a/>"
    assert isinstance(decoded.value, XMLElement)
    assert consumed == len(data)


def test_unknown_type_skips_body():
    body = bytes([0x01, 0x02, 0x03])
    data = NodeID.two_byte(7).encode() + bytes([0x01, 0x03, 0, 0, 0]) + body
    decoded, consumed = ExtensionObject.decode(data)
    assert decoded.value is None
    assert decoded.encoding_mask == EXTENSION_OBJECT_BINARY
    assert consumed == len(data)


def test_type_id_of_unregistered_is_null():
    assert extension_object_type_id(Unregistered()) == ExpandedNodeID.two_byte(0)


def test_type_id_of_registered():
    type_id = extension_object_type_id(AnonymousToken())
    assert str(type_id) == str(NodeID.four_byte(0, 321))


def test_duplicate_registration_raises():
    with pytest.raises(ValueError):
        register_extension_object(NodeID.four_byte(0, 321), Unregistered)


def test_decode_truncated_body():
    with pytest.raises(UnexpectedEOF):
        ExtensionObject.decode(ANONYMOUS_BYTES[:-2])