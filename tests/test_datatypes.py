import pytest

from uacodec.buffer import UnexpectedEOF
from uacodec.codec import ArrayOf, decode, encode
from uacodec.datatypes import (
    GUID,
    LOCALIZED_TEXT_LOCALE,
    LOCALIZED_TEXT_TEXT,
    LocalizedText,
    QualifiedName,
)

GUID_CASES = [
    (
        "AAAABBBB-CCDD-EEFF-0102-0123456789AB",
        bytes(
            [0xBB, 0xBB, 0xAA, 0xAA, 0xDD, 0xCC, 0xFF, 0xEE,
             0x01, 0x02, 0x01, 0x23, 0x45, 0x67, 0x89, 0xAB]
        ),
    ),
    (
        "72962B91-FA75-4AE6-8D28-B404DC7DAF63",
        bytes(
            [0x91, 0x2B, 0x96, 0x72, 0x75, 0xFA, 0xE6, 0x4A,
             0x8D, 0x28, 0xB4, 0x04, 0xDC, 0x7D, 0xAF, 0x63]
        ),
    ),
]


@pytest.mark.parametrize("text,data", GUID_CASES)
def test_guid_codec(text, data):
    guid = GUID.parse(text)
    assert guid.encode() == data
    assert GUID.decode(data) == (guid, 16)
    assert str(guid) == text


@pytest.mark.parametrize(
    "text,expected",
    [
        ("5eac051c-c313-43d7-b790-24aa2c3cfd37", "5EAC051C-C313-43D7-B790-24AA2C3CFD37"),
        ("5EAC051CC31343D7B79024AA2C3CFD37", "5EAC051C-C313-43D7-B790-24AA2C3CFD37"),
        ("00000000-0000-0000-0000-000000000000", "00000000-0000-0000-0000-000000000000"),
    ],
)
def test_guid_string(text, expected):
    assert str(GUID.parse(text)) == expected


@pytest.mark.parametrize("text", ["a", "x", "", "AAAA", "ZZZZBBBB-CCDD-EEFF-0102-0123456789AB"])
def test_guid_parse_invalid(text):
    with pytest.raises(ValueError):
        GUID.parse(text)


def test_guid_decode_short():
    with pytest.raises(UnexpectedEOF):
        GUID.decode(b"\x01\x02\x03")


def test_guid_fields():
    guid = GUID.parse("AAAABBBB-CCDD-EEFF-0102-0123456789AB")
    assert guid.data1 == 0xAAAABBBB
    assert guid.data2 == 0xCCDD
    assert guid.data3 == 0xEEFF
    assert guid.data4 == bytes.fromhex("01020123456789AB")


LOCALIZED_TEXT_CASES = [
    ("nothing", LocalizedText.create(""), b"\x00"),
    ("has-locale", LocalizedText.create("", "foo"), b"\x01\x03\x00\x00\x00foo"),
    ("has-text", LocalizedText.create("bar"), b"\x02\x03\x00\x00\x00bar"),
    (
        "has-both",
        LocalizedText.create("bar", "foo"),
        b"\x03\x03\x00\x00\x00foo\x03\x00\x00\x00bar",
    ),
]


@pytest.mark.parametrize(
    "value,data",
    [c[1:] for c in LOCALIZED_TEXT_CASES],
    ids=[c[0] for c in LOCALIZED_TEXT_CASES],
)
def test_localized_text_codec(value, data):
    assert value.encode() == data
    assert LocalizedText.decode(data) == (value, len(data))


def test_localized_text_mask():
    value = LocalizedText(locale="en", text="hello")
    assert value.encoding_mask == 0
    assert value.encode() == b"\x00"
    value.update_mask()
    assert value.encoding_mask == LOCALIZED_TEXT_LOCALE | LOCALIZED_TEXT_TEXT
    assert value.has(LOCALIZED_TEXT_TEXT)
    assert value.has(LOCALIZED_TEXT_LOCALE)


def test_localized_text_decode_ignores_unflagged_fields():
    value, consumed = LocalizedText.decode(b"\x02\x02\x00\x00\x00hi\xff")
    assert value == LocalizedText(encoding_mask=2, locale="", text="hi")
    assert consumed == 7


QUALIFIED_NAME_CASES = [
    ("normal", QualifiedName(1, "foobar"), b"\x01\x00\x06\x00\x00\x00foobar"),
    ("empty", QualifiedName(1), b"\x01\x00\xff\xff\xff\xff"),
]


@pytest.mark.parametrize(
    "value,data",
    [c[1:] for c in QUALIFIED_NAME_CASES],
    ids=[c[0] for c in QUALIFIED_NAME_CASES],
)
def test_qualified_name_codec(value, data):
    assert value.encode() == data
    assert QualifiedName.decode(data) == (value, len(data))


def test_types_nest_in_codec_arrays():
    names = [QualifiedName(1, "a"), QualifiedName(2, "bc")]
    data = encode(names, ArrayOf(QualifiedName))
    assert data[:4] == b"\x02\x00\x00\x00"
    assert decode(data, ArrayOf(QualifiedName)) == (names, len(data))

    guid = GUID.parse("72962B91-FA75-4AE6-8D28-B404DC7DAF63")
    assert decode(encode(guid, GUID) + b"\xff", GUID) == (guid, 16)