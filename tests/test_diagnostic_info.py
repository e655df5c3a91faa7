import pytest

from uacodec.buffer import UnexpectedEOF
from uacodec.diagnostic_info import (
    DIAGNOSTIC_INFO_ADDITIONAL_INFO,
    DIAGNOSTIC_INFO_INNER_DIAGNOSTIC_INFO,
    DIAGNOSTIC_INFO_INNER_STATUS_CODE,
    DIAGNOSTIC_INFO_LOCALE,
    DIAGNOSTIC_INFO_LOCALIZED_TEXT,
    DIAGNOSTIC_INFO_NAMESPACE_URI,
    DIAGNOSTIC_INFO_SYMBOLIC_ID,
    DiagnosticInfo,
)

ALL = (
    DIAGNOSTIC_INFO_SYMBOLIC_ID
    | DIAGNOSTIC_INFO_NAMESPACE_URI
    | DIAGNOSTIC_INFO_LOCALIZED_TEXT
    | DIAGNOSTIC_INFO_LOCALE
    | DIAGNOSTIC_INFO_ADDITIONAL_INFO
    | DIAGNOSTIC_INFO_INNER_STATUS_CODE
    | DIAGNOSTIC_INFO_INNER_DIAGNOSTIC_INFO
)

CASES = [
    ("nothing", DiagnosticInfo(), bytes([0x00])),
    (
        "symbolic id",
        DiagnosticInfo(encoding_mask=DIAGNOSTIC_INFO_SYMBOLIC_ID, symbolic_id=1),
        bytes([0x01, 0x01, 0x00, 0x00, 0x00]),
    ),
    (
        "namespace uri",
        DiagnosticInfo(encoding_mask=DIAGNOSTIC_INFO_NAMESPACE_URI, namespace_uri=2),
        bytes([0x02, 0x02, 0x00, 0x00, 0x00]),
    ),
    (
        "localized text",
        DiagnosticInfo(encoding_mask=DIAGNOSTIC_INFO_LOCALIZED_TEXT, localized_text=3),
        bytes([0x04, 0x03, 0x00, 0x00, 0x00]),
    ),
    (
        "locale",
        DiagnosticInfo(encoding_mask=DIAGNOSTIC_INFO_LOCALE, locale=4),
        bytes([0x08, 0x04, 0x00, 0x00, 0x00]),
    ),
    (
        "additional info",
        DiagnosticInfo(
            encoding_mask=DIAGNOSTIC_INFO_ADDITIONAL_INFO, additional_info="foobar"
        ),
        bytes([0x10, 0x06, 0x00, 0x00, 0x00, 0x66, 0x6F, 0x6F, 0x62, 0x61, 0x72]),
    ),
    (
        "inner status code",
        DiagnosticInfo(
            encoding_mask=DIAGNOSTIC_INFO_INNER_STATUS_CODE, inner_status_code=6
        ),
        bytes([0x20, 0x06, 0x00, 0x00, 0x00]),
    ),
    (
        "inner diagnostic info",
        DiagnosticInfo(
            encoding_mask=DIAGNOSTIC_INFO_INNER_DIAGNOSTIC_INFO,
            inner_diagnostic_info=DiagnosticInfo(
                encoding_mask=DIAGNOSTIC_INFO_SYMBOLIC_ID, symbolic_id=7
            ),
        ),
        bytes([0x40, 0x01, 0x07, 0x00, 0x00, 0x00]),
    ),
    (
        "all",
        DiagnosticInfo(
            encoding_mask=ALL,
            symbolic_id=1,
            namespace_uri=2,
            locale=3,
            localized_text=4,
            additional_info="foobar",
            inner_status_code=6,
            inner_diagnostic_info=DiagnosticInfo(
                encoding_mask=DIAGNOSTIC_INFO_SYMBOLIC_ID, symbolic_id=7
            ),
        ),
        bytes(
            [
                0x7F,
                0x01, 0x00, 0x00, 0x00,
                0x02, 0x00, 0x00, 0x00,
                0x03, 0x00, 0x00, 0x00,
                0x04, 0x00, 0x00, 0x00,
                0x06, 0x00, 0x00, 0x00, 0x66, 0x6F, 0x6F, 0x62, 0x61, 0x72,
                0x06, 0x00, 0x00, 0x00,
                0x01, 0x07, 0x00, 0x00, 0x00,
            ]
        ),
    ),
]


@pytest.mark.parametrize("name,value,data", CASES, ids=[c[0] for c in CASES])
def test_encode(name, value, data):
    assert DiagnosticInfo.encode(value) == data


@pytest.mark.parametrize("name,value,data", CASES, ids=[c[0] for c in CASES])
def test_decode(name, value, data):
    decoded, consumed = DiagnosticInfo.decode(data)
    assert decoded == value
    assert consumed == len(data)


def test_decode_ignores_trailing_bytes():
    decoded, consumed = DiagnosticInfo.decode(bytes([0x01, 0x01, 0, 0, 0, 0xAA]))
    assert decoded.symbolic_id == 1
    assert consumed == 5


def test_update_mask_sets_all_flags():
    info = DiagnosticInfo(
        symbolic_id=1,
        namespace_uri=2,
        locale=3,
        localized_text=4,
        additional_info="foobar",
        inner_status_code=6,
        inner_diagnostic_info=DiagnosticInfo(),
    )
    info.update_mask()
    assert info.encoding_mask == ALL


def test_update_mask_empty():
    info = DiagnosticInfo(encoding_mask=ALL)
    info.update_mask()
    assert info.encoding_mask == 0


def test_has():
    info = DiagnosticInfo(encoding_mask=DIAGNOSTIC_INFO_LOCALE)
    assert info.has(DIAGNOSTIC_INFO_LOCALE)
    assert not info.has(DIAGNOSTIC_INFO_SYMBOLIC_ID)


def test_decode_truncated():
    with pytest.raises(UnexpectedEOF):
        DiagnosticInfo.decode(bytes([0x01, 0x01, 0x00]))