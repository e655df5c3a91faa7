"""GUID, LocalizedText and QualifiedName built-in types."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .buffer import Buffer
from .codec import Kind, wire_field

__all__ = [
    "GUID",
    "LOCALIZED_TEXT_LOCALE",
    "LOCALIZED_TEXT_TEXT",
    "LocalizedText",
    "QualifiedName",
]

_HEX = re.compile(r"[0-9a-fA-F]*")


@dataclass(frozen=True)
class GUID:
    """A 16-byte globally unique identifier (Part 6, 5.1.3)."""

    data1: int = 0
    data2: int = 0
    data3: int = 0
    data4: bytes = bytes(8)

    @classmethod
    def parse(cls, text: str) -> GUID:
        """Parse a GUID such as ``1111AAAA-22BB-33CC-44DD-55EE77FF9900``.

        Dashes may be omitted and case does not matter. Raises ValueError if
        the text is not a GUID.
        """
        digits = text.replace("-", "")
        if not _HEX.fullmatch(digits) or len(digits) != 32:
            raise ValueError(f"invalid guid: {text}")
        raw = bytes.fromhex(digits)
        return cls(
            data1=int.from_bytes(raw[0:4], "big"),
            data2=int.from_bytes(raw[4:6], "big"),
            data3=int.from_bytes(raw[6:8], "big"),
            data4=raw[8:16],
        )

    def encode(self) -> bytes:
        buf = Buffer()
        buf.write_uint32(self.data1)
        buf.write_uint16(self.data2)
        buf.write_uint16(self.data3)
        buf.write(self.data4)
        return buf.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> tuple[GUID, int]:
        buf = Buffer(data)
        guid = cls(
            data1=buf.read_uint32(),
            data2=buf.read_uint16(),
            data3=buf.read_uint16(),
            data4=buf.read_n(8),
        )
        return guid, buf.pos

    def __str__(self) -> str:
        return "{:08X}-{:04X}-{:04X}-{}-{}".format(
            self.data1,
            self.data2,
            self.data3,
            self.data4[:2].hex().upper().rjust(4, "0"),
            self.data4[2:].hex().upper().rjust(12, "0"),
        )


LOCALIZED_TEXT_LOCALE = 0x1
LOCALIZED_TEXT_TEXT = 0x2


@dataclass
class LocalizedText:
    """A text with an optional locale (Part 6, 5.2.2.14).

    ``encoding_mask`` says which fields are present on the wire.
    """

    encoding_mask: int = 0
    locale: str = ""
    text: str = ""

    @classmethod
    def create(cls, text: str = "", locale: str = "") -> LocalizedText:
        """Build a localized text with the mask set for the given fields."""
        value = cls(locale=locale, text=text)
        value.update_mask()
        return value

    def has(self, mask: int) -> bool:
        return self.encoding_mask & mask == mask

    def update_mask(self) -> None:
        self.encoding_mask = 0
        if self.locale:
            self.encoding_mask |= LOCALIZED_TEXT_LOCALE
        if self.text:
            self.encoding_mask |= LOCALIZED_TEXT_TEXT

    def encode(self) -> bytes:
        buf = Buffer()
        buf.write_byte(self.encoding_mask)
        if self.has(LOCALIZED_TEXT_LOCALE):
            buf.write_string(self.locale)
        if self.has(LOCALIZED_TEXT_TEXT):
            buf.write_string(self.text)
        return buf.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> tuple[LocalizedText, int]:
        buf = Buffer(data)
        value = cls(encoding_mask=buf.read_byte())
        if value.has(LOCALIZED_TEXT_LOCALE):
            value.locale = buf.read_string()
        if value.has(LOCALIZED_TEXT_TEXT):
            value.text = buf.read_string()
        return value, buf.pos


@dataclass
class QualifiedName:
    """A name qualified by a namespace index (Part 3, 8.3)."""

    namespace_index: int = wire_field(Kind.UINT16, default=0)
    name: str = wire_field(Kind.STRING, default="")

    def encode(self) -> bytes:
        buf = Buffer()
        buf.write_uint16(self.namespace_index)
        buf.write_string(self.name)
        return buf.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> tuple[QualifiedName, int]:
        buf = Buffer(data)
        value = cls(namespace_index=buf.read_uint16(), name=buf.read_string())
        return value, buf.pos