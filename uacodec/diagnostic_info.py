"""The DiagnosticInfo built-in type (Part 4, 7.8)."""

from __future__ import annotations

from dataclasses import dataclass

from .buffer import Buffer

__all__ = [
    "DIAGNOSTIC_INFO_SYMBOLIC_ID",
    "DIAGNOSTIC_INFO_NAMESPACE_URI",
    "DIAGNOSTIC_INFO_LOCALIZED_TEXT",
    "DIAGNOSTIC_INFO_LOCALE",
    "DIAGNOSTIC_INFO_ADDITIONAL_INFO",
    "DIAGNOSTIC_INFO_INNER_STATUS_CODE",
    "DIAGNOSTIC_INFO_INNER_DIAGNOSTIC_INFO",
    "DiagnosticInfo",
]

DIAGNOSTIC_INFO_SYMBOLIC_ID = 0x1
DIAGNOSTIC_INFO_NAMESPACE_URI = 0x2
DIAGNOSTIC_INFO_LOCALIZED_TEXT = 0x4
DIAGNOSTIC_INFO_LOCALE = 0x8
DIAGNOSTIC_INFO_ADDITIONAL_INFO = 0x10
DIAGNOSTIC_INFO_INNER_STATUS_CODE = 0x20
DIAGNOSTIC_INFO_INNER_DIAGNOSTIC_INFO = 0x40


@dataclass
class DiagnosticInfo:
    """Diagnostic information; ``encoding_mask`` says which fields are present."""

    encoding_mask: int = 0
    symbolic_id: int = 0
    namespace_uri: int = 0
    locale: int = 0
    localized_text: int = 0
    additional_info: str = ""
    inner_status_code: int = 0
    inner_diagnostic_info: DiagnosticInfo | None = None

    def has(self, mask: int) -> bool:
        return self.encoding_mask & mask == mask

    def update_mask(self) -> None:
        """Set the encoding mask from the fields that hold a value."""
        self.encoding_mask = 0
        if self.symbolic_id:
            self.encoding_mask |= DIAGNOSTIC_INFO_SYMBOLIC_ID
        if self.namespace_uri:
            self.encoding_mask |= DIAGNOSTIC_INFO_NAMESPACE_URI
        if self.locale:
            self.encoding_mask |= DIAGNOSTIC_INFO_LOCALE
        if self.localized_text:
            self.encoding_mask |= DIAGNOSTIC_INFO_LOCALIZED_TEXT
        if self.additional_info:
            self.encoding_mask |= DIAGNOSTIC_INFO_ADDITIONAL_INFO
        if self.inner_status_code:
            self.encoding_mask |= DIAGNOSTIC_INFO_INNER_STATUS_CODE
        if self.inner_diagnostic_info is not None:
            self.encoding_mask |= DIAGNOSTIC_INFO_INNER_DIAGNOSTIC_INFO

    def encode(self) -> bytes:
        buf = Buffer()
        buf.write_byte(self.encoding_mask)
        if self.has(DIAGNOSTIC_INFO_SYMBOLIC_ID):
            buf.write_int32(self.symbolic_id)
        if self.has(DIAGNOSTIC_INFO_NAMESPACE_URI):
            buf.write_int32(self.namespace_uri)
        if self.has(DIAGNOSTIC_INFO_LOCALE):
            buf.write_int32(self.locale)
        if self.has(DIAGNOSTIC_INFO_LOCALIZED_TEXT):
            buf.write_int32(self.localized_text)
        if self.has(DIAGNOSTIC_INFO_ADDITIONAL_INFO):
            buf.write_string(self.additional_info)
        if self.has(DIAGNOSTIC_INFO_INNER_STATUS_CODE):
            buf.write_uint32(self.inner_status_code)
        if self.has(DIAGNOSTIC_INFO_INNER_DIAGNOSTIC_INFO) and self.inner_diagnostic_info:
            buf.write(self.inner_diagnostic_info.encode())
        return buf.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> tuple[DiagnosticInfo, int]:
        buf = Buffer(data)
        info = cls(encoding_mask=buf.read_byte())
        if info.has(DIAGNOSTIC_INFO_SYMBOLIC_ID):
            info.symbolic_id = buf.read_int32()
        if info.has(DIAGNOSTIC_INFO_NAMESPACE_URI):
            info.namespace_uri = buf.read_int32()
        if info.has(DIAGNOSTIC_INFO_LOCALE):
            info.locale = buf.read_int32()
        if info.has(DIAGNOSTIC_INFO_LOCALIZED_TEXT):
            info.localized_text = buf.read_int32()
        if info.has(DIAGNOSTIC_INFO_ADDITIONAL_INFO):
            info.additional_info = buf.read_string()
        if info.has(DIAGNOSTIC_INFO_INNER_STATUS_CODE):
            info.inner_status_code = buf.read_uint32()
        if info.has(DIAGNOSTIC_INFO_INNER_DIAGNOSTIC_INFO):
            inner, consumed = cls.decode(buf.getvalue())
            buf.read_n(consumed)
            info.inner_diagnostic_info = inner
        return info, buf.pos