"""Little-endian reader and writer for the OPC UA binary encoding."""

from __future__ import annotations

import math
import struct
from datetime import datetime, timedelta, timezone

__all__ = ["CodecError", "UnexpectedEOF", "Buffer"]

NULL_LENGTH = 0xFFFFFFFF
F32_QNAN = 0xFFC00000
F64_QNAN = 0xFFF8000000000000
MAX_INT32 = 0x7FFFFFFF

# Offset between 1601-01-01 and 1970-01-01 in 100 nanosecond ticks.
_EPOCH_DIFF_TICKS = 116444736000000000
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MICROSECOND = timedelta(microseconds=1)


class CodecError(Exception):
    """Raised when a value cannot be encoded or decoded."""


class UnexpectedEOF(CodecError):
    """Raised when a read needs more bytes than the buffer holds."""

    def __init__(self, message: str = "unexpected EOF") -> None:
        super().__init__(message)


def _to_signed(value: int, bits: int) -> int:
    sign = 1 << (bits - 1)
    return (value & (sign - 1)) - (value & sign)


class Buffer:
    """A byte buffer that is read from the front and written at the end.

    Reads advance ``pos``; a failed read raises and leaves ``pos`` unchanged.
    """

    def __init__(self, data: bytes | bytearray | None = None) -> None:
        self._buf = bytearray(data or b"")
        self.pos = 0

    def getvalue(self) -> bytes:
        """Return the bytes that have not been read yet."""
        return bytes(self._buf[self.pos:])

    def remaining(self) -> int:
        """Return the number of bytes that have not been read yet."""
        return len(self._buf) - self.pos

    # -- reading ---------------------------------------------------------

    def read_n(self, n: int) -> bytes:
        if n < 0 or n > self.remaining():
            raise UnexpectedEOF()
        start = self.pos
        self.pos += n
        return bytes(self._buf[start:self.pos])

    def _unpack(self, fmt: str, size: int):
        return struct.unpack(fmt, self.read_n(size))[0]

    def read_bool(self) -> bool:
        return self.read_byte() > 0

    def read_byte(self) -> int:
        return self.read_n(1)[0]

    def read_int8(self) -> int:
        return _to_signed(self.read_byte(), 8)

    def read_int16(self) -> int:
        return _to_signed(self.read_uint16(), 16)

    def read_uint16(self) -> int:
        return self._unpack("<H", 2)

    def read_int32(self) -> int:
        return _to_signed(self.read_uint32(), 32)

    def read_uint32(self) -> int:
        return self._unpack("<I", 4)

    def read_int64(self) -> int:
        return _to_signed(self.read_uint64(), 64)

    def read_uint64(self) -> int:
        return self._unpack("<Q", 8)

    def read_float32(self) -> float:
        bits = self.read_uint32()
        if bits == F32_QNAN:
            return math.nan
        return struct.unpack("<f", struct.pack("<I", bits))[0]

    def read_float64(self) -> float:
        bits = self.read_uint64()
        if bits == F64_QNAN:
            return math.nan
        return struct.unpack("<d", struct.pack("<Q", bits))[0]

    def read_string(self) -> str:
        data = self.read_bytes()
        if data is None:
            return ""
        return data.decode("utf-8", errors="surrogateescape")

    def read_bytes(self) -> bytes | None:
        """Read a length-prefixed byte string; empty and null give None."""
        start = self.pos
        n = self.read_uint32()
        if n in (0, NULL_LENGTH):
            return None
        try:
            return self.read_n(n)
        except UnexpectedEOF:
            self.pos = start
            raise

    def read_time(self) -> datetime | None:
        """Read a DateTime; the zero value gives None."""
        ticks = struct.unpack("<Q", self.read_n(8))[0]
        if ticks == 0:
            return None
        try:
            return _UNIX_EPOCH + timedelta(
                microseconds=(ticks - _EPOCH_DIFF_TICKS) // 10
            )
        except OverflowError as exc:
            raise CodecError(f"time out of range: {ticks}") from exc

    # -- writing ---------------------------------------------------------

    def write(self, data: bytes | bytearray) -> None:
        self._buf.extend(data)

    def write_bool(self, value: bool) -> None:
        self.write_byte(1 if value else 0)

    def write_byte(self, value: int) -> None:
        self._buf.append(value & 0xFF)

    def write_int8(self, value: int) -> None:
        self.write_byte(value)

    def write_int16(self, value: int) -> None:
        self.write_uint16(value)

    def write_uint16(self, value: int) -> None:
        self.write(struct.pack("<H", value & 0xFFFF))

    def write_int32(self, value: int) -> None:
        self.write_uint32(value)

    def write_uint32(self, value: int) -> None:
        self.write(struct.pack("<I", value & 0xFFFFFFFF))

    def write_int64(self, value: int) -> None:
        self.write_uint64(value)

    def write_uint64(self, value: int) -> None:
        self.write(struct.pack("<Q", value & 0xFFFFFFFFFFFFFFFF))

    def write_float32(self, value: float) -> None:
        if math.isnan(value):
            self.write_uint32(F32_QNAN)
        else:
            self.write(struct.pack("<f", value))

    def write_float64(self, value: float) -> None:
        if math.isnan(value):
            self.write_uint64(F64_QNAN)
        else:
            self.write(struct.pack("<d", value))

    def write_string(self, value: str) -> None:
        """Write a string; the empty string is written as null."""
        if not value:
            self.write_uint32(NULL_LENGTH)
            return
        self.write_byte_string(value.encode("utf-8", errors="surrogateescape"))

    def write_byte_string(self, value: bytes | None) -> None:
        """Write a length-prefixed byte string; None is written as null."""
        if value is None:
            self.write_uint32(NULL_LENGTH)
            return
        if len(value) > MAX_INT32:
            raise CodecError("value too large")
        self.write_uint32(len(value))
        self.write(value)

    def write_time(self, value: datetime | None) -> None:
        """Write a DateTime; None is written as the zero value.

        Naive datetimes are taken to be UTC.
        """
        if value is None:
            self.write(bytes(8))
            return
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        micros = (value - _UNIX_EPOCH) // _ONE_MICROSECOND
        self.write_uint64(micros * 10 + _EPOCH_DIFF_TICKS)