"""Binary framing primitives.

Big-endian unsigned integers of fixed width and byte strings with an
8-bit length prefix. Reads past the end of a buffer raise MalformedBody
(a peer sent something structurally broken); writes of out-of-range
values raise ValidationError (the caller broke a precondition).
"""

from __future__ import annotations

import struct

from billing.domain.exceptions import MalformedBody, ValidationError
from billing.domain.model.value_objects import U8_MAX, U16_MAX, U32_MAX, require_uint

_U8 = struct.Struct("!B")
_U16 = struct.Struct("!H")
_U32 = struct.Struct("!I")


def _unpack(fmt: struct.Struct, buf: bytes | bytearray, offset: int) -> int:
    if offset < 0 or offset + fmt.size > len(buf):
        raise MalformedBody(
            f"{fmt.size}-byte field at offset {offset} runs past the end "
            f"of a {len(buf)}-byte buffer"
        )
    return fmt.unpack_from(buf, offset)[0]


def _pack(
    fmt: struct.Struct, buf: bytearray, offset: int, value: int, maximum: int
) -> int:
    require_uint(f"{fmt.size * 8}-bit field", value, maximum)
    if offset < 0 or offset + fmt.size > len(buf):
        raise ValidationError(
            f"Cannot write {fmt.size} bytes at offset {offset} "
            f"into a {len(buf)}-byte buffer"
        )
    fmt.pack_into(buf, offset, value)
    return offset + fmt.size


def read_u8(buf: bytes | bytearray, offset: int) -> int:
    return _unpack(_U8, buf, offset)


def read_u16(buf: bytes | bytearray, offset: int) -> int:
    return _unpack(_U16, buf, offset)


def read_u32(buf: bytes | bytearray, offset: int) -> int:
    return _unpack(_U32, buf, offset)


def write_u8(buf: bytearray, offset: int, value: int) -> int:
    """Write *value* at *offset* and return the offset just past it."""
    return _pack(_U8, buf, offset, value, U8_MAX)


def write_u16(buf: bytearray, offset: int, value: int) -> int:
    return _pack(_U16, buf, offset, value, U16_MAX)


def write_u32(buf: bytearray, offset: int, value: int) -> int:
    return _pack(_U32, buf, offset, value, U32_MAX)


def read_prefixed_bytes(buf: bytes | bytearray, offset: int) -> tuple[bytes, int]:
    """Read a length-prefixed byte string; return it and the next offset."""
    length = read_u8(buf, offset)
    start = offset + _U8.size
    end = start + length
    if end > len(buf):
        raise MalformedBody(
            f"Declared length {length} at offset {offset} overruns the buffer "
            f"({len(buf) - start} bytes remain)"
        )
    return bytes(buf[start:end]), end


def write_prefixed_bytes(buf: bytearray, offset: int, data: bytes) -> int:
    if len(data) > U8_MAX:
        raise ValidationError(
            f"Byte string of {len(data)} bytes does not fit an 8-bit length prefix"
        )
    start = write_u8(buf, offset, len(data))
    end = start + len(data)
    if end > len(buf):
        raise ValidationError(
            f"Cannot write {len(data)} bytes at offset {start} "
            f"into a {len(buf)}-byte buffer"
        )
    buf[start:end] = data
    return end


class ByteReader:
    """Forward-only cursor over a bounded buffer."""

    def __init__(self, data: bytes | bytearray, offset: int = 0) -> None:
        self._buf = bytes(data)
        self._pos = offset

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return max(0, len(self._buf) - self._pos)

    def read_u8(self) -> int:
        value = read_u8(self._buf, self._pos)
        self._pos += _U8.size
        return value

    def read_u16(self) -> int:
        value = read_u16(self._buf, self._pos)
        self._pos += _U16.size
        return value

    def read_u32(self) -> int:
        value = read_u32(self._buf, self._pos)
        self._pos += _U32.size
        return value

    def peek_u16(self) -> int:
        return read_u16(self._buf, self._pos)

    def peek_bytes(self, count: int) -> bytes:
        """Return up to *count* bytes without consuming them."""
        return self._buf[self._pos : self._pos + count]

    def read_bytes(self, count: int) -> bytes:
        if count > self.remaining:
            raise MalformedBody(
                f"Need {count} bytes at offset {self._pos}, only {self.remaining} remain"
            )
        data = self._buf[self._pos : self._pos + count]
        self._pos += count
        return data

    def read_prefixed_bytes(self) -> bytes:
        data, self._pos = read_prefixed_bytes(self._buf, self._pos)
        return data


class ByteWriter:
    """Append-only builder for an encoded message."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def _grow(self, size: int) -> int:
        offset = len(self._buf)
        self._buf.extend(bytes(size))
        return offset

    def write_u8(self, value: int) -> None:
        require_uint("8-bit field", value, U8_MAX)
        write_u8(self._buf, self._grow(_U8.size), value)

    def write_u16(self, value: int) -> None:
        require_uint("16-bit field", value, U16_MAX)
        write_u16(self._buf, self._grow(_U16.size), value)

    def write_u32(self, value: int) -> None:
        require_uint("32-bit field", value, U32_MAX)
        write_u32(self._buf, self._grow(_U32.size), value)

    def write_prefixed_bytes(self, data: bytes) -> None:
        if len(data) > U8_MAX:
            raise ValidationError(
                f"Byte string of {len(data)} bytes does not fit an 8-bit length prefix"
            )
        write_prefixed_bytes(self._buf, self._grow(_U8.size + len(data)), data)

    def patch_u16(self, offset: int, value: int) -> None:
        """Overwrite an already written 16-bit field."""
        write_u16(self._buf, offset, value)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


def to_hex(data: bytes | bytearray) -> str:
    """Render bytes as ``0x00 0x0A ...`` for logs and console output."""
    return " ".join(f"0x{b:02X}" for b in data)
