"""Header handling shared by request and response decoding.

Both directions start with ReqNum(u16) TML(u16). The helpers here are
used by the codecs on complete buffers and by the transport while it is
still assembling a message from a stream.
"""

from __future__ import annotations

from billing.domain.exceptions import TruncatedBody, TruncatedHeader
from billing.protocol.codec import read_u16
from billing.protocol.constants import HEADER_SIZE, SENTINEL


def read_header(data: bytes | bytearray) -> tuple[int, int]:
    """Return ``(request_number, total_message_length)``."""
    if len(data) < HEADER_SIZE:
        raise TruncatedHeader(
            f"Need {HEADER_SIZE} header bytes, got {len(data)}"
        )
    return read_u16(data, 0), read_u16(data, 2)


def is_error_header(data: bytes | bytearray) -> bool:
    """True when bytes 2-3 carry the sentinel instead of a length."""
    return read_header(data)[1] == SENTINEL


def frame(data: bytes | bytearray, total_message_length: int) -> bytes:
    """Cut a complete message out of *data* or raise TruncatedBody."""
    if len(data) < total_message_length:
        raise TruncatedBody(
            f"Declared length {total_message_length}, "
            f"only {len(data)} bytes available"
        )
    return bytes(data[:total_message_length])
