"""Client -> server message codec.

Wire layout (big-endian)::

    ReqNum(u16) TML(u16) [Qty(u16) Code(u16)]* 0xFFFF(u16)
"""

from __future__ import annotations

from collections.abc import Iterable

from billing.domain.exceptions import InvalidLength, MalformedBody, ValidationError
from billing.domain.model.messages import LineItem, Request
from billing.domain.model.value_objects import require_field
from billing.protocol.codec import ByteReader, ByteWriter
from billing.protocol.constants import (
    HEADER_SIZE,
    MAX_MESSAGE_LENGTH,
    MIN_REQUEST_LENGTH,
    SENTINEL,
)
from billing.protocol.framing import frame, read_header


def encode_request(request_number: int, items: Iterable[LineItem]) -> bytes:
    return encode(Request(request_number=request_number, items=tuple(items)))


def encode(request: Request) -> bytes:
    for item in request.items:
        require_field("Quantity", item.quantity)
        require_field("Code", item.code)

    tml = request.total_message_length
    if tml > MAX_MESSAGE_LENGTH:
        raise ValidationError(
            f"Request with {len(request.items)} items is {tml} bytes, "
            f"maximum is {MAX_MESSAGE_LENGTH}"
        )

    out = ByteWriter()
    out.write_u16(request.request_number)
    out.write_u16(tml)
    for item in request.items:
        out.write_u16(item.quantity)
        out.write_u16(item.code)
    out.write_u16(SENTINEL)
    return out.getvalue()


def decode_request(data: bytes | bytearray) -> Request:
    """Parse a complete request buffer.

    Raises TruncatedHeader, InvalidLength, TruncatedBody or MalformedBody.
    """
    request_number, tml = read_header(data)
    if tml < MIN_REQUEST_LENGTH:
        raise InvalidLength(
            f"Request length {tml} is below the minimum of {MIN_REQUEST_LENGTH}"
        )
    reader = ByteReader(frame(data, tml), offset=HEADER_SIZE)

    items: list[LineItem] = []
    while True:
        if reader.remaining < 2:
            raise MalformedBody("Request ends without a trailer")
        # The trailer and a quantity share the same width: test for the
        # sentinel before committing to a pair.
        if reader.peek_u16() == SENTINEL:
            reader.read_u16()
            break
        quantity = reader.read_u16()
        if reader.remaining < 2:
            raise MalformedBody(f"Quantity {quantity} is not followed by a code")
        code = reader.read_u16()
        items.append(LineItem(quantity=quantity, code=code))

    return Request(request_number=request_number, items=tuple(items))


decode = decode_request
