"""Server -> client message codec.

Wire layout (big-endian)::

    ReqNum(u16) TML(u16) TotalCost(u32)
        [Len(u8) Desc(Len bytes) UnitCost(u16) Qty(u16)]* 0xFFFF(u16)

    error reply: ReqNum(u16) 0xFFFF(u16)

An error reply is recognised purely by the sentinel in bytes 2-3, where
a normal response carries its length.
"""

from __future__ import annotations

from collections.abc import Iterable

from billing.domain.exceptions import InvalidLength, MalformedBody, ValidationError
from billing.domain.model.messages import ErrorResponse, PricedLineItem, Response
from billing.domain.model.value_objects import MAX_DESCRIPTION_LENGTH, require_field
from billing.domain.policy import truncate_description, wire_total
from billing.protocol.codec import ByteReader, ByteWriter
from billing.protocol.constants import (
    HEADER_SIZE,
    MAX_MESSAGE_LENGTH,
    SENTINEL,
    SENTINEL_BYTES,
)
from billing.protocol.framing import frame, read_header


def encode_response(
    request_number: int,
    items: Iterable[PricedLineItem],
    total_cost: int,
) -> bytes:
    """Encode a response; *total_cost* is truncated to 32 bits."""
    return encode(
        Response(
            request_number=request_number,
            total_cost=wire_total(total_cost),
            items=tuple(items),
        )
    )


def encode(response: Response) -> bytes:
    out = ByteWriter()
    out.write_u16(response.request_number)
    out.write_u16(0)  # patched once the size is known
    out.write_u32(response.total_cost)
    for item in response.items:
        _write_item(out, item)
    out.write_u16(SENTINEL)

    # A length of 0xFFFF would read back as an error reply.
    if len(out) >= MAX_MESSAGE_LENGTH:
        raise ValidationError(
            f"Response is {len(out)} bytes, maximum is {MAX_MESSAGE_LENGTH - 1}"
        )
    out.patch_u16(2, len(out))
    return out.getvalue()


def _write_item(out: ByteWriter, item: PricedLineItem) -> None:
    require_field("Unit cost", item.unit_cost)
    require_field("Quantity", item.quantity)
    description = truncate_description(item.description)
    # Len=0xFF followed by a 0xFF description byte is indistinguishable
    # from the trailer.
    if len(description) == MAX_DESCRIPTION_LENGTH and description[0] == 0xFF:
        raise ValidationError(
            "A 255-byte description cannot start with 0xFF; "
            "it would be read back as the trailer"
        )
    out.write_prefixed_bytes(description)
    out.write_u16(item.unit_cost)
    out.write_u16(item.quantity)


def encode_error_response(request_number: int) -> bytes:
    error = ErrorResponse(request_number=request_number)
    out = ByteWriter()
    out.write_u16(error.request_number)
    out.write_u16(SENTINEL)
    return out.getvalue()


def decode_response(data: bytes | bytearray) -> Response | ErrorResponse:
    """Parse a complete response buffer.

    Returns an ErrorResponse as soon as the header shows the sentinel.
    Raises TruncatedHeader, InvalidLength, TruncatedBody or MalformedBody.
    """
    request_number, tml = read_header(data)
    if tml == SENTINEL:
        return ErrorResponse(request_number=request_number)
    if tml < HEADER_SIZE:
        raise InvalidLength(
            f"Response length {tml} is below the header size of {HEADER_SIZE}"
        )
    reader = ByteReader(frame(data, tml), offset=HEADER_SIZE)
    total_cost = reader.read_u32()

    items: list[PricedLineItem] = []
    while True:
        if reader.remaining < 2:
            raise MalformedBody("Response ends without a trailer")
        # The next item starts with a 1-byte length, so look at two raw
        # bytes before consuming anything.
        if reader.peek_bytes(2) == SENTINEL_BYTES:
            reader.read_bytes(2)
            break
        description = reader.read_prefixed_bytes()
        unit_cost = reader.read_u16()
        quantity = reader.read_u16()
        items.append(
            PricedLineItem(
                description=description,
                unit_cost=unit_cost,
                quantity=quantity,
            )
        )

    return Response(
        request_number=request_number,
        total_cost=total_cost,
        items=tuple(items),
    )


decode = decode_response
