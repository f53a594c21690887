"""Protocol messages exchanged between client and server.

All messages are immutable value objects. Construction validates the
structural width of every field; the stricter producer range
(0..FIELD_MAX) is an encoding precondition checked by the codecs, so a
decoder can still represent whatever a peer actually sent.
"""

from __future__ import annotations

from dataclasses import dataclass

from billing.domain.exceptions import ValidationError
from billing.domain.model.value_objects import (
    MAX_DESCRIPTION_LENGTH,
    require_u16,
    require_u32,
)

# ReqNum(2) + TML(2)
HEADER_SIZE = 4
TRAILER_SIZE = 2
TOTAL_COST_SIZE = 4
PAIR_SIZE = 4
# UnitCost(2) + Qty(2), excluding the length prefix and description
PRICED_FIELDS_SIZE = 4


@dataclass(frozen=True)
class LineItem:
    """One (quantity, code) pair requested by the client."""

    quantity: int
    code: int

    def __post_init__(self) -> None:
        require_u16("Quantity", self.quantity)
        require_u16("Code", self.code)


@dataclass(frozen=True)
class PricedLineItem:
    """One priced row of a response."""

    description: bytes
    unit_cost: int
    quantity: int

    def __post_init__(self) -> None:
        if not isinstance(self.description, bytes):
            raise ValidationError(
                f"Description must be bytes, got {type(self.description).__name__}"
            )
        require_u16("Unit cost", self.unit_cost)
        require_u16("Quantity", self.quantity)

    @property
    def description_length(self) -> int:
        return len(self.description)


@dataclass(frozen=True)
class Request:
    """Client -> server message."""

    request_number: int
    items: tuple[LineItem, ...] = ()

    def __post_init__(self) -> None:
        require_u16("Request number", self.request_number)
        # Accept any iterable but store a tuple so the message stays hashable.
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def total_message_length(self) -> int:
        return HEADER_SIZE + PAIR_SIZE * len(self.items) + TRAILER_SIZE


@dataclass(frozen=True)
class Response:
    """Server -> client message carrying the priced items."""

    request_number: int
    total_cost: int
    items: tuple[PricedLineItem, ...] = ()

    def __post_init__(self) -> None:
        require_u16("Request number", self.request_number)
        require_u32("Total cost", self.total_cost)
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def total_message_length(self) -> int:
        """Encoded size; over-length descriptions count as truncated."""
        body = sum(
            1 + min(item.description_length, MAX_DESCRIPTION_LENGTH) + PRICED_FIELDS_SIZE
            for item in self.items
        )
        return HEADER_SIZE + TOTAL_COST_SIZE + body + TRAILER_SIZE


@dataclass(frozen=True)
class ErrorResponse:
    """Server -> client reply signalling that a request was rejected."""

    request_number: int

    def __post_init__(self) -> None:
        require_u16("Request number", self.request_number)

    @property
    def total_message_length(self) -> int:
        return HEADER_SIZE
