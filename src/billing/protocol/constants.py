from __future__ import annotations

from billing.domain.model.messages import (
    HEADER_SIZE,
    PAIR_SIZE,
    TOTAL_COST_SIZE,
    TRAILER_SIZE,
)

SENTINEL = 0xFFFF
SENTINEL_BYTES = b"\xff\xff"

MIN_REQUEST_LENGTH = HEADER_SIZE + TRAILER_SIZE
MAX_MESSAGE_LENGTH = 0xFFFF

__all__ = [
    "HEADER_SIZE",
    "MAX_MESSAGE_LENGTH",
    "MIN_REQUEST_LENGTH",
    "PAIR_SIZE",
    "SENTINEL",
    "SENTINEL_BYTES",
    "TOTAL_COST_SIZE",
    "TRAILER_SIZE",
]
