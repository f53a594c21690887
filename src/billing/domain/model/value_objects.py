"""Integer field widths shared across the domain.

Every numeric field on the wire is an unsigned integer of a fixed width.
The helpers here keep out-of-range values from ever reaching a message.
"""

from __future__ import annotations

from billing.domain.exceptions import ValidationError

U8_MAX = 0xFF
U16_MAX = 0xFFFF
U32_MAX = 0xFFFFFFFF

# Producers keep quantities, codes and costs below the high bit so that
# no legitimate field can collide with the 0xFFFF trailer.
FIELD_MAX = 0x7FFF

MAX_DESCRIPTION_LENGTH = U8_MAX


def require_uint(name: str, value: int, maximum: int) -> None:
    """Raise ValidationError unless *value* is an int in ``0..maximum``."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if value < 0 or value > maximum:
        raise ValidationError(f"{name} must be in range 0..{maximum}, got {value}")


def require_u16(name: str, value: int) -> None:
    require_uint(name, value, U16_MAX)


def require_u32(name: str, value: int) -> None:
    require_uint(name, value, U32_MAX)


def require_field(name: str, value: int) -> None:
    """Producer-side range check for quantities, codes and unit costs."""
    require_uint(name, value, FIELD_MAX)
