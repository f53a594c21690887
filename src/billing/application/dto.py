"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing wire messages to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LineItemSpec:
    """Input: what the customer asked for (quantity + item code)."""

    quantity: int
    code: int


@dataclass(frozen=True)
class BillLineDTO:
    """Output: one row of a bill as displayed to the user."""

    number: int
    description: str
    unit_cost: int
    quantity: int
    line_cost: int


@dataclass(frozen=True)
class BillDTO:
    """Output: a verified bill."""

    request_number: int
    lines: list[BillLineDTO]
    total: int
