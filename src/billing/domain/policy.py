"""Intentional accommodations applied while pricing and encoding.

These are the only places where the protocol repairs data instead of
rejecting it, kept as named functions so each can be tested on its own.
"""

from __future__ import annotations

from billing.domain.exceptions import ValidationError
from billing.domain.model.catalog import Catalog, CatalogEntry
from billing.domain.model.value_objects import MAX_DESCRIPTION_LENGTH, U32_MAX

NOT_AVAILABLE_DESCRIPTION = b"Article Not Available"


def truncate_description(description: bytes) -> bytes:
    """Cut a description down to what an 8-bit length prefix can express."""
    return description[:MAX_DESCRIPTION_LENGTH]


def placeholder_entry() -> CatalogEntry:
    """Entry used for codes missing from the catalog."""
    return CatalogEntry(
        description=truncate_description(NOT_AVAILABLE_DESCRIPTION),
        unit_cost=0,
    )


def resolve_entry(code: int, catalog: Catalog) -> CatalogEntry:
    """Look up *code*, substituting the placeholder on a miss."""
    entry = catalog.lookup(code)
    if entry is None:
        return placeholder_entry()
    return entry


def wire_total(total: int) -> int:
    """Truncate an exact total to the 32-bit TotalCost field."""
    if not isinstance(total, int) or isinstance(total, bool) or total < 0:
        raise ValidationError(f"Total cost must be a non-negative integer, got {total!r}")
    return total & U32_MAX
