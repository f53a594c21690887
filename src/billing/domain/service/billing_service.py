"""Domain service: pricing and total verification.

Costs are Python ints, so products and sums are exact and never wrap.
The only narrowing happens when a total is written to the 32-bit wire
field (see ``policy.wire_total``); verification always compares the
exact recomputed sum so a wrapped total is reported rather than masked.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from billing.domain.exceptions import TotalMismatch
from billing.domain.model.catalog import Catalog
from billing.domain.model.messages import LineItem, PricedLineItem
from billing.domain.model.value_objects import require_u16, require_u32
from billing.domain.policy import resolve_entry, truncate_description


def compute_line_cost(unit_cost: int, quantity: int) -> int:
    require_u16("Unit cost", unit_cost)
    require_u16("Quantity", quantity)
    return unit_cost * quantity


def aggregate_total(items: Iterable[PricedLineItem]) -> int:
    total = 0
    for item in items:
        total += compute_line_cost(item.unit_cost, item.quantity)
    return total


def build_response_items(
    requested_items: Sequence[LineItem],
    catalog: Catalog,
) -> tuple[PricedLineItem, ...]:
    """Price each requested item against *catalog*.

    Request order is preserved and duplicate codes are priced
    independently. Unknown codes get the placeholder description at zero
    cost.
    """
    priced: list[PricedLineItem] = []
    for item in requested_items:
        entry = resolve_entry(item.code, catalog)
        priced.append(
            PricedLineItem(
                description=truncate_description(entry.description),
                unit_cost=entry.unit_cost,
                quantity=item.quantity,
            )
        )
    return tuple(priced)


def verify_total(declared_total: int, items: Iterable[PricedLineItem]) -> bool:
    require_u32("Declared total", declared_total)
    return aggregate_total(items) == declared_total


def check_total(declared_total: int, items: Sequence[PricedLineItem]) -> None:
    """Raise TotalMismatch unless *declared_total* equals the exact sum."""
    computed = aggregate_total(items)
    if computed != declared_total:
        raise TotalMismatch(declared=declared_total, computed=computed)
