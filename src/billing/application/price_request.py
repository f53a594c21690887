"""Application service: Price Request use case (server side).

Turns a decoded request into a response priced against the catalog.
"""

from __future__ import annotations

from billing.domain.model.catalog import Catalog
from billing.domain.model.messages import Request, Response
from billing.domain.policy import wire_total
from billing.domain.service.billing_service import (
    aggregate_total,
    build_response_items,
)


class PriceRequestHandler:

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def handle(self, request: Request) -> Response:
        """Price every requested item, preserving order and duplicates."""
        items = build_response_items(request.items, self._catalog)
        return Response(
            request_number=request.request_number,
            total_cost=wire_total(aggregate_total(items)),
            items=items,
        )
