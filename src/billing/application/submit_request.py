"""Application service: Submit Request use case (client side).

Steps:
1. Validate the requested pairs and build a numbered request.
2. Exchange it over the transport.
3. Decode the reply; an error reply becomes ServerRejectedError.
4. Verify the declared total against the priced items.
5. Return a bill DTO for display.
"""

from __future__ import annotations

import time

from billing.application.dto import BillDTO, BillLineDTO, LineItemSpec
from billing.application.transport import BillingTransport
from billing.domain.exceptions import MalformedBody, ServerRejectedError
from billing.domain.model.messages import ErrorResponse, LineItem, Request, Response
from billing.domain.model.value_objects import FIELD_MAX, require_field
from billing.domain.service.billing_service import check_total, compute_line_cost
from billing.protocol import request_codec, response_codec


class RequestNumberSequence:
    """Request numbers seeded from the clock, kept within 0..FIELD_MAX."""

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = int(time.time() * 1000)
        self._next = seed & FIELD_MAX

    def next(self) -> int:
        number = self._next
        self._next = (self._next + 1) & FIELD_MAX
        return number


class SubmitRequestHandler:

    def __init__(
        self,
        transport: BillingTransport,
        numbers: RequestNumberSequence | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self._transport = transport
        self._numbers = numbers or RequestNumberSequence()
        self._encoding = encoding

    def handle(self, item_specs: list[LineItemSpec]) -> BillDTO:
        items = []
        for spec in item_specs:
            require_field("Quantity", spec.quantity)
            require_field("Code", spec.code)
            items.append(LineItem(quantity=spec.quantity, code=spec.code))

        request = Request(request_number=self._numbers.next(), items=tuple(items))
        reply = response_codec.decode_response(
            self._transport.exchange(request_codec.encode(request))
        )

        if isinstance(reply, ErrorResponse):
            raise ServerRejectedError(reply.request_number)
        if reply.request_number != request.request_number:
            raise MalformedBody(
                f"Reply is for request #{reply.request_number}, "
                f"expected #{request.request_number}"
            )

        check_total(reply.total_cost, reply.items)
        return self._to_dto(reply)

    # --- Mapping --------------------------------------------------------------

    def _to_dto(self, response: Response) -> BillDTO:
        return BillDTO(
            request_number=response.request_number,
            lines=[
                BillLineDTO(
                    number=i,
                    description=item.description.decode(self._encoding, errors="replace"),
                    unit_cost=item.unit_cost,
                    quantity=item.quantity,
                    line_cost=compute_line_cost(item.unit_cost, item.quantity),
                )
                for i, item in enumerate(response.items, start=1)
            ],
            total=response.total_cost,
        )
