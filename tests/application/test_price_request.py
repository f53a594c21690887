"""Integration tests for the PriceRequest use case.

Uses an in-memory catalog, no file I/O.
"""

from billing.application.price_request import PriceRequestHandler
from billing.domain.model.catalog import Catalog, CatalogEntry
from billing.domain.model.messages import LineItem, PricedLineItem, Request
from billing.protocol import request_codec, response_codec
from tests.fakes import FakeCatalogRepository, sample_catalog


def _setup(catalog: Catalog | None = None) -> PriceRequestHandler:
    return PriceRequestHandler(catalog if catalog is not None else sample_catalog())


class TestPriceRequestHappyPath:

    def test_pencil_scenario(self):
        handler = _setup()
        request = request_codec.decode_request(bytes.fromhex("0001000A00020003FFFF"))
        response = handler.handle(request)
        assert response.request_number == 1
        assert response.total_cost == 2
        assert response.items == (PricedLineItem(b"Pencil #HB", 1, 2),)
        assert response.items[0].description_length == 10

    def test_total_is_sum_of_lines(self):
        handler = _setup()
        response = handler.handle(Request(7, (LineItem(2, 3), LineItem(3, 12), LineItem(1, 7))))
        assert response.total_cost == 2 + 45 + 4

    def test_empty_request(self):
        response = _setup().handle(Request(3, ()))
        assert response.items == ()
        assert response.total_cost == 0
        assert len(response_codec.encode(response)) == 10

    def test_encoded_reply_decodes_to_same_response(self):
        handler = _setup()
        response = handler.handle(Request(9, (LineItem(4, 12), LineItem(4, 12))))
        assert response_codec.decode_response(response_codec.encode(response)) == response


class TestPriceRequestUnknownCodes:

    def test_unknown_code_contributes_nothing(self):
        response = _setup().handle(Request(1, (LineItem(2, 3), LineItem(50, 999))))
        assert response.items[1] == PricedLineItem(b"Article Not Available", 0, 50)
        assert response.total_cost == 2

    def test_catalog_from_repository(self):
        repo = FakeCatalogRepository({5: CatalogEntry(b"Eraser", 2)})
        handler = PriceRequestHandler(repo.load())
        assert handler.handle(Request(1, (LineItem(3, 5),))).total_cost == 6
        assert repo.loads == 1
