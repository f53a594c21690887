"""Unit tests for pricing, aggregation, verification and the repair policies."""

import pytest

from billing.domain.exceptions import ErrorKind, TotalMismatch, ValidationError
from billing.domain.model.catalog import Catalog, CatalogEntry
from billing.domain.model.messages import LineItem, PricedLineItem
from billing.domain.policy import (
    NOT_AVAILABLE_DESCRIPTION,
    placeholder_entry,
    resolve_entry,
    truncate_description,
    wire_total,
)
from billing.domain.service.billing_service import (
    aggregate_total,
    build_response_items,
    check_total,
    compute_line_cost,
    verify_total,
)
from tests.fakes import sample_catalog


class TestLineCost:

    def test_exact_product(self):
        assert compute_line_cost(15, 3) == 45

    def test_no_overflow_at_16_bit_limits(self):
        assert compute_line_cost(0xFFFF, 0xFFFF) == 0xFFFE0001


class TestAggregateTotal:

    def test_empty_is_zero(self):
        assert aggregate_total([]) == 0

    def test_sums_every_line(self):
        items = [PricedLineItem(b"a", 1, 2), PricedLineItem(b"b", 15, 3)]
        assert aggregate_total(items) == 47

    def test_exceeds_32_bits_without_wrapping(self):
        items = [PricedLineItem(b"x", 0xFFFF, 0xFFFF)] * 3
        assert aggregate_total(items) == 3 * 0xFFFE0001


class TestBuildResponseItems:

    def test_known_code_priced_from_catalog(self):
        items = build_response_items([LineItem(2, 3)], sample_catalog())
        assert items == (PricedLineItem(b"Pencil #HB", 1, 2),)

    def test_unknown_code_gets_placeholder(self):
        (item,) = build_response_items([LineItem(5, 999)], sample_catalog())
        assert item.description == b"Article Not Available"
        assert item.unit_cost == 0
        assert item.quantity == 5

    def test_preserves_order_and_duplicates(self):
        items = build_response_items(
            [LineItem(1, 12), LineItem(2, 3), LineItem(4, 12)], sample_catalog()
        )
        assert [i.description for i in items] == [b"Stapler", b"Pencil #HB", b"Stapler"]
        assert [i.quantity for i in items] == [1, 2, 4]

    def test_empty_request(self):
        assert build_response_items([], sample_catalog()) == ()

    def test_empty_catalog_prices_everything_at_zero(self):
        items = build_response_items([LineItem(3, 1), LineItem(1, 2)], Catalog())
        assert aggregate_total(items) == 0


class TestVerifyTotal:

    def test_matching_total(self):
        items = [PricedLineItem(b"Pencil #HB", 1, 2)]
        assert verify_total(2, items) is True

    def test_mismatch_returns_false(self):
        items = [PricedLineItem(b"a", 10, 9)]
        assert verify_total(100, items) is False

    def test_wrapped_total_is_not_masked(self):
        items = [PricedLineItem(b"x", 0xFFFF, 0xFFFF)] * 2
        wrapped = wire_total(aggregate_total(items))
        assert verify_total(wrapped, items) is False

    def test_check_total_raises_with_figures(self):
        items = [PricedLineItem(b"a", 10, 9)]
        with pytest.raises(TotalMismatch) as exc_info:
            check_total(100, items)
        assert exc_info.value.declared == 100
        assert exc_info.value.computed == 90
        assert exc_info.value.kind is ErrorKind.TOTAL_MISMATCH


class TestPolicies:

    def test_truncate_keeps_short_descriptions(self):
        assert truncate_description(b"Pencil") == b"Pencil"

    def test_truncate_cuts_to_255_bytes(self):
        original = bytes(range(256)) + b"tail"
        assert truncate_description(original) == original[:255]

    def test_truncate_is_idempotent(self):
        once = truncate_description(b"y" * 400)
        assert truncate_description(once) == once

    def test_placeholder_entry(self):
        entry = placeholder_entry()
        assert entry.description == NOT_AVAILABLE_DESCRIPTION
        assert entry.unit_cost == 0

    def test_resolve_entry_hit_and_miss(self):
        catalog = Catalog({3: CatalogEntry(b"Pencil #HB", 1)})
        assert resolve_entry(3, catalog).unit_cost == 1
        assert resolve_entry(4, catalog) == placeholder_entry()

    def test_wire_total_truncates_to_32_bits(self):
        assert wire_total(0x1_0000_0005) == 5
        assert wire_total(90) == 90

    def test_wire_total_rejects_negative(self):
        with pytest.raises(ValidationError, match="non-negative"):
            wire_total(-1)
