"""Unit tests for the catalog value and its entries."""

import pytest

from billing.domain.exceptions import ValidationError
from billing.domain.model.catalog import Catalog, CatalogEntry
from tests.fakes import sample_catalog


class TestCatalogEntry:

    def test_valid_entry(self):
        entry = CatalogEntry(b"Pencil #HB", 1)
        assert entry.description == b"Pencil #HB"
        assert entry.unit_cost == 1

    def test_description_over_255_bytes_rejected(self):
        with pytest.raises(ValidationError, match="maximum is 255"):
            CatalogEntry(b"x" * 256, 1)

    def test_unit_cost_above_field_range_rejected(self):
        with pytest.raises(ValidationError, match="0..32767"):
            CatalogEntry(b"Gold", 40000)

    def test_entries_are_immutable(self):
        entry = CatalogEntry(b"Pencil", 1)
        with pytest.raises(AttributeError):
            entry.unit_cost = 2


class TestCatalog:

    def test_lookup_hit(self):
        assert sample_catalog().lookup(3) == CatalogEntry(b"Pencil #HB", 1)

    def test_lookup_miss_is_none(self):
        assert sample_catalog().lookup(999) is None

    def test_code_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            Catalog({40000: CatalogEntry(b"x", 1)})

    def test_items_ordered_by_code(self):
        catalog = Catalog.of([(12, CatalogEntry(b"b", 1)), (3, CatalogEntry(b"a", 1))])
        assert [code for code, _ in catalog.items()] == [3, 12]

    def test_not_mutated_by_source_dict(self):
        source = {3: CatalogEntry(b"Pencil", 1)}
        catalog = Catalog(source)
        source[4] = CatalogEntry(b"Pen", 2)
        assert 4 not in catalog
        assert len(catalog) == 1
