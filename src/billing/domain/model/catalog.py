"""Catalog of billable items.

The catalog is loaded once per server run and never mutated afterwards.
It is passed explicitly into every pricing call rather than living in
module state.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from billing.domain.exceptions import ValidationError
from billing.domain.model.value_objects import (
    MAX_DESCRIPTION_LENGTH,
    require_field,
)


@dataclass(frozen=True)
class CatalogEntry:
    """Description and unit cost of one item code."""

    description: bytes
    unit_cost: int

    def __post_init__(self) -> None:
        if not isinstance(self.description, bytes):
            raise ValidationError(
                f"Description must be bytes, got {type(self.description).__name__}"
            )
        if len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Description is {len(self.description)} bytes, "
                f"maximum is {MAX_DESCRIPTION_LENGTH}"
            )
        require_field("Unit cost", self.unit_cost)


class Catalog:
    """Read-only mapping of item code -> CatalogEntry.

    ``lookup()`` returning None is an expected outcome; callers apply the
    placeholder policy instead of treating it as an error.
    """

    def __init__(self, entries: Mapping[int, CatalogEntry] | None = None) -> None:
        checked: dict[int, CatalogEntry] = {}
        for code, entry in (entries or {}).items():
            require_field("Code", code)
            checked[code] = entry
        self._entries = MappingProxyType(checked)

    @classmethod
    def of(cls, items: Iterable[tuple[int, CatalogEntry]]) -> Catalog:
        return cls(dict(items))

    def lookup(self, code: int) -> CatalogEntry | None:
        return self._entries.get(code)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._entries))

    def __contains__(self, code: object) -> bool:
        return code in self._entries

    def items(self) -> list[tuple[int, CatalogEntry]]:
        """Entries ordered by code."""
        return [(code, self._entries[code]) for code in self]
