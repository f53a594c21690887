"""Abstract repository for the item catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (CSV, in-memory) live in the
infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from billing.domain.model.catalog import Catalog


class CatalogRepository(ABC):

    @abstractmethod
    def load(self) -> Catalog:
        """Return the full catalog as an immutable value."""
