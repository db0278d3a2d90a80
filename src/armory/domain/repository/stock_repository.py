"""Abstract repository for the stock ledger.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from armory.domain.model.stock import StockItem
from armory.domain.model.value_objects import Category, ResourceKey


class StockRepository(ABC):

    @abstractmethod
    def get(self, key: ResourceKey) -> StockItem | None:
        """Return the stock row for a resource, or None.

        If the ledger holds duplicate rows for *key*, they are returned
        as a single item whose quantity is their sum.
        """

    @abstractmethod
    def list_all(self, category: Category | None = None) -> list[StockItem]:
        """Return every (consolidated) stock row, optionally for one category."""

    @abstractmethod
    def save(self, item: StockItem) -> None:
        """Persist a new or updated stock row, collapsing any duplicates."""

    @abstractmethod
    def consolidate_duplicates(self) -> int:
        """Merge duplicate rows by summation; return how many rows were removed."""
