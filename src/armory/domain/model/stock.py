"""StockItem aggregate — one row of the stock ledger.

Each resource (a raw material or an ammunition kind) has one StockItem
holding the physical on-hand quantity and its unit price.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from armory.domain.exceptions import InsufficientStock
from armory.domain.model.value_objects import (
    Category,
    Money,
    ResourceKey,
    non_negative_quantity,
    positive_quantity,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StockItem:
    """Aggregate root for a stock ledger row.

    Invariant: ``quantity`` is never negative.
    """

    key: ResourceKey
    quantity: int
    unit_price: Money = field(default_factory=Money.zero)
    updated_at: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        non_negative_quantity(self.quantity, f"Stock quantity of {self.key.name}")

    @property
    def category(self) -> Category:
        return self.key.category

    @property
    def name(self) -> str:
        return self.key.name

    def debit(self, quantity: int) -> None:
        """Remove *quantity* units from the shelf."""
        positive_quantity(quantity, "Debit quantity")
        if quantity > self.quantity:
            raise InsufficientStock(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.quantity} available)"
            )
        self.quantity -= quantity
        self.updated_at = _now()

    def credit(self, quantity: int) -> None:
        """Put *quantity* units back on (or onto) the shelf."""
        positive_quantity(quantity, "Credit quantity")
        self.quantity += quantity
        self.updated_at = _now()

    def set_quantity(self, quantity: int) -> None:
        """Overwrite the on-hand quantity (manual stock edit)."""
        self.quantity = non_negative_quantity(quantity, f"Stock quantity of {self.name}")
        self.updated_at = _now()

    def merged_with(self, other: StockItem) -> StockItem:
        """Fold a duplicate ledger row for the same resource into this one."""
        return StockItem(
            key=self.key,
            quantity=self.quantity + other.quantity,
            unit_price=self.unit_price,
            updated_at=max(self.updated_at, other.updated_at),
        )
