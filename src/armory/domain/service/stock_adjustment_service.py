"""Domain service: Stock Adjustment.

The only code path that changes a stock quantity by a delta.  Every
higher-level operation (order transitions, the admission scan,
production, withdrawals) goes through ``debit`` / ``credit`` here.

Batches are best-effort: each adjustment is applied on its own, a
failing entry is logged and recorded, and the rest of the batch still
runs.  Callers decide what a partial failure means for them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping

from armory.domain.exceptions import (
    DomainException,
    InsufficientStock,
    PersistenceFailure,
    ResourceNotFound,
)
from armory.domain.model.stock import StockItem
from armory.domain.model.value_objects import ResourceKey, positive_quantity
from armory.domain.repository.stock_repository import StockRepository

logger = logging.getLogger(__name__)


class Direction(Enum):
    DEBIT = "debit"
    CREDIT = "credit"


@dataclass(frozen=True)
class StockAdjustment:
    resource: ResourceKey
    quantity: int
    direction: Direction

    def __str__(self) -> str:
        return f"{self.direction.value} {self.quantity} {self.resource}"

    def reversed(self) -> StockAdjustment:
        flipped = Direction.CREDIT if self.direction is Direction.DEBIT else Direction.DEBIT
        return StockAdjustment(self.resource, self.quantity, flipped)


@dataclass(frozen=True)
class FailedAdjustment:
    adjustment: StockAdjustment
    reason: str


@dataclass
class BatchResult:
    applied: list[StockAdjustment] = field(default_factory=list)
    failed: list[FailedAdjustment] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def debits_for(quantities: Mapping[ResourceKey, int]) -> list[StockAdjustment]:
    """Build debit adjustments, skipping zero quantities."""
    return [
        StockAdjustment(key, qty, Direction.DEBIT)
        for key, qty in quantities.items()
        if qty > 0
    ]


def credits_for(quantities: Mapping[ResourceKey, int]) -> list[StockAdjustment]:
    """Build credit adjustments, skipping zero quantities."""
    return [
        StockAdjustment(key, qty, Direction.CREDIT)
        for key, qty in quantities.items()
        if qty > 0
    ]


class StockAdjustmentService:

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def debit(self, resource: ResourceKey, quantity: int) -> None:
        positive_quantity(quantity, "Debit quantity")
        item = self._load(resource)
        item.debit(quantity)
        self._stock_repo.save(item)
        logger.debug("Debited %d of %s (now %d)", quantity, resource, item.quantity)

    def credit(self, resource: ResourceKey, quantity: int) -> None:
        positive_quantity(quantity, "Credit quantity")
        item = self._load(resource)
        item.credit(quantity)
        self._stock_repo.save(item)
        logger.debug("Credited %d of %s (now %d)", quantity, resource, item.quantity)

    def ensure_available(self, needed: Mapping[ResourceKey, int]) -> None:
        """Raise unless every resource in *needed* has enough on hand.

        Checks everything before anything is written, so a shortage in
        the last material leaves the first one untouched.
        """
        for resource, qty in needed.items():
            item = self._load(resource)
            if qty > item.quantity:
                raise InsufficientStock(
                    f"Insufficient stock for {resource.name} "
                    f"(need {qty}, have {item.quantity} available)"
                )

    def consume(self, needed: Mapping[ResourceKey, int]) -> BatchResult:
        """Debit every resource in *needed*, or none of them.

        Uses a two-phase approach:
          Phase 1 — ``ensure_available`` validates every resource.
          Phase 2 — debit as a batch; if any entry still fails, the
                    entries already applied are credited back.
        """
        self.ensure_available(needed)
        batch = self.apply_batch(debits_for(needed))
        if not batch.ok:
            self.revert(batch.applied)
            raise PersistenceFailure(
                "Could not debit " + "; ".join(f.reason for f in batch.failed)
            )
        return batch

    def apply(self, adjustment: StockAdjustment) -> None:
        if adjustment.direction is Direction.DEBIT:
            self.debit(adjustment.resource, adjustment.quantity)
        else:
            self.credit(adjustment.resource, adjustment.quantity)

    def apply_batch(self, adjustments: Iterable[StockAdjustment]) -> BatchResult:
        """Apply each adjustment independently, debits before credits."""
        ordered = sorted(adjustments, key=lambda a: a.direction is not Direction.DEBIT)
        result = BatchResult()
        for adjustment in ordered:
            try:
                self.apply(adjustment)
            except DomainException as exc:
                logger.warning("Stock adjustment failed (%s): %s", adjustment, exc)
                result.failed.append(FailedAdjustment(adjustment, str(exc)))
            else:
                result.applied.append(adjustment)
        return result

    def revert(self, applied: Iterable[StockAdjustment]) -> BatchResult:
        """Undo adjustments that were applied by an earlier batch."""
        return self.apply_batch(a.reversed() for a in applied)

    # --- Internal helpers -----------------------------------------------------

    def _load(self, resource: ResourceKey) -> StockItem:
        item = self._stock_repo.get(resource)
        if item is None:
            raise ResourceNotFound(f"No stock record for '{resource}'")
        return item
