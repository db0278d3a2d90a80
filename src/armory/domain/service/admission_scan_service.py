"""Domain service: Admission Scan (readiness sweep).

Walks the pending queue oldest-first and promotes each order to
``ready`` while ammunition on hand covers it.  Promotion reserves the
order's quantities by debiting them from the stock ledger, and the scan
keeps a working copy of what is left so later orders in the same sweep
see the reduced stock.

The sweep stops at the first order it cannot cover.  Later orders are
not examined even if they would fit: the head of the queue is served
before anyone behind it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from armory.domain.exceptions import DomainException
from armory.domain.model.order import AmmoKind, Order, OrderStatus
from armory.domain.model.value_objects import Category
from armory.domain.repository.order_repository import OrderRepository
from armory.domain.repository.stock_repository import StockRepository
from armory.domain.service.stock_adjustment_service import (
    StockAdjustmentService,
    debits_for,
)

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    examined: int = 0
    promoted: list[int] = field(default_factory=list)
    halted_at: int | None = None
    available_after: dict[AmmoKind, int] = field(default_factory=dict)


class AdmissionScanService:

    def __init__(
        self,
        order_repo: OrderRepository,
        stock_repo: StockRepository,
        adjuster: StockAdjustmentService | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._stock_repo = stock_repo
        self._adjuster = adjuster or StockAdjustmentService(stock_repo)

    def run(self) -> ScanResult:
        available = self._ammo_on_hand()
        pending = sorted(
            self._order_repo.list_by_status(OrderStatus.PENDING),
            key=lambda o: o.sort_key,
        )
        logger.debug("Admission scan: %d pending order(s), stock %s", len(pending), _fmt(available))

        result = ScanResult()
        for order in pending:
            result.examined += 1
            if not order.fits_within(available):
                logger.info(
                    "Order #%s waits for stock (short %s); scan stops here",
                    order.id,
                    _fmt(order.shortfall(available)),
                )
                result.halted_at = order.id
                break
            if not self._promote(order):
                result.halted_at = order.id
                break
            for kind, qty in order.required.items():
                available[kind] -= qty
            result.promoted.append(order.id)  # type: ignore[arg-type]

        result.available_after = available
        if result.promoted:
            logger.info("Admission scan promoted order(s) %s to ready", result.promoted)
        return result

    def run_best_effort(self) -> ScanResult | None:
        """Run the scan, logging instead of raising on failure.

        Used after a mutation that has already succeeded: a broken scan
        must not undo or hide that mutation from its caller.
        """
        try:
            return self.run()
        except DomainException:
            logger.exception("Admission scan failed")
            return None

    # --- Internal helpers -----------------------------------------------------

    def _promote(self, order: Order) -> bool:
        reservation = debits_for({k.resource: q for k, q in order.required.items()})
        batch = self._adjuster.apply_batch(reservation)
        if not batch.ok:
            logger.error(
                "Could not reserve stock for order #%s: %s",
                order.id,
                "; ".join(f.reason for f in batch.failed),
            )
            undo = self._adjuster.revert(batch.applied)
            if not undo.ok:
                logger.error("Rollback of order #%s reservation was incomplete", order.id)
            return False

        order.mark_ready()
        self._order_repo.save(order)
        return True

    def _ammo_on_hand(self) -> dict[AmmoKind, int]:
        available = {kind: 0 for kind in AmmoKind}
        for item in self._stock_repo.list_all(Category.AMMO):
            try:
                kind = AmmoKind(item.name)
            except ValueError:
                continue
            available[kind] += item.quantity
        return available


def _fmt(quantities: dict[AmmoKind, int]) -> str:
    return ", ".join(f"{kind.value}={qty}" for kind, qty in quantities.items()) or "-"
