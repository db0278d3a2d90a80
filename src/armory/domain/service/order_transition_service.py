"""Domain service: Order Transitions.

Moves an order between statuses and/or changes its required quantities,
keeping the stock ledger in step.  What happens to stock depends only on
whether the old and new statuses hold a reservation
(``OrderStatus.is_reserved``):

    unreserved -> unreserved   nothing
    unreserved -> reserved     debit the new quantities in full
    reserved   -> unreserved   credit what the order holds
    reserved   -> reserved     debit/credit the per-kind difference

Stock is adjusted first, then the order is written.  A failed stock
adjustment is logged and never blocks the order write; the order's
``held`` map only moves by what was actually applied, so a refused debit
is never credited back later.  Every transition (and every removal) ends
with an admission scan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from armory.domain.exceptions import OrderNotFound
from armory.domain.model.order import (
    AmmoKind,
    CustomerContact,
    Order,
    OrderStatus,
    Requirement,
    normalize_required,
    nothing_held,
)
from armory.domain.repository.order_repository import OrderRepository
from armory.domain.service.admission_scan_service import (
    AdmissionScanService,
    ScanResult,
)
from armory.domain.service.stock_adjustment_service import (
    BatchResult,
    Direction,
    StockAdjustment,
    StockAdjustmentService,
    credits_for,
    debits_for,
)

logger = logging.getLogger(__name__)


def plan_stock_adjustments(
    old_status: OrderStatus,
    held: Mapping[AmmoKind, int],
    new_status: OrderStatus,
    new_required: Requirement,
) -> list[StockAdjustment]:
    """Return the debits/credits that take stock from the old state to the new.

    *held* is what the order currently has out of stock; for an order that
    entered its reserved status cleanly it equals the old requirement.
    """
    if not old_status.is_reserved and not new_status.is_reserved:
        return []
    if not old_status.is_reserved:
        return debits_for({k.resource: q for k, q in new_required.items()})
    if not new_status.is_reserved:
        return credits_for({k.resource: q for k, q in held.items()})

    deltas = {
        kind.resource: new_required.get(kind, 0) - held.get(kind, 0)
        for kind in AmmoKind
    }
    return debits_for({k: d for k, d in deltas.items() if d > 0}) + credits_for(
        {k: -d for k, d in deltas.items() if d < 0}
    )


def held_after(held: Mapping[AmmoKind, int], applied: Iterable[StockAdjustment]) -> Requirement:
    """Move *held* by the adjustments that actually went through."""
    after = {kind: held.get(kind, 0) for kind in AmmoKind}
    for adjustment in applied:
        kind = AmmoKind(adjustment.resource.name)
        if adjustment.direction is Direction.DEBIT:
            after[kind] += adjustment.quantity
        else:
            after[kind] -= adjustment.quantity
    return after


@dataclass
class TransitionResult:
    order: Order
    previous_status: OrderStatus
    stock: BatchResult
    scan: ScanResult | None

    @property
    def stock_ok(self) -> bool:
        return self.stock.ok


@dataclass
class RemovalResult:
    order_id: int
    stock: BatchResult
    scan: ScanResult | None


class OrderTransitionService:

    def __init__(
        self,
        order_repo: OrderRepository,
        adjuster: StockAdjustmentService,
        scanner: AdmissionScanService,
    ) -> None:
        self._order_repo = order_repo
        self._adjuster = adjuster
        self._scanner = scanner

    def apply_transition(
        self,
        order_id: int,
        new_required: Mapping[AmmoKind | str, int] | None = None,
        new_status: OrderStatus | None = None,
        contact: CustomerContact | None = None,
    ) -> TransitionResult:
        order = self._get(order_id)
        old_status, old_required = order.status, dict(order.required)
        held = dict(order.held) if old_status.is_reserved else nothing_held()

        # Validate before touching anything.
        target_required = (
            normalize_required(new_required) if new_required is not None else old_required
        )
        target_status = new_status if new_status is not None else old_status

        plan = plan_stock_adjustments(old_status, held, target_status, target_required)
        batch = self._adjuster.apply_batch(plan)
        if not batch.ok:
            logger.warning(
                "Order #%s %s -> %s: %d of %d stock adjustment(s) failed; "
                "order is updated anyway",
                order_id,
                old_status.value,
                target_status.value,
                len(batch.failed),
                len(plan),
            )

        order.revise(
            required=target_required,
            status=target_status,
            contact=contact,
            held=held_after(held, batch.applied) if target_status.is_reserved else nothing_held(),
        )
        self._order_repo.save(order)
        logger.info("Order #%s: %s -> %s", order_id, old_status.value, target_status.value)

        scan = self._scanner.run_best_effort()
        return TransitionResult(order=order, previous_status=old_status, stock=batch, scan=scan)

    def remove(self, order_id: int) -> RemovalResult:
        """Delete an order, returning whatever it holds to stock first."""
        order = self._get(order_id)

        batch = BatchResult()
        if order.is_reserved:
            batch = self._adjuster.apply_batch(
                credits_for({k.resource: q for k, q in order.held.items()})
            )
            if not batch.ok:
                logger.warning(
                    "Order #%s removed but its reservation was only partly returned",
                    order_id,
                )

        self._order_repo.delete(order_id)
        logger.info("Order #%s deleted (was %s)", order_id, order.status.value)

        scan = self._scanner.run_best_effort()
        return RemovalResult(order_id=order_id, stock=batch, scan=scan)

    # --- Internal helpers -----------------------------------------------------

    def _get(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order #{order_id} not found")
        return order
