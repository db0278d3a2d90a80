"""Application service: Delete Order use case.

A reserved (ready or delivered) order gives its quantities back to stock
before it is erased; the admission scan then runs over what is left.
"""

from __future__ import annotations

from armory.application.single_writer import SingleWriter
from armory.domain.repository.order_repository import OrderRepository
from armory.domain.repository.stock_repository import StockRepository
from armory.domain.service.admission_scan_service import AdmissionScanService
from armory.domain.service.order_transition_service import OrderTransitionService
from armory.domain.service.stock_adjustment_service import StockAdjustmentService


class DeleteOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        stock_repo: StockRepository,
        writer: SingleWriter | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._stock_repo = stock_repo
        self._writer = writer or SingleWriter.shared()

    def handle(self, order_id: int) -> bool:
        """Delete an order; return False if its reservation was only partly returned."""
        with self._writer:
            adjuster = StockAdjustmentService(self._stock_repo)
            engine = OrderTransitionService(
                self._order_repo,
                adjuster,
                AdmissionScanService(self._order_repo, self._stock_repo, adjuster),
            )
            result = engine.remove(order_id)
        return result.stock.ok
