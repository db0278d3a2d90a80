"""Application service: Update Order use case.

Changes an order's quantities, status and/or contact details through the
transition service, which keeps stock in step and re-runs the admission
scan.  Stock problems during the transition are reported back on the
result but never fail the update itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from armory.application.dto import OrderDTO
from armory.application.single_writer import SingleWriter
from armory.domain.exceptions import OrderNotFound
from armory.domain.model.order import AmmoKind, CustomerContact, OrderStatus
from armory.domain.repository.order_repository import OrderRepository
from armory.domain.repository.stock_repository import StockRepository
from armory.domain.service.admission_scan_service import AdmissionScanService
from armory.domain.service.order_transition_service import OrderTransitionService
from armory.domain.service.stock_adjustment_service import StockAdjustmentService


@dataclass(frozen=True)
class UpdateOrderResult:
    order: OrderDTO
    previous_status: str
    stock_adjusted: bool  # False if any stock adjustment failed


class UpdateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        stock_repo: StockRepository,
        writer: SingleWriter | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._stock_repo = stock_repo
        self._writer = writer or SingleWriter.shared()

    def handle(
        self,
        order_id: int,
        required: Mapping[AmmoKind | str, int] | None = None,
        status: str | OrderStatus | None = None,
        customer_name: str | None = None,
        family: str | None = None,
        phone: str | None = None,
    ) -> UpdateOrderResult:
        new_status = OrderStatus.parse(status) if status is not None else None

        with self._writer:
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise OrderNotFound(f"Order #{order_id} not found")

            contact = None
            if customer_name is not None or family is not None or phone is not None:
                contact = CustomerContact(
                    name=(customer_name if customer_name is not None else order.contact.name).strip(),
                    family=(family if family is not None else order.contact.family).strip(),
                    phone=phone if phone is not None else order.contact.phone,
                )

            adjuster = StockAdjustmentService(self._stock_repo)
            engine = OrderTransitionService(
                self._order_repo,
                adjuster,
                AdmissionScanService(self._order_repo, self._stock_repo, adjuster),
            )
            result = engine.apply_transition(
                order_id, new_required=required, new_status=new_status, contact=contact
            )
            stored = self._order_repo.get_by_id(order_id) or result.order

        return UpdateOrderResult(
            order=OrderDTO.from_order(stored),
            previous_status=result.previous_status.value,
            stock_adjusted=result.stock_ok,
        )
