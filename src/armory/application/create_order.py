"""Application service: Create Order use case.

Captures the current ammunition prices as the order's price snapshot,
stores the order as pending and then lets the admission scan decide
whether it (or anything older) can be made ready right away.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Mapping

from armory.application.dto import OrderDTO
from armory.application.single_writer import SingleWriter
from armory.domain.model.order import (
    DEFAULT_COMMISSION_RATE,
    AmmoKind,
    CustomerContact,
    Order,
)
from armory.domain.model.value_objects import Category, Money
from armory.domain.repository.order_repository import OrderRepository
from armory.domain.repository.stock_repository import StockRepository
from armory.domain.service.admission_scan_service import AdmissionScanService


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        stock_repo: StockRepository,
        commission_rate: Decimal = DEFAULT_COMMISSION_RATE,
        writer: SingleWriter | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._stock_repo = stock_repo
        self._commission_rate = commission_rate
        self._writer = writer or SingleWriter.shared()

    def handle(
        self,
        customer_name: str,
        family: str,
        required: Mapping[AmmoKind | str, int],
        phone: str = "",
        created_by: str | None = None,
    ) -> OrderDTO:
        """Create a new order.

        Steps:
        1. Validate contact details and quantities (fails before any write).
        2. Snapshot current ammunition prices onto the order.
        3. Persist it as pending.
        4. Run the admission scan.
        """
        contact = CustomerContact(name=customer_name.strip(), family=family.strip(), phone=phone)

        with self._writer:
            order = Order.create(
                contact=contact,
                required=required,
                unit_prices=self._ammo_prices(),
                commission_rate=self._commission_rate,
                created_by=created_by,
            )
            self._order_repo.save(order)

            AdmissionScanService(self._order_repo, self._stock_repo).run_best_effort()
            stored = self._order_repo.get_by_id(order.id) or order  # type: ignore[arg-type]

        return OrderDTO.from_order(stored)

    def _ammo_prices(self) -> dict[AmmoKind, Money]:
        prices: dict[AmmoKind, Money] = {}
        for item in self._stock_repo.list_all(Category.AMMO):
            try:
                prices[AmmoKind(item.name)] = item.unit_price
            except ValueError:
                continue
        return prices
