"""Application service: Show / List Orders use cases (queries)."""

from __future__ import annotations

from armory.application.dto import OrderDTO
from armory.domain.exceptions import OrderNotFound
from armory.domain.model.order import OrderStatus
from armory.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order #{order_id} not found")
        return OrderDTO.from_order(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, status: str | None = None) -> list[OrderDTO]:
        """Every order, newest first, optionally filtered by status."""
        orders = self._order_repo.list_all()
        if status is not None:
            wanted = OrderStatus.parse(status)
            orders = [o for o in orders if o.status is wanted]
        return [OrderDTO.from_order(o) for o in orders]
