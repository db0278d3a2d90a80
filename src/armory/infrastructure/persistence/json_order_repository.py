"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from armory.domain.model.order import (
    AmmoKind,
    CustomerContact,
    Order,
    OrderStatus,
    normalize_required,
    nothing_held,
)
from armory.domain.model.value_objects import Money
from armory.domain.repository.order_repository import OrderRepository
from armory.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        return max((o.id for o in self._orders()), default=0) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for order in self._orders():
            if order.id == order_id:
                return order
        return None

    def list_all(self) -> list[Order]:
        return sorted(self._orders(), key=lambda o: o.sort_key, reverse=True)

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        orders = [o for o in self._orders() if o.status is status]
        return sorted(orders, key=lambda o: o.sort_key)

    def save(self, order: Order) -> None:
        orders = self._file.load()

        if order.id is None:
            order.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw.get("id") == order.id:
                orders[i] = self._to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._to_raw(order))

        self._file.persist(orders)

    def delete(self, order_id: int) -> bool:
        orders = self._file.load()
        kept = [raw for raw in orders if raw.get("id") != order_id]
        if len(kept) == len(orders):
            return False
        self._file.persist(kept)
        return True

    # --- Serialization --------------------------------------------------------

    def _orders(self) -> list[Order]:
        return self._file.records(self._to_domain, "order")

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_name": order.contact.name,
            "family": order.contact.family,
            "phone": order.contact.phone,
            "status": order.status.value,
            "required": {kind.value: qty for kind, qty in order.required.items()},
            "held": {kind.value: qty for kind, qty in order.held.items()},
            "unit_prices": {kind.value: str(price.amount) for kind, price in order.unit_prices.items()},
            "commission_rate": str(order.commission_rate),
            "created_by": order.created_by,
            "created_at": order.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        status = OrderStatus(raw["status"])
        required = normalize_required(raw.get("required", {}))
        if "held" in raw:
            held = normalize_required(raw["held"])
        else:
            # Rows written before held stock was tracked.
            held = dict(required) if status.is_reserved else nothing_held()
        return Order(
            id=raw["id"],
            contact=CustomerContact(
                name=raw["customer_name"],
                family=raw["family"],
                phone=raw.get("phone", ""),
            ),
            required=required,
            unit_prices={
                AmmoKind(k): Money(Decimal(v)) for k, v in raw.get("unit_prices", {}).items()
            },
            commission_rate=Decimal(raw.get("commission_rate", "0.07")),
            status=status,
            created_by=raw.get("created_by"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            held=held,
        )
