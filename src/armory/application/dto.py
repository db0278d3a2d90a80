"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from armory.domain.model.order import Order
from armory.domain.model.stock import StockItem
from armory.domain.model.withdrawal import Withdrawal


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    customer_name: str
    family: str
    phone: str
    status: str
    required: dict[str, int]  # ammo kind -> rounds
    total: str
    commission: str
    created_by: str | None
    created_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            customer_name=order.contact.name,
            family=order.contact.family,
            phone=order.contact.phone,
            status=order.status.value,
            required={kind.value: qty for kind, qty in order.required.items()},
            total=str(order.total),
            commission=str(order.commission),
            created_by=order.created_by,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class StockLineDTO:
    category: str
    name: str
    quantity: int
    unit_price: str
    updated_at: str

    @staticmethod
    def from_item(item: StockItem) -> StockLineDTO:
        return StockLineDTO(
            category=item.category.value,
            name=item.name,
            quantity=item.quantity,
            unit_price=str(item.unit_price),
            updated_at=item.updated_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class WithdrawalDTO:
    id: int
    category: str
    name: str
    quantity: int
    destination: str
    user: str | None
    created_at: str

    @staticmethod
    def from_withdrawal(withdrawal: Withdrawal) -> WithdrawalDTO:
        return WithdrawalDTO(
            id=withdrawal.id,  # type: ignore[arg-type]
            category=withdrawal.resource.category.value,
            name=withdrawal.resource.name,
            quantity=withdrawal.quantity,
            destination=withdrawal.destination_label,
            user=withdrawal.user,
            created_at=withdrawal.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class ProductionDTO:
    ammo_kind: str
    batches: int
    rounds_produced: int
    materials_consumed: dict[str, int]


@dataclass(frozen=True)
class ScanReportDTO:
    examined: int
    promoted: list[int]
    halted_at: int | None
