"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.  Objects are
copied on the way in and out so, like the JSON files, a repository only
changes when ``save`` is called.
"""

from __future__ import annotations

import copy

from armory.domain.model.order import Order, OrderStatus
from armory.domain.model.stock import StockItem
from armory.domain.model.value_objects import Category, Money, ResourceKey
from armory.domain.model.withdrawal import Withdrawal
from armory.domain.repository.order_repository import OrderRepository
from armory.domain.repository.stock_repository import StockRepository
from armory.domain.repository.withdrawal_repository import WithdrawalRepository


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        order = self._store.get(order_id)
        return copy.deepcopy(order) if order is not None else None

    def list_all(self) -> list[Order]:
        orders = [copy.deepcopy(o) for o in self._store.values()]
        return sorted(orders, key=lambda o: o.sort_key, reverse=True)

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        orders = [copy.deepcopy(o) for o in self._store.values() if o.status is status]
        return sorted(orders, key=lambda o: o.sort_key)

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = copy.deepcopy(order)

    def delete(self, order_id: int) -> bool:
        return self._store.pop(order_id, None) is not None


class FakeStockRepository(StockRepository):

    def __init__(self, items: list[StockItem] | None = None) -> None:
        self._store: dict[ResourceKey, StockItem] = {}
        for item in items or []:
            self._store[item.key] = copy.deepcopy(item)

    def get(self, key: ResourceKey) -> StockItem | None:
        item = self._store.get(key)
        return copy.deepcopy(item) if item is not None else None

    def list_all(self, category: Category | None = None) -> list[StockItem]:
        return [
            copy.deepcopy(i)
            for i in self._store.values()
            if category is None or i.category is category
        ]

    def save(self, item: StockItem) -> None:
        self._store[item.key] = copy.deepcopy(item)

    def consolidate_duplicates(self) -> int:
        return 0

    # --- Test helpers ---------------------------------------------------------

    def quantity(self, key: ResourceKey) -> int:
        return self._store[key].quantity


class FakeWithdrawalRepository(WithdrawalRepository):

    def __init__(self) -> None:
        self._store: list[Withdrawal] = []

    def add(self, withdrawal: Withdrawal) -> None:
        withdrawal.id = len(self._store) + 1
        self._store.append(copy.deepcopy(withdrawal))

    def list_all(self) -> list[Withdrawal]:
        return [copy.deepcopy(w) for w in reversed(self._store)]


def stock_item(category: str, name: str, quantity: int, price: str = "0") -> StockItem:
    return StockItem(key=ResourceKey.of(category, name), quantity=quantity, unit_price=Money.of(price))


def armory_stock(
    ammo: dict[str, int] | None = None,
    material: int = 320,
    titanium: int = 26,
) -> FakeStockRepository:
    """A ledger shaped like a fresh install, with optional ammunition on hand."""
    ammo = ammo or {}
    prices = {"5mm": "100", "9mm": "125", "762mm": "200", "12cbc": "200"}
    items = [
        stock_item("material", name, material, "24.50")
        for name in ("Aluminum", "Copper", "Plastic Casing", "Iron")
    ]
    items.append(stock_item("material", "Titanium", titanium, "24.62"))
    items += [stock_item("ammo", kind, ammo.get(kind, 0), price) for kind, price in prices.items()]
    return FakeStockRepository(items)
