"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from armory.application.single_writer import SingleWriter
from armory.domain.model.order import AmmoKind
from armory.domain.model.production import (
    ALUMINUM,
    COPPER,
    IRON,
    PLASTIC_CASING,
    TITANIUM,
)
from armory.domain.model.stock import StockItem
from armory.domain.model.value_objects import Money, ResourceKey
from armory.infrastructure.config import Settings
from armory.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from armory.infrastructure.persistence.json_stock_repository import (
    JsonStockRepository,
)
from armory.infrastructure.persistence.json_withdrawal_repository import (
    JsonWithdrawalRepository,
)

INITIAL_STOCK: list[tuple[ResourceKey, int, str]] = [
    (ALUMINUM, 320, "24.50"),
    (COPPER, 320, "24.62"),
    (PLASTIC_CASING, 320, "24.50"),
    (IRON, 320, "24.50"),
    (TITANIUM, 26, "24.62"),
    (AmmoKind.MM5.resource, 0, "100.00"),
    (AmmoKind.MM9.resource, 0, "125.00"),
    (AmmoKind.MM762.resource, 0, "200.00"),
    (AmmoKind.CBC12.resource, 0, "200.00"),
]


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings.from_env()


def writer() -> SingleWriter:
    return SingleWriter.shared()


def commission_rate() -> Decimal:
    return settings().commission_rate


def stock_repository() -> JsonStockRepository:
    cfg = settings()
    repo = JsonStockRepository(cfg.data_dir / "stock.json", cfg.ledger_schema)
    seed_stock(repo)
    return repo


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def withdrawal_repository() -> JsonWithdrawalRepository:
    return JsonWithdrawalRepository(settings().data_dir / "withdrawals.json")


def seed_stock(repo: JsonStockRepository) -> None:
    """Give an empty ledger its starting materials and price list."""
    if not repo.is_empty():
        return
    for key, quantity, price in INITIAL_STOCK:
        repo.save(StockItem(key=key, quantity=quantity, unit_price=Money.of(price)))
