"""Application services: manual stock edits.

``SetStockHandler`` overwrites a quantity outright.  ``AdjustStockHandler``
adds (or, with a negative delta, removes) stock; adding ammunition can
optionally consume the raw materials its production would have used.
Both re-run the admission scan afterwards, since more stock may let
pending orders through.
"""

from __future__ import annotations

from armory.application.dto import StockLineDTO
from armory.application.single_writer import SingleWriter
from armory.domain.exceptions import (
    InsufficientStock,
    InvalidQuantity,
    ResourceNotFound,
    ValidationError,
)
from armory.domain.model.order import AmmoKind
from armory.domain.model.production import RECIPES, batches_for_rounds
from armory.domain.model.stock import StockItem
from armory.domain.model.value_objects import (
    Category,
    ResourceKey,
    non_negative_quantity,
)
from armory.domain.repository.order_repository import OrderRepository
from armory.domain.repository.stock_repository import StockRepository
from armory.domain.service.admission_scan_service import AdmissionScanService
from armory.domain.service.stock_adjustment_service import StockAdjustmentService


class _StockHandler:

    def __init__(
        self,
        stock_repo: StockRepository,
        order_repo: OrderRepository,
        writer: SingleWriter | None = None,
    ) -> None:
        self._stock_repo = stock_repo
        self._order_repo = order_repo
        self._writer = writer or SingleWriter.shared()

    def _get(self, key: ResourceKey) -> StockItem:
        item = self._stock_repo.get(key)
        if item is None:
            raise ResourceNotFound(f"No stock record for '{key}'")
        return item

    def _scan(self, adjuster: StockAdjustmentService) -> None:
        AdmissionScanService(self._order_repo, self._stock_repo, adjuster).run_best_effort()


class SetStockHandler(_StockHandler):

    def handle(self, category: str | Category, name: str, quantity: int) -> StockLineDTO:
        non_negative_quantity(quantity, "Stock quantity")
        key = ResourceKey.of(category, name)

        with self._writer:
            item = self._get(key)
            item.set_quantity(quantity)
            self._stock_repo.save(item)
            self._scan(StockAdjustmentService(self._stock_repo))
            return StockLineDTO.from_item(self._get(key))


class AdjustStockHandler(_StockHandler):

    def handle(
        self,
        category: str | Category,
        name: str,
        delta: int,
        consume_materials: bool = False,
    ) -> StockLineDTO:
        """Add *delta* units (remove them if negative).

        With ``consume_materials`` an ammunition increase debits the
        materials for ``ceil(delta / 50)`` batches first; a shortage of
        any material aborts before anything is written.
        """
        if isinstance(delta, bool) or not isinstance(delta, int) or delta == 0:
            raise InvalidQuantity(f"Stock adjustment must be a non-zero integer, got {delta!r}")
        key = ResourceKey.of(category, name)
        if consume_materials and (delta < 0 or key.category is not Category.AMMO):
            raise ValidationError("Only an ammunition increase can consume materials")

        with self._writer:
            item = self._get(key)
            adjuster = StockAdjustmentService(self._stock_repo)

            if delta > 0:
                if consume_materials:
                    recipe = RECIPES[AmmoKind.parse(key.name)]
                    adjuster.consume(recipe.materials_for(batches_for_rounds(delta)))
                adjuster.credit(key, delta)
            else:
                if -delta > item.quantity:
                    raise InsufficientStock(
                        f"Insufficient stock for {key.name} "
                        f"(requested {-delta}, have {item.quantity} available)"
                    )
                adjuster.debit(key, -delta)

            self._scan(adjuster)
            return StockLineDTO.from_item(self._get(key))
