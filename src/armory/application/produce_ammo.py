"""Application services: production and material intake.

``ProduceAmmoHandler`` turns raw materials into ammunition in batches of
50 rounds.  ``ReceiveRouteMaterialsHandler`` books the materials brought
in by completed supply routes.  Both end with an admission scan.
"""

from __future__ import annotations

import logging

from armory.application.dto import ProductionDTO
from armory.application.single_writer import SingleWriter
from armory.domain.exceptions import ResourceNotFound
from armory.domain.model.order import AmmoKind
from armory.domain.model.production import RECIPES, ROUNDS_PER_BATCH, route_yield
from armory.domain.model.value_objects import positive_quantity
from armory.domain.repository.order_repository import OrderRepository
from armory.domain.repository.stock_repository import StockRepository
from armory.domain.service.admission_scan_service import AdmissionScanService
from armory.domain.service.stock_adjustment_service import (
    StockAdjustmentService,
    credits_for,
)

logger = logging.getLogger(__name__)


class ProduceAmmoHandler:

    def __init__(
        self,
        stock_repo: StockRepository,
        order_repo: OrderRepository,
        writer: SingleWriter | None = None,
    ) -> None:
        self._stock_repo = stock_repo
        self._order_repo = order_repo
        self._writer = writer or SingleWriter.shared()

    def handle(self, ammo_kind: str | AmmoKind, batches: int) -> ProductionDTO:
        """Produce ``50 * batches`` rounds of *ammo_kind*.

        Every material is checked before any is consumed; a shortage
        raises InsufficientStock and leaves the ledger untouched.
        """
        kind = AmmoKind.parse(ammo_kind)
        needed = RECIPES[kind].materials_for(positive_quantity(batches, "Number of batches"))
        rounds = ROUNDS_PER_BATCH * batches

        with self._writer:
            if self._stock_repo.get(kind.resource) is None:
                raise ResourceNotFound(f"No stock record for '{kind.resource}'")

            adjuster = StockAdjustmentService(self._stock_repo)
            adjuster.consume(needed)
            adjuster.credit(kind.resource, rounds)
            logger.info("Produced %d rounds of %s from %d batch(es)", rounds, kind.value, batches)

            AdmissionScanService(self._order_repo, self._stock_repo, adjuster).run_best_effort()

        return ProductionDTO(
            ammo_kind=kind.value,
            batches=batches,
            rounds_produced=rounds,
            materials_consumed={key.name: qty for key, qty in needed.items()},
        )


class ReceiveRouteMaterialsHandler:

    def __init__(
        self,
        stock_repo: StockRepository,
        order_repo: OrderRepository,
        writer: SingleWriter | None = None,
    ) -> None:
        self._stock_repo = stock_repo
        self._order_repo = order_repo
        self._writer = writer or SingleWriter.shared()

    def handle(self, routes: int) -> dict[str, int]:
        """Credit the materials delivered by *routes* completed routes."""
        delivered = route_yield(routes)

        with self._writer:
            adjuster = StockAdjustmentService(self._stock_repo)
            batch = adjuster.apply_batch(credits_for(delivered))
            AdmissionScanService(self._order_repo, self._stock_repo, adjuster).run_best_effort()

        return {a.resource.name: a.quantity for a in batch.applied}
