"""Production rules: what a batch of ammunition costs in raw materials."""

from __future__ import annotations

import math
from dataclasses import dataclass

from armory.domain.model.order import AmmoKind
from armory.domain.model.value_objects import Category, ResourceKey, positive_quantity

ROUNDS_PER_BATCH = 50

ALUMINUM = ResourceKey(Category.MATERIAL, "Aluminum")
COPPER = ResourceKey(Category.MATERIAL, "Copper")
PLASTIC_CASING = ResourceKey(Category.MATERIAL, "Plastic Casing")
IRON = ResourceKey(Category.MATERIAL, "Iron")
TITANIUM = ResourceKey(Category.MATERIAL, "Titanium")

BASE_MATERIALS = (ALUMINUM, COPPER, PLASTIC_CASING, IRON)
MATERIALS = BASE_MATERIALS + (TITANIUM,)

# Materials delivered by one completed supply route.
ROUTE_BASE_MATERIAL_YIELD = 160
ROUTE_TITANIUM_YIELD = 13


@dataclass(frozen=True)
class Recipe:
    """Materials consumed by ONE batch of a given ammunition kind."""

    base_material: int
    titanium: int

    def materials_for(self, batches: int) -> dict[ResourceKey, int]:
        positive_quantity(batches, "Number of batches")
        needed = {key: self.base_material * batches for key in BASE_MATERIALS}
        needed[TITANIUM] = self.titanium * batches
        return needed


RECIPES: dict[AmmoKind, Recipe] = {
    AmmoKind.MM5: Recipe(base_material=8, titanium=1),
    AmmoKind.MM9: Recipe(base_material=10, titanium=1),
    AmmoKind.MM762: Recipe(base_material=12, titanium=1),
    AmmoKind.CBC12: Recipe(base_material=15, titanium=2),
}


def batches_for_rounds(rounds: int) -> int:
    """Batches needed to cover *rounds*; a partial batch counts as a whole one."""
    return math.ceil(positive_quantity(rounds, "Rounds") / ROUNDS_PER_BATCH)


def route_yield(routes: int) -> dict[ResourceKey, int]:
    positive_quantity(routes, "Number of routes")
    delivered = {key: ROUTE_BASE_MATERIAL_YIELD * routes for key in BASE_MATERIALS}
    delivered[TITANIUM] = ROUTE_TITANIUM_YIELD * routes
    return delivered
