"""Unit tests for the StockAdjustmentService domain service."""

import pytest

from armory.domain.exceptions import InsufficientStock, ResourceNotFound
from armory.domain.model.value_objects import ResourceKey
from armory.domain.service.stock_adjustment_service import (
    Direction,
    StockAdjustment,
    StockAdjustmentService,
    credits_for,
    debits_for,
)
from tests.fakes import FakeStockRepository, stock_item

IRON = ResourceKey.of("material", "Iron")
COPPER = ResourceKey.of("material", "Copper")
GHOST = ResourceKey.of("material", "Unobtainium")


def _setup(iron: int = 100, copper: int = 100):
    repo = FakeStockRepository([
        stock_item("material", "Iron", iron),
        stock_item("material", "Copper", copper),
    ])
    return StockAdjustmentService(repo), repo


class TestDebitCredit:

    def test_debit_and_credit_persist(self):
        svc, repo = _setup()
        svc.debit(IRON, 40)
        svc.credit(COPPER, 5)
        assert repo.quantity(IRON) == 60
        assert repo.quantity(COPPER) == 105

    def test_unknown_resource_rejected(self):
        svc, _ = _setup()
        with pytest.raises(ResourceNotFound, match="No stock record"):
            svc.credit(GHOST, 1)


class TestBuilders:

    def test_zero_quantities_skipped(self):
        assert debits_for({IRON: 0, COPPER: 3}) == [StockAdjustment(COPPER, 3, Direction.DEBIT)]
        assert credits_for({IRON: 0}) == []

    def test_reversed(self):
        adj = StockAdjustment(IRON, 3, Direction.DEBIT)
        assert adj.reversed() == StockAdjustment(IRON, 3, Direction.CREDIT)


class TestApplyBatch:

    def test_failed_entry_does_not_stop_the_rest(self):
        svc, repo = _setup()
        batch = svc.apply_batch([
            StockAdjustment(GHOST, 5, Direction.DEBIT),
            StockAdjustment(IRON, 5, Direction.DEBIT),
            StockAdjustment(COPPER, 5, Direction.CREDIT),
        ])
        assert not batch.ok
        assert len(batch.failed) == 1
        assert batch.failed[0].adjustment.resource == GHOST
        assert repo.quantity(IRON) == 95
        assert repo.quantity(COPPER) == 105

    def test_debits_applied_before_credits(self):
        svc, _ = _setup()
        batch = svc.apply_batch([
            StockAdjustment(COPPER, 1, Direction.CREDIT),
            StockAdjustment(IRON, 1, Direction.DEBIT),
        ])
        assert [a.direction for a in batch.applied] == [Direction.DEBIT, Direction.CREDIT]

    def test_overdraw_is_recorded_as_failure(self):
        svc, repo = _setup(iron=3)
        batch = svc.apply_batch(debits_for({IRON: 5}))
        assert not batch.ok
        assert repo.quantity(IRON) == 3

    def test_revert_undoes_applied(self):
        svc, repo = _setup()
        batch = svc.apply_batch(debits_for({IRON: 10, COPPER: 20}))
        svc.revert(batch.applied)
        assert repo.quantity(IRON) == 100
        assert repo.quantity(COPPER) == 100


class TestConsume:

    def test_consumes_everything(self):
        svc, repo = _setup()
        svc.consume({IRON: 10, COPPER: 20})
        assert repo.quantity(IRON) == 90
        assert repo.quantity(COPPER) == 80

    def test_shortage_leaves_ledger_untouched(self):
        svc, repo = _setup(iron=100, copper=5)
        with pytest.raises(InsufficientStock, match="Copper"):
            svc.consume({IRON: 10, COPPER: 20})
        assert repo.quantity(IRON) == 100
        assert repo.quantity(COPPER) == 5
