"""Integration tests for the UpdateOrder and DeleteOrder use cases."""

import pytest

from armory.application.create_order import CreateOrderHandler
from armory.application.delete_order import DeleteOrderHandler
from armory.application.update_order import UpdateOrderHandler
from armory.domain.exceptions import OrderNotFound, ValidationError
from armory.domain.model.order import AmmoKind, OrderStatus
from tests.fakes import FakeOrderRepository, armory_stock

NINE = AmmoKind.MM9.resource


def _setup(ammo: dict[str, int] | None = None):
    order_repo = FakeOrderRepository()
    stock_repo = armory_stock(ammo)
    create = CreateOrderHandler(order_repo, stock_repo)
    update = UpdateOrderHandler(order_repo, stock_repo)
    delete = DeleteOrderHandler(order_repo, stock_repo)
    return create, update, delete, order_repo, stock_repo


class TestUpdateOrder:

    def test_cancel_ready_order_returns_stock(self):
        create, update, _, _, stock_repo = _setup({"9mm": 50})
        dto = create.handle("Tony", "Marino", {"9mm": 50})
        assert stock_repo.quantity(NINE) == 0

        result = update.handle(dto.id, status="cancelled")

        assert result.previous_status == "ready"
        assert result.order.status == "cancelled"
        assert result.stock_adjusted
        assert stock_repo.quantity(NINE) == 50

    def test_ready_order_quantity_increase_debits_delta(self):
        create, update, _, order_repo, stock_repo = _setup({"9mm": 30})
        dto = create.handle("Tony", "Marino", {"9mm": 10})

        update.handle(dto.id, required={"9mm": 15})

        assert stock_repo.quantity(NINE) == 15
        assert order_repo.get_by_id(dto.id).required[AmmoKind.MM9] == 15

    def test_cancelling_head_of_queue_lets_next_order_in(self):
        create, update, _, order_repo, _ = _setup({"9mm": 20})
        head = create.handle("Tony", "Marino", {"9mm": 100})
        behind = create.handle("Sal", "Vitale", {"9mm": 20})
        assert behind.status == "pending"

        update.handle(head.id, status="cancelled")

        assert order_repo.get_by_id(behind.id).status is OrderStatus.READY

    def test_failed_stock_adjustment_is_reported_not_raised(self):
        create, update, _, order_repo, stock_repo = _setup()
        dto = create.handle("Tony", "Marino", {"9mm": 10})

        result = update.handle(dto.id, status="delivered")

        assert not result.stock_adjusted
        assert order_repo.get_by_id(dto.id).status is OrderStatus.DELIVERED
        assert stock_repo.quantity(NINE) == 0

    def test_contact_fields_merge_with_existing(self):
        create, update, _, _, _ = _setup()
        dto = create.handle("Tony", "Marino", {"5mm": 1}, phone="555-0100")

        result = update.handle(dto.id, family="Corleone")

        assert result.order.customer_name == "Tony"
        assert result.order.family == "Corleone"
        assert result.order.phone == "555-0100"

    def test_unknown_status_rejected(self):
        create, update, _, _, _ = _setup()
        dto = create.handle("Tony", "Marino", {"5mm": 1})
        with pytest.raises(ValidationError, match="Unknown order status"):
            update.handle(dto.id, status="shipped")

    def test_unknown_order_rejected(self):
        _, update, _, _, _ = _setup()
        with pytest.raises(OrderNotFound, match="not found"):
            update.handle(42, status="ready")


class TestDeleteOrder:

    def test_deleting_reserved_order_credits_stock(self):
        create, _, delete, order_repo, stock_repo = _setup({"9mm": 40})
        dto = create.handle("Tony", "Marino", {"9mm": 40})

        assert delete.handle(dto.id) is True

        assert order_repo.get_by_id(dto.id) is None
        assert stock_repo.quantity(NINE) == 40

    def test_deleting_frees_stock_for_waiting_order(self):
        create, _, delete, order_repo, _ = _setup({"9mm": 40})
        first = create.handle("Tony", "Marino", {"9mm": 40})
        waiting = create.handle("Sal", "Vitale", {"9mm": 30})

        delete.handle(first.id)

        assert order_repo.get_by_id(waiting.id).status is OrderStatus.READY

    def test_unknown_order_rejected(self):
        _, _, delete, _, _ = _setup()
        with pytest.raises(OrderNotFound):
            delete.handle(7)
