"""Application service: Withdraw Stock use case.

Ad-hoc removal of stock outside any order.  There is no order lifecycle
to compensate later, so this is the one removal that reads, checks and
only then writes: a withdrawal larger than what is on hand is refused.
"""

from __future__ import annotations

import logging

from armory.application.dto import WithdrawalDTO
from armory.application.single_writer import SingleWriter
from armory.domain.exceptions import InsufficientStock, ResourceNotFound
from armory.domain.model.value_objects import Category, ResourceKey, positive_quantity
from armory.domain.model.withdrawal import Withdrawal
from armory.domain.repository.order_repository import OrderRepository
from armory.domain.repository.stock_repository import StockRepository
from armory.domain.repository.withdrawal_repository import WithdrawalRepository
from armory.domain.service.admission_scan_service import AdmissionScanService
from armory.domain.service.stock_adjustment_service import StockAdjustmentService

logger = logging.getLogger(__name__)


class WithdrawStockHandler:

    def __init__(
        self,
        stock_repo: StockRepository,
        order_repo: OrderRepository,
        withdrawal_repo: WithdrawalRepository,
        writer: SingleWriter | None = None,
    ) -> None:
        self._stock_repo = stock_repo
        self._order_repo = order_repo
        self._withdrawal_repo = withdrawal_repo
        self._writer = writer or SingleWriter.shared()

    def handle(
        self,
        category: str | Category,
        name: str,
        quantity: int,
        destinations: list[str] | str | None = None,
        user: str | None = None,
    ) -> WithdrawalDTO:
        positive_quantity(quantity, "Withdrawal quantity")
        key = ResourceKey.of(category, name)

        with self._writer:
            item = self._stock_repo.get(key)
            if item is None:
                raise ResourceNotFound(f"No stock record for '{key}'")
            if quantity > item.quantity:
                raise InsufficientStock(
                    f"Insufficient stock for {key.name} "
                    f"(requested {quantity}, have {item.quantity} available)"
                )

            adjuster = StockAdjustmentService(self._stock_repo)
            adjuster.debit(key, quantity)

            withdrawal = Withdrawal(
                id=None,
                resource=key,
                quantity=quantity,
                destinations=_split_destinations(destinations),
                user=user,
            )
            self._withdrawal_repo.add(withdrawal)
            logger.info("Withdrew %d of %s to %s", quantity, key, withdrawal.destination_label)

            AdmissionScanService(self._order_repo, self._stock_repo, adjuster).run_best_effort()

        return WithdrawalDTO.from_withdrawal(withdrawal)


class ListWithdrawalsHandler:

    def __init__(self, withdrawal_repo: WithdrawalRepository) -> None:
        self._withdrawal_repo = withdrawal_repo

    def handle(self) -> list[WithdrawalDTO]:
        return [WithdrawalDTO.from_withdrawal(w) for w in self._withdrawal_repo.list_all()]


def _split_destinations(raw: list[str] | str | None) -> list[str]:
    """Accept either a list or a comma-separated string."""
    if raw is None:
        return []
    parts = raw.split(",") if isinstance(raw, str) else raw
    return [p.strip() for p in parts if p and p.strip()]
