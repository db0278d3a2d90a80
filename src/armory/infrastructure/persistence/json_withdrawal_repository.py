"""JSON-file-backed implementation of WithdrawalRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from armory.domain.model.value_objects import ResourceKey
from armory.domain.model.withdrawal import Withdrawal
from armory.domain.repository.withdrawal_repository import WithdrawalRepository
from armory.infrastructure.persistence.json_file import JsonFile


class JsonWithdrawalRepository(WithdrawalRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def add(self, withdrawal: Withdrawal) -> None:
        records = self._file.load()
        withdrawal.id = max((r.get("id") or 0 for r in records), default=0) + 1
        records.append(
            {
                "id": withdrawal.id,
                "category": withdrawal.resource.category.value,
                "name": withdrawal.resource.name,
                "quantity": withdrawal.quantity,
                "destinations": list(withdrawal.destinations),
                "user": withdrawal.user,
                "created_at": withdrawal.created_at.isoformat(),
            }
        )
        self._file.persist(records)

    def list_all(self) -> list[Withdrawal]:
        withdrawals = self._file.records(self._to_domain, "withdrawal")
        return sorted(withdrawals, key=lambda w: (w.created_at, w.id), reverse=True)

    @staticmethod
    def _to_domain(raw: dict) -> Withdrawal:
        return Withdrawal(
            id=raw["id"],
            resource=ResourceKey.of(raw["category"], raw["name"]),
            quantity=raw["quantity"],
            destinations=raw.get("destinations", []),
            user=raw.get("user"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
