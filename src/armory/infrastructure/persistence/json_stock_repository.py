"""JSON-file-backed implementation of StockRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from armory.domain.model.stock import StockItem
from armory.domain.model.value_objects import Category, Money, ResourceKey
from armory.domain.repository.stock_repository import StockRepository
from armory.infrastructure.persistence.json_file import JsonFile
from armory.infrastructure.persistence.ledger_schema import LedgerSchema


class JsonStockRepository(StockRepository):

    def __init__(self, file_path: Path, schema: LedgerSchema | None = None) -> None:
        self._file = JsonFile(file_path)
        self._schema = schema or LedgerSchema()

    # --- StockRepository interface --------------------------------------------

    def get(self, key: ResourceKey) -> StockItem | None:
        return self._consolidated(self._load()).get(key)

    def list_all(self, category: Category | None = None) -> list[StockItem]:
        items = self._consolidated(self._load()).values()
        return [i for i in items if category is None or i.category is category]

    def save(self, item: StockItem) -> None:
        records = self._file.load()
        keys = self._file.parse(records, self._key_of, "stock")
        kept: list[dict] = []
        replaced = False
        for raw, key in zip(records, keys):
            if key != item.key:
                kept.append(raw)
            elif not replaced:
                kept.append(self._to_raw(item))
                replaced = True
        if not replaced:
            kept.append(self._to_raw(item))
        self._file.persist(kept)

    def consolidate_duplicates(self) -> int:
        records = self._file.load()
        merged = self._consolidated(self._file.parse(records, self._to_domain, "stock"))
        removed = len(records) - len(merged)
        if removed:
            self._file.persist([self._to_raw(item) for item in merged.values()])
        return removed

    def is_empty(self) -> bool:
        return not self._file.load()

    # --- Serialization --------------------------------------------------------

    def _to_raw(self, item: StockItem) -> dict:
        s = self._schema
        raw = {
            s.category_field: item.category.value,
            s.name_field: item.name,
            s.quantity_field: item.quantity,
            s.price_field: str(item.unit_price.amount),
        }
        if s.updated_at_field is not None:
            raw[s.updated_at_field] = item.updated_at.isoformat()
        return raw

    def _to_domain(self, raw: dict) -> StockItem:
        s = self._schema
        updated_at = datetime.fromtimestamp(0, timezone.utc)
        if s.updated_at_field is not None and raw.get(s.updated_at_field):
            updated_at = datetime.fromisoformat(raw[s.updated_at_field])
        return StockItem(
            key=self._key_of(raw),
            quantity=int(raw.get(s.quantity_field, 0)),
            unit_price=Money(Decimal(str(raw.get(s.price_field, "0")))),
            updated_at=updated_at,
        )

    def _key_of(self, raw: dict) -> ResourceKey:
        return ResourceKey.of(raw[self._schema.category_field], raw[self._schema.name_field])

    # --- Helpers --------------------------------------------------------------

    def _load(self) -> list[StockItem]:
        return self._file.records(self._to_domain, "stock")

    @staticmethod
    def _consolidated(items: list[StockItem]) -> dict[ResourceKey, StockItem]:
        merged: dict[ResourceKey, StockItem] = {}
        for item in items:
            first = merged.get(item.key)
            merged[item.key] = item if first is None else first.merged_with(item)
        return merged
