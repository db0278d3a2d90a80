"""Application services: Show Stock (query) and ledger de-duplication."""

from __future__ import annotations

import logging

from armory.application.dto import StockLineDTO
from armory.application.single_writer import SingleWriter
from armory.domain.exceptions import ValidationError
from armory.domain.model.value_objects import Category
from armory.domain.repository.stock_repository import StockRepository

logger = logging.getLogger(__name__)


class ShowStockHandler:

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def handle(self, category: str | None = None) -> list[StockLineDTO]:
        """Consolidated stock, sorted by category then name."""
        wanted = None
        if category:
            try:
                wanted = Category(category.strip().lower())
            except ValueError as exc:
                raise ValidationError(f"Unknown stock category: {category!r}") from exc
        items = sorted(
            self._stock_repo.list_all(wanted),
            key=lambda i: (i.category.value, i.name),
        )
        return [StockLineDTO.from_item(item) for item in items]


class ConsolidateStockHandler:

    def __init__(
        self,
        stock_repo: StockRepository,
        writer: SingleWriter | None = None,
    ) -> None:
        self._stock_repo = stock_repo
        self._writer = writer or SingleWriter.shared()

    def handle(self) -> int:
        """Merge duplicate ledger rows by summation; return rows removed."""
        with self._writer:
            removed = self._stock_repo.consolidate_duplicates()
        if removed:
            logger.info("Merged %d duplicate stock row(s)", removed)
        return removed
