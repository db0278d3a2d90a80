"""Describes the layout of a stock ledger file.

Ledgers written by older installs carry no per-row timestamp and name
the quantity/price fields differently.  Repositories receive one of
these at construction instead of probing the file or keeping
module-level flags.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LedgerSchema:
    category_field: str = "category"
    name_field: str = "name"
    quantity_field: str = "quantity"
    price_field: str = "unit_price"
    updated_at_field: str | None = "updated_at"

    @property
    def tracks_updated_at(self) -> bool:
        return self.updated_at_field is not None

    @staticmethod
    def untimestamped() -> LedgerSchema:
        """Layout of ledgers created before rows were timestamped."""
        return LedgerSchema(updated_at_field=None)
