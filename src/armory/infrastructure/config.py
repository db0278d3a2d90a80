"""Runtime configuration, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from armory.domain.exceptions import ValidationError
from armory.domain.model.order import DEFAULT_COMMISSION_RATE
from armory.infrastructure.persistence.ledger_schema import LedgerSchema

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    commission_rate: Decimal
    log_level: str
    log_path: Path | None
    ledger_timestamps: bool

    @property
    def ledger_schema(self) -> LedgerSchema:
        return LedgerSchema() if self.ledger_timestamps else LedgerSchema.untimestamped()

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            data_dir=Path(os.getenv("ARMORY_DATA_DIR", str(_DEFAULT_DATA_DIR))),
            commission_rate=_commission_rate(os.getenv("ARMORY_COMMISSION_RATE")),
            log_level=os.getenv("ARMORY_LOG_LEVEL", "INFO").upper(),
            log_path=_optional_path(os.getenv("ARMORY_LOG_PATH")),
            ledger_timestamps=os.getenv("ARMORY_LEDGER_TIMESTAMPS", "1").strip().lower()
            not in _FALSE_VALUES,
        )


def _commission_rate(raw: str | None) -> Decimal:
    if raw is None or not raw.strip():
        return DEFAULT_COMMISSION_RATE
    try:
        rate = Decimal(raw.strip())
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid commission rate {raw!r}") from exc
    if not Decimal("0") <= rate <= Decimal("1"):
        raise ValidationError(f"Commission rate must be between 0 and 1, got {raw}")
    return rate


def _optional_path(raw: str | None) -> Path | None:
    if not raw:
        return None
    return Path(raw)
