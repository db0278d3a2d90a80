"""Withdrawal — an audit record of ad-hoc stock removed outside any order."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from armory.domain.model.value_objects import ResourceKey

UNSPECIFIED_DESTINATION = "Not specified"


@dataclass
class Withdrawal:
    id: int | None
    resource: ResourceKey
    quantity: int
    destinations: list[str] = field(default_factory=list)
    user: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def destination_label(self) -> str:
        return ", ".join(self.destinations) if self.destinations else UNSPECIFIED_DESTINATION
