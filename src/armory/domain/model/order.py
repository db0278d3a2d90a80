"""Order aggregate — the core of the domain.

An Order asks for fixed quantities of the four ammunition kinds.  Its
status decides whether those quantities are currently held out of the
stock ledger: ``ready`` and ``delivered`` orders hold them, ``pending``
and ``cancelled`` orders do not.  ``held`` records how much stock an
order actually took, which is less than it requires when a manual move
into a reserved status found the shelf short.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Mapping

from armory.domain.exceptions import ValidationError
from armory.domain.model.value_objects import (
    Category,
    Money,
    ResourceKey,
    non_negative_quantity,
)


class AmmoKind(Enum):
    MM5 = "5mm"
    MM9 = "9mm"
    MM762 = "762mm"
    CBC12 = "12cbc"

    @property
    def resource(self) -> ResourceKey:
        return ResourceKey(Category.AMMO, self.value)

    @staticmethod
    def parse(raw: str | AmmoKind) -> AmmoKind:
        if isinstance(raw, AmmoKind):
            return raw
        if not isinstance(raw, str):
            raise ValidationError(f"Unknown ammunition kind {raw!r}")
        try:
            return AmmoKind(raw.strip().lower())
        except ValueError as exc:
            kinds = ", ".join(k.value for k in AmmoKind)
            raise ValidationError(
                f"Unknown ammunition kind '{raw}' (expected one of {kinds})"
            ) from exc


class OrderStatus(Enum):
    PENDING = "pending"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_reserved(self) -> bool:
        """True while the order's quantities are held out of the stock ledger."""
        return self in (OrderStatus.READY, OrderStatus.DELIVERED)

    @staticmethod
    def parse(raw: str | OrderStatus) -> OrderStatus:
        if isinstance(raw, OrderStatus):
            return raw
        if not isinstance(raw, str):
            raise ValidationError(f"Unknown order status {raw!r}")
        try:
            return OrderStatus(raw.strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown order status '{raw}'") from exc


Requirement = dict[AmmoKind, int]


def nothing_held() -> Requirement:
    return {kind: 0 for kind in AmmoKind}


def normalize_required(raw: Mapping[AmmoKind | str, int]) -> Requirement:
    """Return a requirement map holding all four kinds, missing ones as 0."""
    required: Requirement = {kind: 0 for kind in AmmoKind}
    for key, qty in raw.items():
        kind = AmmoKind.parse(key)
        required[kind] = non_negative_quantity(qty, f"Required {kind.value}")
    return required


@dataclass(frozen=True)
class CustomerContact:
    name: str
    family: str
    phone: str = ""

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Customer name is required")
        if not self.family or not self.family.strip():
            raise ValidationError("Family is required")


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
DEFAULT_COMMISSION_RATE = Decimal("0.07")


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    contact: CustomerContact
    required: Requirement
    unit_prices: dict[AmmoKind, Money]
    commission_rate: Decimal = DEFAULT_COMMISSION_RATE
    status: OrderStatus = OrderStatus.PENDING
    created_by: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    # Rounds actually debited from stock for this order while it is reserved.
    held: Requirement = field(default_factory=nothing_held)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        contact: CustomerContact,
        required: Mapping[AmmoKind | str, int],
        unit_prices: Mapping[AmmoKind, Money],
        commission_rate: Decimal = DEFAULT_COMMISSION_RATE,
        created_by: str | None = None,
    ) -> Order:
        """Create a new pending order, enforcing all invariants."""
        normalized = normalize_required(required)
        if not any(normalized.values()):
            raise ValidationError("Order must require at least one round")

        return Order(
            id=None,
            contact=contact,
            required=normalized,
            unit_prices={kind: unit_prices.get(kind, Money.zero()) for kind in AmmoKind},
            commission_rate=commission_rate,
            created_by=created_by,
        )

    # --- State changes --------------------------------------------------------

    def revise(
        self,
        required: Requirement | None = None,
        status: OrderStatus | None = None,
        contact: CustomerContact | None = None,
        held: Requirement | None = None,
    ) -> None:
        """Overwrite quantities, status, contact details and/or held stock.

        Stock effects of the change are the transition service's job and
        must be applied *before* calling this.
        """
        if required is not None:
            self.required = normalize_required(required)
        if status is not None:
            self.status = status
        if contact is not None:
            self.contact = contact
        if held is not None:
            self.held = {kind: held.get(kind, 0) for kind in AmmoKind}

    def mark_ready(self) -> None:
        if self.status != OrderStatus.PENDING:
            raise ValidationError(
                f"Cannot mark order #{self.id} ready; current status is "
                f"{self.status.value}, expected pending"
            )
        self.status = OrderStatus.READY
        self.held = dict(self.required)

    # --- Queries --------------------------------------------------------------

    @property
    def is_reserved(self) -> bool:
        return self.status.is_reserved

    def fits_within(self, available: Mapping[AmmoKind, int]) -> bool:
        """True when every required quantity is covered by *available*."""
        return all(qty <= available.get(kind, 0) for kind, qty in self.required.items())

    def shortfall(self, available: Mapping[AmmoKind, int]) -> dict[AmmoKind, int]:
        return {
            kind: qty - available.get(kind, 0)
            for kind, qty in self.required.items()
            if qty > available.get(kind, 0)
        }

    @property
    def total(self) -> Money:
        result = Money.zero()
        for kind, qty in self.required.items():
            result = result + self.unit_prices.get(kind, Money.zero()) * qty
        return result

    @property
    def commission(self) -> Money:
        return self.total.scaled(self.commission_rate)

    @property
    def sort_key(self) -> tuple[datetime, int]:
        """FIFO position: oldest first, ties broken by id."""
        return (self.created_at, self.id or 0)
