"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

from armory.domain.exceptions import InvalidQuantity, ValidationError

CENTS = Decimal("0.01")


class Category(Enum):
    MATERIAL = "material"
    AMMO = "ammo"


@dataclass(frozen=True)
class ResourceKey:
    """Identifies one row of the stock ledger, e.g. ``(ammo, "9mm")``."""

    category: Category
    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.category, Category):
            raise ValidationError(f"Unknown stock category: {self.category!r}")
        if not self.name or not self.name.strip():
            raise ValidationError("Resource name is required")

    def __str__(self) -> str:
        return f"{self.category.value}:{self.name}"

    @staticmethod
    def of(category: str | Category, name: str) -> ResourceKey:
        """Build a key from a raw category string such as ``"ammo"``."""
        if isinstance(category, Category):
            return ResourceKey(category, name)
        try:
            return ResourceKey(Category(category.strip().lower()), name)
        except ValueError as exc:
            raise ValidationError(f"Unknown stock category: {category!r}") from exc


@dataclass(frozen=True)
class Money:
    """Monetary amount.

    Uses Decimal to avoid floating-point rounding errors.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def scaled(self, rate: Decimal) -> Money:
        """Apply a fractional rate (e.g. a commission), rounded to cents."""
        return Money((self.amount * rate).quantize(CENTS, rounding=ROUND_HALF_UP), self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))


def positive_quantity(value: object, what: str = "Quantity") -> int:
    """Return *value* if it is a positive int, else raise InvalidQuantity."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidQuantity(f"{what} must be an integer, got {type(value).__name__}")
    if value <= 0:
        raise InvalidQuantity(f"{what} must be greater than zero, got {value}")
    return value


def non_negative_quantity(value: object, what: str = "Quantity") -> int:
    """Return *value* if it is an int >= 0, else raise InvalidQuantity."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidQuantity(f"{what} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidQuantity(f"{what} cannot be negative, got {value}")
    return value
