"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from armory.domain.exceptions import InvalidQuantity, ValidationError
from armory.domain.model.value_objects import (
    Category,
    Money,
    ResourceKey,
    non_negative_quantity,
    positive_quantity,
)


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_of_factory_from_string(self):
        assert Money.of("24.62").amount == Decimal("24.62")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_invalid_amount_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_addition_and_multiplication(self):
        assert Money.of("100") * 3 + Money.of("25") == Money.of("325")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1") * 1.5

    def test_scaled_rounds_to_cents(self):
        assert Money.of("1250").scaled(Decimal("0.07")) == Money.of("87.50")
        assert Money.of("0.05").scaled(Decimal("0.5")) == Money.of("0.03")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_str_formatting(self):
        assert str(Money.of("125")) == "$125.00"


# ── ResourceKey ──────────────────────────────────────────────────────────────


class TestResourceKey:

    def test_of_parses_category(self):
        key = ResourceKey.of(" Ammo ", "9mm")
        assert key == ResourceKey(Category.AMMO, "9mm")
        assert str(key) == "ammo:9mm"

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError, match="Unknown stock category"):
            ResourceKey.of("food", "Bread")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            ResourceKey(Category.MATERIAL, "  ")

    def test_same_name_different_category_are_distinct(self):
        assert ResourceKey.of("ammo", "Iron") != ResourceKey.of("material", "Iron")


# ── Quantities ───────────────────────────────────────────────────────────────


class TestQuantities:

    def test_positive_accepts_positive(self):
        assert positive_quantity(5) == 5

    @pytest.mark.parametrize("value", [0, -1])
    def test_positive_rejects_zero_and_negative(self, value):
        with pytest.raises(InvalidQuantity):
            positive_quantity(value)

    @pytest.mark.parametrize("value", [1.5, "3", True, None])
    def test_non_integers_rejected(self, value):
        with pytest.raises(InvalidQuantity, match="must be an integer"):
            non_negative_quantity(value)

    def test_non_negative_accepts_zero(self):
        assert non_negative_quantity(0) == 0

    def test_non_negative_rejects_negative(self):
        with pytest.raises(InvalidQuantity, match="cannot be negative"):
            non_negative_quantity(-3, "Required 9mm")
