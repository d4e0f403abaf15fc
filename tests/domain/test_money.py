"""Tests for Money and decimal amount conversion."""

from __future__ import annotations

import pytest

from checkoutxml.domain.errors import InvalidValueError
from checkoutxml.domain.money import Money, MoneyLike, format_amount, parse_amount, require_money


class TestFormatAmount:
    @pytest.mark.parametrize(
        ("amount", "text"),
        [(22606, "226.06"), (0, "0.00"), (5, "0.05"), (100, "1.00"), (-1050, "-10.50")],
    )
    def test_two_decimals(self, amount: int, text: str) -> None:
        assert format_amount(amount) == text

    def test_str_uses_wire_format(self) -> None:
        assert str(Money(33555, "USD")) == "335.55"


class TestParseAmount:
    @pytest.mark.parametrize(
        ("text", "amount"),
        [("226.06", 22606), ("1.0", 100), ("10", 1000), (" 0.50 ", 50), ("0.005", 1)],
    )
    def test_minor_units(self, text: str, amount: int) -> None:
        assert parse_amount(text) == amount

    @pytest.mark.parametrize("text", ["", "abc", "NaN", "Infinity"])
    def test_rejects_garbage(self, text: str) -> None:
        with pytest.raises(InvalidValueError):
            parse_amount(text)

    def test_parse_keeps_currency(self) -> None:
        assert Money.parse("226.06", "GBP") == Money(22606, "GBP")


class TestMoneyValidation:
    def test_rejects_float_amount(self) -> None:
        with pytest.raises(InvalidValueError):
            Money(1.5, "USD")  # type: ignore[arg-type]

    def test_rejects_bool_amount(self) -> None:
        with pytest.raises(InvalidValueError):
            Money(True, "USD")  # type: ignore[arg-type]

    def test_rejects_empty_currency(self) -> None:
        with pytest.raises(InvalidValueError):
            Money(100, "")

    def test_frozen(self) -> None:
        money = Money(100, "USD")
        with pytest.raises(AttributeError):
            money.amount = 5  # type: ignore[misc]


class TestMoneyLike:
    def test_any_object_with_amount_and_currency(self) -> None:
        class Price:
            amount = 999
            currency = "EUR"

        price = Price()
        assert isinstance(price, MoneyLike)
        assert require_money(price, "Price") is price

    def test_rejects_plain_number(self) -> None:
        with pytest.raises(InvalidValueError, match="Unit price"):
            require_money(10, "Unit price")
