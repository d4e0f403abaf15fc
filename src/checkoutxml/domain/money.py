"""Money: integer minor units plus an ISO currency code.

The wire format is a decimal string with exactly two fractional digits and
a ``currency`` attribute on the same element. Conversion goes through
:class:`~decimal.Decimal` so neither direction depends on float rounding
or locale.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Protocol, runtime_checkable

from checkoutxml.domain.errors import InvalidValueError

_CENTS = Decimal(100)


@runtime_checkable
class MoneyLike(Protocol):
    """Anything carrying an integer ``amount`` in minor units and a ``currency``."""

    @property
    def amount(self) -> int: ...

    @property
    def currency(self) -> str: ...


@dataclass(frozen=True)
class Money:
    """An amount in minor units (cents) of *currency*."""

    amount: int
    currency: str

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            msg = f"Money amount must be an integer number of minor units, got {self.amount!r}"
            raise InvalidValueError(msg)
        if not isinstance(self.currency, str) or not self.currency:
            msg = f"Money currency must be a non-empty string, got {self.currency!r}"
            raise InvalidValueError(msg)

    def __str__(self) -> str:
        return format_amount(self.amount)

    @classmethod
    def parse(cls, text: str, currency: str) -> Money:
        """Build Money from decimal *text* such as ``"226.06"``."""
        return cls(parse_amount(text), currency)


def format_amount(amount: int) -> str:
    """Render minor units as a two-decimal string: ``22606`` -> ``"226.06"``."""
    return str((Decimal(amount) / _CENTS).quantize(Decimal("0.01")))


def parse_amount(text: str) -> int:
    """Parse decimal *text* into minor units, rounding half-up to whole cents."""
    try:
        value = Decimal(text.strip())
    except (InvalidOperation, AttributeError):
        msg = f"Invalid money amount {text!r}"
        raise InvalidValueError(msg) from None
    if not value.is_finite():
        msg = f"Invalid money amount {text!r}"
        raise InvalidValueError(msg)
    return int((value * _CENTS).to_integral_value(rounding=ROUND_HALF_UP))


def require_money(value: object, field_name: str) -> MoneyLike:
    """Return *value* if it satisfies :class:`MoneyLike`, else raise."""
    if not isinstance(value, MoneyLike):
        msg = f"{field_name} must be a Money-like value with amount and currency, got {value!r}"
        raise InvalidValueError(msg)
    return value
