"""Physical measures attached to items and shipping packages."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from checkoutxml.domain.errors import InvalidValueError


def _to_decimal(value: object, field_name: str) -> Decimal:
    if isinstance(value, bool):
        msg = f"{field_name} must be numeric, got {value!r}"
        raise InvalidValueError(msg)
    if isinstance(value, Decimal):
        return value
    try:
        # str() first so 2.2 stays 2.2 instead of its binary expansion
        return Decimal(str(value))
    except InvalidOperation:
        msg = f"{field_name} must be numeric, got {value!r}"
        raise InvalidValueError(msg) from None


def format_decimal(value: Decimal) -> str:
    """Render a measure as a plain decimal string (no exponent)."""
    return format(value, "f")


@dataclass(frozen=True)
class Weight:
    """Item weight. Only pounds are defined by the schema."""

    value: Decimal
    unit: str = "LB"

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _to_decimal(self.value, "Weight value"))
        if self.value < 0:
            msg = f"Weight value must not be negative, got {self.value}"
            raise InvalidValueError(msg)


@dataclass(frozen=True)
class Dimension:
    """Package length, width or height. Only inches are defined by the schema."""

    value: Decimal
    unit: str = "IN"

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _to_decimal(self.value, "Dimension value"))
        if self.value < 0:
            msg = f"Dimension value must not be negative, got {self.value}"
            raise InvalidValueError(msg)
