"""Tax tables and rules.

The first table attached to a checkout is the default table; every later
one is an alternate table that items select by name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from checkoutxml.domain.areas import Area, require_area
from checkoutxml.domain.errors import InvalidValueError


class TaxRule:
    """A rate applied within an area. Only default-table rules tax shipping."""

    def __init__(self, rate: float, area: Area, *, shipping_taxed: bool = False) -> None:
        self.rate = rate
        self.area = area
        self.shipping_taxed = shipping_taxed

    @property
    def rate(self) -> float:
        return self._rate

    @rate.setter
    def rate(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            msg = f"Tax rate must be a number, got {value!r}"
            raise InvalidValueError(msg)
        self._rate = float(value)

    @property
    def area(self) -> Area:
        return self._area

    @area.setter
    def area(self, value: Area) -> None:
        self._area = require_area(value, "Tax rule area")


class TaxTable:
    """A named, ordered list of tax rules.

    Args:
        name: Name items use in their tax-table selector.
        standalone: Whether the alternate table ignores the default table.
        merchant_calculated: Whether taxes are computed by the merchant
            callback instead of these rules.
    """

    def __init__(
        self,
        name: str = "",
        *,
        standalone: bool = False,
        merchant_calculated: bool = False,
    ) -> None:
        self.name = name
        self.standalone = standalone
        self.merchant_calculated = merchant_calculated
        self.rules: list[TaxRule] = []

    def create_rule(self, rate: float, area: Area, *, shipping_taxed: bool = False) -> TaxRule:
        """Append a new rule and return it."""
        rule = TaxRule(rate, area, shipping_taxed=shipping_taxed)
        self.rules.append(rule)
        return rule

    def __repr__(self) -> str:
        return f"TaxTable(name={self.name!r}, rules={len(self.rules)})"


class TaxTableOwner(Protocol):
    """Anything exposing the tax tables a cart's items may select from."""

    @property
    def tax_tables(self) -> list[TaxTable]: ...


class TaxTableFactory(Protocol):
    """Supplies the tax tables in effect at a given moment."""

    def effective_tax_tables_at(self, when: datetime) -> list[TaxTable]: ...


@dataclass
class TaxTableScope:
    """Owner of a decoded cart: the tables that were in effect for the order."""

    tax_tables: list[TaxTable] = field(default_factory=list)
