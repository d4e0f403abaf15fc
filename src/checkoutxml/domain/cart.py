"""Shopping cart, items, digital content, and subscriptions.

These are mutable builders: merchants assemble them before encoding, and
the decoders fill them in from inbound documents. Every setter validates
eagerly so an invalid value never reaches the encoder.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from checkoutxml.domain.errors import InvalidValueError
from checkoutxml.domain.money import MoneyLike, require_money
from checkoutxml.domain.private_data import PrivateData, validate_private_data
from checkoutxml.domain.types import (
    DisplayDisposition,
    SubscriptionPeriod,
    SubscriptionType,
    coerce_enum,
)
from checkoutxml.domain.units import Weight

if TYPE_CHECKING:
    from checkoutxml.domain.tax import TaxTable, TaxTableOwner


def _optional_datetime(value: object, field_name: str) -> datetime | None:
    if value is not None and not isinstance(value, datetime):
        msg = f"{field_name} must be a datetime, got {value!r}"
        raise InvalidValueError(msg)
    return value


class ShoppingCart:
    """Items being bought plus cart-wide private data and expiration.

    Args:
        owner: The command (or decode scope) whose ``tax_tables`` the
            items may select from.
    """

    def __init__(self, owner: TaxTableOwner) -> None:
        self.owner = owner
        self.items: list[Item] = []
        self._expires_at: datetime | None = None
        self._private_data: PrivateData | None = None

    @property
    def expires_at(self) -> datetime | None:
        return self._expires_at

    @expires_at.setter
    def expires_at(self, value: datetime | None) -> None:
        self._expires_at = _optional_datetime(value, "Cart expiration")

    @property
    def private_data(self) -> PrivateData | None:
        return self._private_data

    @private_data.setter
    def private_data(self, value: PrivateData | None) -> None:
        self._private_data = validate_private_data(value, "Cart private data")

    def create_item(self, **attrs: Any) -> Item:
        """Create an item in this cart, append it, and return it."""
        item = Item(self, **attrs)
        self.items.append(item)
        return item

    def __repr__(self) -> str:
        return f"ShoppingCart(items={len(self.items)})"


class Item:
    """A line in a shopping cart.

    Required on the wire: ``name``, ``description``, ``unit_price`` and
    ``quantity``. Everything else is optional.
    """

    def __init__(
        self,
        shopping_cart: ShoppingCart | None,
        *,
        name: str | None = None,
        description: str | None = None,
        unit_price: MoneyLike | None = None,
        quantity: int | None = None,
        merchant_item_id: str | None = None,
        private_data: PrivateData | None = None,
        weight: Weight | None = None,
        tax_table: TaxTable | None = None,
    ) -> None:
        self.shopping_cart = shopping_cart
        self.name = name
        self.description = description
        self.merchant_item_id = merchant_item_id
        self._unit_price: MoneyLike | None = None
        self._quantity: int | None = None
        self._private_data: PrivateData | None = None
        self._weight: Weight | None = None
        self._tax_table: TaxTable | None = None
        self._digital_content: DigitalContent | None = None
        self._subscription: Subscription | None = None
        if unit_price is not None:
            self.unit_price = unit_price
        if quantity is not None:
            self.quantity = quantity
        if private_data is not None:
            self.private_data = private_data
        if weight is not None:
            self.weight = weight
        if tax_table is not None:
            self.tax_table = tax_table

    @property
    def unit_price(self) -> MoneyLike | None:
        return self._unit_price

    @unit_price.setter
    def unit_price(self, value: MoneyLike) -> None:
        self._unit_price = require_money(value, "Item unit price")

    @property
    def quantity(self) -> int | None:
        return self._quantity

    @quantity.setter
    def quantity(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            msg = f"Item quantity must be a non-negative integer, got {value!r}"
            raise InvalidValueError(msg)
        self._quantity = value

    @property
    def private_data(self) -> PrivateData | None:
        return self._private_data

    @private_data.setter
    def private_data(self, value: PrivateData | None) -> None:
        self._private_data = validate_private_data(value, "Item private data")

    @property
    def weight(self) -> Weight | None:
        return self._weight

    @weight.setter
    def weight(self, value: Weight | None) -> None:
        if value is not None and not isinstance(value, Weight):
            msg = f"Item weight must be a Weight, got {value!r}"
            raise InvalidValueError(msg)
        self._weight = value

    def available_tax_tables(self) -> list[TaxTable] | None:
        """Tables this item may select from, or None if it has no owner yet."""
        if self.shopping_cart is None:
            return None
        return list(self.shopping_cart.owner.tax_tables)

    @property
    def tax_table(self) -> TaxTable | None:
        return self._tax_table

    @tax_table.setter
    def tax_table(self, table: TaxTable | None) -> None:
        if table is not None:
            tables = self.available_tax_tables()
            if tables is None or not any(t is table for t in tables):
                name = getattr(table, "name", table)
                msg = f"Tax table {name!r} is not registered with the owning command"
                raise InvalidValueError(msg)
        self._tax_table = table

    @property
    def digital_content(self) -> DigitalContent | None:
        return self._digital_content

    @digital_content.setter
    def digital_content(self, value: DigitalContent | None) -> None:
        if value is not None and not isinstance(value, DigitalContent):
            msg = f"Item digital content must be DigitalContent, got {value!r}"
            raise InvalidValueError(msg)
        self._digital_content = value

    @property
    def subscription(self) -> Subscription | None:
        return self._subscription

    @subscription.setter
    def subscription(self, value: Subscription | None) -> None:
        if value is not None:
            if not isinstance(value, Subscription):
                msg = f"Item subscription must be a Subscription, got {value!r}"
                raise InvalidValueError(msg)
            value.item = self
        self._subscription = value

    def create_digital_content(self, **attrs: Any) -> DigitalContent:
        """Return the item's digital content, creating it on first call."""
        if self._digital_content is None:
            self._digital_content = DigitalContent(**attrs)
        return self._digital_content

    def create_subscription(self, **attrs: Any) -> Subscription:
        """Return the item's subscription, creating it on first call."""
        if self._subscription is None:
            self.subscription = Subscription(**attrs)
        assert self._subscription is not None
        return self._subscription

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, quantity={self.quantity!r})"


class DigitalContent:
    """Download, key, or e-mail delivery details for a digital item."""

    def __init__(
        self,
        *,
        description: str | None = None,
        display_disposition: DisplayDisposition | str = DisplayDisposition.PESSIMISTIC,
        email_delivery: bool | None = None,
        key: str | None = None,
        url: str | None = None,
    ) -> None:
        self.description = description
        self.display_disposition = display_disposition
        self.email_delivery = email_delivery
        self.key = key
        self.url = url

    @property
    def display_disposition(self) -> DisplayDisposition:
        return self._display_disposition

    @display_disposition.setter
    def display_disposition(self, value: DisplayDisposition | str) -> None:
        self._display_disposition = coerce_enum(DisplayDisposition, value, "display disposition")


class SubscriptionPayment:
    """Charge cap for one or more billing periods.

    Args:
        maximum_charge: Upper bound charged per period.
        times: Number of periods the cap applies to; None means unlimited.
    """

    def __init__(self, maximum_charge: MoneyLike, times: int | None = None) -> None:
        self.maximum_charge = maximum_charge
        self.times = times

    @property
    def maximum_charge(self) -> MoneyLike:
        return self._maximum_charge

    @maximum_charge.setter
    def maximum_charge(self, value: MoneyLike) -> None:
        self._maximum_charge = require_money(value, "Subscription payment maximum charge")

    @property
    def times(self) -> int | None:
        return self._times

    @times.setter
    def times(self, value: int | None) -> None:
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            msg = f"Subscription payment times must be an integer, got {value!r}"
            raise InvalidValueError(msg)
        self._times = value


class Subscription:
    """Recurring billing attached to an item.

    ``period`` and ``type`` are mandatory on the wire and validated against
    their enumerations on assignment.
    """

    def __init__(
        self,
        *,
        period: SubscriptionPeriod | str | None = None,
        type: SubscriptionType | str | None = None,  # noqa: A002
        start_date: datetime | None = None,
        no_charge_after: datetime | None = None,
    ) -> None:
        self.item: Item | None = None
        self._period: SubscriptionPeriod | None = None
        self._type: SubscriptionType | None = None
        self._start_date: datetime | None = None
        self._no_charge_after: datetime | None = None
        self.payments: list[SubscriptionPayment] = []
        self.recurrent_items: list[RecurrentItem] = []
        if period is not None:
            self.period = period
        if type is not None:
            self.type = type
        self.start_date = start_date
        self.no_charge_after = no_charge_after

    @property
    def period(self) -> SubscriptionPeriod | None:
        return self._period

    @period.setter
    def period(self, value: SubscriptionPeriod | str) -> None:
        self._period = coerce_enum(SubscriptionPeriod, value, "subscription period")

    @property
    def type(self) -> SubscriptionType | None:
        return self._type

    @type.setter
    def type(self, value: SubscriptionType | str) -> None:
        self._type = coerce_enum(SubscriptionType, value, "subscription type")

    @property
    def start_date(self) -> datetime | None:
        return self._start_date

    @start_date.setter
    def start_date(self, value: datetime | None) -> None:
        self._start_date = _optional_datetime(value, "Subscription start date")

    @property
    def no_charge_after(self) -> datetime | None:
        return self._no_charge_after

    @no_charge_after.setter
    def no_charge_after(self, value: datetime | None) -> None:
        self._no_charge_after = _optional_datetime(value, "Subscription no-charge-after")

    def add_payment(
        self, maximum_charge: MoneyLike, times: int | None = None
    ) -> SubscriptionPayment:
        """Append a payment cap and return it."""
        payment = SubscriptionPayment(maximum_charge, times)
        self.payments.append(payment)
        return payment

    def create_recurrent_item(self, **attrs: Any) -> RecurrentItem:
        """Create an item billed on every period, append it, and return it."""
        item = RecurrentItem(self, **attrs)
        self.recurrent_items.append(item)
        return item


class RecurrentItem(Item):
    """An item charged on each subscription period.

    It belongs to a subscription rather than a cart and selects tax tables
    through the cart of the item that owns the subscription.
    """

    def __init__(self, subscription: Subscription, **attrs: Any) -> None:
        self.subscription_owner = subscription
        super().__init__(None, **attrs)

    def available_tax_tables(self) -> list[TaxTable] | None:
        parent = self.subscription_owner.item
        if parent is None:
            return None
        return parent.available_tax_tables()
