"""Encoders for shopping carts, items, subscriptions, and private data.

Shared by the checkout and the order-recurrence commands.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from xml.etree import ElementTree as ET

from checkoutxml.domain.cart import RecurrentItem
from checkoutxml.domain.errors import InvalidValueError
from checkoutxml.domain.units import format_decimal
from checkoutxml.serialization.document import bool_text, datetime_text, money_element, sub

if TYPE_CHECKING:
    from checkoutxml.domain.cart import DigitalContent, Item, ShoppingCart, Subscription
    from checkoutxml.domain.private_data import PrivateData, PrivateValue

_WHITESPACE_RE = re.compile(r"\s")
_INVALID_TAG_CHARS_RE = re.compile(r"[^a-zA-Z0-9\-_:]")


def to_tag_name(key: object) -> str:
    """Turn a private-data key into an element name.

    Whitespace becomes ``-``; every other character outside
    ``[A-Za-z0-9-_:]`` is dropped.
    """
    name = _INVALID_TAG_CHARS_RE.sub("", _WHITESPACE_RE.sub("-", str(key)))
    if not name:
        msg = f"Private data key {key!r} has no characters usable in an element name"
        raise InvalidValueError(msg)
    return name


def _scalar_text(value: PrivateValue) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return bool_text(value)
    return str(value)


def _flatten_once(values: list[PrivateValue]) -> list[PrivateValue]:
    flat: list[PrivateValue] = []
    for value in values:
        if isinstance(value, list):
            flat.extend(value)
        else:
            flat.append(value)
    return flat


def encode_private_data(parent: ET.Element, data: PrivateData) -> None:
    """Write a private-data mapping as child elements of *parent*.

    A list repeats its key once per entry after one level of flattening;
    a mapping nests; anything else becomes element text.
    """
    for key, value in data.items():
        tag = to_tag_name(key)
        if isinstance(value, dict):
            encode_private_data(sub(parent, tag), value)
        elif isinstance(value, list):
            for entry in _flatten_once(value):
                if isinstance(entry, dict):
                    encode_private_data(sub(parent, tag), entry)
                elif isinstance(entry, list):
                    msg = f"Private data list under {key!r} nests deeper than two levels"
                    raise InvalidValueError(msg)
                else:
                    sub(parent, tag, _scalar_text(entry))
        else:
            sub(parent, tag, _scalar_text(value))


def encode_digital_content(parent: ET.Element, content: DigitalContent) -> ET.Element:
    element = sub(parent, "digital-content")
    if content.description is not None:
        sub(element, "description", content.description)
    if content.email_delivery is not None:
        sub(element, "email-delivery", bool_text(content.email_delivery))
    if content.key is not None:
        sub(element, "key", content.key)
    if content.url is not None:
        sub(element, "url", content.url)
    sub(element, "display-disposition", content.display_disposition.value)
    return element


def encode_subscription(parent: ET.Element, subscription: Subscription) -> ET.Element:
    if subscription.period is None or subscription.type is None:
        msg = "Subscription requires both a period and a type"
        raise InvalidValueError(msg)
    attrs: dict[str, str] = {}
    if subscription.no_charge_after is not None:
        attrs["no-charge-after"] = datetime_text(subscription.no_charge_after)
    attrs["period"] = subscription.period.value
    if subscription.start_date is not None:
        attrs["start-date"] = datetime_text(subscription.start_date)
    attrs["type"] = subscription.type.value
    element = ET.SubElement(parent, "subscription", attrs)

    if subscription.payments:
        payments = sub(element, "payments")
        for payment in subscription.payments:
            attrs = {} if payment.times is None else {"times": str(payment.times)}
            payment_el = ET.SubElement(payments, "subscription-payment", attrs)
            money_element(payment_el, "maximum-charge", payment.maximum_charge)

    for recurrent in subscription.recurrent_items:
        encode_item(element, recurrent, tag="recurrent-item")
    return element


def encode_item(parent: ET.Element, item: Item, *, tag: str = "item") -> ET.Element:
    """Encode *item* as ``<item>`` or, for subscriptions, ``<recurrent-item>``."""
    missing = [
        label
        for label, value in (
            ("name", item.name),
            ("description", item.description),
            ("unit_price", item.unit_price),
            ("quantity", item.quantity),
        )
        if value is None
    ]
    if missing:
        msg = f"Item {item.name!r} is missing {', '.join(missing)}"
        raise InvalidValueError(msg)
    assert item.unit_price is not None

    element = sub(parent, tag)
    sub(element, "item-name", item.name)
    sub(element, "item-description", item.description)
    money_element(element, "unit-price", item.unit_price)
    sub(element, "quantity", str(item.quantity))

    if item.merchant_item_id is not None:
        sub(element, "merchant-item-id", item.merchant_item_id)
    if item.weight is not None:
        sub(
            element,
            "item-weight",
            unit=item.weight.unit,
            value=format_decimal(item.weight.value),
        )
    if item.private_data is not None:
        encode_private_data(sub(element, "merchant-private-item-data"), item.private_data)
    if item.tax_table is not None:
        sub(element, "tax-table-selector", item.tax_table.name)
    if item.digital_content is not None:
        encode_digital_content(element, item.digital_content)
    if item.subscription is not None and not isinstance(item, RecurrentItem):
        encode_subscription(element, item.subscription)
    return element


def encode_shopping_cart(parent: ET.Element, cart: ShoppingCart) -> ET.Element:
    element = sub(parent, "shopping-cart")
    if cart.expires_at is not None:
        expiration = sub(element, "cart-expiration")
        sub(expiration, "good-until-date", datetime_text(cart.expires_at))
    if cart.private_data is not None:
        encode_private_data(sub(element, "merchant-private-data"), cart.private_data)
    items = sub(element, "items")
    for item in cart.items:
        encode_item(items, item)
    return element
