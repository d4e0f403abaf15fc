"""Decoders for carts, items, subscriptions, addresses, and private data."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from checkoutxml.deserialization.elements import (
    child_text,
    optional_float,
    optional_money,
    parse_bool,
    parse_datetime,
    required_attribute,
    required_money,
    required_text,
)
from checkoutxml.domain.addresses import Address, AnonymousAddress
from checkoutxml.domain.cart import (
    DigitalContent,
    Item,
    RecurrentItem,
    ShoppingCart,
    Subscription,
    SubscriptionPayment,
)
from checkoutxml.domain.errors import DecodeError, InvalidValueError
from checkoutxml.domain.fulfillment import ChargeFee
from checkoutxml.domain.units import Dimension, Weight

if TYPE_CHECKING:
    from xml.etree import ElementTree as ET

    from checkoutxml.domain.private_data import PrivateData, PrivateValue
    from checkoutxml.domain.tax import TaxTableOwner

logger = logging.getLogger(__name__)


# --- Private data ---


def _private_value(element: ET.Element) -> PrivateValue:
    if len(element):
        return decode_private_data(element)
    return element.text or ""


def decode_private_data(element: ET.Element) -> PrivateData:
    """Rebuild a private-data mapping from the children of *element*.

    A tag occurring once maps to its text (or a nested mapping); a tag
    repeated among siblings maps to a list in document order.
    """
    data: PrivateData = {}
    for child in element:
        value = _private_value(child)
        if child.tag not in data:
            data[child.tag] = value
            continue
        existing = data[child.tag]
        # single occurrences are never lists, so a list here means a repeat
        if isinstance(existing, list):
            existing.append(value)
        else:
            data[child.tag] = [existing, value]
    return data


# --- Measures and addresses ---


def _measure_value(element: ET.Element) -> Decimal:
    raw = required_attribute(element, "value")
    try:
        return Decimal(raw)
    except InvalidOperation:
        msg = f"Invalid value {raw!r} in <{element.tag}>"
        raise DecodeError(msg) from None


def decode_weight(element: ET.Element) -> Weight:
    return Weight(_measure_value(element), element.get("unit") or "LB")


def decode_dimension(element: ET.Element) -> Dimension:
    return Dimension(_measure_value(element), element.get("unit") or "IN")


def decode_anonymous_address(element: ET.Element) -> AnonymousAddress:
    return AnonymousAddress(
        address_id=element.get("id"),
        city=required_text(element, "city"),
        region=required_text(element, "region"),
        postal_code=required_text(element, "postal-code"),
        country_code=required_text(element, "country-code"),
    )


def decode_address(element: ET.Element) -> Address:
    return Address(
        address_id=element.get("id"),
        contact_name=child_text(element, "contact-name"),
        company_name=child_text(element, "company-name"),
        address1=required_text(element, "address1"),
        address2=child_text(element, "address2"),
        city=required_text(element, "city"),
        region=required_text(element, "region"),
        postal_code=required_text(element, "postal-code"),
        country_code=required_text(element, "country-code"),
        email=child_text(element, "email"),
        phone=child_text(element, "phone"),
        fax=child_text(element, "fax"),
    )


def decode_charge_fee(element: ET.Element, default_currency: str) -> ChargeFee:
    """Fee parts inherit *default_currency* when they carry no currency."""
    return ChargeFee(
        flat=optional_money(element, "flat", default_currency),
        percentage=optional_float(element, "percentage"),
        total=optional_money(element, "total", default_currency),
    )


# --- Digital content and subscriptions ---


def decode_digital_content(element: ET.Element) -> DigitalContent:
    content = DigitalContent(
        description=child_text(element, "description"),
        key=child_text(element, "key"),
        url=child_text(element, "url"),
    )
    email_delivery = child_text(element, "email-delivery")
    if email_delivery is not None:
        content.email_delivery = parse_bool(email_delivery, "email-delivery")
    disposition = child_text(element, "display-disposition")
    if disposition:
        try:
            content.display_disposition = disposition.strip()
        except InvalidValueError as exc:
            raise DecodeError(str(exc)) from exc
    return content


def decode_subscription_payment(element: ET.Element) -> SubscriptionPayment:
    times = element.get("times")
    try:
        parsed_times = None if times is None else int(times)
    except ValueError:
        msg = f"Invalid subscription payment times {times!r}"
        raise DecodeError(msg) from None
    return SubscriptionPayment(required_money(element, "maximum-charge"), parsed_times)


def decode_subscription(
    element: ET.Element,
    *,
    item: Item | None = None,
    strict_tax_table_selector: bool = False,
) -> Subscription:
    """Decode ``<subscription>``, attaching it to *item* before its recurrent items.

    Attaching first lets recurrent items resolve tax tables through the
    owning item's cart.
    """
    subscription = Subscription()
    if item is not None:
        item.subscription = subscription
    try:
        if (period := element.get("period")) is not None:
            subscription.period = period
        if (kind := element.get("type")) is not None:
            subscription.type = kind
    except InvalidValueError as exc:
        raise DecodeError(str(exc)) from exc
    if (start := element.get("start-date")) is not None:
        subscription.start_date = parse_datetime(start, "subscription start-date")
    if (stop := element.get("no-charge-after")) is not None:
        subscription.no_charge_after = parse_datetime(stop, "subscription no-charge-after")

    for payment_el in element.findall("payments/subscription-payment"):
        subscription.payments.append(decode_subscription_payment(payment_el))
    for recurrent_el in element.findall("recurrent-item"):
        subscription.recurrent_items.append(
            decode_recurrent_item(
                recurrent_el, subscription, strict_tax_table_selector=strict_tax_table_selector
            )
        )
    return subscription


# --- Items ---


def _resolve_tax_table(item: Item, selector: str, *, strict: bool) -> None:
    tables = item.available_tax_tables() or []
    found = next((table for table in tables if table.name == selector), None)
    if found is not None:
        item.tax_table = found
        return
    if strict:
        msg = f"Tax table selector {selector!r} matches no known tax table"
        raise DecodeError(msg)
    logger.warning("Tax table selector %r matches no known tax table; left unset", selector)


def _populate_item(item: Item, element: ET.Element, *, strict_tax_table_selector: bool) -> Item:
    item.name = required_text(element, "item-name")
    item.description = required_text(element, "item-description")
    item.unit_price = required_money(element, "unit-price")
    quantity = required_text(element, "quantity")
    try:
        item.quantity = int(quantity.strip())
    except (ValueError, InvalidValueError):
        msg = f"Invalid item quantity {quantity!r}"
        raise DecodeError(msg) from None

    item.merchant_item_id = child_text(element, "merchant-item-id")
    if (weight_el := element.find("item-weight")) is not None:
        item.weight = decode_weight(weight_el)
    if (private_el := element.find("merchant-private-item-data")) is not None:
        item.private_data = decode_private_data(private_el)
    if (selector := child_text(element, "tax-table-selector")) is not None:
        _resolve_tax_table(item, selector, strict=strict_tax_table_selector)
    if (content_el := element.find("digital-content")) is not None:
        item.digital_content = decode_digital_content(content_el)
    if not isinstance(item, RecurrentItem) and (sub_el := element.find("subscription")) is not None:
        decode_subscription(sub_el, item=item, strict_tax_table_selector=strict_tax_table_selector)
    return item


def decode_item(
    element: ET.Element, shopping_cart: ShoppingCart, *, strict_tax_table_selector: bool = False
) -> Item:
    """Decode ``<item>`` into a new item owned by *shopping_cart*.

    The item is not appended to the cart's ``items``.
    """
    return _populate_item(
        Item(shopping_cart), element, strict_tax_table_selector=strict_tax_table_selector
    )


def decode_recurrent_item(
    element: ET.Element, subscription: Subscription, *, strict_tax_table_selector: bool = False
) -> RecurrentItem:
    item = RecurrentItem(subscription)
    _populate_item(item, element, strict_tax_table_selector=strict_tax_table_selector)
    return item


def decode_shopping_cart(
    element: ET.Element, owner: TaxTableOwner, *, strict_tax_table_selector: bool = False
) -> ShoppingCart:
    cart = ShoppingCart(owner)
    if (expiration := child_text(element, "cart-expiration/good-until-date")) is not None:
        cart.expires_at = parse_datetime(expiration, "good-until-date")
    if (private_el := element.find("merchant-private-data")) is not None:
        cart.private_data = decode_private_data(private_el)
    for item_el in element.findall("items/item"):
        cart.items.append(
            decode_item(item_el, cart, strict_tax_table_selector=strict_tax_table_selector)
        )
    return cart

