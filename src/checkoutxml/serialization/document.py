"""Element-building helpers shared by all encoders.

Documents are built with :mod:`xml.etree.ElementTree` and rendered as a
single unindented UTF-8 string behind an XML declaration.
"""

from __future__ import annotations

from datetime import datetime
from xml.etree import ElementTree as ET

from checkoutxml.domain.money import MoneyLike, format_amount

CHECKOUT_NAMESPACE = "http://checkout.google.com/schema/2"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def new_root(tag: str, **attrs: str) -> ET.Element:
    """Root element carrying *attrs* followed by the checkout namespace."""
    root = ET.Element(tag)
    for key, value in attrs.items():
        root.set(key.replace("_", "-"), value)
    root.set("xmlns", CHECKOUT_NAMESPACE)
    return root


def sub(parent: ET.Element, tag: str, text: str | None = None, **attrs: str) -> ET.Element:
    """Append a child element with optional text and attributes."""
    element = ET.SubElement(parent, tag, {k.replace("_", "-"): v for k, v in attrs.items()})
    if text is not None:
        element.text = text
    return element


def money_element(parent: ET.Element, tag: str, money: MoneyLike) -> ET.Element:
    """``<tag currency="USD">10.00</tag>``"""
    return sub(parent, tag, format_amount(money.amount), currency=money.currency)


def bool_text(value: bool) -> str:
    return "true" if value else "false"


def datetime_text(value: datetime) -> str:
    return value.isoformat()


def to_string(root: ET.Element) -> str:
    """Render *root* as a complete document."""
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")
