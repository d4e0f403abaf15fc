"""Parsing and element-access helpers for the decoders.

Every lookup checks presence explicitly: ``child_text`` and friends return
``None`` for absent optional content, while the ``required_*`` variants
raise :class:`DecodeError` naming the missing path.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from xml.etree import ElementTree as ET

from checkoutxml.domain.errors import DecodeError, InvalidValueError
from checkoutxml.domain.money import Money
from checkoutxml.domain.tax import TaxTable


def _no_tables(when: datetime | None) -> list[TaxTable]:
    return []


@dataclass(frozen=True)
class DecodeContext:
    """Per-call settings the decoders consult.

    Attributes:
        tax_tables_at: Returns the tax tables in effect at a moment; decoded
            carts resolve item tax-table selectors against them.
        strict_tax_table_selector: Fail instead of leaving an unresolvable
            selector unset.
    """

    tax_tables_at: Callable[[datetime | None], list[TaxTable]] = field(default=_no_tables)
    strict_tax_table_selector: bool = False


def parse_document(source: str | bytes) -> ET.Element:
    """Parse *source* and strip namespaces from every tag."""
    try:
        root = ET.fromstring(source.strip())
    except ET.ParseError as exc:
        msg = f"Malformed XML document: {exc}"
        raise DecodeError(msg) from exc
    return strip_namespaces(root)


def strip_namespaces(root: ET.Element) -> ET.Element:
    """Drop the ``{namespace}`` prefix from *root* and its descendants in place."""
    for element in root.iter():
        if isinstance(element.tag, str) and element.tag.startswith("{"):
            element.tag = element.tag.split("}", 1)[1]
    return root


def child_text(element: ET.Element, path: str) -> str | None:
    """Text of the child at *path*, ``""`` for an empty child, None if absent."""
    child = element.find(path)
    if child is None:
        return None
    return child.text or ""


def required_text(element: ET.Element, path: str) -> str:
    text = child_text(element, path)
    if text is None:
        msg = f"<{element.tag}> is missing mandatory <{path}>"
        raise DecodeError(msg)
    return text


def required_attribute(element: ET.Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        msg = f"<{element.tag}> is missing mandatory attribute {name!r}"
        raise DecodeError(msg)
    return value


def parse_bool(text: str, where: str) -> bool:
    normalized = text.strip().lower()
    if normalized in ("true", "1"):
        return True
    if normalized in ("false", "0"):
        return False
    msg = f"Invalid boolean {text!r} in <{where}>"
    raise DecodeError(msg)


def optional_bool(element: ET.Element, path: str) -> bool | None:
    text = child_text(element, path)
    return None if text is None else parse_bool(text, path)


def optional_int(element: ET.Element, path: str) -> int | None:
    text = child_text(element, path)
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        msg = f"Invalid integer {text!r} in <{path}>"
        raise DecodeError(msg) from None


def optional_float(element: ET.Element, path: str) -> float | None:
    text = child_text(element, path)
    if text is None:
        return None
    try:
        return float(text.strip())
    except ValueError:
        msg = f"Invalid number {text!r} in <{path}>"
        raise DecodeError(msg) from None


def parse_datetime(text: str, where: str) -> datetime:
    """Parse an ISO-8601 timestamp; a trailing ``Z`` means UTC."""
    value = text.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        msg = f"Invalid timestamp {text!r} in <{where}>"
        raise DecodeError(msg) from None


def optional_datetime(element: ET.Element, path: str) -> datetime | None:
    text = child_text(element, path)
    return None if text is None else parse_datetime(text, path)


def required_datetime(element: ET.Element, path: str) -> datetime:
    return parse_datetime(required_text(element, path), path)


def money_from(element: ET.Element, default_currency: str | None = None) -> Money:
    """Money from an element's text and its ``currency`` attribute."""
    currency = element.get("currency") or default_currency
    if currency is None:
        msg = f"<{element.tag}> has no currency attribute"
        raise DecodeError(msg)
    try:
        return Money.parse(element.text or "", currency)
    except InvalidValueError as exc:
        msg = f"Invalid amount in <{element.tag}>: {exc}"
        raise DecodeError(msg) from exc


def optional_money(
    element: ET.Element, path: str, default_currency: str | None = None
) -> Money | None:
    child = element.find(path)
    return None if child is None else money_from(child, default_currency)


def required_money(element: ET.Element, path: str) -> Money:
    child = element.find(path)
    if child is None:
        msg = f"<{element.tag}> is missing mandatory <{path}>"
        raise DecodeError(msg)
    return money_from(child)


def optional_enum[E: StrEnum](element: ET.Element, path: str, enum_cls: type[E]) -> E | None:
    text = child_text(element, path)
    if text is None:
        return None
    try:
        return enum_cls(text.strip())
    except ValueError:
        msg = f"Invalid {enum_cls.__name__} {text!r} in <{path}>"
        raise DecodeError(msg) from None
