"""Item-level fulfillment details and conversion-tracking URLs."""

from __future__ import annotations

from dataclasses import dataclass

from checkoutxml.domain.errors import InvalidValueError
from checkoutxml.domain.money import Money
from checkoutxml.domain.types import UrlParameterType, coerce_enum


@dataclass(frozen=True)
class TrackingData:
    """A shipment tracking number with its carrier."""

    carrier: str
    tracking_number: str


class ItemInfo:
    """Identifies an order line by merchant item id for item-level commands."""

    def __init__(self, merchant_item_id: str) -> None:
        if not isinstance(merchant_item_id, str) or not merchant_item_id:
            msg = f"Merchant item id must be a non-empty string, got {merchant_item_id!r}"
            raise InvalidValueError(msg)
        self.merchant_item_id = merchant_item_id
        self.tracking_data: list[TrackingData] = []

    def create_tracking_data(self, carrier: str, tracking_number: str) -> TrackingData:
        data = TrackingData(carrier, tracking_number)
        self.tracking_data.append(data)
        return data

    def __repr__(self) -> str:
        return f"ItemInfo({self.merchant_item_id!r})"


@dataclass(frozen=True)
class UrlParameter:
    name: str
    parameter_type: UrlParameterType


class ParameterizedUrl:
    """A third-party tracking URL called after checkout with order details."""

    def __init__(self, url: str) -> None:
        self.url = url
        self.url_parameters: list[UrlParameter] = []

    def create_url_parameter(
        self, name: str, parameter_type: UrlParameterType | str
    ) -> UrlParameter:
        """Append a parameter filled with order data of *parameter_type*."""
        if not isinstance(name, str) or not name:
            msg = f"URL parameter name must be a non-empty string, got {name!r}"
            raise InvalidValueError(msg)
        kind = coerce_enum(UrlParameterType, parameter_type, "URL parameter type")
        param = UrlParameter(name, kind)
        self.url_parameters.append(param)
        return param


@dataclass(frozen=True)
class ChargeFee:
    """Processing fee the API reports for a charge.

    ``percentage`` is the variable part, ``flat`` the fixed part, and
    ``total`` their sum for this charge.
    """

    flat: Money | None = None
    percentage: float | None = None
    total: Money | None = None
