"""Enumerations used on the wire.

Member values are the exact strings the schema expects, so a member can be
written to XML as-is and parsed back with ``Enum(text)``.
"""

from __future__ import annotations

from enum import StrEnum

from checkoutxml.domain.errors import InvalidValueError


class FinancialState(StrEnum):
    """Financial state of an order."""

    REVIEWING = "REVIEWING"
    CHARGEABLE = "CHARGEABLE"
    CHARGING = "CHARGING"
    CHARGED = "CHARGED"
    PAYMENT_DECLINED = "PAYMENT_DECLINED"
    CANCELLED = "CANCELLED"
    CANCELLED_BY_GOOGLE = "CANCELLED_BY_GOOGLE"


class FulfillmentState(StrEnum):
    """Fulfillment state of an order."""

    NEW = "NEW"
    PROCESSING = "PROCESSING"
    DELIVERED = "DELIVERED"
    WILL_NOT_DELIVER = "WILL_NOT_DELIVER"


class SubscriptionPeriod(StrEnum):
    """Billing interval of a subscription."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    SEMI_MONTHLY = "SEMI_MONTHLY"
    MONTHLY = "MONTHLY"
    EVERY_TWO_MONTHS = "EVERY_TWO_MONTHS"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


class SubscriptionType(StrEnum):
    """Who triggers the recurring charges."""

    MERCHANT = "merchant"
    GOOGLE = "google"


class DisplayDisposition(StrEnum):
    """When digital content is shown to the buyer."""

    OPTIMISTIC = "OPTIMISTIC"
    PESSIMISTIC = "PESSIMISTIC"


class UsCountryRegion(StrEnum):
    """Regions accepted by a US country area."""

    CONTINENTAL_48 = "CONTINENTAL_48"
    FULL_50_STATES = "FULL_50_STATES"
    ALL = "ALL"


class ShippingCompany(StrEnum):
    """Carriers supported by carrier-calculated shipping."""

    FEDEX = "FedEx"
    UPS = "UPS"
    USPS = "USPS"


class CarrierPickup(StrEnum):
    """How a carrier receives the package."""

    DROP_OFF = "DROP_OFF"
    REGULAR_PICKUP = "REGULAR_PICKUP"
    SPECIAL_PICKUP = "SPECIAL_PICKUP"


class DeliveryAddressCategory(StrEnum):
    """Kind of address a package is shipped to."""

    RESIDENTIAL = "RESIDENTIAL"
    COMMERCIAL = "COMMERCIAL"


class UrlParameterType(StrEnum):
    """Values a conversion-tracking URL parameter may carry."""

    BUYER_ID = "buyer-id"
    ORDER_ID = "order-id"
    ORDER_SUBTOTAL = "order-subtotal"
    ORDER_SUBTOTAL_PLUS_TAX = "order-subtotal-plus-tax"
    ORDER_SUBTOTAL_PLUS_SHIPPING = "order-subtotal-plus-shipping"
    ORDER_TOTAL = "order-total"
    TAX_AMOUNT = "tax-amount"
    SHIPPING_AMOUNT = "shipping-amount"
    COUPON_AMOUNT = "coupon-amount"
    BILLING_CITY = "billing-city"
    BILLING_REGION = "billing-region"
    BILLING_POSTAL_CODE = "billing-postal-code"
    BILLING_COUNTRY_CODE = "billing-country-code"
    SHIPPING_CITY = "shipping-city"
    SHIPPING_REGION = "shipping-region"
    SHIPPING_POSTAL_CODE = "shipping-postal-code"
    SHIPPING_COUNTRY_CODE = "shipping-country-code"


class PurchaseType(StrEnum):
    """Account flavour; donation accounts use a separate endpoint."""

    MERCHANT = "merchant"
    DONATION = "donation"


def coerce_enum[E: StrEnum](enum_cls: type[E], value: object, field_name: str) -> E:
    """Convert *value* to a member of *enum_cls* or raise InvalidValueError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        msg = f"Invalid {field_name} {value!r}; expected one of: {allowed}"
        raise InvalidValueError(msg) from None
