"""Decoded inbound documents: notifications, callbacks, and API responses.

All models are frozen once built by the decoders. Notifications that embed
a shopping cart hold the mutable :class:`ShoppingCart` builder as-is.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from checkoutxml.domain.addresses import Address, AnonymousAddress
from checkoutxml.domain.cart import ShoppingCart
from checkoutxml.domain.fulfillment import ChargeFee
from checkoutxml.domain.money import Money
from checkoutxml.domain.types import FinancialState, FulfillmentState

_FROZEN = {"frozen": True, "arbitrary_types_allowed": True}


# --- Order adjustment (new-order) ---


class MerchantCodeAdjustment(BaseModel):
    """A coupon or gift certificate applied to the order."""

    model_config = _FROZEN

    kind: Literal["coupon", "gift-certificate"]
    code: str
    calculated_amount: Money | None = None
    applied_amount: Money | None = None
    message: str | None = None


class ShippingAdjustment(BaseModel):
    """The shipping option the buyer chose and what it cost."""

    model_config = _FROZEN

    kind: Literal["flat-rate", "merchant-calculated", "pickup", "carrier-calculated"]
    shipping_name: str
    shipping_cost: Money


class OrderAdjustment(BaseModel):
    model_config = _FROZEN

    merchant_calculation_successful: bool | None = None
    merchant_codes: list[MerchantCodeAdjustment] = Field(default_factory=list)
    total_tax: Money | None = None
    shipping: ShippingAdjustment | None = None
    adjustment_total: Money | None = None


# --- Notifications ---


class Notification(BaseModel):
    """Fields shared by every order notification."""

    model_config = _FROZEN

    serial_number: str
    google_order_number: str
    timestamp: datetime


class NewOrderNotification(Notification):
    """A buyer completed checkout and a new order exists."""

    shopping_cart: ShoppingCart
    buyer_id: str | None = None
    buyer_billing_address: Address | None = None
    buyer_shipping_address: Address | None = None
    email_allowed: bool | None = None
    order_adjustment: OrderAdjustment | None = None
    order_total: Money | None = None
    financial_order_state: FinancialState | None = None
    fulfillment_order_state: FulfillmentState | None = None


class RiskInformationNotification(Notification):
    """Fraud-screening results for the buyer's payment."""

    buyer_billing_address: Address | None = None
    ip_address: str | None = None
    avs_response: str | None = None
    cvn_response: str | None = None
    eligible_for_protection: bool | None = None
    partial_card_number: int | None = None
    buyer_account_age: int | None = None


class OrderStateChangeNotification(Notification):
    new_financial_order_state: FinancialState | None = None
    previous_financial_order_state: FinancialState | None = None
    new_fulfillment_order_state: FulfillmentState | None = None
    previous_fulfillment_order_state: FulfillmentState | None = None
    reason: str | None = None


class ChargeAmountNotification(Notification):
    latest_charge_amount: Money
    total_charge_amount: Money
    latest_charge_fee: ChargeFee | None = None


class AuthorizationAmountNotification(Notification):
    authorization_amount: Money
    authorization_expiration_date: datetime | None = None
    avs_response: str | None = None
    cvn_response: str | None = None


class RefundAmountNotification(Notification):
    latest_refund_amount: Money
    total_refund_amount: Money
    latest_fee_refund_amount: Money | None = None


class ChargebackAmountNotification(Notification):
    latest_chargeback_amount: Money
    total_chargeback_amount: Money
    latest_fee_refund_amount: Money | None = None
    latest_chargeback_fee_amount: Money | None = None


type AnyNotification = (
    NewOrderNotification
    | RiskInformationNotification
    | OrderStateChangeNotification
    | ChargeAmountNotification
    | AuthorizationAmountNotification
    | RefundAmountNotification
    | ChargebackAmountNotification
)


# --- Merchant-calculation callback ---


class MerchantCalculationCallback(BaseModel):
    """Request to price shipping, tax, and codes for candidate addresses."""

    model_config = _FROZEN

    serial_number: str
    shopping_cart: ShoppingCart
    buyer_id: str | None = None
    buyer_language: str | None = None
    anonymous_addresses: list[AnonymousAddress] = Field(default_factory=list)
    tax: bool = False
    shipping_methods: list[str] = Field(default_factory=list)
    merchant_code_strings: list[str] = Field(default_factory=list)


# --- Synchronous responses ---


class CheckoutRedirectResponse(BaseModel):
    """Where to send the buyer after posting a cart."""

    model_config = _FROZEN

    serial_number: str
    redirect_url: str


class RequestReceivedResponse(BaseModel):
    """Acknowledges an order-processing command."""

    model_config = _FROZEN

    serial_number: str


class SubscriptionRequestReceivedResponse(BaseModel):
    """Acknowledges a recurrence request with the order number it created."""

    model_config = _FROZEN

    serial_number: str
    new_google_order_number: str


class NotificationHistoryResponse(BaseModel):
    model_config = _FROZEN

    serial_number: str | None = None
    notifications: list[AnyNotification] = Field(default_factory=list)
    next_page_token: str | None = None


class NotificationDataTokenResponse(BaseModel):
    model_config = _FROZEN

    serial_number: str | None = None
    continue_token: str


class NotificationDataResponse(BaseModel):
    model_config = _FROZEN

    serial_number: str | None = None
    continue_token: str
    has_more_notifications: bool = False
    notifications: list[AnyNotification] = Field(default_factory=list)
