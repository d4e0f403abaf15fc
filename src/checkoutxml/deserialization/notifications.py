"""Decoders for the seven order notifications.

Each decoder takes the notification's root element and a
:class:`DecodeContext`. :data:`NOTIFICATION_DECODERS` maps root tags to
decoders; the router and the history/polling responses both use it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from checkoutxml.deserialization.cart import (
    decode_address,
    decode_charge_fee,
    decode_shopping_cart,
)
from checkoutxml.deserialization.elements import (
    DecodeContext,
    child_text,
    optional_bool,
    optional_datetime,
    optional_enum,
    optional_int,
    optional_money,
    required_attribute,
    required_datetime,
    required_money,
    required_text,
)
from checkoutxml.domain.errors import DecodeError
from checkoutxml.domain.notifications import (
    AuthorizationAmountNotification,
    ChargeAmountNotification,
    ChargebackAmountNotification,
    MerchantCodeAdjustment,
    NewOrderNotification,
    Notification,
    OrderAdjustment,
    OrderStateChangeNotification,
    RefundAmountNotification,
    RiskInformationNotification,
    ShippingAdjustment,
)
from checkoutxml.domain.tax import TaxTableScope
from checkoutxml.domain.types import FinancialState, FulfillmentState

if TYPE_CHECKING:
    from xml.etree import ElementTree as ET

    from checkoutxml.domain.addresses import Address

type NotificationDecoder = Callable[[ET.Element, DecodeContext], Notification]


def _common(element: ET.Element) -> dict[str, Any]:
    return {
        "serial_number": required_attribute(element, "serial-number"),
        "google_order_number": required_text(element, "google-order-number"),
        "timestamp": required_datetime(element, "timestamp"),
    }


def _optional_address(element: ET.Element, path: str) -> Address | None:
    child = element.find(path)
    return None if child is None else decode_address(child)


# --- new-order-notification ---

_SHIPPING_ADJUSTMENT_KINDS = {
    "flat-rate-shipping-adjustment": "flat-rate",
    "merchant-calculated-shipping-adjustment": "merchant-calculated",
    "pickup-shipping-adjustment": "pickup",
    "carrier-calculated-shipping-adjustment": "carrier-calculated",
}

_MERCHANT_CODE_KINDS = {
    "coupon-adjustment": "coupon",
    "gift-certificate-adjustment": "gift-certificate",
}


def decode_order_adjustment(element: ET.Element) -> OrderAdjustment:
    codes: list[MerchantCodeAdjustment] = []
    for code_el in element.findall("merchant-codes/*"):
        kind = _MERCHANT_CODE_KINDS.get(code_el.tag)
        if kind is None:
            msg = f"Unknown merchant code adjustment <{code_el.tag}>"
            raise DecodeError(msg)
        codes.append(
            MerchantCodeAdjustment(
                kind=kind,
                code=required_text(code_el, "code"),
                calculated_amount=optional_money(code_el, "calculated-amount"),
                applied_amount=optional_money(code_el, "applied-amount"),
                message=child_text(code_el, "message"),
            )
        )

    shipping: ShippingAdjustment | None = None
    for shipping_el in element.findall("shipping/*"):
        kind = _SHIPPING_ADJUSTMENT_KINDS.get(shipping_el.tag)
        if kind is None:
            msg = f"Unknown shipping adjustment <{shipping_el.tag}>"
            raise DecodeError(msg)
        shipping = ShippingAdjustment(
            kind=kind,
            shipping_name=required_text(shipping_el, "shipping-name"),
            shipping_cost=required_money(shipping_el, "shipping-cost"),
        )

    return OrderAdjustment(
        merchant_calculation_successful=optional_bool(element, "merchant-calculation-successful"),
        merchant_codes=codes,
        total_tax=optional_money(element, "total-tax"),
        shipping=shipping,
        adjustment_total=optional_money(element, "adjustment-total"),
    )


def decode_new_order(element: ET.Element, context: DecodeContext) -> NewOrderNotification:
    common = _common(element)
    cart_el = element.find("shopping-cart")
    if cart_el is None:
        msg = "<new-order-notification> is missing mandatory <shopping-cart>"
        raise DecodeError(msg)
    scope = TaxTableScope(context.tax_tables_at(common["timestamp"]))
    cart = decode_shopping_cart(
        cart_el, scope, strict_tax_table_selector=context.strict_tax_table_selector
    )
    adjustment_el = element.find("order-adjustment")
    return NewOrderNotification(
        **common,
        shopping_cart=cart,
        buyer_id=child_text(element, "buyer-id"),
        buyer_billing_address=_optional_address(element, "buyer-billing-address"),
        buyer_shipping_address=_optional_address(element, "buyer-shipping-address"),
        email_allowed=optional_bool(element, "buyer-marketing-preferences/email-allowed"),
        order_adjustment=None if adjustment_el is None else decode_order_adjustment(adjustment_el),
        order_total=optional_money(element, "order-total"),
        financial_order_state=optional_enum(element, "financial-order-state", FinancialState),
        fulfillment_order_state=optional_enum(element, "fulfillment-order-state", FulfillmentState),
    )


# --- risk-information-notification ---


def decode_risk_information(
    element: ET.Element, context: DecodeContext
) -> RiskInformationNotification:
    info = element.find("risk-information")
    if info is None:
        msg = "<risk-information-notification> is missing mandatory <risk-information>"
        raise DecodeError(msg)
    return RiskInformationNotification(
        **_common(element),
        buyer_billing_address=_optional_address(info, "billing-address"),
        ip_address=child_text(info, "ip-address"),
        avs_response=child_text(info, "avs-response"),
        cvn_response=child_text(info, "cvn-response"),
        eligible_for_protection=optional_bool(info, "eligible-for-protection"),
        partial_card_number=optional_int(info, "partial-cc-number"),
        buyer_account_age=optional_int(info, "buyer-account-age"),
    )


# --- order-state-change-notification ---


def decode_order_state_change(
    element: ET.Element, context: DecodeContext
) -> OrderStateChangeNotification:
    return OrderStateChangeNotification(
        **_common(element),
        new_financial_order_state=optional_enum(
            element, "new-financial-order-state", FinancialState
        ),
        previous_financial_order_state=optional_enum(
            element, "previous-financial-order-state", FinancialState
        ),
        new_fulfillment_order_state=optional_enum(
            element, "new-fulfillment-order-state", FulfillmentState
        ),
        previous_fulfillment_order_state=optional_enum(
            element, "previous-fulfillment-order-state", FulfillmentState
        ),
        reason=child_text(element, "reason"),
    )


# --- Amount notifications ---


def decode_charge_amount(element: ET.Element, context: DecodeContext) -> ChargeAmountNotification:
    latest = required_money(element, "latest-charge-amount")
    fee_el = element.find("latest-charge-fee")
    return ChargeAmountNotification(
        **_common(element),
        latest_charge_amount=latest,
        total_charge_amount=required_money(element, "total-charge-amount"),
        # fee parts without a currency attribute are in the charge's currency
        latest_charge_fee=None if fee_el is None else decode_charge_fee(fee_el, latest.currency),
    )


def decode_authorization_amount(
    element: ET.Element, context: DecodeContext
) -> AuthorizationAmountNotification:
    return AuthorizationAmountNotification(
        **_common(element),
        authorization_amount=required_money(element, "authorization-amount"),
        authorization_expiration_date=optional_datetime(element, "authorization-expiration-date"),
        avs_response=child_text(element, "avs-response"),
        cvn_response=child_text(element, "cvn-response"),
    )


def decode_refund_amount(element: ET.Element, context: DecodeContext) -> RefundAmountNotification:
    return RefundAmountNotification(
        **_common(element),
        latest_refund_amount=required_money(element, "latest-refund-amount"),
        total_refund_amount=required_money(element, "total-refund-amount"),
        latest_fee_refund_amount=optional_money(element, "latest-fee-refund-amount"),
    )


def decode_chargeback_amount(
    element: ET.Element, context: DecodeContext
) -> ChargebackAmountNotification:
    return ChargebackAmountNotification(
        **_common(element),
        latest_chargeback_amount=required_money(element, "latest-chargeback-amount"),
        total_chargeback_amount=required_money(element, "total-chargeback-amount"),
        latest_fee_refund_amount=optional_money(element, "latest-fee-refund-amount"),
        latest_chargeback_fee_amount=optional_money(element, "latest-chargeback-fee-amount"),
    )


NOTIFICATION_DECODERS: dict[str, NotificationDecoder] = {
    "new-order-notification": decode_new_order,
    "risk-information-notification": decode_risk_information,
    "order-state-change-notification": decode_order_state_change,
    "charge-amount-notification": decode_charge_amount,
    "authorization-amount-notification": decode_authorization_amount,
    "refund-amount-notification": decode_refund_amount,
    "chargeback-amount-notification": decode_chargeback_amount,
}
