"""Decoders for synchronous API responses, callbacks, and echoed requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from checkoutxml.deserialization.cart import decode_anonymous_address, decode_shopping_cart
from checkoutxml.deserialization.elements import (
    DecodeContext,
    child_text,
    optional_bool,
    parse_datetime,
    required_attribute,
    required_text,
)
from checkoutxml.deserialization.notifications import NOTIFICATION_DECODERS
from checkoutxml.domain.commands import OrderReportCommand
from checkoutxml.domain.errors import (
    CheckoutApiError,
    DecodeError,
    DispatchError,
    InactiveAccountError,
    InvalidValueError,
)
from checkoutxml.domain.notifications import (
    AnyNotification,
    CheckoutRedirectResponse,
    MerchantCalculationCallback,
    NotificationDataResponse,
    NotificationDataTokenResponse,
    NotificationHistoryResponse,
    RequestReceivedResponse,
    SubscriptionRequestReceivedResponse,
)
from checkoutxml.domain.tax import TaxTableScope

if TYPE_CHECKING:
    from xml.etree import ElementTree as ET

_INACTIVE_ACCOUNT_MARKER = "not active"


def decode_error(element: ET.Element) -> CheckoutApiError:
    """Build the exception described by an ``<error>`` document.

    The caller decides whether to raise it.
    """
    serial_number = element.get("serial-number")
    message = child_text(element, "error-message")
    if serial_number is None or message is None:
        msg = "<error> document lacks a serial number or an error message"
        raise DecodeError(msg)
    warnings = [entry.text or "" for entry in element.findall("warning-messages/string")]
    error_cls = (
        InactiveAccountError if _INACTIVE_ACCOUNT_MARKER in message.lower() else CheckoutApiError
    )
    return error_cls(message, serial_number=serial_number, warnings=warnings)


def decode_checkout_redirect(
    element: ET.Element, context: DecodeContext
) -> CheckoutRedirectResponse:
    return CheckoutRedirectResponse(
        serial_number=required_attribute(element, "serial-number"),
        redirect_url=required_text(element, "redirect-url"),
    )


def decode_request_received(
    element: ET.Element, context: DecodeContext
) -> RequestReceivedResponse:
    return RequestReceivedResponse(serial_number=required_attribute(element, "serial-number"))


def decode_subscription_request_received(
    element: ET.Element, context: DecodeContext
) -> SubscriptionRequestReceivedResponse:
    return SubscriptionRequestReceivedResponse(
        serial_number=required_attribute(element, "serial-number"),
        new_google_order_number=required_text(element, "new-google-order-number"),
    )


def _decode_notification_list(element: ET.Element, context: DecodeContext) -> list[AnyNotification]:
    notifications: list[AnyNotification] = []
    for child in element.findall("notifications/*"):
        decoder = NOTIFICATION_DECODERS.get(child.tag)
        if decoder is None:
            msg = f"Unknown notification <{child.tag}> in <{element.tag}>"
            raise DispatchError(msg)
        notifications.append(decoder(child, context))  # type: ignore[arg-type]
    return notifications


def decode_notification_history(
    element: ET.Element, context: DecodeContext
) -> NotificationHistoryResponse:
    return NotificationHistoryResponse(
        serial_number=element.get("serial-number"),
        notifications=_decode_notification_list(element, context),
        next_page_token=child_text(element, "next-page-token"),
    )


def decode_notification_data_token(
    element: ET.Element, context: DecodeContext
) -> NotificationDataTokenResponse:
    return NotificationDataTokenResponse(
        serial_number=element.get("serial-number"),
        continue_token=required_text(element, "continue-token"),
    )


def decode_notification_data(
    element: ET.Element, context: DecodeContext
) -> NotificationDataResponse:
    return NotificationDataResponse(
        serial_number=element.get("serial-number"),
        continue_token=required_text(element, "continue-token"),
        has_more_notifications=optional_bool(element, "has-more-notifications") or False,
        notifications=_decode_notification_list(element, context),
    )


def decode_order_report(element: ET.Element, context: DecodeContext) -> OrderReportCommand:
    """Rebuild the order-report request from an ``<order-list-request>`` document."""
    start = parse_datetime(required_attribute(element, "start-date"), "start-date")
    end = parse_datetime(required_attribute(element, "end-date"), "end-date")
    try:
        return OrderReportCommand(
            start,
            end,
            financial_state=child_text(element, "financial-state"),
            fulfillment_state=child_text(element, "fulfillment-state"),
            date_time_zone=child_text(element, "date-time-zone"),
        )
    except InvalidValueError as exc:
        raise DecodeError(str(exc)) from exc


def decode_merchant_calculation_callback(
    element: ET.Element, context: DecodeContext
) -> MerchantCalculationCallback:
    cart_el = element.find("shopping-cart")
    if cart_el is None:
        msg = "<merchant-calculation-callback> is missing mandatory <shopping-cart>"
        raise DecodeError(msg)
    scope = TaxTableScope(context.tax_tables_at(None))
    calculate = element.find("calculate")
    addresses = []
    methods: list[str] = []
    codes: list[str] = []
    tax = False
    if calculate is not None:
        addresses = [
            decode_anonymous_address(address_el)
            for address_el in calculate.findall("addresses/anonymous-address")
        ]
        methods = [
            required_attribute(method_el, "name")
            for method_el in calculate.findall("shipping/method")
        ]
        codes = [
            required_attribute(code_el, "code")
            for code_el in calculate.findall("merchant-code-strings/merchant-code-string")
        ]
        tax = optional_bool(calculate, "tax") or False
    return MerchantCalculationCallback(
        serial_number=required_attribute(element, "serial-number"),
        shopping_cart=decode_shopping_cart(
            cart_el, scope, strict_tax_table_selector=context.strict_tax_table_selector
        ),
        buyer_id=child_text(element, "buyer-id"),
        buyer_language=child_text(element, "buyer-language"),
        anonymous_addresses=addresses,
        tax=tax,
        shipping_methods=methods,
        merchant_code_strings=codes,
    )
