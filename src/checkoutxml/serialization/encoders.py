"""One encoder per command kind, dispatched by command class.

:func:`encode` looks the command's class up in :data:`ENCODERS`; each
encoder builds the root element and lets its subclass append the body.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar
from xml.etree import ElementTree as ET

from checkoutxml.domain import commands as cmd
from checkoutxml.domain.callbacks import MerchantCalculationResults, NotificationAcknowledgement
from checkoutxml.domain.errors import DispatchError, InvalidValueError
from checkoutxml.serialization.cart import encode_shopping_cart
from checkoutxml.serialization.checkout import encode_checkout
from checkoutxml.serialization.document import (
    bool_text,
    datetime_text,
    money_element,
    new_root,
    sub,
    to_string,
)

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

ORDER_REPORT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class XmlEncoder:
    """Base encoder: builds the root, delegates the body, renders the document."""

    tag: ClassVar[str]

    def root(self, document: Any) -> ET.Element:
        return new_root(self.tag)

    def body(self, root: ET.Element, document: Any) -> None:
        """Append the command-specific children to *root*."""

    def encode(self, document: Any) -> str:
        missing = document.missing_fields() if isinstance(document, cmd.Command) else []
        if missing:
            msg = f"<{self.tag}> requires {', '.join(missing)}"
            raise InvalidValueError(msg)
        root = self.root(document)
        self.body(root, document)
        return to_string(root)


class OrderCommandEncoder(XmlEncoder):
    """Root carries ``google-order-number`` before the namespace."""

    def root(self, document: cmd.OrderCommand) -> ET.Element:
        return new_root(self.tag, google_order_number=document.google_order_number)


ENCODERS: dict[type, XmlEncoder] = {}


def register[E: type[XmlEncoder]](*document_types: type) -> Callable[[E], E]:
    """Class decorator binding an encoder to one or more document classes.

    The root tag comes from COMMAND_TAGS unless the encoder sets ``tag``.
    """

    def decorator(encoder_cls: E) -> E:
        for document_type in document_types:
            encoder = encoder_cls()
            if not hasattr(encoder_cls, "tag"):
                encoder.tag = cmd.command_tag(document_type)  # type: ignore[misc]
            ENCODERS[document_type] = encoder
        return encoder_cls

    return decorator


def encode(document: object) -> str:
    """Encode a command or outbound document to its XML string.

    Raises:
        DispatchError: No encoder is registered for the document's class.
        InvalidValueError: A required field is missing.
    """
    encoder = ENCODERS.get(type(document))
    if encoder is None:
        msg = f"No encoder registered for {type(document).__name__}"
        raise DispatchError(msg)
    xml = encoder.encode(document)
    logger.debug("Encoded <%s> document (%d bytes)", encoder.tag, len(xml))
    return xml


# --- Helpers ---


def _tracking_data(parent: ET.Element, carrier: str, tracking_number: str) -> None:
    element = sub(parent, "tracking-data")
    sub(element, "carrier", carrier)
    sub(element, "tracking-number", tracking_number)


def _send_email(parent: ET.Element, value: bool | None) -> None:
    if value is not None:
        sub(parent, "send-email", bool_text(value))


# --- Checkout ---


@register(cmd.CheckoutCommand)
class CheckoutEncoder(XmlEncoder):
    def body(self, root: ET.Element, document: cmd.CheckoutCommand) -> None:
        encode_checkout(root, document)


@register(cmd.CreateOrderRecurrenceRequestCommand)
class OrderRecurrenceEncoder(OrderCommandEncoder):
    def body(self, root: ET.Element, document: cmd.CreateOrderRecurrenceRequestCommand) -> None:
        encode_shopping_cart(root, document.shopping_cart)


# --- Financial ---


@register(cmd.ChargeOrderCommand)
class ChargeOrderEncoder(OrderCommandEncoder):
    def body(self, root: ET.Element, document: cmd.ChargeOrderCommand) -> None:
        if document.amount is not None:
            money_element(root, "amount", document.amount)


@register(cmd.ChargeAndShipOrderCommand)
class ChargeAndShipOrderEncoder(OrderCommandEncoder):
    def body(self, root: ET.Element, document: cmd.ChargeAndShipOrderCommand) -> None:
        if document.amount is not None:
            money_element(root, "amount", document.amount)
        if document.carrier and document.tracking_number:
            tracking = sub(root, "tracking-data-list")
            _tracking_data(tracking, document.carrier, document.tracking_number)
        if document.send_email:
            sub(root, "send-email", "true")


@register(cmd.RefundOrderCommand)
class RefundOrderEncoder(OrderCommandEncoder):
    def body(self, root: ET.Element, document: cmd.RefundOrderCommand) -> None:
        if document.amount is not None:
            money_element(root, "amount", document.amount)
        if document.comment is not None:
            sub(root, "comment", document.comment)
        sub(root, "reason", document.reason)


@register(cmd.CancelOrderCommand)
class CancelOrderEncoder(OrderCommandEncoder):
    def body(self, root: ET.Element, document: cmd.CancelOrderCommand) -> None:
        sub(root, "reason", document.reason)
        if document.comment is not None:
            sub(root, "comment", document.comment)


@register(
    cmd.AuthorizeOrderCommand,
    cmd.ProcessOrderCommand,
    cmd.ArchiveOrderCommand,
    cmd.UnarchiveOrderCommand,
)
class EmptyOrderCommandEncoder(OrderCommandEncoder):
    """Commands whose root element has no children."""


# --- Fulfillment ---


@register(cmd.AddMerchantOrderNumberCommand)
class AddMerchantOrderNumberEncoder(OrderCommandEncoder):
    def body(self, root: ET.Element, document: cmd.AddMerchantOrderNumberCommand) -> None:
        sub(root, "merchant-order-number", document.merchant_order_number)


@register(cmd.DeliverOrderCommand)
class DeliverOrderEncoder(OrderCommandEncoder):
    def body(self, root: ET.Element, document: cmd.DeliverOrderCommand) -> None:
        if document.carrier and document.tracking_number:
            _tracking_data(root, document.carrier, document.tracking_number)
        _send_email(root, document.send_email)


@register(cmd.AddTrackingDataCommand)
class AddTrackingDataEncoder(OrderCommandEncoder):
    def body(self, root: ET.Element, document: cmd.AddTrackingDataCommand) -> None:
        _tracking_data(root, document.carrier, document.tracking_number)  # type: ignore[arg-type]


@register(cmd.SendBuyerMessageCommand)
class SendBuyerMessageEncoder(OrderCommandEncoder):
    def body(self, root: ET.Element, document: cmd.SendBuyerMessageCommand) -> None:
        sub(root, "message", document.message)
        _send_email(root, document.send_email)


# --- Line items ---


class ItemsCommandEncoder(OrderCommandEncoder):
    def items(self, root: ET.Element, document: cmd.ItemsCommand) -> None:
        ids_el = sub(root, "item-ids")
        for info in document.item_infos:
            sub(sub(ids_el, "item-id"), "merchant-item-id", info.merchant_item_id)

    def body(self, root: ET.Element, document: cmd.ItemsCommand) -> None:
        self.items(root, document)
        sub(root, "send-email", bool_text(document.send_email))


@register(
    cmd.BackorderItemsCommand,
    cmd.ReturnItemsCommand,
    cmd.ResetItemsShippingInformationCommand,
)
class PlainItemsCommandEncoder(ItemsCommandEncoder):
    """Item-level commands carrying only item ids."""


@register(cmd.ShipItemsCommand)
class ShipItemsEncoder(ItemsCommandEncoder):
    def items(self, root: ET.Element, document: cmd.ItemsCommand) -> None:
        list_el = sub(root, "item-shipping-information-list")
        for info in document.item_infos:
            info_el = sub(list_el, "item-shipping-information")
            sub(sub(info_el, "item-id"), "merchant-item-id", info.merchant_item_id)
            tracking_el = sub(info_el, "tracking-data-list")
            for data in info.tracking_data:
                _tracking_data(tracking_el, data.carrier, data.tracking_number)


@register(cmd.CancelItemsCommand)
class CancelItemsEncoder(ItemsCommandEncoder):
    def body(self, root: ET.Element, document: cmd.CancelItemsCommand) -> None:
        super().body(root, document)
        sub(root, "reason", document.reason)
        if document.comment is not None:
            sub(root, "comment", document.comment)


# --- Reports and polling ---


@register(cmd.OrderReportCommand)
class OrderReportEncoder(XmlEncoder):
    def root(self, document: cmd.OrderReportCommand) -> ET.Element:
        return new_root(
            self.tag,
            start_date=document.start_date.strftime(ORDER_REPORT_DATE_FORMAT),
            end_date=document.end_date.strftime(ORDER_REPORT_DATE_FORMAT),
        )

    def body(self, root: ET.Element, document: cmd.OrderReportCommand) -> None:
        if document.financial_state is not None:
            sub(root, "financial-state", document.financial_state.value)
        if document.fulfillment_state is not None:
            sub(root, "fulfillment-state", document.fulfillment_state.value)
        if document.date_time_zone is not None:
            sub(root, "date-time-zone", document.date_time_zone)


@register(cmd.NotificationHistoryRequestCommand)
class NotificationHistoryRequestEncoder(XmlEncoder):
    def body(self, root: ET.Element, document: cmd.NotificationHistoryRequestCommand) -> None:
        if document.serial_number is not None:
            sub(root, "serial-number", document.serial_number)
        if document.start_time is not None:
            sub(root, "start-time", datetime_text(document.start_time))
        if document.end_time is not None:
            sub(root, "end-time", datetime_text(document.end_time))
        if document.notification_types:
            types_el = sub(root, "notification-types")
            for notification_type in document.notification_types:
                sub(types_el, "notification-type", notification_type)
        if document.order_numbers:
            orders_el = sub(root, "order-numbers")
            for order_number in document.order_numbers:
                sub(orders_el, "google-order-number", order_number)
        if document.next_page_token is not None:
            sub(root, "next-page-token", document.next_page_token)


@register(cmd.NotificationDataTokenRequestCommand)
class NotificationDataTokenRequestEncoder(XmlEncoder):
    def body(self, root: ET.Element, document: cmd.NotificationDataTokenRequestCommand) -> None:
        if document.start_time is not None:
            sub(root, "start-time", datetime_text(document.start_time))


@register(cmd.NotificationDataRequestCommand)
class NotificationDataRequestEncoder(XmlEncoder):
    def body(self, root: ET.Element, document: cmd.NotificationDataRequestCommand) -> None:
        sub(root, "continue-token", document.continue_token)


# --- Callback answers ---


@register(NotificationAcknowledgement)
class NotificationAcknowledgementEncoder(XmlEncoder):
    tag = "notification-acknowledgment"

    def root(self, document: NotificationAcknowledgement) -> ET.Element:
        if document.serial_number is None:
            return new_root(self.tag)
        return new_root(self.tag, serial_number=document.serial_number)


@register(MerchantCalculationResults)
class MerchantCalculationResultsEncoder(XmlEncoder):
    tag = "merchant-calculation-results"

    def body(self, root: ET.Element, document: MerchantCalculationResults) -> None:
        results_el = sub(root, "results")
        for result in document.results:
            attrs = {"address_id": result.address_id}
            if result.shipping_name is not None:
                attrs = {"shipping_name": result.shipping_name, **attrs}
            result_el = sub(results_el, "result", **attrs)
            if result.shipping_rate is not None:
                money_element(result_el, "shipping-rate", result.shipping_rate)
            if result.shippable is not None:
                sub(result_el, "shippable", bool_text(result.shippable))
            if result.total_tax is not None:
                money_element(result_el, "total-tax", result.total_tax)
            if result.merchant_code_results:
                codes_el = sub(result_el, "merchant-code-results")
                for code in result.merchant_code_results:
                    code_el = sub(codes_el, f"{code.kind}-result")
                    sub(code_el, "valid", bool_text(code.valid))
                    sub(code_el, "code", code.code)
                    if code.calculated_amount is not None:
                        money_element(code_el, "calculated-amount", code.calculated_amount)
                    if code.message is not None:
                        sub(code_el, "message", code.message)
