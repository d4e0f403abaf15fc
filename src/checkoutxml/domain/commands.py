"""Commands sent to the merchant API.

Each command maps to one root element through :data:`COMMAND_TAGS`.
Order-targeted commands (:class:`OrderCommand` subclasses) require a Google
order number at construction; checkout, report and polling commands do not
carry one. Fields listed in ``required_fields`` are checked when encoding.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any, ClassVar

from checkoutxml.domain.cart import ShoppingCart
from checkoutxml.domain.errors import DispatchError, InvalidValueError
from checkoutxml.domain.fulfillment import ItemInfo, ParameterizedUrl
from checkoutxml.domain.money import MoneyLike, require_money
from checkoutxml.domain.shipping import SHIPPING_METHOD_TYPES, ShippingMethod
from checkoutxml.domain.tax import TaxTable
from checkoutxml.domain.types import FinancialState, FulfillmentState, coerce_enum


class Command:
    """Base of every command. Concrete kinds are listed in COMMAND_TAGS."""

    required_fields: ClassVar[tuple[str, ...]] = ()

    def missing_fields(self) -> list[str]:
        """Names of required fields that are still unset."""
        return [name for name in self.required_fields if getattr(self, name, None) in (None, "")]


class OrderCommand(Command):
    """A command targeting an existing order."""

    def __init__(self, google_order_number: str) -> None:
        if not isinstance(google_order_number, str) or not google_order_number.strip():
            msg = f"Google order number must be a non-empty string, got {google_order_number!r}"
            raise InvalidValueError(msg)
        self.google_order_number = google_order_number

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.google_order_number!r})"


class _AmountMixin:
    _amount: MoneyLike | None = None

    @property
    def amount(self) -> MoneyLike | None:
        return self._amount

    @amount.setter
    def amount(self, value: MoneyLike | None) -> None:
        self._amount = None if value is None else require_money(value, "Amount")


# --- Checkout ---


class CheckoutCommand(Command):
    """Posts a shopping cart and checkout-flow settings.

    The first tax table is the default table; later ones are alternates.
    """

    def __init__(self, *, tax_tables: Iterable[TaxTable] = ()) -> None:
        self.tax_tables: list[TaxTable] = list(tax_tables)
        self.shopping_cart = ShoppingCart(self)
        self.shipping_methods: list[ShippingMethod] = []
        self.parameterized_urls: list[ParameterizedUrl] = []
        self.edit_cart_url: str | None = None
        self.continue_shopping_url: str | None = None
        self.request_buyer_phone_number: bool | None = None
        self.merchant_calculations_url: str | None = None
        self.accept_merchant_coupons: bool | None = None
        self.accept_gift_certificates: bool | None = None
        self.platform_id: str | None = None
        self.analytics_data: str | None = None

    def add_shipping_method[M: ShippingMethod](self, method: M) -> M:
        """Offer *method* at checkout and return it."""
        if not isinstance(method, SHIPPING_METHOD_TYPES):
            msg = f"Unsupported shipping method {method!r}"
            raise InvalidValueError(msg)
        self.shipping_methods.append(method)
        return method

    def create_parameterized_url(self, url: str) -> ParameterizedUrl:
        purl = ParameterizedUrl(url)
        self.parameterized_urls.append(purl)
        return purl


# --- Financial commands ---


class ChargeOrderCommand(_AmountMixin, OrderCommand):
    """Charges the buyer, optionally less than the order total."""

    def __init__(self, google_order_number: str, *, amount: MoneyLike | None = None) -> None:
        super().__init__(google_order_number)
        self.amount = amount


class ChargeAndShipOrderCommand(_AmountMixin, OrderCommand):
    """Charges the buyer and marks the order shipped in one step."""

    def __init__(
        self,
        google_order_number: str,
        *,
        amount: MoneyLike | None = None,
        carrier: str | None = None,
        tracking_number: str | None = None,
        send_email: bool | None = None,
    ) -> None:
        super().__init__(google_order_number)
        self.amount = amount
        self.carrier = carrier
        self.tracking_number = tracking_number
        self.send_email = send_email


class RefundOrderCommand(_AmountMixin, OrderCommand):
    """Refunds the buyer. A reason is mandatory."""

    required_fields = ("reason",)

    def __init__(
        self,
        google_order_number: str,
        *,
        reason: str | None = None,
        amount: MoneyLike | None = None,
        comment: str | None = None,
    ) -> None:
        super().__init__(google_order_number)
        self.reason = reason
        self.amount = amount
        self.comment = comment


class CancelOrderCommand(OrderCommand):
    required_fields = ("reason",)

    def __init__(
        self, google_order_number: str, *, reason: str | None = None, comment: str | None = None
    ) -> None:
        super().__init__(google_order_number)
        self.reason = reason
        self.comment = comment


class AuthorizeOrderCommand(OrderCommand):
    """Re-authorizes the buyer's card."""


# --- Fulfillment commands ---


class ProcessOrderCommand(OrderCommand):
    """Moves the order to PROCESSING."""


class AddMerchantOrderNumberCommand(OrderCommand):
    required_fields = ("merchant_order_number",)

    def __init__(
        self, google_order_number: str, *, merchant_order_number: str | None = None
    ) -> None:
        super().__init__(google_order_number)
        self.merchant_order_number = merchant_order_number


class DeliverOrderCommand(OrderCommand):
    def __init__(
        self,
        google_order_number: str,
        *,
        carrier: str | None = None,
        tracking_number: str | None = None,
        send_email: bool | None = None,
    ) -> None:
        super().__init__(google_order_number)
        self.carrier = carrier
        self.tracking_number = tracking_number
        self.send_email = send_email


class AddTrackingDataCommand(OrderCommand):
    required_fields = ("carrier", "tracking_number")

    def __init__(
        self,
        google_order_number: str,
        *,
        carrier: str | None = None,
        tracking_number: str | None = None,
    ) -> None:
        super().__init__(google_order_number)
        self.carrier = carrier
        self.tracking_number = tracking_number


class SendBuyerMessageCommand(OrderCommand):
    required_fields = ("message",)

    def __init__(
        self,
        google_order_number: str,
        *,
        message: str | None = None,
        send_email: bool | None = None,
    ) -> None:
        super().__init__(google_order_number)
        self.message = message
        self.send_email = send_email


class ArchiveOrderCommand(OrderCommand):
    """Hides the order from the merchant center inbox."""


class UnarchiveOrderCommand(OrderCommand):
    """Returns an archived order to the inbox."""


class CreateOrderRecurrenceRequestCommand(OrderCommand):
    """Charges the next period of a merchant-handled subscription."""

    def __init__(self, google_order_number: str, *, tax_tables: Iterable[TaxTable] = ()) -> None:
        super().__init__(google_order_number)
        self.tax_tables: list[TaxTable] = list(tax_tables)
        self.shopping_cart = ShoppingCart(self)


# --- Line-item commands ---


class ItemsCommand(OrderCommand):
    """Base for commands acting on individual order lines."""

    def __init__(
        self,
        google_order_number: str,
        *,
        item_infos: Iterable[ItemInfo] = (),
        send_email: bool = False,
    ) -> None:
        super().__init__(google_order_number)
        self.item_infos: list[ItemInfo] = list(item_infos)
        self.send_email = send_email

    def create_item_info(self, merchant_item_id: str) -> ItemInfo:
        info = ItemInfo(merchant_item_id)
        self.item_infos.append(info)
        return info

    def missing_fields(self) -> list[str]:
        missing = super().missing_fields()
        if not self.item_infos:
            missing.append("item_infos")
        return missing


class ShipItemsCommand(ItemsCommand):
    """Marks lines shipped, each with its own tracking data."""


class BackorderItemsCommand(ItemsCommand):
    pass


class CancelItemsCommand(ItemsCommand):
    required_fields = ("reason",)

    def __init__(
        self,
        google_order_number: str,
        *,
        item_infos: Iterable[ItemInfo] = (),
        send_email: bool = False,
        reason: str | None = None,
        comment: str | None = None,
    ) -> None:
        super().__init__(google_order_number, item_infos=item_infos, send_email=send_email)
        self.reason = reason
        self.comment = comment


class ReturnItemsCommand(ItemsCommand):
    pass


class ResetItemsShippingInformationCommand(ItemsCommand):
    pass


# --- Reports and polling ---


class OrderReportCommand(Command):
    """Requests a CSV list of orders created between two moments.

    Both bounds are datetimes and ``start_date`` must not be after
    ``end_date``.
    """

    def __init__(
        self,
        start_date: datetime,
        end_date: datetime,
        *,
        financial_state: FinancialState | str | None = None,
        fulfillment_state: FulfillmentState | str | None = None,
        date_time_zone: str | None = None,
    ) -> None:
        for label, value in (("start_date", start_date), ("end_date", end_date)):
            if not isinstance(value, datetime):
                msg = f"Order report {label} must be a datetime, got {value!r}"
                raise InvalidValueError(msg)
        if start_date > end_date:
            msg = f"Order report start_date {start_date} is after end_date {end_date}"
            raise InvalidValueError(msg)
        self.start_date = start_date
        self.end_date = end_date
        self.financial_state = financial_state
        self.fulfillment_state = fulfillment_state
        self.date_time_zone = date_time_zone

    @property
    def financial_state(self) -> FinancialState | None:
        return self._financial_state

    @financial_state.setter
    def financial_state(self, value: FinancialState | str | None) -> None:
        self._financial_state = (
            None if value is None else coerce_enum(FinancialState, value, "financial state")
        )

    @property
    def fulfillment_state(self) -> FulfillmentState | None:
        return self._fulfillment_state

    @fulfillment_state.setter
    def fulfillment_state(self, value: FulfillmentState | str | None) -> None:
        self._fulfillment_state = (
            None if value is None else coerce_enum(FulfillmentState, value, "fulfillment state")
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderReportCommand):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None  # type: ignore[assignment]


class NotificationHistoryRequestCommand(Command):
    """Re-fetches notifications by serial number, time range, or order."""

    def __init__(
        self,
        *,
        serial_number: str | None = None,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        notification_types: Iterable[str] = (),
        order_numbers: Iterable[str] = (),
        next_page_token: str | None = None,
    ) -> None:
        self.serial_number = serial_number
        self.start_time = start_time
        self.end_time = end_time
        self.notification_types: list[str] = list(notification_types)
        self.order_numbers: list[str] = list(order_numbers)
        self.next_page_token = next_page_token


class NotificationDataTokenRequestCommand(Command):
    """Asks for a continue token to poll notifications from *start_time* on."""

    def __init__(self, *, start_time: datetime | None = None) -> None:
        self.start_time = start_time


class NotificationDataRequestCommand(Command):
    """Polls the notifications after a continue token."""

    required_fields = ("continue_token",)

    def __init__(self, *, continue_token: str | None = None) -> None:
        self.continue_token = continue_token


COMMAND_TAGS: dict[type[Command], str] = {
    CheckoutCommand: "checkout-shopping-cart",
    ChargeOrderCommand: "charge-order",
    ChargeAndShipOrderCommand: "charge-and-ship-order",
    RefundOrderCommand: "refund-order",
    CancelOrderCommand: "cancel-order",
    AuthorizeOrderCommand: "authorize-order",
    ProcessOrderCommand: "process-order",
    AddMerchantOrderNumberCommand: "add-merchant-order-number",
    DeliverOrderCommand: "deliver-order",
    AddTrackingDataCommand: "add-tracking-data",
    SendBuyerMessageCommand: "send-buyer-message",
    ArchiveOrderCommand: "archive-order",
    UnarchiveOrderCommand: "unarchive-order",
    CreateOrderRecurrenceRequestCommand: "create-order-recurrence-request",
    ShipItemsCommand: "ship-items",
    BackorderItemsCommand: "backorder-items",
    CancelItemsCommand: "cancel-items",
    ReturnItemsCommand: "return-items",
    ResetItemsShippingInformationCommand: "reset-items-shipping-information",
    OrderReportCommand: "order-list-request",
    NotificationHistoryRequestCommand: "notification-history-request",
    NotificationDataTokenRequestCommand: "notification-data-token-request",
    NotificationDataRequestCommand: "notification-data-request",
}

# Name used by the CLI and Frontend.create_command: "charge-order" -> ChargeOrderCommand
COMMANDS_BY_TAG: dict[str, type[Command]] = {tag: cls for cls, tag in COMMAND_TAGS.items()}


def command_tag(command: Command | type[Command]) -> str:
    """Root element name of *command*."""
    cls = command if isinstance(command, type) else type(command)
    try:
        return COMMAND_TAGS[cls]
    except KeyError:
        msg = f"No root tag registered for {cls.__name__}"
        raise DispatchError(msg) from None


def create_command(kind: str | type[Command], **attrs: Any) -> Command:
    """Instantiate a command by class or by root tag name."""
    if isinstance(kind, str):
        if kind not in COMMANDS_BY_TAG:
            msg = f"Unknown command kind {kind!r}"
            raise DispatchError(msg)
        kind = COMMANDS_BY_TAG[kind]
    return kind(**attrs)
