"""InboundService: decode inbound documents and acknowledge notifications."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from checkoutxml.domain.callbacks import NotificationAcknowledgement
from checkoutxml.domain.cart import ShoppingCart
from checkoutxml.domain.commands import OrderReportCommand
from checkoutxml.domain.errors import CheckoutError
from checkoutxml.domain.notifications import Notification
from checkoutxml.serialization import encode
from checkoutxml.services.base import BaseService
from checkoutxml.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


def _cart_items(cart: ShoppingCart) -> list[dict[str, Any]]:
    return [
        {
            "name": item.name,
            "quantity": item.quantity,
            "unit_price": (
                f"{item.unit_price} {item.unit_price.currency}" if item.unit_price else None
            ),
            "merchant_item_id": item.merchant_item_id,
        }
        for item in cart.items
    ]


def summarize(entity: object) -> dict[str, Any]:
    """JSON-safe summary of a decoded document."""
    data: dict[str, Any] = {"document": type(entity).__name__}
    if isinstance(entity, BaseModel):
        data.update(
            entity.model_dump(
                mode="json", exclude={"shopping_cart", "notifications"}, exclude_none=True
            )
        )
        cart = getattr(entity, "shopping_cart", None)
        if isinstance(cart, ShoppingCart):
            data["items"] = _cart_items(cart)
        notifications = getattr(entity, "notifications", None)
        if notifications is not None:
            data["notifications"] = [summarize(n) for n in notifications]
    elif isinstance(entity, OrderReportCommand):
        data["start_date"] = entity.start_date.isoformat()
        data["end_date"] = entity.end_date.isoformat()
        if entity.financial_state is not None:
            data["financial_state"] = entity.financial_state.value
        if entity.fulfillment_state is not None:
            data["fulfillment_state"] = entity.fulfillment_state.value
        if entity.date_time_zone is not None:
            data["date_time_zone"] = entity.date_time_zone
    return data


class InboundService(BaseService):
    """Operations on documents received from the API."""

    def decode(self, document: str | bytes) -> ServiceResult:
        try:
            entity = self._frontend.decode(document)
        except CheckoutError as exc:
            logger.warning("Inbound document rejected: %s", exc)
            return self._failure("decode", exc)
        return ServiceResult(ok=True, op="decode", data=summarize(entity))

    def acknowledge(self, document: str | bytes) -> ServiceResult:
        """Decode a notification and produce its acknowledgment document."""
        try:
            entity = self._frontend.decode(document)
        except CheckoutError as exc:
            return self._failure("acknowledge", exc)
        if not isinstance(entity, Notification):
            return ServiceResult(
                ok=False,
                op="acknowledge",
                error=ServiceError(
                    code="NOT_A_NOTIFICATION",
                    message=f"{type(entity).__name__} is not a notification",
                ),
            )
        xml = encode(NotificationAcknowledgement.for_notification(entity))
        return ServiceResult(
            ok=True,
            op="acknowledge",
            data={"serial_number": entity.serial_number, "xml": xml},
        )
