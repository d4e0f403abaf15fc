"""Frontend: the configuration-keyed entry point.

A :class:`Frontend` owns the settings and the tax-table source. It creates
commands, picks the API endpoint for them, and serves as the decode context
so decoded carts resolve tax tables that were in effect for the order.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from checkoutxml.config.settings import CheckoutSettings
from checkoutxml.deserialization.elements import DecodeContext
from checkoutxml.deserialization.router import decode as decode_document
from checkoutxml.domain.commands import (
    CheckoutCommand,
    Command,
    CreateOrderRecurrenceRequestCommand,
    NotificationDataRequestCommand,
    NotificationDataTokenRequestCommand,
    NotificationHistoryRequestCommand,
    OrderReportCommand,
    create_command,
)
from checkoutxml.domain.types import PurchaseType
from checkoutxml.serialization import encode

if TYPE_CHECKING:
    from xml.etree import ElementTree as ET

    from checkoutxml.domain.tax import TaxTable, TaxTableFactory

logger = logging.getLogger(__name__)

SANDBOX_BASE_URL = "https://sandbox.google.com/checkout/api/checkout/v2"
PRODUCTION_BASE_URL = "https://checkout.google.com/api/checkout/v2"

# Command kinds that go to a dedicated endpoint instead of /request
_ENDPOINT_SUFFIXES: dict[type[Command], str] = {
    CheckoutCommand: "merchantCheckout",
    OrderReportCommand: "reports",
    NotificationHistoryRequestCommand: "reports",
    NotificationDataTokenRequestCommand: "reports",
    NotificationDataRequestCommand: "reports",
}


class Frontend:
    """Settings plus tax-table source, shared by encoding and decoding.

    Args:
        settings: Loaded settings; ``CheckoutSettings()`` when omitted.
        tax_table_factory: Source of the tax tables in effect at a moment.
    """

    def __init__(
        self,
        settings: CheckoutSettings | None = None,
        *,
        tax_table_factory: TaxTableFactory | None = None,
    ) -> None:
        self.settings = settings if settings is not None else CheckoutSettings()
        self.tax_table_factory = tax_table_factory

    def tax_tables_at(self, when: datetime | None = None) -> list[TaxTable]:
        """Tax tables in effect at *when* (now if None)."""
        if self.tax_table_factory is None:
            return []
        return list(self.tax_table_factory.effective_tax_tables_at(when or datetime.now(UTC)))

    def create_command[C: Command](self, kind: type[C] | str, **attrs: Any) -> C:
        """Create a command by class or root tag, wiring in the current tax tables."""
        command = create_command(kind, **attrs)
        if isinstance(command, (CheckoutCommand, CreateOrderRecurrenceRequestCommand)):
            if not command.tax_tables:
                command.tax_tables.extend(self.tax_tables_at())
        return command  # type: ignore[return-value]

    def endpoint_url(self, command: Command) -> str:
        """URL the transport layer should post *command* to."""
        merchant = self.settings.merchant
        base = SANDBOX_BASE_URL if merchant.use_sandbox else PRODUCTION_BASE_URL
        suffix = _ENDPOINT_SUFFIXES.get(type(command), "request")
        if suffix == "merchantCheckout" and merchant.purchase_type is PurchaseType.DONATION:
            suffix = "donationCheckout"
        return f"{base}/{suffix}/Merchant/{merchant.merchant_id}"

    def decode_context(self) -> DecodeContext:
        return DecodeContext(
            tax_tables_at=self.tax_tables_at,
            strict_tax_table_selector=self.settings.codec.strict_tax_table_selector,
        )

    def encode(self, command: object) -> str:
        return encode(command)

    def decode(self, document: str | bytes | ET.Element) -> Any:
        return decode_document(document, context=self.decode_context())
