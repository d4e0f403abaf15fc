"""Root-tag dispatch for inbound documents.

``decode`` parses a document, looks its root tag up in :data:`DECODERS`
and returns the decoded object. An ``<error>`` root is raised as
:class:`CheckoutApiError`; any other unknown root is a
:class:`DispatchError`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any
from xml.etree import ElementTree as ET

from checkoutxml.deserialization import responses
from checkoutxml.deserialization.elements import (
    DecodeContext,
    parse_document,
    strip_namespaces,
)
from checkoutxml.deserialization.notifications import NOTIFICATION_DECODERS
from checkoutxml.domain.errors import DispatchError

if TYPE_CHECKING:
    from checkoutxml.frontend import Frontend

logger = logging.getLogger(__name__)

DECODERS: dict[str, Callable[[ET.Element, DecodeContext], Any]] = {
    "checkout-redirect": responses.decode_checkout_redirect,
    "request-received": responses.decode_request_received,
    "subscription-request-received": responses.decode_subscription_request_received,
    **NOTIFICATION_DECODERS,
    "notification-history-response": responses.decode_notification_history,
    "notification-data-token-response": responses.decode_notification_data_token,
    "notification-data-response": responses.decode_notification_data,
    "order-list-request": responses.decode_order_report,
    "merchant-calculation-callback": responses.decode_merchant_calculation_callback,
}


def decode(
    document: str | bytes | ET.Element,
    frontend: Frontend | None = None,
    *,
    context: DecodeContext | None = None,
) -> Any:
    """Decode an inbound document into its domain object.

    Args:
        document: Raw XML or an already parsed root element.
        frontend: Supplies tax tables and codec settings; defaults apply
            when omitted.
        context: Explicit decode context, overriding *frontend*.

    Raises:
        CheckoutApiError: The document is an ``<error>`` response.
        DispatchError: The root tag is not a known document.
        DecodeError: The document is malformed or misses mandatory content.
    """
    if isinstance(document, ET.Element):
        root = strip_namespaces(document)
    else:
        root = parse_document(document)

    if context is None:
        context = frontend.decode_context() if frontend is not None else DecodeContext()

    if root.tag == "error":
        raise responses.decode_error(root)

    decoder = DECODERS.get(root.tag)
    if decoder is None:
        msg = f"Unknown document root <{root.tag}>"
        raise DispatchError(msg)
    logger.debug("Decoding <%s> document", root.tag)
    return decoder(root, context)
