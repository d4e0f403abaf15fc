"""CommandService: build and encode order-processing commands."""

from __future__ import annotations

import inspect
from typing import Any

from checkoutxml.domain.commands import COMMANDS_BY_TAG, OrderCommand
from checkoutxml.domain.errors import CheckoutError, DispatchError
from checkoutxml.domain.money import Money
from checkoutxml.services.base import BaseService
from checkoutxml.services.result import ServiceError, ServiceResult

DEFAULT_CURRENCY = "USD"


def _scalar_only(cls: type) -> bool:
    params = inspect.signature(cls).parameters
    return "item_infos" not in params and "tax_tables" not in params


#: Order commands that can be rendered from scalar fields alone
RENDERABLE: dict[str, type[OrderCommand]] = {
    tag: cls
    for tag, cls in COMMANDS_BY_TAG.items()
    if issubclass(cls, OrderCommand) and _scalar_only(cls)
}


class CommandService(BaseService):
    """Operations producing outbound command documents."""

    def render(
        self,
        kind: str,
        google_order_number: str,
        *,
        currency: str = DEFAULT_CURRENCY,
        **fields: Any,
    ) -> ServiceResult:
        """Encode the *kind* command for an order.

        Unset (None) fields are dropped and the rest must be accepted by the
        command's constructor. A string ``amount`` is parsed as a decimal
        in *currency*.
        """
        command_cls = RENDERABLE.get(kind)
        if command_cls is None:
            return self._failure("render", DispatchError(f"Cannot render command kind {kind!r}"))

        accepted = inspect.signature(command_cls).parameters
        attrs = {name: value for name, value in fields.items() if value is not None}
        unknown = sorted(set(attrs) - set(accepted))
        if unknown:
            return ServiceResult(
                ok=False,
                op="render",
                error=ServiceError(
                    code="INVALID_FIELD",
                    message=f"{kind} does not accept: {', '.join(unknown)}",
                ),
            )

        try:
            if isinstance(attrs.get("amount"), str):
                attrs["amount"] = Money.parse(attrs["amount"], currency)
            command = self._frontend.create_command(
                command_cls, google_order_number=google_order_number, **attrs
            )
            xml = self._frontend.encode(command)
        except CheckoutError as exc:
            return self._failure("render", exc)
        return ServiceResult(
            ok=True,
            op="render",
            data={"kind": kind, "endpoint": self._frontend.endpoint_url(command), "xml": xml},
        )
