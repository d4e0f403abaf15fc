"""Command: render an order-processing command as XML."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from checkoutxml.commands._base import XmlCommand
from checkoutxml.services.commands import DEFAULT_CURRENCY, RENDERABLE

if TYPE_CHECKING:
    from checkoutxml.commands._context import AppContext


@click.command(
    cls=XmlCommand,
    examples="""\
  checkoutxml render charge-order 841171949013218 --amount 335.55
  checkoutxml render refund-order 841171949013218 --reason "Damaged" --amount 10 --currency GBP
  checkoutxml render deliver-order 841171949013218 --carrier UPS --tracking-number Z5498W45987123684
  checkoutxml --json render archive-order 841171949013218""",
)
@click.argument("kind", type=click.Choice(sorted(RENDERABLE)))
@click.argument("google_order_number")
@click.option("--amount", default=None, help="Decimal amount, e.g. 12.50.")
@click.option(
    "--currency", default=DEFAULT_CURRENCY, show_default=True, help="Currency of --amount."
)
@click.option("--reason", default=None, help="Refund or cancellation reason.")
@click.option("--comment", default=None, help="Free-form comment.")
@click.option("--carrier", default=None, help="Shipping carrier for tracking data.")
@click.option("--tracking-number", default=None, help="Carrier tracking number.")
@click.option("--message", default=None, help="Message to the buyer.")
@click.option("--merchant-order-number", default=None, help="Merchant-side order number.")
@click.option("--send-email/--no-send-email", default=None, help="Ask the API to email the buyer.")
@click.pass_obj
def render(
    app: AppContext,
    kind: str,
    google_order_number: str,
    amount: str | None,
    currency: str,
    reason: str | None,
    comment: str | None,
    carrier: str | None,
    tracking_number: str | None,
    message: str | None,
    merchant_order_number: str | None,
    send_email: bool | None,
) -> None:
    """Print the XML for KIND targeting GOOGLE_ORDER_NUMBER, with its endpoint."""
    from checkoutxml.services.commands import CommandService

    result = CommandService(app.frontend).render(
        kind,
        google_order_number,
        currency=currency,
        amount=amount,
        reason=reason,
        comment=comment,
        carrier=carrier,
        tracking_number=tracking_number,
        message=message,
        merchant_order_number=merchant_order_number,
        send_email=send_email,
    )
    app.emit(result)
