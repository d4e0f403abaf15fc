"""Command: decode an inbound document and summarize it."""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO

import click

from checkoutxml.commands._base import XmlCommand

if TYPE_CHECKING:
    from checkoutxml.commands._context import AppContext


@click.command(
    cls=XmlCommand,
    examples="""\
  checkoutxml decode new-order.xml
  curl -s ... | checkoutxml decode -
  checkoutxml --json decode chargeback.xml""",
)
@click.argument("source", type=click.File("rb"), default="-")
@click.pass_obj
def decode(app: AppContext, source: BinaryIO) -> None:
    """Decode a notification, response or callback document (stdin by default)."""
    from checkoutxml.services.inbound import InboundService

    app.emit(InboundService(app.frontend).decode(source.read()))
