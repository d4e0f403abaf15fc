"""Command: print the acknowledgment for a notification."""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO

import click

from checkoutxml.commands._base import XmlCommand

if TYPE_CHECKING:
    from checkoutxml.commands._context import AppContext


@click.command(
    cls=XmlCommand,
    examples="""\
  checkoutxml ack risk-information.xml
  checkoutxml --json ack - < order-state-change.xml""",
)
@click.argument("source", type=click.File("rb"), default="-")
@click.pass_obj
def ack(app: AppContext, source: BinaryIO) -> None:
    """Decode a notification and print its notification-acknowledgment."""
    from checkoutxml.services.inbound import InboundService

    app.emit(InboundService(app.frontend).acknowledge(source.read()))
