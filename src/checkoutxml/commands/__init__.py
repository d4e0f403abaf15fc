"""Subcommand modules for the checkoutxml CLI.

register_commands() imports them lazily so ``checkoutxml --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach every standalone command to the root group."""
    from checkoutxml.commands.ack import ack
    from checkoutxml.commands.decode import decode
    from checkoutxml.commands.render import render

    cli.add_command(decode)
    cli.add_command(ack)
    cli.add_command(render)
