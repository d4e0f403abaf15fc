"""Root CLI group for checkoutxml with global flags and command registration."""

from __future__ import annotations

import click

from checkoutxml import __version__
from checkoutxml.commands import register_commands
from checkoutxml.commands._context import AppContext
from checkoutxml.config.settings import CheckoutSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="checkoutxml")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging of encode/decode.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """checkoutxml: Google Checkout XML documents from the command line."""
    settings = CheckoutSettings.load(
        config_path=config_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
