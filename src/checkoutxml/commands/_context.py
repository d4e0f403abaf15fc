"""AppContext: shared Click context for all commands.

Created once by the root group and handed to subcommands through
``@click.pass_obj``. The Frontend is built on first use so ``--help`` and
``--version`` never touch configuration beyond what the group loaded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from checkoutxml.config.logging import configure_logging
from checkoutxml.output.formatters import format_result, format_warnings

if TYPE_CHECKING:
    from checkoutxml.config.settings import CheckoutSettings
    from checkoutxml.frontend import Frontend
    from checkoutxml.services.result import ServiceResult


class AppContext:
    """Settings, a lazy Frontend, and result emission for subcommands."""

    def __init__(self, settings: CheckoutSettings) -> None:
        self.settings = settings
        self._frontend: Frontend | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def frontend(self) -> Frontend:
        if self._frontend is None:
            from checkoutxml.frontend import Frontend

            self._frontend = Frontend(self.settings)
        return self._frontend

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and exit 1 on failure.

        Successful output goes to stdout with warnings on stderr; failures
        go to stderr.
        """
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
            if result.warnings and not self.settings.json_output:
                click.echo(format_warnings(result.warnings), err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
