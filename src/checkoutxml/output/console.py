"""Rich Console factory and theme for checkoutxml output.

Consoles render into a StringIO buffer so formatters keep returning plain
strings. Rich drops color codes on its own when output is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CHECKOUT_THEME = Theme(
    {
        "co.ok": "bold green",
        "co.error": "bold red",
        "co.warning": "bold yellow",
        "co.op": "bold cyan",
        "co.key": "dim",
        "co.money": "magenta",
        "co.document": "bold blue",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=CHECKOUT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
