"""Render a ServiceResult for humans (Rich) or machines (``--json``).

XML payloads are printed verbatim after the key-value table so they can be
piped into other tools.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from checkoutxml.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from checkoutxml.services.result import ServiceResult


def _cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _render_items(console: Console, items: list[dict[str, Any]]) -> None:
    table = Table(show_header=True, header_style="co.key", box=None, pad_edge=False)
    table.add_column("Item")
    table.add_column("Qty", justify="right")
    table.add_column("Unit price", style="co.money", justify="right")
    table.add_column("Merchant id")
    for item in items:
        table.add_row(
            str(item.get("name") or ""),
            str(item.get("quantity") or ""),
            str(item.get("unit_price") or ""),
            str(item.get("merchant_item_id") or ""),
        )
    console.print(table)


def _render_ok(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="co.ok"), Text(result.op, style="co.op"))
    data = dict(result.data)
    xml = data.pop("xml", None)
    items = data.pop("items", None)

    if data:
        table = Table(show_header=False, box=None, pad_edge=False)
        table.add_column(style="co.key")
        table.add_column()
        for key, value in data.items():
            style = "co.document" if key == "document" else ""
            table.add_row(key, Text(_cell(value), style=style))
        console.print(table)
    if items:
        _render_items(console, items)
    if xml is not None:
        console.print(xml, markup=False, soft_wrap=True)


def _render_error(console: Console, result: ServiceResult) -> None:
    error = result.error
    message = error.message if error else "Unknown error"
    console.print(Text("ERROR", style="co.error"), Text(result.op, style="co.op"))
    console.print(f"  {message}", markup=False)
    if error is not None:
        console.print(f"  code: {error.code}", style="co.key", markup=False)
        for key, value in error.detail.items():
            console.print(f"  {key}: {_cell(value)}", style="co.key", markup=False)


def format_warnings(warnings: list[str]) -> str:
    """Render non-fatal service warnings, one per line."""
    console = create_console()
    for warning in warnings:
        console.print(Text("WARNING", style="co.warning"), Text(warning))
    return get_output(console).rstrip("\n")


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: Return the result as indented JSON.
    """
    if json_output:
        return result.model_dump_json(indent=2)
    console = create_console()
    if result.ok:
        _render_ok(console, result)
    else:
        _render_error(console, result)
    return get_output(console).rstrip("\n")
