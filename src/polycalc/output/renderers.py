"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from polycalc.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from polycalc.services.result import ServiceResult


def render_result(result: ServiceResult) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: one value per accepted line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"

    items = result.data.get("items")
    if items:
        return "\n".join(_value_text(item) for item in items)
    return f"OK: {result.op}"


def _value_text(item: dict[str, Any]) -> str:
    if "arg" in item:
        return f"{item['value']} {item['arg']}"
    return str(item["value"])


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="pc.ok"), Text(f"  {result.op}", style="pc.op"))


def _counts_line(console: Console, counts: dict[str, int]) -> None:
    summary = "  ".join(f"{key}={value}" for key, value in counts.items())
    console.print(Text(summary, style="pc.key"))


def _render_parse(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    items = result.data.get("items", [])
    if items:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Line", justify="right", style="pc.line")
        table.add_column("Kind")
        table.add_column("Value")
        for item in items:
            kind = item["kind"]
            table.add_row(
                str(item["line"]),
                Text(kind, style=style_for_kind(kind)),
                Text(_value_text(item)),
            )
        console.print(table)
    _counts_line(console, result.data.get("counts", {}))


def _render_check(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _counts_line(console, result.data.get("counts", {}))


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text.assemble((f"  {key}: ", "pc.key"), str(value)))


def _render_error(result: ServiceResult, console: Console) -> None:
    msg = result.error.message if result.error else "Unknown error"
    console.print(Text("ERROR", style="pc.error"), Text(f"  {result.op}", style="pc.op"), Text(msg))
    counts = result.data.get("counts")
    if counts:
        _counts_line(console, counts)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "parse": _render_parse,
    "check": _render_check,
}
