"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic renderer that prints the display
value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from tdcalc.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from tdcalc.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_value)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def describe_error(result: ServiceResult) -> str:
    """One-line error description: op, code, message, offending input.

    Example::

        calculate — ParseError.OutOfRangeField: month 13 is outside 1..12
        (input '2024-13-01', at '13')
    """
    err = result.error
    if err is None:
        return f"{result.op} — Unknown error"
    line = f"{result.op} — {err.code}: {err.message}"
    text = err.detail.get("input")
    fragment = err.detail.get("fragment")
    if text:
        line += f" (input {text!r}"
        if fragment and fragment != text:
            line += f", at {fragment!r}"
        line += ")"
    return line


# ── Helpers ───────────────────────────────────────────────────────────


def _value_text(data: dict[str, Any]) -> Text:
    display = str(data.get("display", ""))
    style = "td.negative" if display.startswith("-") else "td.value"
    return Text(display, style=style)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a span tree, one line per span with its timing and notes."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    notes = " ".join(f"{k}={v}" for k, v in span_data.get("annotations", {}).items())
    style = "yellow" if duration > 10 else "dim"
    line = f"{prefix}[{style}]{duration:>8.3f}ms[/{style}]  {name}"
    console.print(f"{line}  [dim]{notes}[/dim]" if notes else line)
    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Value renderers ───────────────────────────────────────────────────


def _render_value(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Print the display value alone (timestamps, hours, unknown ops)."""
    console.print(_value_text(result.data))
    if verbose:
        for key in ("from", "shift", "to", "duration", "minutes", "epoch_seconds"):
            if key in result.data:
                console.print(Text(f"  {key}:", style="td.key"), Text(str(result.data[key])))
        _render_meta(console, result)


def _render_duration(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Print a duration; in verbose mode add a unit breakdown table."""
    if result.data.get("kind") != "duration":
        _render_value(result, console, verbose=verbose)
        return

    console.print(_value_text(result.data))
    if not verbose:
        return

    breakdown = result.data.get("breakdown", {})
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    for unit in ("days", "hours", "minutes", "seconds", "nanos"):
        table.add_column(unit, justify="right")
    table.add_row(*(str(breakdown.get(unit, 0)) for unit in ("days", "hours", "minutes", "seconds", "nanos")))
    console.print(table)
    for key in ("from", "to"):
        if key in result.data:
            console.print(Text(f"  {key}:", style="td.key"), Text(str(result.data[key])))
    console.print(Text("  total_seconds:", style="td.key"), Text(str(result.data.get("total_seconds"))))
    _render_meta(console, result)


def _render_batch(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """One line per successful item; failures are reported as warnings."""
    for item in result.data.get("items", []):
        if not item.get("ok"):
            continue
        if verbose:
            console.print(Text(f"{item['line']:>4} ", style="td.key"), _value_text(item))
        else:
            console.print(_value_text(item))
    if verbose:
        console.print(
            Text(f"  {result.data.get('count', 0)} items, {result.data.get('failed', 0)} failed", style="dim")
        )
        _render_meta(console, result)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    label = Text("ERROR", style="td.error")
    console.print(label, Text(describe_error(result)))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "calculate": _render_duration,
    "add": _render_duration,
    "subtract": _render_duration,
    "hours": _render_value,
    "batch": _render_batch,
}
