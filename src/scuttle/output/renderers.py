"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from scuttle.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from scuttle.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    if verbose:
        _render_meta(console, result)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render a single line for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "broadcast":
        d = result.data
        return f"OK: broadcast {d.get('succeeded', 0)}/{d.get('attempted', 0)}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult, title: str = "") -> None:
    console.print(
        Text("OK", style="sc.ok"),
        Text(f"  {result.op}", style="sc.op"),
        Text(f"  {title}", style="sc.title") if title else Text(""),
        sep="",
    )


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text(f"  {key}: ", style="sc.key"), Text(str(value)), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the telemetry span tree, if any."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{' ' * indent}[{style}]{duration:>8.2f}ms[/{style}]  {span.get('name', '?')}"
    annotations = span.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="sc.error"),
        Text(f"  {result.op}", style="sc.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )
    if verbose and err:
        _field(console, "code", err.code)
        for k, v in err.detail.items():
            _field(console, k, v)


# ── Stats ─────────────────────────────────────────────────────────────


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    title = (
        f"{d['riot_id']}'s {d['queue_type'].title()} stats "
        f"for the past {d['range_days']} day(s)"
    )
    _status_line(console, result, title)

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Metric", style="sc.metric")
    table.add_column("Value", style="sc.value", justify="right")
    for metric, value in d["stats"].items():
        table.add_row(Text(metric), Text(value))
    console.print(table)
    console.print(Text("Match data is updated hourly on the hour.", style="dim"))


def _render_rankings(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    title = f"Top {d['queue_type'].title()} players ({d['start_date']} – {d['end_date']})"
    _status_line(console, result, title)

    if not d["rankings"]:
        console.print(Text("  No ranking categories.", style="dim"))
        return

    for metric, entries in d["rankings"].items():
        table = Table(title=Text(metric), show_header=False, pad_edge=False, expand=False)
        table.add_column("#", style="sc.rank", justify="right")
        table.add_column("Value", style="sc.value", justify="right")
        table.add_column("Summoner")
        for entry in entries:
            table.add_row(str(entry["rank"]), Text(entry["value"]), Text(entry["name"]))
        console.print(table)
    console.print(Text("Data is updated hourly.", style="dim"))


# ── Broadcast ─────────────────────────────────────────────────────────


def _render_broadcast(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    attempted = d["attempted"]
    prefix = "TEST MODE — " if d["test_mode"] else ""
    plural = "" if attempted == 1 else "s"
    _status_line(
        console,
        result,
        f"{prefix}Broadcast sent to {d['succeeded']}/{attempted} guild{plural}",
    )
    _field(console, "template", d["template"])
    _field(console, "succeeded", d["succeeded"])
    _field(console, "failed", d["failed"])

    if d["failure_reasons"]:
        console.print(Text("  failures:", style="sc.warning"))
        for reason in d["failure_reasons"]:
            console.print(f"    {reason}", markup=False)
        if d["truncated"]:
            console.print(f"    ... and {d['omitted_failures']} more")


def _render_templates(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in result.data.get("items", []):
        console.print(f"  {key}", markup=False)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "stats": _render_stats,
    "rankings": _render_rankings,
    "broadcast": _render_broadcast,
    "templates": _render_templates,
}
