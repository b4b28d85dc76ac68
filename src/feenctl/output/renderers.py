"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from feenctl.output.console import create_console, get_output, style_for_side

if TYPE_CHECKING:
    from rich.console import Console

    from feenctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    empty_glyph: str = ".",
    show_hierarchy: bool = True,
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()
    view = _View(console, verbose=verbose, empty_glyph=empty_glyph, show_hierarchy=show_hierarchy)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, view)
    else:
        _render_error(result, view)

    if verbose:
        _render_meta(console, result)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: just the canonical text when there is one."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    text = result.data.get("feen") or result.data.get("field")
    if text:
        return str(text)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


class _View:
    """A console plus the display preferences renderers need."""

    def __init__(
        self, console: Console, *, verbose: bool, empty_glyph: str, show_hierarchy: bool
    ) -> None:
        self.console = console
        self.verbose = verbose
        self.empty_glyph = empty_glyph
        self.show_hierarchy = show_hierarchy


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="feen.ok")
    op = Text(f"  {result.op}", style="feen.op")
    console.print(label, op, sep="")


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="feen.key")
    if key in ("feen", "field"):
        style = style or "feen.feen"
    console.print(k, Text(str(value), style=style), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 10 else "dim"

    line = Text(f"{prefix}")
    line.append(f"{duration:>8.3f}ms", style=style)
    line.append(f"  {name}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append(f"  ({', '.join(f'{ak}={av}' for ak, av in annotations.items())})")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _board_table(placement: dict[str, Any], empty_glyph: str) -> Table:
    """One table row per rank; a section break wherever a separator is deeper than 1."""
    widest = max(placement["rank_widths"], default=0)
    table = Table(show_header=False, show_lines=False, pad_edge=False, box=None)
    table.add_column("rank", style="feen.key", justify="right")
    for _ in range(widest):
        table.add_column(justify="center")

    separators = [1, *placement["separators"]]
    for idx, (row, depth) in enumerate(zip(placement["board"], separators, strict=True)):
        if depth > 1:
            table.add_section()
        cells = [_board_cell(token, empty_glyph) for token in row]
        cells.extend(Text("") for _ in range(widest - len(row)))
        table.add_row(Text(str(idx)), *cells)
    return table


def _board_cell(token: str | None, empty_glyph: str) -> Text:
    if token is None:
        return Text(empty_glyph, style="feen.empty")
    letter = next((ch for ch in token if ch.isalpha()), "")
    return Text(token, style=style_for_side("first" if letter.isupper() else "second"))


def _placement_summary(view: _View, placement: dict[str, Any]) -> None:
    console = view.console
    _field(console, "dimension", placement["dimension"])
    if placement["regular"]:
        _field(console, "shape", " x ".join(str(n) for n in placement["shape"]))
    else:
        _field(console, "shape", "irregular", style="feen.warning")
    _field(console, "ranks", len(placement["rank_widths"]))
    _field(console, "pieces", f"{placement['piece_count']} / {placement['cell_count']} cells")
    if view.show_hierarchy and placement["dimension"] > 1:
        _field(console, "layout", placement["layout"])
    console.print()
    console.print(_board_table(placement, view.empty_glyph))


def _hands_line(console: Console, hands: dict[str, Any], side: str) -> None:
    k = Text(f"  {side}: ", style="feen.key")
    entries = hands[side]
    if not entries:
        console.print(k, Text("-", style="feen.empty"), sep="")
        return
    body = Text()
    for i, entry in enumerate(entries):
        if i:
            body.append("  ")
        body.append(entry["piece"], style=style_for_side(side))
        body.append(f" x{entry['count']}", style="feen.count")
    console.print(k, body, sep="")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, view: _View) -> None:
    console = view.console
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="feen.error")
    op = Text(f"  {result.op}", style="feen.op")
    console.print(label, op, Text(" — "), Text(msg))

    if err:
        _field(console, "code", err.code)
        for k, v in err.detail.items():
            _field(console, k, v)


# ── Operation renderers ───────────────────────────────────────────────


def _render_parse(result: ServiceResult, view: _View) -> None:
    console = view.console
    data = result.data
    _status_line(console, result)
    _field(console, "feen", data["feen"])
    if not data.get("canonical", True):
        _field(console, "canonical", "no", style="feen.warning")

    styles = data["styles"]
    _field(console, "to move", styles["active"], style=style_for_side(styles["active"]))
    _field(console, "styles", f"{styles['first_style']} / {styles['second_style']}")
    for side in ("first", "second"):
        _hands_line(console, data["hands"], side)
    _placement_summary(view, data["placement"])


def _render_validate(result: ServiceResult, view: _View) -> None:
    _status_line(view.console, result)
    _field(view.console, "feen", result.data["feen"])
    canonical = result.data.get("canonical", True)
    _field(view.console, "canonical", "yes" if canonical else "no")


def _render_normalize(result: ServiceResult, view: _View) -> None:
    _status_line(view.console, result)
    _field(view.console, "feen", result.data["feen"])
    if view.verbose:
        _field(view.console, "input", result.data["input"])
        _field(view.console, "changed", result.data["changed"])


def _render_placement(result: ServiceResult, view: _View) -> None:
    _status_line(view.console, result)
    _field(view.console, "field", result.data["field"])
    _placement_summary(view, result.data)


def _render_hands(result: ServiceResult, view: _View) -> None:
    console = view.console
    data = result.data
    _status_line(console, result)
    _field(console, "field", data["field"])
    if not data.get("canonical", True):
        _field(console, "canonical", "no", style="feen.warning")
    for side in ("first", "second"):
        _hands_line(console, data, side)
        _field(console, f"{side} total", data[f"{side}_total"])


def _render_generic(result: ServiceResult, view: _View) -> None:
    _status_line(view.console, result)
    for key, value in result.data.items():
        _field(view.console, key, value)


_OP_RENDERERS = {
    "parse": _render_parse,
    "validate": _render_validate,
    "normalize": _render_normalize,
    "placement": _render_placement,
    "hands": _render_hands,
}
