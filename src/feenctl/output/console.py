"""Rich Console factory and theme for feenctl output.

Consoles render into a StringIO buffer so renderers keep a plain
``str`` contract.  Outside a terminal (tests, pipes) Rich drops color codes
on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

FEEN_THEME = Theme(
    {
        "feen.ok": "bold green",
        "feen.error": "bold red",
        "feen.warning": "bold yellow",
        "feen.op": "bold cyan",
        "feen.key": "dim",
        "feen.feen": "bold",
        "feen.first": "bold blue",
        "feen.second": "bold magenta",
        "feen.empty": "dim",
        "feen.count": "cyan",
    }
)

_SIDE_STYLES: dict[str, str] = {
    "first": "feen.first",
    "second": "feen.second",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=FEEN_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_side(side: str) -> str:
    """Rich style name for ``"first"`` or ``"second"``; empty when unknown."""
    return _SIDE_STYLES.get(side, "")
