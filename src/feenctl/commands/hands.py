"""Command: inspect a pieces-in-hand field."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from feenctl.commands._base import FEEN_TEXT, FeenCommand

if TYPE_CHECKING:
    from feenctl.commands._context import AppContext


@click.command(
    cls=FeenCommand,
    examples="""\
  feenctl hands '3P2B/p'
  feenctl hands --strict '2B3P/'
  feenctl -q hands 'PBPP/pp'""",
)
@click.argument("field", type=FEEN_TEXT)
@click.option(
    "--strict/--lenient",
    default=None,
    help="Reject unmerged or unordered input (default: [parser] strict_hands).",
)
@click.pass_obj
def hands(app: AppContext, field: str, strict: bool | None) -> None:
    """Show per-side reserves and the canonical form of FIELD."""
    app.emit(app.codec.inspect_hands(field, strict=strict))
