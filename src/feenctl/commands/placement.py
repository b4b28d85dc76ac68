"""Command: inspect a piece placement field."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from feenctl.commands._base import FEEN_TEXT, FeenCommand

if TYPE_CHECKING:
    from feenctl.commands._context import AppContext


@click.command(
    cls=FeenCommand,
    examples="""\
  feenctl placement 'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR'
  feenctl placement 'a2/3//3/3'
  feenctl placement --uniform 'rkr//PPPP/4'
  feenctl --json placement 'r/n//p///q/k//b/R'""",
)
@click.argument("field", type=FEEN_TEXT)
@click.option(
    "--uniform/--any-shape",
    default=None,
    help="Require a regular shape (default: [parser] require_uniform_shape).",
)
@click.pass_obj
def placement(app: AppContext, field: str, uniform: bool | None) -> None:
    """Show dimension, separators, rank widths, and the board for FIELD."""
    app.emit(app.codec.inspect_placement(field, uniform=uniform))
