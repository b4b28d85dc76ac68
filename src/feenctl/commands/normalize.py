"""Command: rewrite a FEEN string in canonical form."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from feenctl.commands._base import FEEN_TEXT, FeenCommand

if TYPE_CHECKING:
    from feenctl.commands._context import AppContext


@click.command(
    cls=FeenCommand,
    examples="""\
  feenctl normalize '8/8 B2P/ C/c'
  feenctl -q normalize '8/8 PBPP/pp c/C'
  cat positions.txt | feenctl -q normalize -""",
)
@click.argument("feen", type=FEEN_TEXT)
@click.pass_obj
def normalize(app: AppContext, feen: str) -> None:
    """Print the canonical form of FEEN (or '-' for stdin)."""
    app.emit(app.codec.normalize(feen))
