"""Command: check that a FEEN string is well formed."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from feenctl.commands._base import FEEN_TEXT, FeenCommand

if TYPE_CHECKING:
    from feenctl.commands._context import AppContext


@click.command(
    cls=FeenCommand,
    examples="""\
  feenctl validate '8/8/8/8/8/8/8/8 / C/c'
  feenctl validate --strict 'k7/8/8/8/8/8/8/7K 2PB/ C/c'
  feenctl -q validate - < position.feen""",
)
@click.argument("feen", type=FEEN_TEXT)
@click.option(
    "--strict/--lenient",
    default=None,
    help="Reject unmerged or unordered pieces in hand (default: [parser] strict_hands).",
)
@click.pass_obj
def validate(app: AppContext, feen: str, strict: bool | None) -> None:
    """Validate FEEN (or '-' for stdin); exit status 1 when invalid."""
    app.emit(app.codec.validate(feen, strict=strict))
