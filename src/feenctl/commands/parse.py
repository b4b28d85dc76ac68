"""Command: parse a FEEN string and describe the position."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from feenctl.commands._base import FEEN_TEXT, FeenCommand

if TYPE_CHECKING:
    from feenctl.commands._context import AppContext


@click.command(
    cls=FeenCommand,
    examples="""\
  feenctl parse '+rnbq+kbn+r/+p+p+p+p+p+p+p+p/8/8/8/8/+P+P+P+P+P+P+P+P/+RNBQ+KBN+R / C/c'
  feenctl parse --strict 'lnsgksgnl/1r5b1/ppppppppp/9/9/9/PPPPPPPPP/1B5R1/LNSGKGSNL / S/s'
  feenctl --json parse '8/8 2P/p c/G'
  echo '3/3//3/3 / A/b' | feenctl parse -""",
)
@click.argument("feen", type=FEEN_TEXT)
@click.option(
    "--strict/--lenient",
    default=None,
    help="Reject non-canonical pieces in hand (default: [parser] strict_hands).",
)
@click.pass_obj
def parse(app: AppContext, feen: str, strict: bool | None) -> None:
    """Parse FEEN (or '-' for stdin) and show board, hands, and turn."""
    app.emit(app.codec.inspect_position(feen, strict=strict))
