"""Subcommand modules for feenctl.

register_commands() imports each command lazily so ``feenctl --help``
stays cheap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every standalone command on the root CLI group."""
    from feenctl.commands.hands import hands
    from feenctl.commands.normalize import normalize
    from feenctl.commands.parse import parse
    from feenctl.commands.placement import placement
    from feenctl.commands.validate import validate

    cli.add_command(parse)
    cli.add_command(validate)
    cli.add_command(normalize)
    cli.add_command(placement)
    cli.add_command(hands)
