"""Click building blocks shared by every feenctl command.

- ``FeenCommand`` / ``FeenGroup``: accept an ``examples=`` string and expose
  it through an eager ``--examples`` flag, keeping ``--help`` short.
- ``FEEN_TEXT``: argument type for FEEN text; ``-`` reads the whole of stdin.
"""

from __future__ import annotations

import sys
from typing import Any

import click

STDIN_MARKER = "-"


def _attach_examples(cmd: click.Command, examples: str | None) -> None:
    """Give *cmd* an eager ``--examples`` flag when *examples* is non-empty."""
    if not examples:
        return

    def print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=print_examples,
            help="Show usage examples.",
        )
    )


class FeenCommand(click.Command):
    """Command with optional ``--examples``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        _attach_examples(self, examples)


class FeenGroup(click.Group):
    """Group with optional ``--examples``; subcommands default to FeenCommand."""

    command_class = FeenCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        _attach_examples(self, examples)


class FeenText(click.ParamType):
    """FEEN text given inline, or ``-`` for stdin."""

    name = "text"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> str:
        if value != STDIN_MARKER:
            return str(value)
        text = sys.stdin.read()
        if not text.strip():
            self.fail("no FEEN text on stdin", param, ctx)
        return text


FEEN_TEXT = FeenText()
