"""Root CLI group for feenctl with global flags and command registration."""

from __future__ import annotations

import click

from feenctl import __version__
from feenctl.commands import register_commands
from feenctl.commands._base import FeenGroup
from feenctl.commands._context import AppContext
from feenctl.config.settings import FeenSettings


@click.group(
    cls=FeenGroup,
    invoke_without_command=True,
    examples="""\
  feenctl parse '8/8/8/8/8/8/8/8 / C/c'
  feenctl --json validate '+rnbq+kbn+r/+p+p+p+p+p+p+p+p/8/8/8/8/+P+P+P+P+P+P+P+P/+RNBQ+KBN+R / C/c'
  feenctl -q normalize '8 PBP/ C/c'
  feenctl -c ./feenctl.toml hands --strict '3P2B/'""",
)
@click.version_option(version=__version__, prog_name="feenctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Only the canonical FEEN text.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing spans.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """feenctl — parse, validate, and normalize FEEN positions."""
    settings = FeenSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
