"""Tests for the --examples flag on every command."""

from __future__ import annotations

import click
import pytest
from click.testing import CliRunner

from feenctl.cli import cli
from feenctl.commands._base import FeenCommand, FeenGroup

EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--examples"], ["feenctl parse", "feenctl -q normalize"]),
    (["parse", "--examples"], ["feenctl parse -"]),
    (["validate", "--examples"], ["--strict"]),
    (["normalize", "--examples"], ["feenctl -q normalize"]),
    (["placement", "--examples"], ["--uniform"]),
    (["hands", "--examples"], ["feenctl hands"]),
]


@pytest.mark.parametrize(("args", "keywords"), EXAMPLES_COMMANDS)
def test_examples(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


def test_examples_not_in_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["parse", "--help"])
    assert "--examples" in result.output
    assert "feenctl parse -" not in result.output


def test_command_without_examples_has_no_flag() -> None:
    cmd = FeenCommand("bare", callback=lambda: None)
    assert cmd.examples is None
    assert all("--examples" not in param.opts for param in cmd.params)


def test_group_subcommands_default_to_feen_command() -> None:
    group = FeenGroup("root", examples="feenctl root")

    @group.command(examples="feenctl root leaf")
    def leaf() -> None:
        click.echo("leaf")

    assert isinstance(group.commands["leaf"], FeenCommand)
    assert any("--examples" in param.opts for param in group.commands["leaf"].params)
