"""Tests for ``feenctl validate``."""

from pathlib import Path

from click.testing import CliRunner

from feenctl.cli import cli


class TestValidateCommand:
    def test_valid(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["validate", "8/8 / C/c"])
        assert result.exit_code == 0
        assert "canonical: yes" in result.stdout
        assert result.stderr == ""

    def test_non_canonical_warns_on_stderr(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "validate", "8 2B3P/ C/c"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "8 3P2B/ C/c"
        assert "WARNING" in result.stderr

    def test_strict_rejects(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["validate", "--strict", "8 2B3P/ C/c"])
        assert result.exit_code == 1
        assert "ERROR" in result.stderr
        assert "NON_CANONICAL" in result.stderr

    def test_lenient_overrides_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "feenctl.toml").write_text("[parser]\nstrict_hands = true\n")
        assert cli_runner.invoke(cli, ["validate", "8 2B3P/ C/c"]).exit_code == 1
        result = cli_runner.invoke(cli, ["validate", "--lenient", "8 2B3P/ C/c"])
        assert result.exit_code == 0

    def test_invalid(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["validate", "8 / C/C"])
        assert result.exit_code == 1
        assert "STYLE" in result.stderr
