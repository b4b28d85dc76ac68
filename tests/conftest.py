"""Shared pytest fixtures for feenctl tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from feenctl.config.settings import FeenSettings
from feenctl.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test from an empty directory with no FEENCTL_* variables.

    Keeps config discovery from picking up a ``feenctl.toml`` outside the
    test.  Afterwards, undoes what a CLI run leaves behind: telemetry
    enabled by ``--verbose`` and a log handler bound to the runner's stderr.
    """
    for key in list(os.environ):
        if key.startswith("FEENCTL_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    feen_level = logging.getLogger("feenctl").level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("feenctl").setLevel(feen_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings() -> FeenSettings:
    """Default settings with no TOML file in reach."""
    return FeenSettings.from_cli()
