"""Config file discovery and loading.

``feenctl.toml`` is found by walking up from the working directory, the
way git finds ``.git/``.  ``FEENCTL_CONFIG`` pins an explicit file.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from feenctl.config.models import FeenConfig

CONFIG_FILENAME = "feenctl.toml"
CONFIG_ENV_VAR = "FEENCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``feenctl.toml`` at or above *start* (default: cwd).

    When ``FEENCTL_CONFIG`` is set, only that path is considered.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> FeenConfig:
    """Load and validate a config file; defaults when none is found."""
    if path is None:
        path = find_config(cwd)
    if path is None:
        return FeenConfig()
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    return FeenConfig.model_validate(data)
