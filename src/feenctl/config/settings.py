"""FeenSettings — CLI flags, env vars, and TOML config in one frozen object.

Priority chain (highest to lowest):
  1. Init kwargs   — CLI flags passed by Click
  2. Env vars      — ``FEENCTL_*`` prefix, ``__`` for nesting
                     (``FEENCTL_PARSER__STRICT_HANDS=true``)
  3. TOML file     — ``feenctl.toml`` discovered via walk-up
  4. Code defaults — baked into :mod:`feenctl.config.models`
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from feenctl.config.discovery import find_config, load_config
from feenctl.config.models import DisplayConfig, ParserConfig

# TOML path for the settings object currently being constructed.
_pending_toml: ContextVar[Path | None] = ContextVar("_pending_toml", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a ``feenctl.toml`` file.

    Only keys present in the file are contributed, so env vars can override
    single nested values without masking the rest of a section.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            config = load_config(toml_path)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        self._data = config.model_dump(exclude_unset=True)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class FeenSettings(BaseSettings):
    """Unified settings for the feenctl CLI and services.

    Attributes:
        config_path: The TOML file that was loaded, if any.
        parser: Parsing limits and modes (``[parser]``).
        display: Human-output preferences (``[display]``).
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FEENCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    parser: ParserConfig = Field(default_factory=ParserConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Init kwargs, then env vars, then the TOML file."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _pending_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start_dir: Path | None = None,
        **cli_flags: Any,
    ) -> FeenSettings:
        """Build settings for a CLI invocation.

        An explicit *config_path* wins over walk-up discovery from
        *start_dir* (default: cwd).  CLI flags override everything else.
        """
        toml_path: Path | None
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(start_dir)

        token = _pending_toml.set(toml_path)
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _pending_toml.reset(token)
