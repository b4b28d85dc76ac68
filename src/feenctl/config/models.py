"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``feenctl.toml`` only holds
overrides.  An empty file (or no file) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from feenctl.domain.counts import MAX_EMPTY_RUN, MAX_HAND_COUNT


class ParserConfig(BaseModel):
    """[parser] section."""

    model_config = {"frozen": True}

    strict_hands: bool = False
    max_hand_count: int = Field(default=MAX_HAND_COUNT, ge=2)
    max_empty_run: int = Field(default=MAX_EMPTY_RUN, ge=1)
    require_uniform_shape: bool = False


class DisplayConfig(BaseModel):
    """[display] section."""

    model_config = {"frozen": True}

    empty_glyph: str = Field(default=".", min_length=1, max_length=1)
    show_hierarchy: bool = True


class FeenConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    parser: ParserConfig = Field(default_factory=ParserConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
