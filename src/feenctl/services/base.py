"""BaseService — shared construction for feenctl services.

Every service is built from a frozen :class:`FeenSettings` and an optional
piece codec.  Parser limits and modes come from ``settings.parser`` so the
CLI, the TOML file, and environment variables all steer the same knobs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from feenctl.domain.identity import DEFAULT_CODEC, PieceCodec

if TYPE_CHECKING:
    from feenctl.config.models import ParserConfig
    from feenctl.config.settings import FeenSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service classes.

    Usage::

        class CodecService(BaseService):
            def normalize(self, text: str) -> ServiceResult:
                ...
    """

    def __init__(self, settings: FeenSettings, codec: PieceCodec | None = None) -> None:
        self._settings = settings
        self._codec = codec or DEFAULT_CODEC

    @property
    def parser_config(self) -> ParserConfig:
        return self._settings.parser

    def _strict(self, override: bool | None) -> bool:
        """Resolve strict-hands mode: explicit argument wins over config."""
        strict = self.parser_config.strict_hands if override is None else override
        logger.debug("strict hands mode: %s", strict)
        return strict
