"""CodecService — parse, validate, normalize, and inspect FEEN text.

Five read-only surfaces over the pure domain layer:
- inspect_position: full position breakdown (op ``parse``)
- validate: accept/reject with a warning for non-canonical input
- normalize: canonical re-serialization
- inspect_placement: structure of a lone placement field
- inspect_hands: per-side reserves of a lone pieces-in-hand field

Limits and modes come from ``settings.parser`` unless overridden per call.
"""

from __future__ import annotations

import logging
from typing import Any

from feenctl.domain import position as feen
from feenctl.domain.cells import Cell, Occupied
from feenctl.domain.errors import FeenError
from feenctl.domain.hands import Hands
from feenctl.domain.identity import PieceCodec, Side
from feenctl.domain.placement import Placement
from feenctl.domain.styles import StyleTurn
from feenctl.domain.tokenizer import render_rank, render_token
from feenctl.services.base import BaseService
from feenctl.services.result import ServiceResult
from feenctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class CodecService(BaseService):
    """Wraps the FEEN codec in ServiceResult-returning operations."""

    # ------------------------------------------------------------------
    # parse: whole position
    # ------------------------------------------------------------------

    @traced
    def inspect_position(self, text: str, *, strict: bool | None = None) -> ServiceResult:
        """Parse a FEEN string and describe each of its three fields."""
        try:
            position = self._parse_position(text, strict=strict)
        except FeenError as exc:
            logger.debug("parse failed: %s", exc)
            return ServiceResult.failure("parse", exc)

        with trace_span("dump") as span:
            canonical = position.dump()
            if span:
                span.annotate("length", len(canonical))

        return ServiceResult(
            ok=True,
            op="parse",
            data={
                "feen": canonical,
                "canonical": canonical == text.strip(),
                "placement": _placement_data(position.placement),
                "hands": _hands_data(position.hands),
                "styles": _styles_data(position.styles),
            },
        )

    # ------------------------------------------------------------------
    # validate
    # ------------------------------------------------------------------

    @traced
    def validate(self, text: str, *, strict: bool | None = None) -> ServiceResult:
        """Check that *text* parses.

        Lenient mode accepts unmerged or unordered hands and reports the
        canonical form as a warning; strict mode rejects them outright.
        """
        try:
            position = self._parse_position(text, strict=strict)
        except FeenError as exc:
            return ServiceResult.failure("validate", exc)

        canonical = position.dump()
        warnings: list[str] = []
        if canonical != text.strip():
            warnings.append(f"input is not canonical; canonical form is {canonical!r}")
        return ServiceResult(
            ok=True,
            op="validate",
            data={"valid": True, "feen": canonical, "canonical": not warnings},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # normalize
    # ------------------------------------------------------------------

    @traced
    def normalize(self, text: str) -> ServiceResult:
        """Parse leniently and dump canonically."""
        try:
            position = self._parse_position(text, strict=False)
        except FeenError as exc:
            return ServiceResult.failure("normalize", exc)

        canonical = position.dump()
        source = text.strip()
        return ServiceResult(
            ok=True,
            op="normalize",
            data={"input": source, "feen": canonical, "changed": canonical != source},
        )

    # ------------------------------------------------------------------
    # placement / hands: single fields
    # ------------------------------------------------------------------

    @traced
    def inspect_placement(self, text: str, *, uniform: bool | None = None) -> ServiceResult:
        """Describe a piece placement field on its own."""
        cfg = self.parser_config
        if uniform is None:
            uniform = cfg.require_uniform_shape
        try:
            with trace_span("placement") as span:
                placement = Placement.parse(
                    text.strip(), codec=self._codec, max_run=cfg.max_empty_run, uniform=uniform
                )
                if span:
                    span.annotate("dimension", placement.dimension)
                    span.annotate("ranks", len(placement.ranks))
        except FeenError as exc:
            return ServiceResult.failure("placement", exc)

        return ServiceResult(ok=True, op="placement", data=_placement_data(placement))

    @traced
    def inspect_hands(self, text: str, *, strict: bool | None = None) -> ServiceResult:
        """Describe a pieces-in-hand field on its own."""
        strict = self._strict(strict)
        try:
            with trace_span("hands") as span:
                hands = Hands.parse(
                    text.strip(),
                    codec=self._codec,
                    strict=strict,
                    max_count=self.parser_config.max_hand_count,
                )
                if span:
                    span.annotate("strict", strict)
        except FeenError as exc:
            return ServiceResult.failure("hands", exc)

        data = _hands_data(hands)
        data["canonical"] = data["field"] == text.strip()
        return ServiceResult(ok=True, op="hands", data=data)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _parse_position(self, text: str, *, strict: bool | None) -> feen.Position:
        cfg = self.parser_config
        strict = self._strict(strict)
        with trace_span("parse") as span:
            position = feen.parse(
                text,
                codec=self._codec,
                strict=strict,
                uniform=cfg.require_uniform_shape,
                max_hand_count=cfg.max_hand_count,
                max_empty_run=cfg.max_empty_run,
            )
            if span:
                span.annotate("dimension", position.placement.dimension)
                span.annotate("ranks", len(position.placement.ranks))
        return position


def _placement_data(placement: Placement) -> dict[str, Any]:
    regular = placement.is_regular
    return {
        "field": placement.dump(),
        "dimension": placement.dimension,
        "separators": list(placement.separators),
        "rank_widths": list(placement.rank_widths),
        "cell_count": placement.cell_count,
        "piece_count": sum(1 for _ in placement.pieces()),
        "regular": regular,
        "shape": list(placement.shape()) if regular else None,
        "layout": placement.layout(),
        "ranks": [render_rank(rank, codec=placement.codec) for rank in placement.ranks],
        "board": [_board_row(rank, placement.codec) for rank in placement.ranks],
    }


def _hands_data(hands: Hands) -> dict[str, Any]:
    data: dict[str, Any] = {"field": hands.dump()}
    for side in Side:
        data[side.value] = [
            {"piece": hands.codec.render(identity), "count": quantity}
            for identity, quantity in hands.side(side)
        ]
        data[f"{side.value}_total"] = sum(quantity for _, quantity in hands.side(side))
    return data


def _styles_data(styles: StyleTurn) -> dict[str, Any]:
    return {
        "field": styles.dump(),
        "first_style": styles.first_style,
        "second_style": styles.second_style,
        "active": styles.active.value,
    }


def _board_row(rank: tuple[Cell, ...], codec: PieceCodec) -> list[str | None]:
    """One rank as a list of cell tokens, ``None`` for empty squares."""
    return [
        render_token(cell.identity, codec) if isinstance(cell, Occupied) else None
        for cell in rank
    ]
