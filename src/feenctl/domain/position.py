"""Position — a complete FEEN record: placement, hands, style/turn.

A FEEN string is exactly three fields joined by single spaces::

    +rnbq+kbn+r/+p+p+p+p+p+p+p+p/8/8/8/8/+P+P+P+P+P+P+P+P/+RNBQ+KBN+R / C/c

Pure functions, no global state.  The piece codec is injected and shared by
the placement and hands components.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from feenctl.domain.counts import MAX_EMPTY_RUN, MAX_HAND_COUNT
from feenctl.domain.errors import FeenError, FeenSyntaxError
from feenctl.domain.hands import Hands
from feenctl.domain.identity import DEFAULT_CODEC, PieceCodec
from feenctl.domain.placement import Placement
from feenctl.domain.styles import StyleTurn

FIELD_SEPARATOR = " "
FIELD_COUNT = 3

_T = TypeVar("_T")


@dataclass(frozen=True)
class Position:
    """Immutable FEEN position."""

    placement: Placement
    hands: Hands
    styles: StyleTurn

    def dump(self) -> str:
        return FIELD_SEPARATOR.join(
            (self.placement.dump(), self.hands.dump(), self.styles.dump())
        )

    def __str__(self) -> str:
        return self.dump()


def split_fields(text: str) -> tuple[str, str, str]:
    """Split a FEEN string into its three fields.

    Raises:
        FeenSyntaxError: empty input or a field count other than three.
    """
    stripped = text.strip()
    if not stripped:
        raise FeenSyntaxError("empty FEEN input")
    fields = stripped.split(FIELD_SEPARATOR)
    if len(fields) != FIELD_COUNT:
        raise FeenSyntaxError(
            f"FEEN must have exactly {FIELD_COUNT} space-separated fields, got {len(fields)}"
        )
    return fields[0], fields[1], fields[2]


def parse(
    text: str,
    *,
    codec: PieceCodec = DEFAULT_CODEC,
    strict: bool = False,
    uniform: bool = False,
    max_hand_count: int = MAX_HAND_COUNT,
    max_empty_run: int = MAX_EMPTY_RUN,
) -> Position:
    """Parse a FEEN string into a :class:`Position`.

    Args:
        text: The FEEN string; surrounding whitespace is ignored.
        codec: Piece identity codec for board and hands.
        strict: Reject non-canonical pieces-in-hand input.
        uniform: Reject irregular board shapes.
        max_hand_count: Largest accepted reserve quantity.
        max_empty_run: Largest accepted empty-run count.
    """
    placement_text, hands_text, style_text = split_fields(text)
    return Position(
        placement=Placement.parse(
            placement_text, codec=codec, max_run=max_empty_run, uniform=uniform
        ),
        hands=Hands.parse(hands_text, codec=codec, strict=strict, max_count=max_hand_count),
        styles=StyleTurn.parse(style_text),
    )


def dump(position: Position | str) -> str:
    """Canonical FEEN string for a position (strings are parsed first)."""
    if isinstance(position, str):
        position = parse(position)
    if not isinstance(position, Position):
        raise TypeError(f"expected Position or FEEN string, got {type(position).__name__}")
    return position.dump()


def normalize(text: str, *, codec: PieceCodec = DEFAULT_CODEC) -> str:
    """Parse leniently and dump canonically."""
    return parse(text, codec=codec).dump()


def is_valid(text: str, *, codec: PieceCodec = DEFAULT_CODEC, strict: bool = False) -> bool:
    """True when *text* parses; every FEEN failure becomes False."""
    try:
        parse(text, codec=codec, strict=strict)
    except FeenError:
        return False
    return True


def build(
    *,
    piece_placement: Placement | str,
    pieces_in_hand: Hands | str,
    style_turn: StyleTurn | str,
    codec: PieceCodec = DEFAULT_CODEC,
) -> Position:
    """Assemble a position from fields given as strings or value objects."""
    placement = _coerce(piece_placement, Placement, lambda s: Placement.parse(s, codec=codec))
    hands = _coerce(pieces_in_hand, Hands, lambda s: Hands.parse(s, codec=codec))
    styles = _coerce(style_turn, StyleTurn, StyleTurn.parse)
    return Position(placement=placement, hands=hands, styles=styles)


def _coerce(value: _T | str, cls: type[_T], parse_field: Callable[[str], _T]) -> _T:
    if isinstance(value, cls):
        return value
    if isinstance(value, str):
        return parse_field(value)
    raise TypeError(f"expected {cls.__name__} or str, got {type(value).__name__}")
