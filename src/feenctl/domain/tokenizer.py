"""Cell tokenizer — one rank substring to an ordered list of cells, and back.

Grammar (single left-to-right pass, no backtracking)::

    rank    := ( count | bracket | bare )+
    count   := [1-9][0-9]*              N empty cells
    bracket := "[" ... "]"              nested brackets allowed; inner text
                                        goes to the piece codec
    bare    := [+-]? [A-Za-z] "'"?      whole token goes to the piece codec
"""

from __future__ import annotations

from collections.abc import Iterable

from feenctl.domain.cells import EMPTY, Cell, Empty, Occupied
from feenctl.domain.counts import MAX_EMPTY_RUN, digits_end, to_count
from feenctl.domain.errors import FeenError, FeenSyntaxError, PieceError
from feenctl.domain.identity import BARE_TOKEN_PATTERN, DEFAULT_CODEC, PieceCodec

_OPEN = "["
_CLOSE = "]"


def tokenize_rank(
    text: str,
    *,
    codec: PieceCodec = DEFAULT_CODEC,
    max_run: int = MAX_EMPTY_RUN,
    rank: int | None = None,
    base_offset: int = 0,
) -> tuple[Cell, ...]:
    """Tokenize one rank into cells.

    Args:
        text: The rank substring (no delimiters).
        codec: Piece identity codec used for every piece token.
        max_run: Largest accepted empty-run count.
        rank: Rank index, attached to any error raised.
        base_offset: Where the rank starts in the placement field.  Error
            offsets are relative to the whole field.

    Raises:
        FeenSyntaxError: unexpected character, dangling prefix, or
            unterminated bracket.
        CountError: run-length with a leading zero or above *max_run*.
        PieceError: the codec rejected a token.
    """
    if not text:
        raise FeenSyntaxError("empty rank", rank=rank)

    cells: list[Cell] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        at = base_offset + i
        if "0" <= ch <= "9":
            end = digits_end(text, i)
            try:
                count = to_count(text[i:end], limit=max_run, what="empty run", offset=at)
            except FeenError as exc:
                raise exc.with_context(rank=rank) from None
            cells.extend([EMPTY] * count)
            i = end
        elif ch == _OPEN:
            end = _bracket_end(text, i, rank, base_offset)
            cells.append(_occupied(text[i + 1 : end], codec, rank, len(cells), at))
            i = end + 1
        elif ch in "+-" or ch.isascii() and ch.isalpha():
            end = _bare_end(text, i, rank, base_offset)
            cells.append(_occupied(text[i:end], codec, rank, len(cells), at))
            i = end
        else:
            raise FeenSyntaxError(f"unexpected character {ch!r}", rank=rank, offset=at)
    return tuple(cells)


def render_rank(cells: Iterable[Cell], *, codec: PieceCodec = DEFAULT_CODEC) -> str:
    """Render cells back to rank text, run-length compressing empties.

    Tokens the codec renders outside the bare grammar are bracketed so the
    output stays parseable.
    """
    parts: list[str] = []
    run = 0
    for cell in cells:
        if isinstance(cell, Empty):
            run += 1
            continue
        if run:
            parts.append(str(run))
            run = 0
        parts.append(render_token(cell.identity, codec))
    if run:
        parts.append(str(run))
    return "".join(parts)


def render_token(identity: object, codec: PieceCodec) -> str:
    token = codec.render(identity)
    if BARE_TOKEN_PATTERN.fullmatch(token):
        return token
    return f"{_OPEN}{token}{_CLOSE}"


def _bracket_end(text: str, start: int, rank: int | None, base_offset: int) -> int:
    """Index of the ``]`` matching the ``[`` at *start*."""
    depth = 0
    for i in range(start, len(text)):
        if text[i] == _OPEN:
            depth += 1
        elif text[i] == _CLOSE:
            depth -= 1
            if depth == 0:
                return i
    raise FeenSyntaxError("unterminated bracket", rank=rank, offset=base_offset + start)


def _bare_end(text: str, start: int, rank: int | None, base_offset: int) -> int:
    """Index one past a ``prefix? letter suffix?`` token starting at *start*."""
    i = start
    if text[i] in "+-":
        i += 1
    if i >= len(text) or not (text[i].isascii() and text[i].isalpha()):
        raise FeenSyntaxError(
            "expected a letter after piece prefix", rank=rank, offset=base_offset + start
        )
    i += 1
    if i < len(text) and text[i] == "'":
        i += 1
    return i


def _occupied(
    token: str, codec: PieceCodec, rank: int | None, column: int, offset: int
) -> Occupied:
    try:
        return Occupied(codec.parse(token))
    except PieceError as exc:
        raise exc.with_context(rank=rank, column=column, offset=offset) from None
