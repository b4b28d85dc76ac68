"""Pieces in hand — per-side reserve multisets with one canonical form.

Field grammar::

    hands   := section "/" section          exactly one separator
    section := entry*                       either side may be empty
    entry   := count? [+-]? LETTER "'"?
    count   := [2-9] | [1-9][0-9]+          "0" and "1" are rejected

The first section holds uppercase (first side) pieces, the second
lowercase (second side) pieces.

Canonical order within a side, after merging repeated pieces:

1. quantity, descending
2. base letter, ascending (case-folded)
3. uppercase before lowercase
4. prefix: ``-`` before ``+`` before none
5. suffix: none before ``'``

Lenient parsing merges and reorders.  Strict parsing raises
:class:`CanonicalOrderError` unless the input is already canonical.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from feenctl.domain.counts import MAX_HAND_COUNT, digits_end, to_count
from feenctl.domain.errors import (
    CanonicalOrderError,
    CountError,
    FeenError,
    FeenSyntaxError,
    PieceError,
)
from feenctl.domain.identity import DEFAULT_CODEC, PieceCodec, Side, split_token

SIDE_SEPARATOR = "/"

_PREFIX_RANK: dict[str, int] = {"-": 0, "+": 1, "": 2}
_SUFFIX_RANK: dict[str, int] = {"": 0, "'": 1}


@dataclass(frozen=True)
class HandEntry:
    """One tokenized entry; transient, merged away by accumulation."""

    identity: Any
    quantity: int
    token: str
    offset: int


def canonical_key(token: str, quantity: int) -> tuple[int, str, int, int, int]:
    """Sort key implementing the five-key canonical order."""
    parts = split_token(token)
    if parts is None:
        raise PieceError(f"piece token cannot be held in hand: {token!r}")
    prefix, letter, suffix = parts
    return (
        -quantity,
        letter.lower(),
        0 if letter.isupper() else 1,
        _PREFIX_RANK[prefix],
        _SUFFIX_RANK[suffix],
    )


def render_entry(token: str, quantity: int) -> str:
    return f"{quantity}{token}" if quantity > 1 else token


def tokenize_section(
    text: str,
    side: Side,
    *,
    codec: PieceCodec = DEFAULT_CODEC,
    max_count: int = MAX_HAND_COUNT,
    base_offset: int = 0,
) -> list[HandEntry]:
    """Split one side's section into entries, in source order.

    Offsets in errors and entries are relative to the whole field
    (*base_offset* is where this section starts).
    """
    entries: list[HandEntry] = []
    i = 0
    n = len(text)
    while i < n:
        start = i
        quantity = 1
        if "0" <= text[i] <= "9":
            end = digits_end(text, i)
            digits = text[i:end]
            if digits == "1":
                raise CountError(
                    "a count of 1 must be omitted", side=side.value, offset=base_offset + i
                )
            try:
                quantity = to_count(
                    digits, limit=max_count, what="piece count", offset=base_offset + i
                )
            except FeenError as exc:
                raise exc.with_context(side=side.value) from None
            i = end
        token_start = i
        if i < n and text[i] in "+-":
            i += 1
        if i >= n or not (text[i].isascii() and text[i].isalpha()):
            if i == start and i < n:
                message = f"unexpected character {text[i]!r}"
            else:
                message = "expected a piece letter"
            raise FeenSyntaxError(message, side=side.value, offset=base_offset + i)
        if Side.of_letter(text[i]) is not side:
            raise FeenSyntaxError(
                f"piece letter {text[i]!r} has the wrong case for the {side.value} side",
                side=side.value,
                offset=base_offset + i,
            )
        i += 1
        if i < n and text[i] == "'":
            i += 1
        token = text[token_start:i]
        try:
            identity = codec.parse(token)
        except PieceError as exc:
            raise exc.with_context(side=side.value, offset=base_offset + token_start) from None
        entries.append(HandEntry(identity, quantity, token, base_offset + start))
    return entries


@dataclass(frozen=True)
class Hands:
    """Reserve multisets for both sides, stored in canonical order.

    Each side is a tuple of ``(identity, quantity)`` pairs.  A mapping or
    any iterable of pairs is accepted at construction; repeated identities
    are merged.  Identities must be hashable.  A merged quantity above
    ``max_count`` raises :class:`CountError`, since it could not be dumped
    as parseable text.
    """

    first: tuple[tuple[Any, int], ...] = ()
    second: tuple[tuple[Any, int], ...] = ()
    codec: PieceCodec = field(default=DEFAULT_CODEC, compare=False, repr=False)
    max_count: int = field(default=MAX_HAND_COUNT, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "first", self._canonical_side(self.first, Side.FIRST))
        object.__setattr__(self, "second", self._canonical_side(self.second, Side.SECOND))

    def _canonical_side(
        self,
        pairs: Mapping[Any, int] | Iterable[tuple[Any, int]],
        side: Side,
    ) -> tuple[tuple[Any, int], ...]:
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        merged: dict[Any, int] = {}
        for identity, quantity in items:
            if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
                raise CountError(
                    f"hand quantity must be a positive integer, got {quantity!r}",
                    side=side.value,
                )
            merged[identity] = merged.get(identity, 0) + quantity

        keyed: list[tuple[tuple[int, str, int, int, int], Any, int]] = []
        for identity, quantity in merged.items():
            token = self.codec.render(identity)
            if quantity > self.max_count:
                raise CountError(
                    f"piece count exceeds maximum of {self.max_count}: {quantity} {token!r}",
                    side=side.value,
                )
            key = canonical_key(token, quantity)
            letter_side = Side.FIRST if key[2] == 0 else Side.SECOND
            if letter_side is not side:
                raise FeenSyntaxError(
                    f"piece {token!r} cannot be held by the {side.value} side",
                    side=side.value,
                )
            keyed.append((key, identity, quantity))
        keyed.sort(key=lambda item: item[0])
        return tuple((identity, quantity) for _, identity, quantity in keyed)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_counts(
        cls,
        first: Mapping[Any, int] | None = None,
        second: Mapping[Any, int] | None = None,
        *,
        codec: PieceCodec = DEFAULT_CODEC,
        max_count: int = MAX_HAND_COUNT,
    ) -> Hands:
        return cls(
            first=tuple((first or {}).items()),
            second=tuple((second or {}).items()),
            codec=codec,
            max_count=max_count,
        )

    @classmethod
    def parse(
        cls,
        text: str,
        *,
        codec: PieceCodec = DEFAULT_CODEC,
        strict: bool = False,
        max_count: int = MAX_HAND_COUNT,
    ) -> Hands:
        """Parse a pieces-in-hand field.

        Args:
            text: The field, e.g. ``"3P2B/p"`` or ``"/"``.
            codec: Piece identity codec.
            strict: Reject input that is not merged and canonically ordered.
            max_count: Largest accepted quantity.
        """
        separators = text.count(SIDE_SEPARATOR)
        if separators != 1:
            raise FeenSyntaxError(
                f"pieces-in-hand field needs exactly one {SIDE_SEPARATOR!r} separator, "
                f"found {separators}"
            )
        upper, lower = text.split(SIDE_SEPARATOR)
        sections = (
            (upper, Side.FIRST, 0),
            (lower, Side.SECOND, len(upper) + 1),
        )
        per_side: list[list[HandEntry]] = []
        for section, side, base in sections:
            entries = tokenize_section(
                section, side, codec=codec, max_count=max_count, base_offset=base
            )
            if strict:
                check_canonical(entries, side)
            per_side.append(entries)
        return cls(
            first=tuple((e.identity, e.quantity) for e in per_side[0]),
            second=tuple((e.identity, e.quantity) for e in per_side[1]),
            codec=codec,
            max_count=max_count,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def side(self, side: Side) -> tuple[tuple[Any, int], ...]:
        return self.first if side is Side.FIRST else self.second

    def counts(self, side: Side) -> dict[Any, int]:
        return dict(self.side(side))

    def quantity(self, identity: Any) -> int:
        """How many of *identity* are held (0 if none)."""
        for held, quantity in (*self.first, *self.second):
            if held == identity:
                return quantity
        return 0

    @property
    def is_empty(self) -> bool:
        return not self.first and not self.second

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def dump_side(self, side: Side) -> str:
        return "".join(
            render_entry(self.codec.render(identity), quantity)
            for identity, quantity in self.side(side)
        )

    def dump(self) -> str:
        """Canonical field text: ``upper + "/" + lower``."""
        return f"{self.dump_side(Side.FIRST)}{SIDE_SEPARATOR}{self.dump_side(Side.SECOND)}"

    def __str__(self) -> str:
        return self.dump()


def check_canonical(entries: list[HandEntry], side: Side) -> None:
    """Raise CanonicalOrderError unless *entries* are merged and ordered."""
    seen: set[Any] = set()
    for entry in entries:
        if entry.identity in seen:
            raise CanonicalOrderError(
                f"repeated piece {entry.token!r}; counts must be merged",
                side=side.value,
                offset=entry.offset,
            )
        seen.add(entry.identity)

    expected = sorted(entries, key=lambda e: canonical_key(e.token, e.quantity))
    if [e.token for e in expected] != [e.token for e in entries]:
        actual_text = "".join(render_entry(e.token, e.quantity) for e in entries)
        expected_text = "".join(render_entry(e.token, e.quantity) for e in expected)
        raise CanonicalOrderError(
            f"pieces in hand not in canonical order: got {actual_text!r}, "
            f"expected {expected_text!r}",
            side=side.value,
        )
