"""Placement — the immutable board of a FEEN position.

A placement is a flat sequence of ranks plus the separator depth between
each adjacent pair.  That flat pair is the only serialization source of
truth; irregular rank widths and irregular section sizes are first-class
and round-trip exactly.

The N-dimensional view (:meth:`Placement.hierarchy`) is a derived,
read-only projection: ranks are grouped at the deepest separators first,
then at each shallower depth, giving a nested structure whose depth equals
:attr:`Placement.dimension`.

Uniform shape is *not* required.  :meth:`Placement.shape` is an opt-in
validator layered on top for callers that need a regular grid.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from feenctl.domain.cells import Cell, Empty, Occupied
from feenctl.domain.counts import MAX_EMPTY_RUN
from feenctl.domain.errors import BoundsError, CountError, FeenSyntaxError, ShapeError
from feenctl.domain.identity import DEFAULT_CODEC, PieceCodec
from feenctl.domain.scanner import DELIMITER, dimension_of, scan_separators
from feenctl.domain.tokenizer import render_rank, tokenize_rank

Rank = tuple[Cell, ...]


@dataclass(frozen=True)
class Placement:
    """Ranks, separator depths, and the codec used to render pieces.

    The codec is excluded from equality: two placements holding the same
    cells with the same separators are equal whatever codec produced them.
    ``max_run`` bounds consecutive empty cells so that :meth:`dump` never
    writes a run-length :meth:`parse` would reject.
    """

    ranks: tuple[Rank, ...]
    separators: tuple[int, ...] = ()
    codec: PieceCodec = field(default=DEFAULT_CODEC, compare=False, repr=False)
    max_run: int = field(default=MAX_EMPTY_RUN, compare=False, repr=False)

    def __post_init__(self) -> None:
        ranks = tuple(tuple(rank) for rank in self.ranks)
        separators = tuple(self.separators)
        _assemble(ranks, separators, self.max_run)
        object.__setattr__(self, "ranks", ranks)
        object.__setattr__(self, "separators", separators)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(
        cls,
        text: str,
        *,
        codec: PieceCodec = DEFAULT_CODEC,
        max_run: int = MAX_EMPTY_RUN,
        uniform: bool = False,
    ) -> Placement:
        """Parse a piece placement field.

        Args:
            text: The placement field (no surrounding whitespace).
            codec: Piece identity codec for every piece token.
            max_run: Largest accepted empty-run count.
            uniform: Additionally require a regular shape (raises ShapeError).
        """
        scan = scan_separators(text)
        ranks: list[Rank] = []
        start = 0
        for idx, rank_text in enumerate(scan.ranks):
            ranks.append(
                tokenize_rank(
                    rank_text, codec=codec, max_run=max_run, rank=idx, base_offset=start
                )
            )
            start += len(rank_text)
            if idx < len(scan.separators):
                start += scan.separators[idx]
        placement = cls(
            ranks=tuple(ranks), separators=scan.separators, codec=codec, max_run=max_run
        )
        if uniform:
            placement.shape()
        return placement

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def dimension(self) -> int:
        return dimension_of(self.separators)

    @property
    def rank_widths(self) -> tuple[int, ...]:
        return tuple(len(rank) for rank in self.ranks)

    @property
    def cell_count(self) -> int:
        return sum(self.rank_widths)

    def pieces(self) -> Iterator[tuple[int, int, Any]]:
        """Yield ``(rank_index, column_index, identity)`` for occupied cells."""
        for r, rank in enumerate(self.ranks):
            for c, cell in enumerate(rank):
                if isinstance(cell, Occupied):
                    yield r, c, cell.identity

    def hierarchy(self) -> Any:
        """Nested tuples of depth :attr:`dimension`.

        A 1-D placement yields its single rank (a tuple of cells); a 2-D one
        a tuple of ranks; a 3-D one a tuple of sections of ranks; and so on.
        Sections may differ in size.
        """
        return _nest(self.ranks, self.separators, self.dimension)

    def layout(self) -> Any:
        """Like :meth:`hierarchy` with each rank replaced by its width.

        ``"8/8"`` gives ``(8, 8)``; ``"3/3//3"`` gives ``((3, 3), (3,))``.
        """
        return _nest(self.rank_widths, self.separators, self.dimension)

    def at(self, *coords: int) -> Cell:
        """Return the cell at N-dimensional *coords*, outermost first.

        Raises:
            IndexError: wrong number of coordinates or a coordinate outside
                the (possibly irregular) structure.
        """
        if len(coords) != self.dimension:
            raise IndexError(f"expected {self.dimension} coordinates, got {len(coords)}")
        node = self.hierarchy()
        for coord in coords:
            if coord < 0 or coord >= len(node):
                raise IndexError(f"coordinate {coord} out of range for {coords}")
            node = node[coord]
        return node

    @property
    def is_regular(self) -> bool:
        try:
            self.shape()
        except ShapeError:
            return False
        return True

    def shape(self) -> tuple[int, ...]:
        """Sizes per dimension, outermost first, for a uniform placement.

        Raises:
            ShapeError: sibling groups at some level differ in size.
        """
        sizes: list[int] = []
        level: list[Any] = [self.hierarchy()]
        for depth in range(self.dimension):
            lengths = {len(node) for node in level}
            if len(lengths) != 1:
                raise ShapeError(
                    f"inconsistent size at dimension {depth + 1}: {sorted(lengths)}",
                )
            sizes.append(lengths.pop())
            if depth + 1 < self.dimension:
                level = [child for node in level for child in node]
        return tuple(sizes)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def dump(self) -> str:
        """Regenerate the placement field; ``parse(dump(p)) == p``."""
        parts = [render_rank(self.ranks[0], codec=self.codec)]
        for depth, rank in zip(self.separators, self.ranks[1:], strict=True):
            parts.append(DELIMITER * depth)
            parts.append(render_rank(rank, codec=self.codec))
        return "".join(parts)

    def __str__(self) -> str:
        return self.dump()


def _assemble(ranks: tuple[Rank, ...], separators: tuple[int, ...], max_run: int) -> None:
    """Validate the flat (ranks, separators) pair."""
    if not ranks:
        raise FeenSyntaxError("placement must contain at least one rank")
    if len(separators) != len(ranks) - 1:
        raise BoundsError(
            f"expected {len(ranks) - 1} separators for {len(ranks)} ranks, got {len(separators)}"
        )
    for idx, depth in enumerate(separators):
        if not isinstance(depth, int) or isinstance(depth, bool) or depth < 1:
            raise FeenSyntaxError(
                f"separator depth must be a positive integer, got {depth!r}", rank=idx + 1
            )
    for idx, rank in enumerate(ranks):
        if not rank:
            raise FeenSyntaxError("empty rank", rank=idx)
        run = 0
        for col, cell in enumerate(rank):
            if not isinstance(cell, (Empty, Occupied)):
                raise TypeError(
                    f"rank {idx} column {col}: expected a Cell, got {type(cell).__name__}"
                )
            run = run + 1 if isinstance(cell, Empty) else 0
            if run > max_run:
                raise CountError(
                    f"empty run exceeds maximum of {max_run}",
                    rank=idx,
                    column=col - run + 1,
                )


def _nest(items: tuple[Any, ...], separators: tuple[int, ...], dimension: int) -> Any:
    """Group *items* bottom-up: depth-1 boundaries first, then depth 2, ..."""
    level: list[Any] = list(items)
    boundaries = list(separators)
    for depth in range(1, dimension):
        grouped: list[Any] = []
        kept: list[int] = []
        current: list[Any] = [level[0]]
        for item, boundary in zip(level[1:], boundaries, strict=True):
            if boundary == depth:
                current.append(item)
            else:
                grouped.append(tuple(current))
                kept.append(boundary)
                current = [item]
        grouped.append(tuple(current))
        level, boundaries = grouped, kept
    return level[0]
