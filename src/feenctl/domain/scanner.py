"""Separator scanner — split a placement field into ranks and separator depths.

A maximal run of ``k`` consecutive delimiters is one separator of depth
``k``.  The text between separators is one rank.  Dimension is one more
than the deepest separator (1 when there is none).

    >>> scan_separators("8//8/8")
    ScanResult(ranks=('8', '8', '8'), separators=(2, 1), dimension=3)
"""

from __future__ import annotations

from typing import NamedTuple

from feenctl.domain.errors import FeenSyntaxError

DELIMITER = "/"


class ScanResult(NamedTuple):
    """Ranks in source order plus the separator depth between each pair."""

    ranks: tuple[str, ...]
    separators: tuple[int, ...]
    dimension: int


def dimension_of(separators: tuple[int, ...] | list[int]) -> int:
    """Dimension implied by a separator sequence."""
    return 1 + max(separators, default=0)


def scan_separators(text: str) -> ScanResult:
    """Scan *text* left to right in a single pass.

    Raises:
        FeenSyntaxError: if the field is empty or any rank between
            separators is empty (leading, trailing, or between two runs).
    """
    if not text:
        raise FeenSyntaxError("piece placement field is empty")

    if DELIMITER not in text:
        return ScanResult(ranks=(text,), separators=(), dimension=1)

    ranks: list[str] = []
    separators: list[int] = []
    start = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] != DELIMITER:
            i += 1
            continue
        run_start = i
        while i < n and text[i] == DELIMITER:
            i += 1
        _append_rank(ranks, text, start, run_start)
        separators.append(i - run_start)
        start = i
    _append_rank(ranks, text, start, n)

    return ScanResult(
        ranks=tuple(ranks),
        separators=tuple(separators),
        dimension=dimension_of(separators),
    )


def _append_rank(ranks: list[str], text: str, start: int, end: int) -> None:
    if start == end:
        raise FeenSyntaxError("empty rank", rank=len(ranks), offset=start)
    ranks.append(text[start:end])
