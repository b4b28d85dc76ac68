"""Board cells: either empty or occupied by a piece identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Empty:
    """An unoccupied cell.  Use the module-level :data:`EMPTY` instance."""

    def __repr__(self) -> str:
        return "EMPTY"


@dataclass(frozen=True)
class Occupied:
    """A cell holding one piece identity (opaque, codec-owned)."""

    identity: Any


Cell = Empty | Occupied

EMPTY = Empty()


def is_empty(cell: Cell) -> bool:
    return isinstance(cell, Empty)
