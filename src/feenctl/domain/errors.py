"""FEEN error taxonomy.

Every failure raised by the domain layer is a :class:`FeenError`.  Each
subclass carries a stable ``code`` used by the service layer when it turns
an exception into a ``ServiceError``.

Positional context is attached wherever it can be determined:

- ``rank``: zero-based rank index in the placement field.
- ``column``: zero-based cell index within that rank.
- ``offset``: zero-based character offset within the field being parsed
  (the whole placement field, or the whole pieces-in-hand field).
- ``side``: ``"first"`` or ``"second"`` for pieces-in-hand failures.
"""

from __future__ import annotations

import copy
from typing import Any, ClassVar

_CONTEXT_KEYS: tuple[str, ...] = ("rank", "column", "offset", "side")


class FeenError(Exception):
    """Base class for all FEEN parsing, dumping, and validation errors."""

    code: ClassVar[str] = "FEEN_ERROR"

    def __init__(
        self,
        message: str,
        *,
        rank: int | None = None,
        column: int | None = None,
        offset: int | None = None,
        side: str | None = None,
    ) -> None:
        self.message = message
        self.rank = rank
        self.column = column
        self.offset = offset
        self.side = side
        super().__init__(message)

    def context(self) -> dict[str, Any]:
        """Positional context as a dict, omitting unknown positions."""
        return {
            key: getattr(self, key) for key in _CONTEXT_KEYS if getattr(self, key) is not None
        }

    def with_context(self, **context: Any) -> FeenError:
        """Return a copy of this error with additional positional context.

        Context already present on the error is kept; only missing keys are
        filled in, so the innermost (most precise) location wins.
        """
        clone = copy.copy(self)
        for key, value in context.items():
            if key not in _CONTEXT_KEYS:
                raise TypeError(f"unknown error context key: {key!r}")
            if getattr(clone, key) is None:
                setattr(clone, key, value)
        return clone

    def __str__(self) -> str:
        where = ", ".join(f"{k}={v}" for k, v in self.context().items())
        return f"{self.message} ({where})" if where else self.message


class FeenSyntaxError(FeenError):
    """Structural grammar violation (unexpected character, empty rank, ...)."""

    code = "SYNTAX"


class CanonicalOrderError(FeenSyntaxError):
    """Strict-mode rejection of input that is not already in canonical form."""

    code = "NON_CANONICAL"


class CountError(FeenError):
    """Invalid run-length or reserve quantity."""

    code = "COUNT"


class PieceError(FeenError):
    """Failure delegated from the piece identity codec."""

    code = "PIECE"


class StyleError(FeenError):
    """Invalid style/turn field content."""

    code = "STYLE"


class BoundsError(FeenError):
    """Internal structural invariant violated (e.g. separator count mismatch)."""

    code = "BOUNDS"


class ShapeError(FeenError):
    """Placement is irregular where a uniform shape was requested."""

    code = "SHAPE"
