"""Piece identity codec — the narrow seam between FEEN and piece semantics.

FEEN never interprets a piece token.  It hands the token text to a
:class:`PieceCodec` and stores whatever opaque identity comes back.
Dumping asks the same codec to render the identity again.

Contract: ``codec.render(codec.parse(s)) == s`` for every token already in
canonical textual form.  Codecs must be stateless and reentrant.

:class:`EpinCodec` is the default implementation for the token grammar
``prefix? letter suffix?`` (prefix ``+``/``-``, suffix ``'``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable

from feenctl.domain.errors import PieceError

# prefix? letter suffix?
BARE_TOKEN_PATTERN = re.compile(r"([-+]?)([A-Za-z])(')?")

PREFIXES: tuple[str, ...] = ("-", "+")
SUFFIX = "'"


class Side(StrEnum):
    """The two sides of a position.  Letter case encodes side membership."""

    FIRST = "first"
    SECOND = "second"

    @classmethod
    def of_letter(cls, letter: str) -> Side:
        return cls.FIRST if letter.isupper() else cls.SECOND


@runtime_checkable
class PieceCodec(Protocol):
    """Converts between piece token text and opaque identity values."""

    def parse(self, token: str) -> Any:
        """Parse *token* into an identity; raise PieceError if malformed."""
        ...

    def render(self, identity: Any) -> str:
        """Render *identity* back into its canonical token text."""
        ...


@dataclass(frozen=True)
class PieceIdentity:
    """A piece kind as described by the bare token grammar."""

    letter: str
    prefix: str = ""
    suffix: str = ""

    @property
    def side(self) -> Side:
        return Side.of_letter(self.letter)

    @property
    def token(self) -> str:
        return f"{self.prefix}{self.letter}{self.suffix}"

    def __str__(self) -> str:
        return self.token


class EpinCodec:
    """Default codec: ``[+-]?[A-Za-z]'?`` tokens to :class:`PieceIdentity`."""

    def parse(self, token: str) -> PieceIdentity:
        m = BARE_TOKEN_PATTERN.fullmatch(token)
        if m is None:
            raise PieceError(f"invalid piece token: {token!r}")
        prefix, letter, suffix = m.group(1), m.group(2), m.group(3) or ""
        return PieceIdentity(letter=letter, prefix=prefix, suffix=suffix)

    def render(self, identity: Any) -> str:
        if not isinstance(identity, PieceIdentity):
            raise PieceError(f"cannot render {type(identity).__name__} as a piece token")
        token = identity.token
        if BARE_TOKEN_PATTERN.fullmatch(token) is None:
            raise PieceError(f"piece identity does not form a valid token: {token!r}")
        return token

    def __repr__(self) -> str:
        return "EpinCodec()"


DEFAULT_CODEC: PieceCodec = EpinCodec()


def split_token(token: str) -> tuple[str, str, str] | None:
    """Split a bare token into ``(prefix, letter, suffix)``; None if not bare."""
    m = BARE_TOKEN_PATTERN.fullmatch(token)
    if m is None:
        return None
    return m.group(1), m.group(2), m.group(3) or ""
