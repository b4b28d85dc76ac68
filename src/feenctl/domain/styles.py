"""Style/turn field — each side's style letter and the side to move.

Field grammar: ``X/y`` — two ASCII letters separated by ``/``.  Exactly one
letter is uppercase; it marks the side to move.  The first letter belongs
to the first side, the second letter to the second side.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from feenctl.domain.errors import FeenSyntaxError, StyleError
from feenctl.domain.identity import Side

_STYLE_TURN_PATTERN = re.compile(r"([A-Za-z])/([A-Za-z])")


@dataclass(frozen=True)
class StyleTurn:
    """Style letters (stored uppercase) for both sides plus the active side."""

    first_style: str
    second_style: str
    active: Side = Side.FIRST

    def __post_init__(self) -> None:
        for name in ("first_style", "second_style"):
            value = getattr(self, name)
            is_letter = isinstance(value, str) and len(value) == 1 and value.isalpha()
            if not (is_letter and value.isascii()):
                raise StyleError(f"{name} must be a single ASCII letter, got {value!r}")
            object.__setattr__(self, name, value.upper())
        object.__setattr__(self, "active", Side(self.active))

    @classmethod
    def parse(cls, text: str) -> StyleTurn:
        m = _STYLE_TURN_PATTERN.fullmatch(text)
        if m is None:
            raise FeenSyntaxError(f"style/turn field must look like 'C/c', got {text!r}")
        first, second = m.group(1), m.group(2)
        if first.isupper() == second.isupper():
            raise StyleError("exactly one style letter must be uppercase to mark the side to move")
        active = Side.FIRST if first.isupper() else Side.SECOND
        return cls(first_style=first, second_style=second, active=active)

    def dump(self) -> str:
        if self.active is Side.FIRST:
            return f"{self.first_style}/{self.second_style.lower()}"
        return f"{self.first_style.lower()}/{self.second_style}"

    def __str__(self) -> str:
        return self.dump()
