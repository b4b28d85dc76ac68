"""Decimal count scanning shared by rank run-lengths and reserve quantities.

Counts come from untrusted input and may be arbitrarily long digit runs, so
magnitude is checked on digit length before any integer conversion.
"""

from __future__ import annotations

from feenctl.domain.errors import CountError

MAX_HAND_COUNT = 999
MAX_EMPTY_RUN = 4096


def digits_end(text: str, start: int) -> int:
    """Index one past the maximal run of ASCII digits starting at *start*."""
    i = start
    n = len(text)
    while i < n and "0" <= text[i] <= "9":
        i += 1
    return i


def to_count(digits: str, *, limit: int, what: str, offset: int) -> int:
    """Convert a digit run to an int, rejecting leading zeros and overflow."""
    if digits[0] == "0":
        raise CountError(f"{what} must not have a leading zero: {digits!r}", offset=offset)
    if len(digits) > len(str(limit)) or int(digits) > limit:
        raise CountError(f"{what} exceeds maximum of {limit}: {digits!r}", offset=offset)
    return int(digits)
