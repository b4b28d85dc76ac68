"""Tests for board cells."""

from feenctl.domain.cells import EMPTY, Empty, Occupied, is_empty
from feenctl.domain.identity import PieceIdentity


class TestCells:
    def test_empty_singleton_equality(self) -> None:
        assert Empty() == EMPTY
        assert repr(EMPTY) == "EMPTY"

    def test_is_empty(self) -> None:
        assert is_empty(EMPTY)
        assert not is_empty(Occupied(PieceIdentity(letter="K")))

    def test_occupied_compares_by_identity_value(self) -> None:
        assert Occupied(PieceIdentity("K")) == Occupied(PieceIdentity("K"))
        assert Occupied(PieceIdentity("K")) != Occupied(PieceIdentity("k"))
