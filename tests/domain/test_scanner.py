"""Tests for the separator scanner."""

import pytest

from feenctl.domain.errors import FeenSyntaxError
from feenctl.domain.scanner import dimension_of, scan_separators


class TestScanSeparators:
    def test_single_rank_is_one_dimensional(self) -> None:
        scan = scan_separators("rnbqkbnr")
        assert scan.ranks == ("rnbqkbnr",)
        assert scan.separators == ()
        assert scan.dimension == 1

    def test_single_slashes_are_depth_one(self) -> None:
        scan = scan_separators("3/3")
        assert scan.ranks == ("3", "3")
        assert scan.separators == (1,)
        assert scan.dimension == 2

    def test_runs_of_slashes_form_one_separator(self) -> None:
        scan = scan_separators("8//8/8")
        assert scan.ranks == ("8", "8", "8")
        assert scan.separators == (2, 1)
        assert scan.dimension == 3

    def test_dimension_is_deepest_separator_plus_one(self) -> None:
        scan = scan_separators("r/n//p/q///k/b//R/Q")
        assert scan.separators == (1, 2, 1, 3, 1, 2, 1)
        assert scan.dimension == 4

    def test_empty_field(self) -> None:
        with pytest.raises(FeenSyntaxError):
            scan_separators("")

    @pytest.mark.parametrize(
        ("text", "rank"),
        [("/8", 0), ("8/", 1), ("8//", 1), ("//8", 0)],
    )
    def test_leading_or_trailing_separator_is_empty_rank(self, text: str, rank: int) -> None:
        with pytest.raises(FeenSyntaxError, match="empty rank") as exc_info:
            scan_separators(text)
        assert exc_info.value.rank == rank

    def test_empty_rank_offset(self) -> None:
        with pytest.raises(FeenSyntaxError) as exc_info:
            scan_separators("8/")
        assert exc_info.value.offset == 2


class TestDimensionOf:
    def test_no_separators(self) -> None:
        assert dimension_of(()) == 1

    def test_mixed_depths(self) -> None:
        assert dimension_of([1, 3, 2]) == 4
