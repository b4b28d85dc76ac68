"""Tests for rank tokenizing and rendering."""

import pytest

from feenctl.domain.cells import EMPTY, Occupied
from feenctl.domain.errors import CountError, FeenSyntaxError, PieceError
from feenctl.domain.identity import PieceIdentity
from feenctl.domain.tokenizer import render_rank, render_token, tokenize_rank


def piece(token: str) -> Occupied:
    prefix = token[0] if token[0] in "+-" else ""
    body = token[len(prefix) :]
    return Occupied(PieceIdentity(letter=body[0], prefix=prefix, suffix=body[1:]))


class TestTokenizeRank:
    def test_run_length_between_pieces(self) -> None:
        cells = tokenize_rank("r10n")
        assert len(cells) == 12
        assert cells[0] == piece("r")
        assert cells[1:11] == (EMPTY,) * 10
        assert cells[11] == piece("n")

    def test_all_empty(self) -> None:
        assert tokenize_rank("8") == (EMPTY,) * 8

    def test_prefixed_and_suffixed_tokens(self) -> None:
        cells = tokenize_rank("+K-p'B'")
        assert cells == (piece("+K"), piece("-p'"), piece("B'"))

    def test_bracketed_token_goes_to_codec(self) -> None:
        assert tokenize_rank("[+P]2") == (piece("+P"), EMPTY, EMPTY)

    @pytest.mark.parametrize("text", ["r01n", "r0n", "0"])
    def test_leading_zero_count(self, text: str) -> None:
        with pytest.raises(CountError, match="leading zero"):
            tokenize_rank(text, rank=3)

    def test_count_above_limit(self) -> None:
        with pytest.raises(CountError, match="exceeds maximum"):
            tokenize_rank("9", max_run=8)

    def test_very_long_digit_run_rejected_without_conversion(self) -> None:
        with pytest.raises(CountError):
            tokenize_rank("9" * 5000)

    def test_count_error_carries_rank(self) -> None:
        with pytest.raises(CountError) as exc_info:
            tokenize_rank("r0n", rank=5)
        assert exc_info.value.rank == 5
        assert exc_info.value.offset == 1

    @pytest.mark.parametrize("text", ["r,n", "r n", "*", "é"])
    def test_unexpected_character(self, text: str) -> None:
        with pytest.raises(FeenSyntaxError, match="unexpected character"):
            tokenize_rank(text)

    @pytest.mark.parametrize("text", ["+", "r-", "+3"])
    def test_dangling_prefix(self, text: str) -> None:
        with pytest.raises(FeenSyntaxError, match="after piece prefix"):
            tokenize_rank(text)

    def test_unterminated_bracket(self) -> None:
        with pytest.raises(FeenSyntaxError, match="unterminated") as exc_info:
            tokenize_rank("2[P", rank=0)
        assert exc_info.value.offset == 1

    def test_codec_error_has_position(self) -> None:
        with pytest.raises(PieceError) as exc_info:
            tokenize_rank("2[PP]", rank=4)
        err = exc_info.value
        assert (err.rank, err.column, err.offset) == (4, 2, 1)

    def test_base_offset_shifts_error_offsets(self) -> None:
        with pytest.raises(CountError) as exc_info:
            tokenize_rank("r0n", rank=2, base_offset=4)
        assert exc_info.value.offset == 5
        with pytest.raises(FeenSyntaxError) as exc_info:
            tokenize_rank("2[P", base_offset=10)
        assert exc_info.value.offset == 11

    def test_empty_rank(self) -> None:
        with pytest.raises(FeenSyntaxError):
            tokenize_rank("")


class TestRenderRank:
    def test_compresses_empty_runs(self) -> None:
        cells = (piece("r"), *(EMPTY,) * 10, piece("n"))
        assert render_rank(cells) == "r10n"

    def test_trailing_run(self) -> None:
        assert render_rank((piece("K"), EMPTY, EMPTY)) == "K2"

    def test_bracketed_input_dumps_bare(self) -> None:
        assert render_rank(tokenize_rank("[+P]2")) == "+P2"

    def test_non_bare_codec_output_is_bracketed(self) -> None:
        class WordCodec:
            def parse(self, token: str) -> str:
                return token

            def render(self, identity: object) -> str:
                return str(identity)

        codec = WordCodec()
        assert render_token("Queen", codec) == "[Queen]"
        assert render_token("Q", codec) == "Q"
        cells = tokenize_rank("[Queen]1", codec=codec)
        assert render_rank(cells, codec=codec) == "[Queen]1"
