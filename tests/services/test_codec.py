"""Tests for CodecService — the ServiceResult boundary over the domain."""

from __future__ import annotations

import pytest

from feenctl.config.models import ParserConfig
from feenctl.config.settings import FeenSettings
from feenctl.services.codec import CodecService
from feenctl.services.telemetry import disable_telemetry, enable_telemetry

CHESS = "+rnbq+kbn+r/+p+p+p+p+p+p+p+p/8/8/8/8/+P+P+P+P+P+P+P+P/+RNBQ+KBN+R / C/c"


@pytest.fixture
def svc(settings: FeenSettings) -> CodecService:
    return CodecService(settings)


def _with_parser(**overrides: object) -> CodecService:
    return CodecService(FeenSettings(parser=ParserConfig(**overrides)))  # type: ignore[arg-type]


class TestInspectPosition:
    def test_chess_start(self, svc: CodecService) -> None:
        result = svc.inspect_position(CHESS)
        assert result.ok
        assert result.op == "parse"
        data = result.data
        assert data["feen"] == CHESS
        assert data["canonical"] is True
        assert data["placement"]["dimension"] == 2
        assert data["placement"]["shape"] == [8, 8]
        assert data["placement"]["piece_count"] == 32
        assert data["hands"]["field"] == "/"
        assert data["styles"] == {
            "field": "C/c",
            "first_style": "C",
            "second_style": "C",
            "active": "first",
        }

    def test_board_rows(self, svc: CodecService) -> None:
        board = svc.inspect_position("K1/2 / C/c").data["placement"]["board"]
        assert board == [["K", None], [None, None]]

    def test_hands_breakdown(self, svc: CodecService) -> None:
        hands = svc.inspect_position("8 2B3P/p c/C").data["hands"]
        assert hands["first"] == [{"piece": "P", "count": 3}, {"piece": "B", "count": 2}]
        assert hands["second"] == [{"piece": "p", "count": 1}]
        assert hands["first_total"] == 5

    def test_non_canonical_flagged(self, svc: CodecService) -> None:
        result = svc.inspect_position("8 2B3P/ C/c")
        assert result.ok
        assert result.data["canonical"] is False

    def test_failure_carries_code_and_position(self, svc: CodecService) -> None:
        result = svc.inspect_position("8/r0n / C/c")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "COUNT"
        assert result.error.detail == {"rank": 1, "offset": 3}

    def test_irregular_placement_has_no_shape(self, svc: CodecService) -> None:
        placement = svc.inspect_position("rkr//PPPP/4 / C/c").data["placement"]
        assert placement["regular"] is False
        assert placement["shape"] is None
        assert placement["layout"] == ((3,), (4, 4))


class TestValidate:
    def test_canonical_input(self, svc: CodecService) -> None:
        result = svc.validate(CHESS)
        assert result.ok
        assert result.data == {"valid": True, "feen": CHESS, "canonical": True}
        assert result.warnings == []

    def test_lenient_warns(self, svc: CodecService) -> None:
        result = svc.validate("8 2B3P/ C/c")
        assert result.ok
        assert result.data["canonical"] is False
        assert "8 3P2B/ C/c" in result.warnings[0]

    def test_strict_override(self, svc: CodecService) -> None:
        result = svc.validate("8 2B3P/ C/c", strict=True)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NON_CANONICAL"
        assert result.error.detail["side"] == "first"

    def test_strict_from_config(self) -> None:
        svc = _with_parser(strict_hands=True)
        assert not svc.validate("8 2B3P/ C/c").ok
        assert svc.validate("8 2B3P/ C/c", strict=False).ok

    def test_style_error(self, svc: CodecService) -> None:
        result = svc.validate("8 / c/c")
        assert result.error is not None
        assert result.error.code == "STYLE"

    def test_uniform_from_config(self) -> None:
        result = _with_parser(require_uniform_shape=True).validate("8/7 / C/c")
        assert result.error is not None
        assert result.error.code == "SHAPE"


class TestNormalize:
    def test_changed(self, svc: CodecService) -> None:
        result = svc.normalize("  8/8 PBPP/pp c/C ")
        assert result.data == {
            "input": "8/8 PBPP/pp c/C",
            "feen": "8/8 3PB/2p c/C",
            "changed": True,
        }

    def test_unchanged(self, svc: CodecService) -> None:
        assert svc.normalize(CHESS).data["changed"] is False

    def test_ignores_strict_config(self) -> None:
        assert _with_parser(strict_hands=True).normalize("8 2B3P/ C/c").ok

    def test_merged_count_overflow_fails(self, svc: CodecService) -> None:
        result = svc.normalize("8 999P2P/ C/c")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "COUNT"
        assert result.error.detail == {"side": "first"}

    def test_merged_count_respects_configured_limit(self) -> None:
        svc = _with_parser(max_hand_count=10)
        assert not svc.validate("8 5P6P/ C/c").ok
        assert svc.validate("8 5P5P/ C/c").data["feen"] == "8 10P/ C/c"

    def test_failure(self, svc: CodecService) -> None:
        result = svc.normalize("8")
        assert not result.ok
        assert result.op == "normalize"
        assert result.error is not None
        assert result.error.code == "SYNTAX"


class TestInspectPlacement:
    def test_structure(self, svc: CodecService) -> None:
        data = svc.inspect_placement("a2/3//3/3").data
        assert data["dimension"] == 3
        assert data["separators"] == [1, 2, 1]
        assert data["rank_widths"] == [3, 3, 3, 3]
        assert data["shape"] == [2, 2, 3]
        assert data["ranks"] == ["a2", "3", "3", "3"]

    def test_uniform_flag(self, svc: CodecService) -> None:
        assert svc.inspect_placement("8/7").ok
        result = svc.inspect_placement("8/7", uniform=True)
        assert result.error is not None
        assert result.error.code == "SHAPE"

    def test_max_empty_run_from_config(self) -> None:
        result = _with_parser(max_empty_run=8).inspect_placement("9")
        assert result.error is not None
        assert result.error.code == "COUNT"

    def test_syntax_error(self, svc: CodecService) -> None:
        result = svc.inspect_placement("8//")
        assert result.error is not None
        assert result.error.code == "SYNTAX"
        assert result.error.detail["rank"] == 1


class TestInspectHands:
    def test_lenient(self, svc: CodecService) -> None:
        result = svc.inspect_hands("2B3P/")
        assert result.ok
        assert result.data["field"] == "3P2B/"
        assert result.data["canonical"] is False
        assert result.data["second"] == []

    def test_strict(self, svc: CodecService) -> None:
        assert svc.inspect_hands("3P2B/", strict=True).data["canonical"] is True
        result = svc.inspect_hands("2B3P/", strict=True)
        assert result.error is not None
        assert result.error.code == "NON_CANONICAL"

    def test_max_hand_count_from_config(self) -> None:
        result = _with_parser(max_hand_count=9).inspect_hands("10P/")
        assert result.error is not None
        assert result.error.code == "COUNT"

    def test_count_of_one(self, svc: CodecService) -> None:
        result = svc.inspect_hands("1P/")
        assert result.error is not None
        assert result.error.detail == {"offset": 0, "side": "first"}


class TestTelemetry:
    def test_verbose_spans_attached(self, svc: CodecService) -> None:
        enable_telemetry()
        try:
            result = svc.inspect_position(CHESS)
        finally:
            disable_telemetry()
        assert result.meta is not None
        tree = result.meta["telemetry"]
        names = [child["name"] for child in tree["children"]]
        assert names == ["parse", "dump"]
        assert tree["children"][0]["annotations"] == {"dimension": 2, "ranks": 8}

    def test_no_meta_by_default(self, svc: CodecService) -> None:
        assert svc.validate(CHESS).meta is None
