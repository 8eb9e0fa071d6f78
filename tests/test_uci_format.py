import pytest

from fishcore.types import Move, MoveType, PieceType, make_square
from fishcore.uci_format import (
    InfoFull,
    InternalScore,
    MateScore,
    TablebaseScore,
    format_bestmove,
    format_info_full,
    format_info_iter,
    format_info_no_moves,
    format_info_string,
    format_score,
    move_to_uci,
    square_name,
    to_cp,
    wdl,
    win_rate_model,
    win_rate_params,
)


@pytest.mark.parametrize("file", range(8))
@pytest.mark.parametrize("rank", range(8))
def test_square_name_covers_board(file, rank):
    name = square_name(make_square(file, rank))
    assert name == "abcdefgh"[file] + "12345678"[rank]


def test_special_moves():
    assert move_to_uci(Move.none(), False) == "(none)"
    assert move_to_uci(Move.null(), False) == "0000"


def test_normal_move():
    move = Move.from_squares(12, 28)
    assert move_to_uci(move, False) == square_name(12) + square_name(28)


def test_castling_standard_and_960():
    king_side = Move.make(MoveType.CASTLING, 4, 7)
    assert move_to_uci(king_side, False) == square_name(4) + square_name(6)
    assert move_to_uci(king_side, True) == square_name(4) + square_name(7)
    queen_side = Move.make(MoveType.CASTLING, 4, 0)
    assert move_to_uci(queen_side, False) == square_name(4) + square_name(2)


@pytest.mark.parametrize(
    "piece,letter",
    [(PieceType.KNIGHT, "n"), (PieceType.BISHOP, "b"), (PieceType.ROOK, "r"), (PieceType.QUEEN, "q")],
)
def test_promotion_letter(piece, letter):
    move = Move.make(MoveType.PROMOTION, 52, 60, piece)
    assert move_to_uci(move, False) == square_name(52) + square_name(60) + letter


def test_mate_score_moves():
    assert format_score(MateScore(1)) == "mate 1"
    assert format_score(MateScore(-2)) == "mate -1"
    assert format_score(MateScore(3)) == format_score(MateScore(4))
    assert format_score(MateScore(-5)) == format_score(MateScore(-4))


def test_tablebase_score():
    assert format_score(TablebaseScore(0, True)) == "cp 20000"
    win = int(format_score(TablebaseScore(10, True)).split()[1])
    loss = int(format_score(TablebaseScore(10, False)).split()[1])
    assert win < 20000
    assert loss < -20000


def test_internal_score():
    assert format_score(InternalScore(-37)) == "cp -37"


def test_format_score_rejects_other():
    with pytest.raises(TypeError):
        format_score(42)


def test_win_rate_params_clamped():
    assert win_rate_params(0) == win_rate_params(17)
    assert win_rate_params(200) == win_rate_params(78)


def test_win_rate_monotonic():
    rates = [win_rate_model(v, 40) for v in range(-1000, 1001, 100)]
    assert rates == sorted(rates)
    assert all(0 <= r <= 1000 for r in rates)


def test_win_rate_extreme_values():
    assert win_rate_model(-32000, 58) == 0
    assert win_rate_model(32000, 58) == 1000


def test_to_cp():
    assert to_cp(0, 58) == 0
    a, _ = win_rate_params(58)
    assert to_cp(round(a), 58) == 100
    assert to_cp(-250, 30) == -to_cp(250, 30)


@pytest.mark.parametrize("value", [-600, -50, 0, 120, 900])
def test_wdl_sums_to_thousand(value):
    w, d, l = (int(x) for x in wdl(value, 50).split())
    assert w + d + l == 1000
    assert wdl(-value, 50).split() == [str(l), str(d), str(w)]


def test_info_string_skips_blank_lines():
    out = format_info_string("first\n   \n\nsecond")
    assert out.split("\n") == ["info string first", "info string second"]
    assert format_info_string(" \n") == ""


def test_info_no_moves():
    assert format_info_no_moves(0, MateScore(0)) == "info depth 0 score " + format_score(MateScore(0))


def test_info_full():
    info = InfoFull(
        depth=12, sel_depth=18, multi_pv=1, score=InternalScore(35), wdl="100 800 100",
        bound="lowerbound", nodes=5000, nps=100000, hashfull=3, tb_hits=0, time_ms=50, pv="e2e4 e7e5",
    )
    line = format_info_full(info, True)
    assert line.startswith("info depth 12 seldepth 18 multipv 1 score cp 35 wdl 100 800 100 lowerbound")
    assert line.endswith("nodes 5000 nps 100000 hashfull 3 tbhits 0 time 50 pv e2e4 e7e5")
    plain = format_info_full(info, False)
    assert " wdl " not in plain


def test_info_full_without_bound():
    info = InfoFull(depth=1, sel_depth=1, multi_pv=1, score=InternalScore(0), pv="d2d4")
    assert "score cp 0 nodes" in format_info_full(info, False)


def test_info_iter():
    assert format_info_iter(7, "g1f3", 4) == "info depth 7 currmove g1f3 currmovenumber 4"


def test_bestmove():
    assert format_bestmove("e2e4", "") == "bestmove e2e4"
    assert format_bestmove("e2e4", "e7e5") == "bestmove e2e4 ponder e7e5"