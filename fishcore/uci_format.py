"""Formatting of scores, moves and search information for the UCI protocol."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .types import (
    FILE_C,
    FILE_G,
    Move,
    MoveType,
    file_of,
    make_square,
    rank_of,
)

TB_CP = 20000

# Polynomial coefficients of the win rate model, in terms of normalised material.
_AS = (-13.50030198, 40.92780883, -36.82753545, 386.83004070)
_BS = (96.53354896, -165.79058388, 90.89679019, 49.29561889)


@dataclass(frozen=True)
class MateScore:
    """Mate in a number of plies; negative when the side to move gets mated."""

    plies: int


@dataclass(frozen=True)
class TablebaseScore:
    """A tablebase win or loss reached in a number of plies."""

    plies: int
    win: bool


@dataclass(frozen=True)
class InternalScore:
    """A score in internal centipawn-like units."""

    value: int


Score = Union[MateScore, TablebaseScore, InternalScore]


@dataclass(frozen=True)
class InfoFull:
    """Everything reported in a full 'info' line after an iteration."""

    depth: int
    sel_depth: int
    multi_pv: int
    score: Score
    wdl: str = ""
    bound: str = ""
    nodes: int = 0
    nps: int = 0
    hashfull: int = 0
    tb_hits: int = 0
    time_ms: int = 0
    pv: str = ""


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _round_half_away(x: float) -> int:
    return int(math.floor(x + 0.5)) if x >= 0 else -int(math.floor(-x + 0.5))


def square_name(square: int) -> str:
    """Algebraic name of a square, e.g. 'e4'."""
    return "abcdefgh"[file_of(square)] + "12345678"[rank_of(square)]


def move_to_uci(move: Move, chess960: bool = False) -> str:
    """Coordinate notation of a move as sent over UCI."""
    if move == Move.none():
        return "(none)"
    if move == Move.null():
        return "0000"

    from_sq = move.from_sq()
    to_sq = move.to_sq()

    if move.type_of() is MoveType.CASTLING and not chess960:
        to_sq = make_square(FILE_G if to_sq > from_sq else FILE_C, rank_of(from_sq))

    text = square_name(from_sq) + square_name(to_sq)
    if move.type_of() is MoveType.PROMOTION:
        text += " pnbrqk"[move.promotion_type()]
    return text


def format_score(score: Score) -> str:
    """The 'score' field of an info line: 'mate N' or 'cp N'."""
    if isinstance(score, MateScore):
        plies = score.plies
        moves = _tdiv(plies + 1 if plies > 0 else plies, 2)
        return f"mate {moves}"
    if isinstance(score, TablebaseScore):
        cp = TB_CP - score.plies if score.win else -TB_CP - score.plies
        return f"cp {cp}"
    if isinstance(score, InternalScore):
        return f"cp {score.value}"
    raise TypeError(f"not a score: {score!r}")


def win_rate_params(material: int) -> tuple[float, float]:
    """Parameters (a, b) of the win rate model for a material count.

    Material counts pawns as 1, knights and bishops as 3, rooks as 5 and
    queens as 9.
    """
    m = min(max(material, 17), 78) / 58.0
    a = ((_AS[0] * m + _AS[1]) * m + _AS[2]) * m + _AS[3]
    b = ((_BS[0] * m + _BS[1]) * m + _BS[2]) * m + _BS[3]
    return a, b


def win_rate_model(value: int, material: int) -> int:
    """Win rate in per mille for a value from the side to move's point of view."""
    a, b = win_rate_params(material)
    try:
        denominator = 1 + math.exp((a - float(value)) / b)
    except OverflowError:
        return 0
    return int(0.5 + 1000 / denominator)


def to_cp(value: int, material: int) -> int:
    """Convert an internal value to centipawns, ignoring mate scores."""
    a, _ = win_rate_params(material)
    return _round_half_away(100 * int(value) / a)


def wdl(value: int, material: int) -> str:
    """Win, draw and loss chances in per mille as 'W D L'."""
    win = win_rate_model(value, material)
    loss = win_rate_model(-value, material)
    draw = 1000 - win - loss
    return f"{win} {draw} {loss}"


def format_info_string(text: str) -> str:
    """Turn each non-blank line of text into an 'info string' line."""
    lines = [f"info string {line}" for line in text.split("\n") if line.strip()]
    return "\n".join(lines)


def format_info_no_moves(depth: int, score: Score) -> str:
    return f"info depth {depth} score {format_score(score)}"


def format_info_full(info: InfoFull, show_wdl: bool = False) -> str:
    parts = [
        "info",
        f"depth {info.depth}",
        f"seldepth {info.sel_depth}",
        f"multipv {info.multi_pv}",
        f"score {format_score(info.score)}",
    ]
    if show_wdl:
        parts.append(f"wdl {info.wdl}")
    if info.bound:
        parts.append(info.bound)
    parts += [
        f"nodes {info.nodes}",
        f"nps {info.nps}",
        f"hashfull {info.hashfull}",
        f"tbhits {info.tb_hits}",
        f"time {info.time_ms}",
        f"pv {info.pv}",
    ]
    return " ".join(parts)


def format_info_iter(depth: int, currmove: str, currmovenumber: int) -> str:
    return f"info depth {depth} currmove {currmove} currmovenumber {currmovenumber}"


def format_bestmove(bestmove: str, ponder: str = "") -> str:
    text = f"bestmove {bestmove}"
    if ponder:
        text += f" ponder {ponder}"
    return text