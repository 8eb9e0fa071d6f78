"""Parsing of the arguments of the UCI 'go' and 'position' commands."""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass, field
from typing import Optional

from .timeman import Limits, now

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)
_LEADING_INT = re.compile(r"[+-]?\d+")


@dataclass
class PositionCommand:
    """A parsed 'position' command: the starting FEN and the moves played from it."""

    fen: str
    moves: list[str] = field(default_factory=list)


def to_lower(text: str) -> str:
    """Lower-case the ASCII letters of a string, leaving other characters alone."""
    return text.translate(_ASCII_LOWER)


class _ParseStop(Exception):
    """Raised when a numeric argument cannot be read; parsing ends there."""


def _read_int(tokens: deque[str]) -> int:
    """Read a leading integer from the next token, like a formatted stream read.

    Characters after the number stay behind as the next token.
    """
    if not tokens:
        raise _ParseStop
    token = tokens.popleft()
    found = _LEADING_INT.match(token)
    if found is None:
        raise _ParseStop
    rest = token[found.end():]
    if rest:
        tokens.appendleft(rest)
    return int(found.group())


def parse_limits(command: str) -> Limits:
    """Build search limits from the arguments of a 'go' command.

    Parsing stops at the first numeric argument that cannot be read.
    'searchmoves' takes every remaining token as a move.
    """
    limits = Limits()
    limits.start_time = now()  # the search starts as early as possible

    tokens = deque(command.split())
    int_fields = {
        "movestogo": "movestogo",
        "depth": "depth",
        "nodes": "nodes",
        "movetime": "movetime",
        "mate": "mate",
        "perft": "perft",
    }
    try:
        while tokens:
            token = tokens.popleft()
            if token == "searchmoves":
                limits.searchmoves.extend(to_lower(move) for move in tokens)
                tokens.clear()
            elif token == "wtime":
                limits.time[0] = _read_int(tokens)
            elif token == "btime":
                limits.time[1] = _read_int(tokens)
            elif token == "winc":
                limits.inc[0] = _read_int(tokens)
            elif token == "binc":
                limits.inc[1] = _read_int(tokens)
            elif token in int_fields:
                setattr(limits, int_fields[token], _read_int(tokens))
            elif token == "infinite":
                limits.infinite = 1
            elif token == "ponder":
                limits.ponder_mode = True
    except _ParseStop:
        pass
    return limits


def parse_position(command: str) -> Optional[PositionCommand]:
    """Parse the arguments of a 'position' command.

    Returns None when the command names neither 'startpos' nor 'fen'.
    After 'startpos' the next token is taken to be the 'moves' keyword.
    """
    tokens = iter(command.split())
    kind = next(tokens, "")

    if kind == "startpos":
        fen = START_FEN
        next(tokens, None)  # the "moves" keyword, if any
    elif kind == "fen":
        parts = []
        for token in tokens:
            if token == "moves":
                break
            parts.append(token)
        fen = " ".join(parts)
    else:
        return None

    return PositionCommand(fen, list(tokens))