"""Core chess types: colours, pieces, squares, values and packed moves."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag

MASK64 = (1 << 64) - 1

MAX_MOVES = 256
MAX_PLY = 246


class Color(IntEnum):
    WHITE = 0
    BLACK = 1


COLOR_NB = 2


class CastlingRights(IntFlag):
    NO_CASTLING = 0
    WHITE_OO = 1
    WHITE_OOO = 2
    BLACK_OO = 4
    BLACK_OOO = 8

    KING_SIDE = WHITE_OO | BLACK_OO
    QUEEN_SIDE = WHITE_OOO | BLACK_OOO
    WHITE_CASTLING = WHITE_OO | WHITE_OOO
    BLACK_CASTLING = BLACK_OO | BLACK_OOO
    ANY_CASTLING = WHITE_CASTLING | BLACK_CASTLING


CASTLING_RIGHT_NB = 16


class Bound(IntFlag):
    NONE = 0
    UPPER = 1
    LOWER = 2
    EXACT = UPPER | LOWER


# Search values. Values used in search lie in (-VALUE_NONE, VALUE_NONE].
VALUE_ZERO = 0
VALUE_DRAW = 0
VALUE_NONE = 32002
VALUE_INFINITE = 32001

VALUE_MATE = 32000
VALUE_MATE_IN_MAX_PLY = VALUE_MATE - MAX_PLY
VALUE_MATED_IN_MAX_PLY = -VALUE_MATE_IN_MAX_PLY

VALUE_TB = VALUE_MATE_IN_MAX_PLY - 1
VALUE_TB_WIN_IN_MAX_PLY = VALUE_TB - MAX_PLY
VALUE_TB_LOSS_IN_MAX_PLY = -VALUE_TB_WIN_IN_MAX_PLY

PAWN_VALUE = 208
KNIGHT_VALUE = 781
BISHOP_VALUE = 825
ROOK_VALUE = 1276
QUEEN_VALUE = 2538


class PieceType(IntEnum):
    NO_PIECE_TYPE = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


ALL_PIECES = PieceType.NO_PIECE_TYPE
PIECE_TYPE_NB = 8


class Piece(IntEnum):
    NO_PIECE = 0
    W_PAWN = 1
    W_KNIGHT = 2
    W_BISHOP = 3
    W_ROOK = 4
    W_QUEEN = 5
    W_KING = 6
    B_PAWN = 9
    B_KNIGHT = 10
    B_BISHOP = 11
    B_ROOK = 12
    B_QUEEN = 13
    B_KING = 14


PIECE_NB = 16

PIECE_VALUE = (
    VALUE_ZERO, PAWN_VALUE, KNIGHT_VALUE, BISHOP_VALUE, ROOK_VALUE, QUEEN_VALUE, VALUE_ZERO, VALUE_ZERO,
    VALUE_ZERO, PAWN_VALUE, KNIGHT_VALUE, BISHOP_VALUE, ROOK_VALUE, QUEEN_VALUE, VALUE_ZERO, VALUE_ZERO,
)

# Depths stored in the transposition table.
DEPTH_QS = 0
DEPTH_UNSEARCHED = -2
DEPTH_ENTRY_OFFSET = -3

# Squares are plain integers 0..63, A1 = 0, H8 = 63.
SQ_A1, SQ_H1, SQ_A8, SQ_H8 = 0, 7, 56, 63
SQ_NONE = 64
SQUARE_NB = 64

FILE_A, FILE_B, FILE_C, FILE_D, FILE_E, FILE_F, FILE_G, FILE_H = range(8)
FILE_NB = 8
RANK_1, RANK_2, RANK_3, RANK_4, RANK_5, RANK_6, RANK_7, RANK_8 = range(8)
RANK_NB = 8

NORTH = 8
EAST = 1
SOUTH = -NORTH
WEST = -EAST
NORTH_EAST = NORTH + EAST
SOUTH_EAST = SOUTH + EAST
SOUTH_WEST = SOUTH + WEST
NORTH_WEST = NORTH + WEST


def is_valid(value: int) -> bool:
    """Return True unless the value is VALUE_NONE."""
    return value != VALUE_NONE


def _require_valid(value: int) -> None:
    if not is_valid(value):
        raise ValueError("VALUE_NONE is not a search value")


def is_win(value: int) -> bool:
    """Return True for a proven (tablebase or mate) win."""
    _require_valid(value)
    return value >= VALUE_TB_WIN_IN_MAX_PLY


def is_loss(value: int) -> bool:
    """Return True for a proven (tablebase or mate) loss."""
    _require_valid(value)
    return value <= VALUE_TB_LOSS_IN_MAX_PLY


def is_decisive(value: int) -> bool:
    return is_win(value) or is_loss(value)


def mate_in(ply: int) -> int:
    return VALUE_MATE - ply


def mated_in(ply: int) -> int:
    return -VALUE_MATE + ply


def make_square(file: int, rank: int) -> int:
    return (rank << 3) + file


def make_piece(color: int, piece_type: int) -> Piece:
    return Piece((color << 3) + piece_type)


def type_of(piece: int) -> PieceType:
    return PieceType(piece & 7)


def color_of(piece: int) -> Color:
    if piece == Piece.NO_PIECE:
        raise ValueError("NO_PIECE has no colour")
    return Color(piece >> 3)


def flip_piece_color(piece: int) -> Piece:
    """Swap the colour of a piece, e.g. W_KNIGHT <-> B_KNIGHT."""
    return Piece(piece ^ 8)


def opposite(color: int) -> Color:
    return Color(color ^ Color.BLACK)


def is_ok(square: int) -> bool:
    return SQ_A1 <= square <= SQ_H8


def file_of(square: int) -> int:
    return square & 7


def rank_of(square: int) -> int:
    return square >> 3


def relative_square(color: int, square: int) -> int:
    return square ^ (color * 56)


def relative_rank(color: int, rank: int) -> int:
    return rank ^ (color * 7)


def flip_rank(square: int) -> int:
    """Mirror vertically: A1 <-> A8."""
    return square ^ SQ_A8


def flip_file(square: int) -> int:
    """Mirror horizontally: A1 <-> H1."""
    return square ^ SQ_H1


def pawn_push(color: int) -> int:
    return NORTH if color == Color.WHITE else SOUTH


def make_key(seed: int) -> int:
    """Linear congruential step giving a 64-bit key."""
    return (seed * 6364136223846793005 + 1442695040888963407) & MASK64


class MoveType(IntEnum):
    NORMAL = 0
    PROMOTION = 1 << 14
    EN_PASSANT = 2 << 14
    CASTLING = 3 << 14


@dataclass(frozen=True)
class Move:
    """A move packed into 16 bits.

    bits 0-5 destination, 6-11 origin, 12-13 promotion piece - KNIGHT,
    14-15 move type.
    """

    data: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.data <= 0xFFFF:
            raise ValueError(f"move data out of 16-bit range: {self.data}")

    @classmethod
    def from_squares(cls, from_sq: int, to_sq: int) -> Move:
        return cls((from_sq << 6) + to_sq)

    @classmethod
    def make(
        cls,
        move_type: MoveType,
        from_sq: int,
        to_sq: int,
        promotion: PieceType = PieceType.KNIGHT,
    ) -> Move:
        return cls(int(move_type) + ((promotion - PieceType.KNIGHT) << 12) + (from_sq << 6) + to_sq)

    def _require_ok(self) -> None:
        if not self.is_ok():
            raise ValueError("none and null moves have no squares")

    def from_sq(self) -> int:
        self._require_ok()
        return (self.data >> 6) & 0x3F

    def to_sq(self) -> int:
        self._require_ok()
        return self.data & 0x3F

    def from_to(self) -> int:
        return self.data & 0xFFF

    def type_of(self) -> MoveType:
        return MoveType(self.data & (3 << 14))

    def promotion_type(self) -> PieceType:
        return PieceType(((self.data >> 12) & 3) + PieceType.KNIGHT)

    def is_ok(self) -> bool:
        return self.data not in (Move.none().data, Move.null().data)

    @classmethod
    def null(cls) -> Move:
        return cls(65)

    @classmethod
    def none(cls) -> Move:
        return cls(0)

    @property
    def raw(self) -> int:
        return self.data

    def __bool__(self) -> bool:
        return self.data != 0