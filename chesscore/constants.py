"""Engine-wide constants and square helpers."""

from __future__ import annotations

WHITE = 0
BLACK = 1

EMPTY = 0

# Signed piece codes: positive is White, negative is Black.
WP, WN, WB, WR, WQ, WK = 1, 2, 3, 4, 5, 6
BP, BN, BB, BR, BQ, BK = -1, -2, -3, -4, -5, -6

PAWN, KNIGHT, BISHOP, ROOK, QUEEN, KING = WP, WN, WB, WR, WQ, WK

PIECE_SYMBOLS = {
    WP: "P",
    WN: "N",
    WB: "B",
    WR: "R",
    WQ: "Q",
    WK: "K",
    BP: "p",
    BN: "n",
    BB: "b",
    BR: "r",
    BQ: "q",
    BK: "k",
}

SYMBOL_TO_PIECE = {v: k for k, v in PIECE_SYMBOLS.items()}

CASTLE_WHITE_KING = 1
CASTLE_WHITE_QUEEN = 2
CASTLE_BLACK_KING = 4
CASTLE_BLACK_QUEEN = 8
ALL_CASTLING_RIGHTS = 15

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

FILES = "abcdefgh"

# Rank index 0 is the eighth rank, rank index 7 the first.
WHITE_HOME_RANK = 7
BLACK_HOME_RANK = 0
KING_FILE = 4
KINGSIDE_ROOK_FILE = 7
QUEENSIDE_ROOK_FILE = 0


def color_of(piece: int) -> int:
    return WHITE if piece > 0 else BLACK


def opposite(color: int) -> int:
    return color ^ 1


def home_rank(color: int) -> int:
    return WHITE_HOME_RANK if color == WHITE else BLACK_HOME_RANK


def square_name(rank: int, file: int) -> str:
    if not (0 <= rank < 8 and 0 <= file < 8):
        raise ValueError(f"Square out of range: ({rank}, {file})")
    return f"{FILES[file]}{8 - rank}"


def parse_square(square: str) -> tuple[int, int]:
    if len(square) != 2 or square[0] not in FILES or square[1] not in "12345678":
        raise ValueError(f"Invalid square: {square}")
    return 8 - int(square[1]), FILES.index(square[0])
