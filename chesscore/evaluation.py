"""Static board evaluation."""

from __future__ import annotations

from .board import Board
from .constants import BB, BK, BN, BP, BQ, BR, WB, WHITE, WK, WN, WP, WQ, WR

# Material values in pawns, signed by color.
PIECE_VALUES = {
    WP: 1,
    WN: 3,
    WB: 3,
    WR: 5,
    WQ: 9,
    WK: 200,
    BP: -1,
    BN: -3,
    BB: -3,
    BR: -5,
    BQ: -9,
    BK: -200,
}

MATE_SCORE = 10_000


def piece_value(piece: int) -> int:
    return PIECE_VALUES.get(piece, 0)


def evaluate(board: Board) -> int:
    """Return the material balance from White's perspective."""
    return sum(piece_value(piece) for row in board.squares for piece in row)


def terminal_score(color: int, side_in_check: bool, depth: int) -> int:
    """Score of a node where ``color`` has no legal moves.

    Mate scores grow with the remaining depth, so among lines compared at
    the same ply the quicker mate wins.
    """
    if not side_in_check:
        return 0
    if color == WHITE:
        return -(MATE_SCORE + depth)
    return MATE_SCORE + depth
