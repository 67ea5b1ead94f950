"""Game status and engine self-play."""

from __future__ import annotations

from enum import Enum
from typing import Iterator

from .board import Board
from .constants import opposite
from .move import Move
from .movegen import in_check, legal_moves
from .search import SearchEngine


class GameStatus(str, Enum):
    ONGOING = "ongoing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


def status_from_moves(board: Board, color: int, moves: set[Move]) -> GameStatus:
    if moves:
        return GameStatus.ONGOING
    return GameStatus.CHECKMATE if in_check(board, color) else GameStatus.STALEMATE


def game_status(board: Board, color: int, rights: int) -> GameStatus:
    return status_from_moves(board, color, legal_moves(board, color, rights))


def self_play(
    board: Board,
    color: int,
    rights: int,
    depth: int,
    max_plies: int,
    engine: SearchEngine | None = None,
    use_pruning: bool = True,
    use_ordering: bool = True,
) -> Iterator[tuple[int, Move, int]]:
    """Let the engine play both sides, advancing ``board`` in place.

    Yields ``(color, move, rights_after)`` for every ply played. Stops when
    the side to move has no legal move or after ``max_plies`` plies.
    """
    if max_plies < 0:
        raise ValueError("max_plies must be >= 0")
    engine = engine if engine is not None else SearchEngine()

    for _ in range(max_plies):
        move = engine.best_move(board, color, depth, rights, use_pruning, use_ordering)
        if move is None:
            return
        _, rights = board.make_move(move, rights)
        yield color, move, rights
        color = opposite(color)
