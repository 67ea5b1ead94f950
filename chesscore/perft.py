"""Perft utilities for move generation correctness checks."""

from __future__ import annotations

from .board import Board
from .constants import opposite
from .movegen import legal_moves


def perft(board: Board, color: int, depth: int, rights: int) -> int:
    if depth < 0:
        raise ValueError("Depth must be >= 0")
    if depth == 0:
        return 1

    moves = legal_moves(board, color, rights)
    if depth == 1:
        return len(moves)

    nodes = 0
    for move in moves:
        captured, new_rights = board.make_move(move, rights)
        nodes += perft(board, opposite(color), depth - 1, new_rights)
        board.unmake_move(move, captured)
    return nodes


def perft_divide(board: Board, color: int, depth: int, rights: int) -> dict[str, int]:
    if depth < 1:
        raise ValueError("Depth must be >= 1 for perft divide")

    result: dict[str, int] = {}
    for move in legal_moves(board, color, rights):
        captured, new_rights = board.make_move(move, rights)
        count = perft(board, opposite(color), depth - 1, new_rights)
        board.unmake_move(move, captured)
        result[move.uci()] = count
    return dict(sorted(result.items()))
