"""Flat integer encoding used by hosts that cannot pass Python objects.

Boards travel as 64 row-major signed cell codes, colors as ints (0 is White,
anything else Black), castling rights as a 4-bit mask, and moves as
``(from_rank, from_file, to_rank, to_file)`` quadruples.
"""

from __future__ import annotations

from typing import Sequence

from .board import Board
from .constants import ALL_CASTLING_RIGHTS, BLACK, WHITE
from .move import Move
from .movegen import in_check, legal_moves
from .search import RandomSource, SearchEngine


def decode_color(color: int) -> int:
    return WHITE if color == 0 else BLACK


def decode_rights(rights: int) -> int:
    if not 0 <= rights <= ALL_CASTLING_RIGHTS:
        raise ValueError(f"Castling rights must be in 0..{ALL_CASTLING_RIGHTS}, got {rights}")
    return rights


def encode_moves(moves: Sequence[Move]) -> list[int]:
    flat: list[int] = []
    for move in moves:
        flat.extend(move.as_quad())
    return flat


def get_all_legal_moves(cells: Sequence[int], color: int, rights: int) -> list[int]:
    board = Board.from_cells(list(cells))
    moves = legal_moves(board, decode_color(color), decode_rights(rights))
    return encode_moves(sorted(moves, key=Move.as_quad))


def get_best_move(
    cells: Sequence[int],
    color: int,
    depth: int,
    rights: int,
    use_pruning: bool = True,
    use_ordering: bool = True,
    rng: RandomSource | None = None,
) -> list[int]:
    board = Board.from_cells(list(cells))
    move = SearchEngine(rng).best_move(
        board, decode_color(color), depth, decode_rights(rights), use_pruning, use_ordering
    )
    if move is None:
        return []
    return list(move.as_quad())


def is_in_check(cells: Sequence[int], color: int) -> bool:
    return in_check(Board.from_cells(list(cells)), decode_color(color))
