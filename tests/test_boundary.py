import random

import pytest

from chesscore.board import Board
from chesscore.boundary import get_all_legal_moves, get_best_move, is_in_check
from chesscore.constants import START_FEN, WHITE
from chesscore.movegen import legal_moves


def _quads(flat: list[int]) -> set[tuple[int, ...]]:
    assert len(flat) % 4 == 0
    return {tuple(flat[i : i + 4]) for i in range(0, len(flat), 4)}


def test_legal_moves_match_filter_output() -> None:
    board, color, rights = Board.from_fen("r3k2r/8/8/3n4/4P3/8/8/R3K2R w KQkq - 0 1")
    flat = get_all_legal_moves(board.to_cells(), 0, rights)

    assert _quads(flat) == {move.as_quad() for move in legal_moves(board, color, rights)}
    # e1g1 on the grid: rank 7, file 4 -> rank 7, file 6.
    assert (7, 4, 7, 6) in _quads(flat)


def test_any_nonzero_color_means_black() -> None:
    cells = Board.startpos().to_cells()
    quads = _quads(get_all_legal_moves(cells, 7, 15))
    assert len(quads) == 20
    assert (1, 4, 3, 4) in quads


def test_best_move_quad_or_empty() -> None:
    board, _, rights = Board.from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
    assert get_best_move(board.to_cells(), 0, 2, rights, rng=random.Random(0)) == [7, 0, 0, 0]

    mated, _, rights = Board.from_fen("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3")
    assert get_best_move(mated.to_cells(), 0, 2, rights) == []


def test_is_in_check() -> None:
    mated, _, _ = Board.from_fen("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3")
    assert is_in_check(mated.to_cells(), WHITE)
    assert not is_in_check(mated.to_cells(), 1)
    assert not is_in_check(Board.from_fen(START_FEN)[0].to_cells(), 0)


def test_invalid_inputs_rejected() -> None:
    cells = Board.startpos().to_cells()
    with pytest.raises(ValueError):
        get_all_legal_moves(cells, 0, 16)
    with pytest.raises(ValueError):
        get_all_legal_moves(cells[:10], 0, 15)
    with pytest.raises(ValueError):
        get_best_move(cells, 0, 0, 15)
