import pytest

from chesscore.board import Board
from chesscore.constants import (
    ALL_CASTLING_RIGHTS,
    BLACK,
    BP,
    BR,
    CASTLE_BLACK_KING,
    CASTLE_BLACK_QUEEN,
    CASTLE_WHITE_KING,
    CASTLE_WHITE_QUEEN,
    EMPTY,
    START_FEN,
    WHITE,
    WK,
    WR,
)
from chesscore.move import Move, Position
from chesscore.movegen import all_pseudo_legal_moves, legal_moves

KIWIPETE_FEN = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


def snapshot(board: Board):
    return board.debug_state()


def sq(name: str) -> Position:
    return Position.from_name(name)


def test_make_unmake_simple_pawn_push_roundtrip() -> None:
    board, _, rights = Board.from_fen("4k3/8/8/8/8/8/4P3/4K3 w - - 0 1")
    initial = snapshot(board)

    move = Move.from_uci("e2e4")
    captured, new_rights = board.make_move(move, rights)

    assert captured == EMPTY
    assert new_rights == rights
    assert board.piece_at(sq("e2")) == EMPTY
    board.unmake_move(move, captured)
    assert snapshot(board) == initial


def test_make_unmake_capture_restores_victim() -> None:
    board, _, rights = Board.from_fen("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1")
    initial = snapshot(board)

    move = Move.from_uci("e4d5")
    captured, _ = board.make_move(move, rights)
    assert captured == BP

    board.unmake_move(move, captured)
    assert snapshot(board) == initial


def test_make_unmake_kingside_castle_roundtrip() -> None:
    board, _, rights = Board.from_fen("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    initial = snapshot(board)

    castle = Move.from_uci("e1g1")
    captured, new_rights = board.make_move(castle, rights)
    assert board.piece_at(sq("g1")) == WK
    assert board.piece_at(sq("f1")) == WR
    assert board.piece_at(sq("h1")) == EMPTY
    assert new_rights == 0

    board.unmake_move(castle, captured)
    assert snapshot(board) == initial


def test_make_unmake_queenside_castle_roundtrip() -> None:
    board, _, rights = Board.from_fen("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    initial = snapshot(board)

    castle = Move.from_uci("e1c1")
    captured, _ = board.make_move(castle, rights)
    assert board.piece_at(sq("c1")) == WK
    assert board.piece_at(sq("d1")) == WR
    assert board.piece_at(sq("a1")) == EMPTY

    board.unmake_move(castle, captured)
    assert snapshot(board) == initial


def test_black_castle_moves_rook_and_clears_black_rights() -> None:
    board, _, rights = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")

    captured, new_rights = board.make_move(Move.from_uci("e8g8"), rights)
    assert board.piece_at(sq("f8")) == BR
    assert board.piece_at(sq("h8")) == EMPTY
    assert new_rights == CASTLE_WHITE_KING | CASTLE_WHITE_QUEEN
    assert captured == EMPTY


def test_rook_move_from_origin_clears_one_right() -> None:
    board, _, rights = Board.from_fen("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")

    _, new_rights = board.make_move(Move.from_uci("h1h2"), rights)
    assert new_rights == CASTLE_WHITE_QUEEN

    board2, _, rights2 = Board.from_fen("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    _, new_rights2 = board2.make_move(Move.from_uci("a1a2"), rights2)
    assert new_rights2 == CASTLE_WHITE_KING


def test_rook_move_off_origin_keeps_rights() -> None:
    board, _, _ = Board.from_fen("4k3/8/8/8/8/8/7R/4K3 w - - 0 1")
    _, new_rights = board.make_move(Move.from_uci("h2h1"), ALL_CASTLING_RIGHTS)
    assert new_rights == ALL_CASTLING_RIGHTS


def test_rook_capture_on_origin_clears_victims_right() -> None:
    board, _, rights = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")

    captured, new_rights = board.make_move(Move.from_uci("a1a8"), rights)
    assert captured == BR
    assert new_rights == CASTLE_WHITE_KING | CASTLE_BLACK_KING


def test_unmake_does_not_touch_rights() -> None:
    board, _, rights = Board.from_fen("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    move = Move.from_uci("e1e2")

    captured, new_rights = board.make_move(move, rights)
    assert new_rights == 0
    assert board.unmake_move(move, captured) is None
    # The caller still owns the pre-move value.
    assert rights == CASTLE_WHITE_KING | CASTLE_WHITE_QUEEN


def test_every_pseudo_legal_and_castle_move_roundtrips() -> None:
    for fen in (START_FEN, KIWIPETE_FEN, "r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1"):
        board, color, rights = Board.from_fen(fen)
        initial = snapshot(board)
        moves = all_pseudo_legal_moves(board, color) | legal_moves(board, color, rights)
        for move in moves:
            captured, _ = board.make_move(move, rights)
            board.unmake_move(move, captured)
            assert snapshot(board) == initial, (fen, move.uci())


def test_nested_make_unmake_restores_in_lifo_order() -> None:
    board, _, rights = Board.from_fen(KIWIPETE_FEN)
    initial = snapshot(board)

    first = Move.from_uci("e1g1")
    second = Move.from_uci("e8c8")
    third = Move.from_uci("f3f6")

    cap1, rights1 = board.make_move(first, rights)
    cap2, rights2 = board.make_move(second, rights1)
    cap3, _ = board.make_move(third, rights2)
    board.unmake_move(third, cap3)
    board.unmake_move(second, cap2)
    board.unmake_move(first, cap1)

    assert snapshot(board) == initial
    assert rights2 == 0


def test_fen_roundtrip() -> None:
    board, color, rights = Board.from_fen(KIWIPETE_FEN)
    assert board.to_fen(color, rights) == KIWIPETE_FEN

    board, color, rights = Board.from_fen("4k3/8/8/8/8/8/8/4K3 b - - 0 1")
    assert color == BLACK
    assert rights == 0
    assert board.to_fen(color, rights) == "4k3/8/8/8/8/8/8/4K3 b - - 0 1"


def test_start_position_layout() -> None:
    board, color, rights = Board.from_fen(START_FEN)
    assert color == WHITE
    assert rights == ALL_CASTLING_RIGHTS
    assert board == Board.startpos()
    assert board.squares[7][4] == WK
    assert board.squares[0][0] == BR
    assert rights & CASTLE_BLACK_QUEEN and rights & CASTLE_BLACK_KING


@pytest.mark.parametrize(
    "fen",
    [
        "",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KXkq - 0 1",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq z9 0 1",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - a 1",
        "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
    ],
)
def test_malformed_fen_rejected(fen: str) -> None:
    with pytest.raises(ValueError):
        Board.from_fen(fen)


def test_cells_roundtrip_and_validation() -> None:
    board = Board.startpos()
    cells = board.to_cells()
    assert len(cells) == 64
    assert cells[60] == WK
    assert Board.from_cells(cells) == board

    with pytest.raises(ValueError):
        Board.from_cells(cells[:63])
    with pytest.raises(ValueError):
        Board.from_cells([7] + cells[1:])
