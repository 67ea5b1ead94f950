"""Move generation, attack detection and the legal move filter."""

from __future__ import annotations

from .board import Board
from .constants import (
    BISHOP,
    BLACK,
    CASTLE_BLACK_KING,
    CASTLE_BLACK_QUEEN,
    CASTLE_WHITE_KING,
    CASTLE_WHITE_QUEEN,
    EMPTY,
    KING,
    KING_FILE,
    KNIGHT,
    PAWN,
    QUEEN,
    ROOK,
    WHITE,
    color_of,
    home_rank,
    opposite,
)
from .move import Move, Position


KNIGHT_DELTAS = ((-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1))
KING_DELTAS = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))
BISHOP_DIRS = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS = BISHOP_DIRS + ROOK_DIRS

# color -> (kingside bit, queenside bit)
CASTLING_BITS = {
    WHITE: (CASTLE_WHITE_KING, CASTLE_WHITE_QUEEN),
    BLACK: (CASTLE_BLACK_KING, CASTLE_BLACK_QUEEN),
}


def _in_bounds(rank: int, file: int) -> bool:
    return 0 <= rank < 8 and 0 <= file < 8


def _pawn_targets(board: Board, color: int, rank: int, file: int) -> set[Position]:
    targets: set[Position] = set()
    squares = board.squares
    # White pawns advance toward rank index 0.
    direction = -1 if color == WHITE else 1
    start_rank = 6 if color == WHITE else 1

    one = rank + direction
    if _in_bounds(one, file) and squares[one][file] == EMPTY:
        targets.add(Position(one, file))
        two = rank + 2 * direction
        if rank == start_rank and _in_bounds(two, file) and squares[two][file] == EMPTY:
            targets.add(Position(two, file))

    for df in (-1, 1):
        nf = file + df
        if not _in_bounds(one, nf):
            continue
        target = squares[one][nf]
        if target != EMPTY and color_of(target) != color:
            targets.add(Position(one, nf))

    return targets


def _leaper_targets(
    board: Board, color: int, rank: int, file: int, deltas: tuple[tuple[int, int], ...]
) -> set[Position]:
    targets: set[Position] = set()
    for dr, df in deltas:
        nr, nf = rank + dr, file + df
        if not _in_bounds(nr, nf):
            continue
        target = board.squares[nr][nf]
        if target == EMPTY or color_of(target) != color:
            targets.add(Position(nr, nf))
    return targets


def _slider_targets(
    board: Board, color: int, rank: int, file: int, directions: tuple[tuple[int, int], ...]
) -> set[Position]:
    targets: set[Position] = set()
    for dr, df in directions:
        nr, nf = rank + dr, file + df
        while _in_bounds(nr, nf):
            target = board.squares[nr][nf]
            if target == EMPTY:
                targets.add(Position(nr, nf))
            else:
                if color_of(target) != color:
                    targets.add(Position(nr, nf))
                break
            nr += dr
            nf += df
    return targets


def pseudo_legal_moves(board: Board, color: int, position: Position) -> set[Position]:
    """Destinations for the piece on ``position``, ignoring self-check."""
    rank, file = position.rank, position.file
    kind = abs(board.squares[rank][file])

    if kind == PAWN:
        return _pawn_targets(board, color, rank, file)
    if kind == KNIGHT:
        return _leaper_targets(board, color, rank, file, KNIGHT_DELTAS)
    if kind == BISHOP:
        return _slider_targets(board, color, rank, file, BISHOP_DIRS)
    if kind == ROOK:
        return _slider_targets(board, color, rank, file, ROOK_DIRS)
    if kind == QUEEN:
        return _slider_targets(board, color, rank, file, QUEEN_DIRS)
    if kind == KING:
        return _leaper_targets(board, color, rank, file, KING_DELTAS)
    return set()


def _occupied_by(board: Board, color: int):
    for rank, row in enumerate(board.squares):
        for file, piece in enumerate(row):
            if piece != EMPTY and color_of(piece) == color:
                yield Position(rank, file)


def all_pseudo_legal_moves(board: Board, color: int) -> set[Move]:
    moves: set[Move] = set()
    for origin in _occupied_by(board, color):
        for target in pseudo_legal_moves(board, color, origin):
            moves.add(Move(origin, target))
    return moves


def is_square_attacked(board: Board, position: Position, by_color: int) -> bool:
    for origin in _occupied_by(board, by_color):
        if position in pseudo_legal_moves(board, by_color, origin):
            return True
    return False


def king_position(board: Board, color: int) -> Position | None:
    king = KING if color == WHITE else -KING
    for rank, row in enumerate(board.squares):
        for file, piece in enumerate(row):
            if piece == king:
                return Position(rank, file)
    return None


def in_check(board: Board, color: int) -> bool:
    """Whether ``color``'s king is attacked.

    A board without a king for ``color`` reports ``True``. This is a
    sentinel for a degenerate position, not a rules result.
    """
    king_pos = king_position(board, color)
    if king_pos is None:
        return True
    return is_square_attacked(board, king_pos, opposite(color))


def _castling_moves(board: Board, color: int, rights: int) -> set[Move]:
    """Castle candidates for ``color``.

    Origin, transit and destination squares are checked with
    ``is_square_attacked``, which sees a pawn's diagonal only when that
    square is occupied. An empty transit square covered only by a pawn is
    therefore not caught here; ``legal_moves`` still rejects castles that
    land the king on such a square.
    """
    moves: set[Move] = set()
    rank = home_rank(color)
    king = KING if color == WHITE else -KING
    if board.squares[rank][KING_FILE] != king:
        return moves

    enemy = opposite(color)
    origin = Position(rank, KING_FILE)
    if is_square_attacked(board, origin, enemy):
        return moves

    kingside_bit, queenside_bit = CASTLING_BITS[color]
    row = board.squares[rank]

    if rights & kingside_bit and row[5] == EMPTY and row[6] == EMPTY:
        if not is_square_attacked(board, Position(rank, 5), enemy) and not is_square_attacked(
            board, Position(rank, 6), enemy
        ):
            moves.add(Move(origin, Position(rank, 6)))

    if rights & queenside_bit and row[1] == EMPTY and row[2] == EMPTY and row[3] == EMPTY:
        if not is_square_attacked(board, Position(rank, 3), enemy) and not is_square_attacked(
            board, Position(rank, 2), enemy
        ):
            moves.add(Move(origin, Position(rank, 2)))

    return moves


def legal_moves(board: Board, color: int, rights: int) -> set[Move]:
    """Pseudo-legal moves and castles that leave ``color``'s king safe."""
    legal: set[Move] = set()
    scratch = board.copy()

    for move in all_pseudo_legal_moves(board, color) | _castling_moves(board, color, rights):
        captured, _ = scratch.make_move(move, rights)
        if not in_check(scratch, color):
            legal.add(move)
        scratch.unmake_move(move, captured)

    return legal
