"""Board representation with reversible make/unmake operations.

The board is an 8x8 grid of signed piece codes. Castling rights are not
part of the board: ``make_move`` returns the updated mask and ``unmake_move``
leaves rights alone, so callers keep the pre-move value themselves and pass
it to sibling and recursive calls. Every ``make_move`` must be paired with
exactly one ``unmake_move`` in LIFO order using the captured piece it
returned.
"""

from __future__ import annotations

from .constants import (
    BK,
    BLACK,
    BLACK_HOME_RANK,
    BR,
    CASTLE_BLACK_KING,
    CASTLE_BLACK_QUEEN,
    CASTLE_WHITE_KING,
    CASTLE_WHITE_QUEEN,
    EMPTY,
    KINGSIDE_ROOK_FILE,
    PIECE_SYMBOLS,
    QUEENSIDE_ROOK_FILE,
    START_FEN,
    SYMBOL_TO_PIECE,
    WHITE,
    WHITE_HOME_RANK,
    WK,
    WR,
    parse_square,
)
from .move import Move, Position

# (piece, rank, file) of each unmoved rook and the right it carries.
ROOK_ORIGINS = {
    (WR, WHITE_HOME_RANK, KINGSIDE_ROOK_FILE): CASTLE_WHITE_KING,
    (WR, WHITE_HOME_RANK, QUEENSIDE_ROOK_FILE): CASTLE_WHITE_QUEEN,
    (BR, BLACK_HOME_RANK, KINGSIDE_ROOK_FILE): CASTLE_BLACK_KING,
    (BR, BLACK_HOME_RANK, QUEENSIDE_ROOK_FILE): CASTLE_BLACK_QUEEN,
}

_RIGHTS_ORDER = (
    ("K", CASTLE_WHITE_KING),
    ("Q", CASTLE_WHITE_QUEEN),
    ("k", CASTLE_BLACK_KING),
    ("q", CASTLE_BLACK_QUEEN),
)


def is_castle(piece: int, move: Move) -> bool:
    return piece in (WK, BK) and abs(move.from_pos.file - move.to_pos.file) == 2


class Board:
    __slots__ = ("squares",)

    def __init__(self, squares: list[list[int]] | None = None):
        if squares is None:
            self.squares = [[EMPTY] * 8 for _ in range(8)]
        else:
            if len(squares) != 8 or any(len(row) != 8 for row in squares):
                raise ValueError("Board must be 8x8")
            self.squares = [list(row) for row in squares]

    @classmethod
    def startpos(cls) -> "Board":
        board, _, _ = cls.from_fen(START_FEN)
        return board

    @classmethod
    def from_fen(cls, fen: str) -> tuple["Board", int, int]:
        """Parse a FEN string into ``(board, color_to_move, castling_rights)``.

        En-passant target and move counters are checked for shape only;
        neither is tracked by the engine.
        """
        if not fen or not isinstance(fen, str):
            raise ValueError("FEN must be a non-empty string")
        fields = fen.split()
        if len(fields) != 6:
            raise ValueError(f"Invalid FEN: {fen}")

        placement, side, castling, ep, halfmove, fullmove = fields

        ranks = placement.split("/")
        if len(ranks) != 8:
            raise ValueError(f"Invalid FEN board placement: {placement}")

        board = cls()
        for rank_idx, rank in enumerate(ranks):
            file_idx = 0
            for ch in rank:
                if ch.isdigit():
                    file_idx += int(ch)
                    continue
                if ch not in SYMBOL_TO_PIECE:
                    raise ValueError(f"Invalid piece symbol in FEN: {ch}")
                if file_idx >= 8:
                    raise ValueError(f"Invalid rank in FEN: {rank}")
                board.squares[rank_idx][file_idx] = SYMBOL_TO_PIECE[ch]
                file_idx += 1
            if file_idx != 8:
                raise ValueError(f"Invalid rank in FEN: {rank}")

        if side not in ("w", "b"):
            raise ValueError(f"Invalid side to move in FEN: {side}")
        color = WHITE if side == "w" else BLACK

        rights = 0
        if castling != "-":
            for ch in castling:
                if ch not in "KQkq":
                    raise ValueError(f"Invalid castling rights in FEN: {castling}")
            for symbol, bit in _RIGHTS_ORDER:
                if symbol in castling:
                    rights |= bit

        if ep != "-":
            parse_square(ep)
        try:
            halfmove_clock = int(halfmove)
            fullmove_number = int(fullmove)
        except ValueError as exc:
            raise ValueError(f"Invalid move counters in FEN: {fen}") from exc
        if halfmove_clock < 0 or fullmove_number <= 0:
            raise ValueError(f"Invalid move counters in FEN: {fen}")

        return board, color, rights

    def to_fen(self, color: int = WHITE, rights: int = 0) -> str:
        rows = []
        for row in self.squares:
            run = 0
            out = []
            for piece in row:
                if piece == EMPTY:
                    run += 1
                    continue
                if run:
                    out.append(str(run))
                    run = 0
                out.append(PIECE_SYMBOLS[piece])
            if run:
                out.append(str(run))
            rows.append("".join(out))
        castling = "".join(symbol for symbol, bit in _RIGHTS_ORDER if rights & bit) or "-"
        side = "w" if color == WHITE else "b"
        return f"{'/'.join(rows)} {side} {castling} - 0 1"

    @classmethod
    def from_cells(cls, cells: list[int]) -> "Board":
        """Build a board from 64 row-major cell codes."""
        if len(cells) != 64:
            raise ValueError(f"Board must have 64 cells, got {len(cells)}")
        board = cls()
        for idx, piece in enumerate(cells):
            piece = int(piece)
            if piece != EMPTY and piece not in PIECE_SYMBOLS:
                raise ValueError(f"Invalid piece code at cell {idx}: {piece}")
            board.squares[idx // 8][idx % 8] = piece
        return board

    def to_cells(self) -> list[int]:
        return [piece for row in self.squares for piece in row]

    def copy(self) -> "Board":
        return Board(self.squares)

    def piece_at(self, pos: Position) -> int:
        return self.squares[pos.rank][pos.file]

    def make_move(self, move: Move, rights: int) -> tuple[int, int]:
        """Apply ``move`` in place and return ``(captured, new_rights)``.

        No legality check is made. A king moving two files is a castle and
        drags the matching rook next to it.
        """
        fr, ff = move.from_pos.rank, move.from_pos.file
        tr, tf = move.to_pos.rank, move.to_pos.file
        piece = self.squares[fr][ff]
        captured = self.squares[tr][tf]

        self.squares[tr][tf] = piece
        self.squares[fr][ff] = EMPTY

        if is_castle(piece, move):
            if tf == 6:
                self.squares[fr][5] = self.squares[fr][KINGSIDE_ROOK_FILE]
                self.squares[fr][KINGSIDE_ROOK_FILE] = EMPTY
            elif tf == 2:
                self.squares[fr][3] = self.squares[fr][QUEENSIDE_ROOK_FILE]
                self.squares[fr][QUEENSIDE_ROOK_FILE] = EMPTY

        return captured, _update_castling_rights(rights, move, piece, captured)

    def unmake_move(self, move: Move, captured: int) -> None:
        fr, ff = move.from_pos.rank, move.from_pos.file
        tr, tf = move.to_pos.rank, move.to_pos.file
        piece = self.squares[tr][tf]

        self.squares[fr][ff] = piece
        self.squares[tr][tf] = captured

        if is_castle(piece, move):
            if tf == 6:
                self.squares[fr][KINGSIDE_ROOK_FILE] = self.squares[fr][5]
                self.squares[fr][5] = EMPTY
            elif tf == 2:
                self.squares[fr][QUEENSIDE_ROOK_FILE] = self.squares[fr][3]
                self.squares[fr][3] = EMPTY

    def debug_state(self) -> tuple:
        return tuple(tuple(row) for row in self.squares)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.squares == other.squares

    def __repr__(self) -> str:
        return f"Board({self.to_fen().split()[0]!r})"


def _update_castling_rights(rights: int, move: Move, piece: int, captured: int) -> int:
    if piece == WK:
        rights &= ~(CASTLE_WHITE_KING | CASTLE_WHITE_QUEEN)
    elif piece == BK:
        rights &= ~(CASTLE_BLACK_KING | CASTLE_BLACK_QUEEN)
    elif piece in (WR, BR):
        rights &= ~ROOK_ORIGINS.get((piece, move.from_pos.rank, move.from_pos.file), 0)

    if captured in (WR, BR):
        rights &= ~ROOK_ORIGINS.get((captured, move.to_pos.rank, move.to_pos.file), 0)

    return rights
