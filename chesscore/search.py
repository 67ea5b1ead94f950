"""Fixed-depth minimax search with optional alpha-beta pruning.

The root clones the caller's board once; below that, every node mutates the
same board through ``make_move``/``unmake_move`` pairs and threads castling
rights by value. A ``SearchEngine`` therefore must not run two searches at
the same time on one board.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterable, Protocol

from .board import Board
from .constants import EMPTY, WHITE, opposite
from .evaluation import evaluate, piece_value, terminal_score
from .move import Move
from .movegen import in_check, legal_moves

logger = logging.getLogger(__name__)

INFINITY = 1_000_000
ROOT_WINDOW = 50_000


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


@dataclass(slots=True)
class CandidateScore:
    move: str
    score: int


@dataclass(slots=True)
class SearchResult:
    best_move: Move | None
    score: int
    depth: int
    nodes: int
    cutoffs: int
    elapsed_ms: float
    nps: int
    candidates: list[CandidateScore] = field(default_factory=list)
    ties: list[Move] = field(default_factory=list)


def order_score(board: Board, move: Move) -> int:
    """MVV-LVA key: ``10 * victim - attacker`` for captures, else 0."""
    victim = board.piece_at(move.to_pos)
    if victim == EMPTY:
        return 0
    attacker = board.piece_at(move.from_pos)
    return 10 * abs(piece_value(victim)) - abs(piece_value(attacker))


def order_moves(board: Board, moves: Iterable[Move], use_ordering: bool) -> list[Move]:
    ordered = sorted(moves, key=Move.as_quad)
    if use_ordering:
        ordered.sort(key=lambda move: order_score(board, move), reverse=True)
    return ordered


class SearchEngine:
    def __init__(self, rng: RandomSource | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.nodes = 0
        self.cutoffs = 0

    def search(
        self,
        board: Board,
        color: int,
        depth: int,
        rights: int,
        use_pruning: bool = True,
        use_ordering: bool = True,
    ) -> SearchResult:
        if depth < 1:
            raise ValueError("depth must be >= 1")

        self.nodes = 0
        self.cutoffs = 0
        start = perf_counter()

        root = board.copy()
        moves = order_moves(root, legal_moves(root, color, rights), use_ordering)
        if not moves:
            score = terminal_score(color, in_check(root, color), depth)
            return SearchResult(
                best_move=None,
                score=score,
                depth=depth,
                nodes=0,
                cutoffs=0,
                elapsed_ms=(perf_counter() - start) * 1000.0,
                nps=0,
            )

        scored: list[tuple[int, Move]] = []
        for move in moves:
            captured, new_rights = root.make_move(move, rights)
            score = self.minimax(
                root,
                opposite(color),
                depth - 1,
                -ROOT_WINDOW,
                ROOT_WINDOW,
                new_rights,
                use_pruning,
                use_ordering,
            )
            root.unmake_move(move, captured)
            scored.append((score, move))

        if color == WHITE:
            best_score = max(score for score, _ in scored)
        else:
            best_score = min(score for score, _ in scored)
        ties = [move for score, move in scored if score == best_score]
        best_move = ties[self.rng.randrange(len(ties))]

        elapsed_ms = (perf_counter() - start) * 1000.0
        nps = int(self.nodes / max(elapsed_ms / 1000.0, 1e-9))
        candidates = [CandidateScore(move=move.uci(), score=score) for score, move in scored]
        candidates.sort(key=lambda item: item.score, reverse=color == WHITE)

        logger.debug(
            "search depth=%d moves=%d ties=%d best=%s score=%d nodes=%d cutoffs=%d elapsed_ms=%.1f",
            depth,
            len(moves),
            len(ties),
            best_move.uci(),
            best_score,
            self.nodes,
            self.cutoffs,
            elapsed_ms,
        )

        return SearchResult(
            best_move=best_move,
            score=best_score,
            depth=depth,
            nodes=self.nodes,
            cutoffs=self.cutoffs,
            elapsed_ms=elapsed_ms,
            nps=nps,
            candidates=candidates,
            ties=ties,
        )

    def best_move(
        self,
        board: Board,
        color: int,
        depth: int,
        rights: int,
        use_pruning: bool = True,
        use_ordering: bool = True,
    ) -> Move | None:
        return self.search(board, color, depth, rights, use_pruning, use_ordering).best_move

    def minimax(
        self,
        board: Board,
        color: int,
        depth: int,
        alpha: int,
        beta: int,
        rights: int,
        use_pruning: bool,
        use_ordering: bool,
    ) -> int:
        self.nodes += 1

        if depth == 0:
            return evaluate(board)

        moves = legal_moves(board, color, rights)
        if not moves:
            return terminal_score(color, in_check(board, color), depth)

        maximizing = color == WHITE
        best = -INFINITY if maximizing else INFINITY

        for move in order_moves(board, moves, use_ordering):
            captured, new_rights = board.make_move(move, rights)
            score = self.minimax(
                board,
                opposite(color),
                depth - 1,
                alpha,
                beta,
                new_rights,
                use_pruning,
                use_ordering,
            )
            board.unmake_move(move, captured)

            if maximizing:
                best = max(best, score)
                alpha = max(alpha, score)
            else:
                best = min(best, score)
                beta = min(beta, score)

            if use_pruning and beta <= alpha:
                self.cutoffs += 1
                break

        return best


def best_move(
    board: Board,
    color: int,
    depth: int,
    rights: int,
    use_pruning: bool = True,
    use_ordering: bool = True,
    rng: RandomSource | None = None,
) -> Move | None:
    return SearchEngine(rng).best_move(board, color, depth, rights, use_pruning, use_ordering)
