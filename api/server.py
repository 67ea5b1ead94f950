"""FastAPI server exposing move generation, check detection and search."""

from __future__ import annotations

import logging
import random

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from chesscore.board import Board
from chesscore.boundary import decode_color, encode_moves
from chesscore.config import SearchConfig
from chesscore.constants import ALL_CASTLING_RIGHTS, WHITE
from chesscore.evaluation import evaluate
from chesscore.game import status_from_moves
from chesscore.move import Move
from chesscore.movegen import in_check, legal_moves
from chesscore.perft import perft, perft_divide
from chesscore.search import SearchEngine, SearchResult

from .middleware import RequestLoggingMiddleware

logger = logging.getLogger(__name__)

_DEFAULTS = SearchConfig()


class PositionRequest(BaseModel):
    fen: str | None = Field(default=None)
    board: list[int] | None = Field(default=None, min_length=64, max_length=64)
    color: int = Field(default=0)
    castling_rights: int = Field(default=ALL_CASTLING_RIGHTS, ge=0, le=ALL_CASTLING_RIGHTS)


class SearchRequest(PositionRequest):
    depth: int = Field(default=_DEFAULTS.depth, ge=1, le=5)
    use_pruning: bool = Field(default=_DEFAULTS.use_pruning)
    use_ordering: bool = Field(default=_DEFAULTS.use_ordering)
    seed: int | None = Field(default=_DEFAULTS.seed)


class PerftRequest(PositionRequest):
    depth: int = Field(default=2, ge=1, le=4)
    divide: bool = Field(default=False)


app = FastAPI(title="Chesscore API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


def _position(payload: PositionRequest) -> tuple[Board, int, int]:
    """Resolve a request into ``(board, color, rights)``; FEN wins over ``board``."""
    try:
        if payload.fen is not None:
            return Board.from_fen(payload.fen)
        if payload.board is not None:
            board = Board.from_cells(payload.board)
        else:
            board = Board.startpos()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return board, decode_color(payload.color), payload.castling_rights


def _position_payload(board: Board, color: int, rights: int, moves: set[Move]) -> dict:
    ordered = sorted(moves, key=Move.as_quad)
    return {
        "fen": board.to_fen(color, rights),
        "board": board.to_cells(),
        "side_to_move": "w" if color == WHITE else "b",
        "castling_rights": rights,
        "legal_moves": [move.uci() for move in ordered],
        "moves": encode_moves(ordered),
        "in_check": in_check(board, color),
        "status": status_from_moves(board, color, moves).value,
        "evaluation": evaluate(board),
    }


def _search_payload(result: SearchResult) -> dict:
    return {
        "best_move": result.best_move.uci() if result.best_move else None,
        "move": list(result.best_move.as_quad()) if result.best_move else [],
        "score": result.score,
        "depth": result.depth,
        "nodes": result.nodes,
        "cutoffs": result.cutoffs,
        "nps": result.nps,
        "elapsed_ms": round(result.elapsed_ms, 2),
        "candidate_moves": [{"move": c.move, "score": c.score} for c in result.candidates],
        "ties": [move.uci() for move in result.ties],
    }


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/legal-moves")
def get_legal_moves(payload: PositionRequest) -> dict:
    board, color, rights = _position(payload)
    return _position_payload(board, color, rights, legal_moves(board, color, rights))


@app.post("/in-check")
def get_in_check(payload: PositionRequest) -> dict:
    board, color, _ = _position(payload)
    return {"in_check": in_check(board, color)}


@app.post("/best-move")
def get_best_move(payload: SearchRequest) -> dict:
    board, color, rights = _position(payload)
    rng = random.Random(payload.seed) if payload.seed is not None else None
    result = SearchEngine(rng).search(
        board,
        color,
        payload.depth,
        rights,
        use_pruning=payload.use_pruning,
        use_ordering=payload.use_ordering,
    )
    logger.info(
        "best-move depth=%d best=%s score=%d nodes=%d",
        result.depth,
        result.best_move.uci() if result.best_move else None,
        result.score,
        result.nodes,
    )
    response = _position_payload(board, color, rights, legal_moves(board, color, rights))
    response.update(_search_payload(result))
    return response


@app.post("/perft")
def run_perft(payload: PerftRequest) -> dict:
    board, color, rights = _position(payload)
    if payload.divide:
        return {"divide": perft_divide(board, color, payload.depth, rights)}
    return {"nodes": perft(board, color, payload.depth, rights)}
