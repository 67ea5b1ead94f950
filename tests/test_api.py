"""API smoke tests for the HTTP surface."""

from __future__ import annotations

from fastapi.testclient import TestClient

from api.server import app
from chesscore.board import Board
from chesscore.constants import START_FEN

FOOLS_MATE_FEN = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"

client = TestClient(app)


def test_health() -> None:
    health = client.get("/health")
    assert health.status_code == 200
    assert health.json() == {"status": "ok"}
    assert "x-request-id" in health.headers


def test_legal_moves_defaults_to_start_position() -> None:
    response = client.post("/legal-moves", json={})
    assert response.status_code == 200
    body = response.json()
    assert len(body["legal_moves"]) == 20
    assert len(body["moves"]) == 80
    assert body["status"] == "ongoing"
    assert body["evaluation"] == 0
    assert body["fen"] == START_FEN


def test_legal_moves_from_flat_board() -> None:
    cells = Board.startpos().to_cells()
    response = client.post("/legal-moves", json={"board": cells, "color": 1, "castling_rights": 0})
    assert response.status_code == 200
    body = response.json()
    assert body["side_to_move"] == "b"
    assert "e7e5" in body["legal_moves"]


def test_checkmate_reported() -> None:
    response = client.post("/legal-moves", json={"fen": FOOLS_MATE_FEN})
    body = response.json()
    assert body["status"] == "checkmate"
    assert body["in_check"] is True

    response = client.post("/in-check", json={"fen": FOOLS_MATE_FEN})
    assert response.json() == {"in_check": True}


def test_best_move_is_legal() -> None:
    response = client.post("/best-move", json={"fen": START_FEN, "depth": 2, "seed": 4})
    assert response.status_code == 200
    body = response.json()
    assert body["best_move"] in body["legal_moves"]
    assert len(body["move"]) == 4
    assert body["depth"] == 2
    assert body["nodes"] > 0


def test_best_move_empty_when_mated() -> None:
    response = client.post("/best-move", json={"fen": FOOLS_MATE_FEN, "depth": 2})
    body = response.json()
    assert body["best_move"] is None
    assert body["move"] == []


def test_perft_endpoint() -> None:
    response = client.post("/perft", json={"depth": 2})
    assert response.json() == {"nodes": 400}

    response = client.post("/perft", json={"depth": 1, "divide": True})
    assert sum(response.json()["divide"].values()) == 20


def test_bad_input_rejected() -> None:
    assert client.post("/legal-moves", json={"fen": "not a fen"}).status_code == 400
    assert client.post("/legal-moves", json={"board": [0] * 10}).status_code == 422
    assert client.post("/legal-moves", json={"board": [9] * 64}).status_code == 400
    assert client.post("/legal-moves", json={"castling_rights": 16}).status_code == 422
    assert client.post("/best-move", json={"depth": 0}).status_code == 422
