"""Command-line utilities for the chess engine."""

from __future__ import annotations

import argparse
import random

from chesscore.board import Board
from chesscore.config import DEFAULT_CONFIG_PATH, Config, configure_logging
from chesscore.constants import START_FEN, WHITE, opposite
from chesscore.game import game_status, self_play
from chesscore.move import Move
from chesscore.movegen import legal_moves
from chesscore.perft import perft, perft_divide
from chesscore.search import SearchEngine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Chess engine utilities")
    parser.add_argument("--fen", default=START_FEN, help="FEN position")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="TOML config file")
    parser.add_argument("--log-level", default=None, help="Override configured log level")

    subparsers = parser.add_subparsers(dest="command", required=False)

    perft_parser = subparsers.add_parser("perft", help="Run perft")
    perft_parser.add_argument("depth", type=int, help="Perft depth")
    perft_parser.add_argument("--divide", action="store_true", help="Show per-move split")

    subparsers.add_parser("legal", help="List legal moves")

    for name, help_text in (("search", "Find the best move"), ("selfplay", "Let the engine play itself")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--depth", type=int, default=None, help="Search depth")
        sub.add_argument("--no-pruning", action="store_true", help="Disable alpha-beta pruning")
        sub.add_argument("--no-ordering", action="store_true", help="Disable MVV-LVA move ordering")
        sub.add_argument("--seed", type=int, default=None, help="Seed for tie-breaking")
        if name == "selfplay":
            sub.add_argument("--plies", type=int, default=40, help="Maximum plies to play")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def _search_options(args: argparse.Namespace, cfg: Config) -> tuple[int, bool, bool, SearchEngine]:
    depth = args.depth if args.depth is not None else cfg.search.depth
    use_pruning = cfg.search.use_pruning and not args.no_pruning
    use_ordering = cfg.search.use_ordering and not args.no_ordering
    seed = args.seed if args.seed is not None else cfg.search.seed
    engine = SearchEngine(random.Random(seed) if seed is not None else None)
    return depth, use_pruning, use_ordering, engine


def run() -> None:
    parser = build_parser()
    args = parser.parse_args()

    cfg = Config.load_from_toml(args.config)
    configure_logging(args.log_level or cfg.log_level)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("api.server:app", host=args.host, port=args.port)
        return

    try:
        board, color, rights = Board.from_fen(args.fen)
    except ValueError as exc:
        parser.error(str(exc))

    if args.command == "perft":
        if args.divide:
            for move, count in perft_divide(board, color, args.depth, rights).items():
                print(f"{move}: {count}")
        else:
            print(perft(board, color, args.depth, rights))
        return

    if args.command == "legal":
        moves = sorted(legal_moves(board, color, rights), key=Move.as_quad)
        print(" ".join(move.uci() for move in moves))
        print(f"status {game_status(board, color, rights).value}")
        return

    if args.command == "search":
        depth, use_pruning, use_ordering, engine = _search_options(args, cfg)
        result = engine.search(board, color, depth, rights, use_pruning, use_ordering)
        print(f"bestmove {result.best_move.uci() if result.best_move else '0000'}")
        print(f"depth {result.depth} score {result.score} nodes {result.nodes} cutoffs {result.cutoffs} nps {result.nps}")
        return

    if args.command == "selfplay":
        depth, use_pruning, use_ordering, engine = _search_options(args, cfg)
        for mover, move, rights in self_play(
            board, color, rights, depth, args.plies, engine, use_pruning, use_ordering
        ):
            side = "w" if mover == WHITE else "b"
            print(f"{side} {move.uci()}")
            color = opposite(mover)
        print(f"status {game_status(board, color, rights).value}")
        print(board.to_fen(color, rights))
        return

    print(board.to_fen(color, rights))


if __name__ == "__main__":
    run()
