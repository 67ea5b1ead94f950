#!/usr/bin/env python3
"""Generate reproducible benchmark CSVs for the perft and search paths."""

from __future__ import annotations

import argparse
import csv
import random
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chesscore.board import Board
from chesscore.constants import START_FEN
from chesscore.perft import perft
from chesscore.search import SearchEngine


KIWIPETE_FEN = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"

# (name, use_pruning, use_ordering)
SEARCH_MODES = (
    ("minimax", False, False),
    ("alphabeta", True, False),
    ("alphabeta_mvvlva", True, True),
)


@dataclass(frozen=True)
class PositionCase:
    name: str
    fen: str


def _write_csv(path: Path, fieldnames: list[str], rows: list[dict[str, object]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def run_perft_bench(depths_by_case: dict[PositionCase, list[int]]) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for case, depths in depths_by_case.items():
        for depth in depths:
            board, color, rights = Board.from_fen(case.fen)
            start = perf_counter()
            nodes = perft(board, color, depth, rights)
            elapsed_ms = (perf_counter() - start) * 1000.0
            nps = int(nodes / max(elapsed_ms / 1000.0, 1e-9))
            rows.append(
                {
                    "position": case.name,
                    "depth": depth,
                    "nodes": nodes,
                    "elapsed_ms": round(elapsed_ms, 3),
                    "nps": nps,
                }
            )
    return rows


def run_search_bench(cases: list[PositionCase], depths: list[int], seed: int) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for case in cases:
        for depth in depths:
            for mode, use_pruning, use_ordering in SEARCH_MODES:
                board, color, rights = Board.from_fen(case.fen)
                engine = SearchEngine(random.Random(seed))
                result = engine.search(board, color, depth, rights, use_pruning, use_ordering)
                rows.append(
                    {
                        "position": case.name,
                        "mode": mode,
                        "depth": depth,
                        "nodes": result.nodes,
                        "cutoffs": result.cutoffs,
                        "elapsed_ms": round(result.elapsed_ms, 3),
                        "nps": result.nps,
                        "best_move": result.best_move.uci() if result.best_move else "0000",
                        "score": result.score,
                    }
                )
    return rows


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate benchmark CSV files")
    parser.add_argument(
        "--metrics-dir",
        default=str(ROOT / "docs" / "metrics"),
        help="Output directory for CSV metrics",
    )
    parser.add_argument("--max-depth", type=int, default=3, help="Deepest search depth to benchmark")
    parser.add_argument("--seed", type=int, default=0, help="Tie-breaking seed")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    metrics_dir = Path(args.metrics_dir)

    perft_cases = [
        PositionCase("start", START_FEN),
        PositionCase("kiwipete", KIWIPETE_FEN),
    ]
    search_cases = [
        PositionCase("start", START_FEN),
        PositionCase("open_after_e4", "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"),
    ]

    perft_rows = run_perft_bench(
        {
            perft_cases[0]: [1, 2, 3],
            # Attack detection regenerates moves per piece; keep Kiwipete shallow.
            perft_cases[1]: [1, 2],
        }
    )
    search_rows = run_search_bench(search_cases, depths=list(range(1, args.max_depth + 1)), seed=args.seed)

    perft_path = metrics_dir / "perft_metrics.csv"
    search_path = metrics_dir / "search_metrics.csv"

    _write_csv(
        perft_path,
        fieldnames=["position", "depth", "nodes", "elapsed_ms", "nps"],
        rows=perft_rows,
    )
    _write_csv(
        search_path,
        fieldnames=[
            "position",
            "mode",
            "depth",
            "nodes",
            "cutoffs",
            "elapsed_ms",
            "nps",
            "best_move",
            "score",
        ],
        rows=search_rows,
    )

    print(f"wrote {perft_path}")
    print(f"wrote {search_path}")


if __name__ == "__main__":
    main()
