#!/usr/bin/env python3
"""Render benchmark charts from CSV metrics into SVG."""

from __future__ import annotations

import argparse
import csv
from collections import defaultdict
from pathlib import Path

import matplotlib.pyplot as plt

ROOT = Path(__file__).resolve().parents[1]

PALETTE = {
    "bg": "#161616",
    "panel": "#1e1e1e",
    "grid": "#2b2b2b",
    "text": "#e6e2d8",
    "muted": "#bdb8ad",
    "gold": "#c6a25a",
    "red": "#7d2a2a",
    "green": "#4e7d49",
}


def _load_csv(path: Path) -> list[dict[str, str]]:
    with path.open("r", encoding="utf-8") as handle:
        return list(csv.DictReader(handle))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plot benchmark metrics")
    parser.add_argument(
        "--metrics-dir",
        default=str(ROOT / "docs" / "metrics"),
        help="Directory containing benchmark CSV files",
    )
    parser.add_argument(
        "--output",
        default=str(ROOT / "docs" / "visuals" / "search-nodes.svg"),
        help="Output SVG path",
    )
    parser.add_argument("--position", default="start", help="Position name to chart")
    return parser.parse_args()


def plot(search_rows: list[dict[str, str]], position: str, output: Path) -> None:
    plt.rcParams.update(
        {
            "font.family": "DejaVu Sans",
            "axes.facecolor": PALETTE["panel"],
            "figure.facecolor": PALETTE["bg"],
            "axes.edgecolor": PALETTE["grid"],
            "axes.labelcolor": PALETTE["text"],
            "xtick.color": PALETTE["muted"],
            "ytick.color": PALETTE["muted"],
            "text.color": PALETTE["text"],
            "axes.titlecolor": PALETTE["text"],
            "grid.color": PALETTE["grid"],
        }
    )

    fig, axes = plt.subplots(1, 2, figsize=(16, 6), dpi=150)
    fig.suptitle(f"Search cost by mode ({position})", fontsize=18, fontweight="bold", color=PALETTE["text"])

    by_mode: dict[str, list[tuple[int, int, float]]] = defaultdict(list)
    for row in search_rows:
        if row["position"] != position:
            continue
        by_mode[row["mode"]].append((int(row["depth"]), int(row["nodes"]), float(row["elapsed_ms"])))

    colors = [PALETTE["gold"], PALETTE["red"], PALETTE["green"]]
    ax0, ax1 = axes
    for idx, (mode, data) in enumerate(sorted(by_mode.items())):
        data.sort(key=lambda x: x[0])
        depths = [d for d, _, _ in data]
        nodes = [n for _, n, _ in data]
        elapsed = [e for _, _, e in data]
        color = colors[idx % len(colors)]
        ax0.plot(depths, nodes, marker="o", linewidth=2.5, color=color, label=mode)
        ax1.plot(depths, elapsed, marker="s", linewidth=2.5, color=color, label=mode)

    ax0.set_title("Nodes visited by depth")
    ax0.set_xlabel("Depth")
    ax0.set_ylabel("Nodes")
    ax0.set_yscale("log")
    ax0.grid(True, alpha=0.6)
    ax0.legend(frameon=False)

    ax1.set_title("Elapsed time by depth")
    ax1.set_xlabel("Depth")
    ax1.set_ylabel("ms")
    ax1.set_yscale("log")
    ax1.grid(True, alpha=0.6)
    ax1.legend(frameon=False)

    output.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout(rect=(0, 0, 1, 0.95))
    fig.savefig(output, format="svg")
    plt.close(fig)


def main() -> None:
    args = parse_args()
    metrics_dir = Path(args.metrics_dir)
    output = Path(args.output)

    search_rows = _load_csv(metrics_dir / "search_metrics.csv")
    plot(search_rows, args.position, output)
    print(f"wrote {output}")


if __name__ == "__main__":
    main()
