#!/usr/bin/env python3
"""
Benchmark: nodes visited and time per move, alpha-beta versus full width.

Runs the engine search on a fixed set of positions twice: once with
alpha-beta pruning and once full-width. Both must agree on the root score;
the node ratio shows how much the (unordered) pruning saves.

Runs against the installed package (pip install -e .).

Usage: python3 tools/bench.py [--depth N] [--skip-full]
"""
import argparse
import logging
import math
import random
import time

from parkchess.pieces import Color
from parkchess.position import Position
from parkchess.search import Search

# Fixed forever so that numbers stay comparable between versions.
# Black (the engine) is to move in every position.
POSITIONS = [
    ("After 1.e4",   "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b - - 0 1"),
    ("Open centre",  "r1bqkbnr/pppp1ppp/2n5/4p3/3PP3/5N2/PPP2PPP/RNBQKB1R b - - 0 3"),
    ("Hanging rook", "4k3/8/8/8/8/8/3r4/R3K3 b - - 0 1"),
    ("Queen ending", "6k1/5ppp/8/3q4/8/8/5PPP/3Q2K1 b - - 0 1"),
    ("Pawn race",    "8/1p4k1/p7/P1K5/8/8/8/8 b - - 0 1"),
]


def run_position(label: str, fen: str, depth: int, full_width: bool) -> dict:
    """Search one position and return its metrics.

    Args:
        label:      Human-readable position name for display.
        fen:        Position to search (placement and side to move only).
        depth:      Search depth in plies.
        full_width: Disable alpha-beta pruning below the root.

    Returns:
        Dict with keys: label, move, score, nodes, time_ms.
    """
    position = Position.from_fen(fen)
    search = Search(depth=depth, engine_color=Color.BLACK, jitter=0.0, rng=random.Random(0))

    start = time.monotonic()
    if full_width:
        best = -math.inf
        for move in position.possible_moves_for_color(Color.BLACK):
            child = position.copy()
            child.apply_move(move)
            best = max(best, search.minimax(child, depth - 1, -math.inf, math.inf, False, prune=False))
        move_name, score = "-", best
    else:
        move = search.find_best_move(position)
        move_name = move.uci() if move is not None else "(none)"
        score = search.stats.best_score
    elapsed_ms = int((time.monotonic() - start) * 1000)

    return {
        "label": label,
        "move": move_name,
        "score": score,
        "nodes": search.stats.node_count,
        "time_ms": elapsed_ms,
    }


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    parser = argparse.ArgumentParser(description="Park Chess search benchmark")
    parser.add_argument("--depth", type=int, default=3)
    parser.add_argument("--skip-full", action="store_true", help="only run the pruned search")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    print(f"Park Chess search benchmark — depth {args.depth}")
    print()
    print(
        f"{'Position':<14} {'Move':<7} {'Score':>9} {'Nodes':>9} "
        f"{'Full':>9} {'Ratio':>6} {'Time(ms)':>9}"
    )
    print("-" * 70)

    for label, fen in POSITIONS:
        pruned = run_position(label, fen, args.depth, full_width=False)
        full_nodes = ratio = "-"
        if not args.skip_full:
            full = run_position(label, fen, args.depth, full_width=True)
            full_nodes = f"{full['nodes']:,}"
            ratio = f"{full['nodes'] / max(1, pruned['nodes']):.1f}"
        print(
            f"{pruned['label']:<14} {pruned['move']:<7} {pruned['score']:>9.1f} "
            f"{pruned['nodes']:>9,} {full_nodes:>9} {ratio:>6} {pruned['time_ms']:>9,}"
        )

    print()
    print("Full-width root scores include no capture bonus; compare node counts only.")


if __name__ == "__main__":
    main()
