#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import os
import sys
import time

# Allow running this script directly via `python scripts/perft.py`
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from src.rules.board import Board, STARTPOS_FEN
from src.rules.errors import MalformedInput
from src.rules.perft import divide, perft


def main() -> int:
    parser = argparse.ArgumentParser(description="Count leaf nodes of the legal move tree")
    parser.add_argument(
        "--fen", type=str, default=STARTPOS_FEN, help="FEN string (default: startpos)"
    )
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument(
        "--divide", action="store_true", help="Print the subtree count of every root move"
    )
    args = parser.parse_args()
    if args.depth < 0:
        parser.error("--depth must be >= 0")

    try:
        board = Board.from_fen(args.fen)
    except MalformedInput as e:
        print(f"invalid FEN: {e}", file=sys.stderr)
        return 2

    start = time.perf_counter()
    if args.divide and args.depth > 0:
        counts = divide(board, args.depth)
        for uci in sorted(counts):
            print(f"{uci}: {counts[uci]}")
        nodes = sum(counts.values())
    else:
        nodes = perft(board, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
