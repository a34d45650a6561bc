from __future__ import annotations

import argparse
from time import perf_counter

from ..engine.perft import perft, play_moves


def main() -> None:
    p = argparse.ArgumentParser(prog="reversi-perft")
    p.add_argument("--depth", type=int, required=True)
    p.add_argument("--moves", type=str, default="", help="move sequence from the start, like d3c3c4 (-- for a pass)")
    args = p.parse_args()

    moves = [args.moves[i : i + 2] for i in range(0, len(args.moves), 2)]
    game = play_moves(moves)
    t0 = perf_counter()
    n = perft(game, args.depth)
    dt = perf_counter() - t0
    print(f"perft(d={args.depth})={n} in {dt:.3f}s")
