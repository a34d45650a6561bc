from __future__ import annotations

from typing import Iterable, Optional

from .notation import PASS_NOTATION, parse_move
from .reversi import Reversi


def perft(game: Reversi, depth: int) -> int:
    """Count the move sequences of length `depth`.

    A forced pass counts as a move; a finished game counts as a single leaf.
    """
    if depth == 0 or game.is_terminal():
        return 1
    moves = game.valid_moves()
    if not moves:
        return perft(game.passed(), depth - 1)
    return sum(perft(game.after(move), depth - 1) for move in moves)


def play_moves(moves: Iterable[str], game: Optional[Reversi] = None) -> Reversi:
    g = Reversi() if game is None else game.clone()
    for mv in moves:
        if mv == PASS_NOTATION:
            g.pass_turn()
        else:
            g.apply_move(parse_move(mv))
    return g
