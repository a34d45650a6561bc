from __future__ import annotations

import logging
import random
import time
from typing import Callable, Optional, Protocol

from .engine.errors import ConstructionError
from .engine.eval import Evaluator, disc_differential
from .engine.notation import parse_move
from .engine.reversi import Reversi
from .engine.search import SearchLimits, Searcher
from .engine.tile_pos import TilePos

logger = logging.getLogger(__name__)

MOVE_PROMPT = "Enter your move (e.g. A1): "


class Player(Protocol):
    def choose_move(self, game: Reversi) -> Optional[TilePos]:
        """Return a legal move for the player to move, or None to stop the game."""


class NegamaxPlayer:
    """Plays the negamax best move.

    Without an rng the choice is deterministic (first best move). With an
    rng, one of the equally scored best moves is picked at random.
    """

    def __init__(
        self,
        depth: int = 4,
        evaluate: Evaluator = disc_differential,
        rng: Optional[random.Random] = None,
        time_ms: Optional[int] = None,
        alpha_beta: bool = True,
    ) -> None:
        self.limits = SearchLimits(max_depth=depth, alpha_beta=alpha_beta, time_ms=time_ms)
        self.evaluate = evaluate
        self.rng = rng

    def choose_move(self, game: Reversi) -> Optional[TilePos]:
        start = time.perf_counter()
        searcher = Searcher(self.evaluate)
        result = searcher.search(game, self.limits)
        if self.rng is None or result.move is None:
            return result.move
        # The tie search shares the move's time budget
        deadline = None
        if self.limits.time_ms is not None:
            deadline = start + self.limits.time_ms / 1000
        ties = searcher.best_moves(game, result.depth, result.score, deadline=deadline)
        return self.rng.choice(ties) if ties else result.move


class RandomPlayer:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def choose_move(self, game: Reversi) -> Optional[TilePos]:
        moves = game.valid_moves()
        return self.rng.choice(moves) if moves else None


class HumanPlayer:
    """Reads moves from a prompt until a legal one is entered."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self.input_fn = input_fn
        self.output_fn = output_fn

    def choose_move(self, game: Reversi) -> Optional[TilePos]:
        while True:
            try:
                line = self.input_fn(MOVE_PROMPT)
            except EOFError:
                logger.info("End of input, leaving the game")
                return None
            try:
                move = parse_move(line)
            except ConstructionError:
                self.output_fn(f"Invalid input: `{line.strip()}`. Enter something like 'A1'.\n")
                continue
            if not game.is_valid_move(move):
                self.output_fn(f"Invalid move: `{move}`. Your move must flip at least one tile.\n")
                continue
            return move
