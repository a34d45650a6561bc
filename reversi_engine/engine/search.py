from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import TerminalStateViolation
from .eval import Evaluator, disc_differential
from .piece import Piece
from .reversi import Reversi
from .tile_pos import TilePos

logger = logging.getLogger(__name__)


@dataclass
class SearchLimits:
    max_depth: int = 4
    alpha_beta: bool = True
    # Wall-clock budget; when set, depths 1..max_depth are searched in turn
    time_ms: Optional[int] = None


@dataclass
class SearchResult:
    move: Optional[TilePos]  # None when the player to move is forced to pass
    score: int
    depth: int = 0
    nodes: int = 0
    time_ms: int = 0


class _SearchTimeout(Exception):
    pass


class Searcher:
    """Negamax search over cloned successor states.

    Scores are always relative to a player: `score(game, depth, p)` is how
    good `game` is for `p`. Turning a child's score into the parent's is a
    negation because the evaluators are zero-sum.
    """

    def __init__(self, evaluate: Evaluator = disc_differential) -> None:
        self.evaluate = evaluate
        self.nodes = 0
        self._deadline: Optional[float] = None

    def _visit(self) -> None:
        self.nodes += 1
        if self._deadline is not None and time.perf_counter() > self._deadline:
            raise _SearchTimeout()

    # ------------------------------------------------------------------
    # Plain negamax
    # ------------------------------------------------------------------
    def score(self, game: Reversi, depth: int, player: Piece) -> int:
        self._visit()
        if depth <= 0 or game.is_terminal():
            return self.evaluate(game, player)

        mover = game.current_player
        moves = game.valid_moves()
        if not moves:
            # Forced pass: same perspective, one ply used up
            return self.score(game.passed(), depth - 1, player)

        best = max(-self.score(game.after(move), depth - 1, mover.opposite()) for move in moves)
        return best if player is mover else -best

    # ------------------------------------------------------------------
    # Alpha-beta, same values as `score` for the player to move
    # ------------------------------------------------------------------
    def _alphabeta(self, game: Reversi, depth: int, alpha: float, beta: float) -> float:
        self._visit()
        mover = game.current_player
        if depth <= 0 or game.is_terminal():
            return self.evaluate(game, mover)

        moves = game.valid_moves()
        if not moves:
            return -self._alphabeta(game.passed(), depth - 1, -beta, -alpha)

        best = -math.inf
        for move in moves:
            value = self._child_value(game.after(move), mover, depth - 1, alpha, beta)
            if value > best:
                best = value
            if best > alpha:
                alpha = best
            if alpha >= beta:
                break
        return best

    def _child_value(self, child: Reversi, mover: Piece, depth: int, alpha: float, beta: float) -> float:
        # The mover keeps the turn when the opponent has to pass
        if child.current_player is mover:
            return self._alphabeta(child, depth, alpha, beta)
        return -self._alphabeta(child, depth, -beta, -alpha)

    # ------------------------------------------------------------------
    # Root
    # ------------------------------------------------------------------
    def score_moves(self, game: Reversi, depth: int) -> List[Tuple[TilePos, int]]:
        """Exact score of every legal move for the player to move."""
        mover = game.current_player
        return [(move, -self.score(game.after(move), depth - 1, mover.opposite())) for move in game.valid_moves()]

    def best_moves(
        self, game: Reversi, depth: int, score: int, deadline: Optional[float] = None,
    ) -> List[TilePos]:
        """Every move worth `score`, which must be the best score at `depth`.

        `deadline` is a `time.perf_counter()` value. Once it passes, the ties
        found so far are returned, which may be none.
        """
        mover = game.current_player
        ties: List[TilePos] = []
        self._deadline = deadline
        try:
            for move in game.valid_moves():
                # Null window just below the best score: a result >= score means a tie
                if self._child_value(game.after(move), mover, depth - 1, score - 1, score) >= score:
                    ties.append(move)
        except _SearchTimeout:
            logger.debug("tie search ran out of time after %d move(s)", len(ties))
        finally:
            self._deadline = None
        return ties

    def _root(self, game: Reversi, depth: int, alpha_beta: bool) -> Tuple[Optional[TilePos], int]:
        mover = game.current_player
        moves = game.valid_moves()
        if not moves:
            return None, self.score(game.passed(), depth - 1, mover)

        best_move: Optional[TilePos] = None
        best_score = -math.inf
        for move in moves:
            child = game.after(move)
            if alpha_beta:
                value = self._child_value(child, mover, depth - 1, best_score, math.inf)
            else:
                value = -self.score(child, depth - 1, mover.opposite())
            # Strict comparison keeps the first of equally scored moves
            if value > best_score:
                best_score = value
                best_move = move
        return best_move, int(best_score)

    def search(self, game: Reversi, limits: SearchLimits) -> SearchResult:
        if limits.max_depth < 1:
            raise ValueError(f"search depth must be at least 1, got {limits.max_depth}")
        if game.is_terminal():
            raise TerminalStateViolation("cannot search a finished game")

        start = time.perf_counter()
        self.nodes = 0
        deadline = start + limits.time_ms / 1000 if limits.time_ms is not None else None
        depths = range(1, limits.max_depth + 1) if deadline is not None else [limits.max_depth]

        result: Optional[SearchResult] = None
        for depth in depths:
            # The first iteration always runs to completion
            self._deadline = deadline if result is not None else None
            try:
                move, score = self._root(game, depth, limits.alpha_beta)
            except _SearchTimeout:
                logger.debug("search budget of %sms ran out at depth %d", limits.time_ms, depth)
                break
            finally:
                self._deadline = None
            elapsed_ms = int((time.perf_counter() - start) * 1000)
            result = SearchResult(move, score, depth, self.nodes, elapsed_ms)
            if deadline is not None and time.perf_counter() >= deadline:
                break

        assert result is not None
        logger.debug(
            "search %s depth=%d move=%s score=%d nodes=%d time_ms=%d",
            game.current_player.name, result.depth, result.move, result.score, result.nodes, result.time_ms,
        )
        return result


def negamax_score(game: Reversi, depth: int, player: Piece, evaluate: Evaluator = disc_differential) -> int:
    """Value of `game` for `player` after searching `depth` plies."""
    return Searcher(evaluate).score(game, depth, player)


def best_move(
    game: Reversi,
    depth: int,
    evaluate: Evaluator = disc_differential,
    alpha_beta: bool = True,
) -> SearchResult:
    """Best move for the player to move; ties go to the first move in `valid_moves` order."""
    return Searcher(evaluate).search(game, SearchLimits(max_depth=depth, alpha_beta=alpha_beta))
