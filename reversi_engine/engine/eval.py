from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from .piece import Piece
from .reversi import Reversi
from .tile_pos import GRID_SIZE, TilePos

# Static evaluators score a position for `player`; positive is good for them.
# Every evaluator must satisfy f(game, p) == -f(game, p.opposite()).
Evaluator = Callable[[Reversi, Piece], int]


@dataclass(frozen=True)
class EvalWeights:
    corner: int = 4
    side: int = 2


DEFAULT_WEIGHTS = EvalWeights()

_LAST = GRID_SIZE - 1
CORNERS = (TilePos(0, 0), TilePos(0, _LAST), TilePos(_LAST, 0), TilePos(_LAST, _LAST))
# Walked row by row and column by column, so each corner appears twice
SIDES = tuple(
    [TilePos(row, col) for row in range(GRID_SIZE) for col in (0, _LAST)]
    + [TilePos(row, col) for col in range(GRID_SIZE) for row in (0, _LAST)]
)


def disc_differential(game: Reversi, player: Piece) -> int:
    scores = game.scores()
    return scores[player] - scores[player.opposite()]


def positional(game: Reversi, player: Piece, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    # Disc balance plus bonuses for holding corners and edges
    score = disc_differential(game, player)
    for tiles, bonus in ((CORNERS, weights.corner), (SIDES, weights.side)):
        for pos in tiles:
            piece = game.tile(pos)
            if piece is player:
                score += bonus
            elif piece is not None:
                score -= bonus
    return score


EVALUATORS: Dict[str, Evaluator] = {
    "disc": disc_differential,
    "positional": positional,
}
