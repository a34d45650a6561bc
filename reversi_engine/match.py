from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from .engine.errors import InvalidMove
from .engine.notation import moves_to_string
from .engine.piece import Piece
from .engine.reversi import Reversi
from .engine.tile_pos import TilePos
from .logging_setup import log_event
from .players import Player

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    game: Reversi
    # (player, move) in play order; a None move is a pass
    moves: List[Tuple[Piece, Optional[TilePos]]] = field(default_factory=list)
    finished: bool = False

    @property
    def scores(self) -> Dict[Piece, int]:
        return self.game.scores()

    @property
    def winner(self) -> Optional[Piece]:
        return self.game.winner()

    @property
    def transcript(self) -> str:
        return moves_to_string(move for _, move in self.moves)


def play_game(
    players: Mapping[Piece, Player],
    game: Optional[Reversi] = None,
    on_update: Optional[Callable[[Reversi], None]] = None,
) -> GameRecord:
    """Run the turn loop until the game ends or a player stops it by returning None."""
    record = GameRecord(game=game.clone() if game is not None else Reversi())
    g = record.game
    log_event("match", "game_start", to_move=g.current_player.name)

    while True:
        if on_update is not None:
            on_update(g)
        if g.is_terminal():
            record.finished = True
            break

        player = g.current_player
        if not g.has_valid_move(player):
            logger.info("%s has no move and passes", player.name)
            g.pass_turn()
            record.moves.append((player, None))
            continue

        move: Optional[TilePos] = players[player].choose_move(g)
        if move is None:
            logger.info("%s stopped the game", player.name)
            break
        if not g.is_valid_move(move):
            raise InvalidMove(move, player, reason="player chose an illegal move")
        g.apply_move(move)
        record.moves.append((player, move))
        logger.info("%s plays %s", player.name, move)

    scores = g.scores()
    log_event(
        "match",
        "game_end",
        finished=record.finished,
        black=scores[Piece.BLACK],
        white=scores[Piece.WHITE],
        winner=record.winner.name if record.winner else None,
        moves=record.transcript,
    )
    return record
