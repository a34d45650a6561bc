from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import InvalidMove, TerminalStateViolation
from .grid import Cell, Grid
from .piece import Piece
from .tile_pos import Direction, TilePos, all_positions

logger = logging.getLogger(__name__)


class Reversi:
    """A Reversi game: the grid plus the player whose turn it is.

    The state only changes through `apply_move` (and `pass_turn` for
    hand-built positions). Both check everything before touching the grid,
    so a rejected move leaves the game exactly as it was.
    """

    def __init__(self) -> None:
        self._grid = Grid()
        # Standard opening square: white on d4/e5, black on e4/d5
        self._grid.set(TilePos(3, 3), Piece.WHITE)
        self._grid.set(TilePos(3, 4), Piece.BLACK)
        self._grid.set(TilePos(4, 3), Piece.BLACK)
        self._grid.set(TilePos(4, 4), Piece.WHITE)
        self._current_player = Piece.BLACK

    @classmethod
    def from_grid(cls, grid: Grid, current_player: Piece = Piece.BLACK) -> "Reversi":
        game = cls.__new__(cls)
        game._grid = grid.copy()
        game._current_player = current_player
        return game

    def clone(self) -> "Reversi":
        return Reversi.from_grid(self._grid, self._current_player)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def current_player(self) -> Piece:
        return self._current_player

    def tile(self, pos: TilePos) -> Cell:
        return self._grid.get(pos)

    def rows(self) -> Iterator[Tuple[int, Tuple[Cell, ...]]]:
        return self._grid.rows()

    def grid(self) -> Grid:
        """Return a copy of the grid."""
        return self._grid.copy()

    def scores(self) -> Dict[Piece, int]:
        return {piece: self._grid.count(piece) for piece in Piece}

    def winner(self) -> Optional[Piece]:
        scores = self.scores()
        if scores[Piece.BLACK] > scores[Piece.WHITE]:
            return Piece.BLACK
        if scores[Piece.WHITE] > scores[Piece.BLACK]:
            return Piece.WHITE
        return None

    def flips(self, pos: TilePos, player: Optional[Piece] = None) -> List[TilePos]:
        """Opponent tiles that would be captured by `player` playing at `pos`.

        Along each direction the captured run is one or more opponent pieces
        followed directly by one of the player's own pieces. A run that meets
        an empty tile or the edge captures nothing.
        """
        if player is None:
            player = self._current_player
        if self._grid.get(pos) is not None:
            return []
        opponent = player.opposite()
        captured: List[TilePos] = []
        for direction in Direction:
            run: List[TilePos] = []
            for step in pos.ray(direction):
                piece = self._grid.get(step)
                if piece is opponent:
                    run.append(step)
                    continue
                if piece is player:
                    captured.extend(run)
                break
        return captured

    def is_valid_move(self, pos: TilePos, player: Optional[Piece] = None) -> bool:
        if player is None:
            player = self._current_player
        if self._grid.get(pos) is not None:
            return False
        opponent = player.opposite()
        for direction in Direction:
            seen_opponent = False
            for step in pos.ray(direction):
                piece = self._grid.get(step)
                if piece is opponent:
                    seen_opponent = True
                    continue
                if piece is player and seen_opponent:
                    return True
                break
        return False

    def valid_moves(self, player: Optional[Piece] = None) -> List[TilePos]:
        """Legal moves for `player` (default: the player to move), in row-major order."""
        return [pos for pos in all_positions() if self.is_valid_move(pos, player)]

    def has_valid_move(self, player: Optional[Piece] = None) -> bool:
        return any(self.is_valid_move(pos, player) for pos in all_positions())

    def is_terminal(self) -> bool:
        return not self.has_valid_move(Piece.BLACK) and not self.has_valid_move(Piece.WHITE)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def apply_move(self, pos: TilePos, player: Optional[Piece] = None) -> None:
        if player is None:
            player = self._current_player
        flips = self.flips(pos, player)
        if not flips or player is not self._current_player:
            # A terminal position has no legal move at all, report that first
            if self.is_terminal():
                raise TerminalStateViolation(f"game is over, {player.name} cannot play {pos}")
            if player is not self._current_player:
                raise InvalidMove(pos, player, reason="not this player's turn")
            raise InvalidMove(pos, player)

        self._grid.set(pos, player)
        for captured in flips:
            self._grid.set(captured, player)

        opponent = player.opposite()
        if self.has_valid_move(opponent):
            self._current_player = opponent
        else:
            # Opponent must pass; if the mover is stuck too the game has ended
            logger.debug("%s has no reply to %s, %s moves again", opponent.name, pos, player.name)

    def pass_turn(self) -> None:
        """Hand the turn over when the player to move has no legal move."""
        if self.is_terminal():
            raise TerminalStateViolation("game is over, nobody can pass")
        if self.has_valid_move(self._current_player):
            raise InvalidMove(None, self._current_player, reason="cannot pass with moves available")
        self._current_player = self._current_player.opposite()

    def passed(self) -> "Reversi":
        """Return a copy with the turn handed over (see `pass_turn`)."""
        game = self.clone()
        game.pass_turn()
        return game

    def after(self, pos: TilePos) -> "Reversi":
        """Return the successor state of the current player playing `pos`."""
        game = self.clone()
        game.apply_move(pos)
        return game

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reversi):
            return NotImplemented
        return self._current_player is other._current_player and self._grid == other._grid

    def __repr__(self) -> str:
        return f"Reversi(to_move={self._current_player.name}, {self._grid!r})"
