from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .piece import Piece
    from .tile_pos import TilePos


class ReversiError(Exception):
    """Base class for every error raised by the engine."""


class ConstructionError(ReversiError, ValueError):
    """A coordinate, move string or board text does not describe a tile on the grid."""


class InvalidMove(ReversiError, ValueError):
    """The move is not legal in the current position. The game is left untouched."""

    def __init__(self, pos: Optional["TilePos"], player: "Piece", reason: str = "illegal move") -> None:
        self.pos = pos
        self.player = player
        self.reason = reason
        where = pos.notation if pos is not None else "pass"
        super().__init__(f"{reason}: {player.name} {where}")


class TerminalStateViolation(ReversiError):
    """A move or search was requested after the game ended."""
