from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from .errors import ConstructionError

# The board is always 8x8; rows are numbered 1..8 top to bottom, columns A..H left to right.
GRID_SIZE = 8
COLUMNS = "ABCDEFGH"


class Direction(Enum):
    """The eight unit steps from a tile, in row-major order."""

    NW = (-1, -1)
    N = (-1, 0)
    NE = (-1, 1)
    W = (0, -1)
    E = (0, 1)
    SW = (1, -1)
    S = (1, 0)
    SE = (1, 1)

    @property
    def drow(self) -> int:
        return self.value[0]

    @property
    def dcol(self) -> int:
        return self.value[1]


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE


@dataclass(frozen=True, order=True)
class TilePos:
    row: int
    col: int

    def __post_init__(self) -> None:
        if not in_bounds(self.row, self.col):
            raise ConstructionError(f"tile ({self.row}, {self.col}) is outside the {GRID_SIZE}x{GRID_SIZE} grid")

    @classmethod
    def new(cls, row: int, col: int) -> Optional["TilePos"]:
        """Return the position, or None when it falls outside the grid."""
        if not in_bounds(row, col):
            return None
        return cls(row, col)

    def translate(self, direction: Direction, steps: int = 1) -> Optional["TilePos"]:
        return TilePos.new(self.row + direction.drow * steps, self.col + direction.dcol * steps)

    def ray(self, direction: Direction) -> Iterator["TilePos"]:
        """Yield the tiles from the neighbour in `direction` up to the edge of the board."""
        pos = self.translate(direction)
        while pos is not None:
            yield pos
            pos = pos.translate(direction)

    def neighbors(self) -> List["TilePos"]:
        found = []
        for direction in Direction:
            pos = self.translate(direction)
            if pos is not None:
                found.append(pos)
        return found

    @property
    def notation(self) -> str:
        return f"{COLUMNS[self.col]}{self.row + 1}"

    def __str__(self) -> str:
        return self.notation


def all_positions() -> Iterator[TilePos]:
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            yield TilePos(row, col)
