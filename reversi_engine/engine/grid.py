from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .piece import Piece
from .tile_pos import GRID_SIZE, TilePos, all_positions

Cell = Optional[Piece]


class Grid:
    """Fixed 8x8 storage of tiles, each empty (None) or holding one piece.

    `_tiles[r][c]` is the tile at row r and column c. The lists never leave
    this class; readers go through `get` and `rows`.
    """

    def __init__(self) -> None:
        self._tiles: List[List[Cell]] = [[None] * GRID_SIZE for _ in range(GRID_SIZE)]

    @staticmethod
    def _index(pos: TilePos) -> Tuple[int, int]:
        if not (0 <= pos.row < GRID_SIZE and 0 <= pos.col < GRID_SIZE):
            raise IndexError(f"tile {pos!r} is outside the grid")
        return pos.row, pos.col

    def get(self, pos: TilePos) -> Cell:
        r, c = self._index(pos)
        return self._tiles[r][c]

    def set(self, pos: TilePos, piece: Piece) -> None:
        r, c = self._index(pos)
        self._tiles[r][c] = piece

    def clear(self, pos: TilePos) -> None:
        r, c = self._index(pos)
        self._tiles[r][c] = None

    def is_full(self) -> bool:
        return all(self.get(pos) is not None for pos in all_positions())

    def count(self, piece: Piece) -> int:
        return sum(row.count(piece) for row in self._tiles)

    def rows(self) -> Iterator[Tuple[int, Tuple[Cell, ...]]]:
        for index, row in enumerate(self._tiles):
            yield index, tuple(row)

    def copy(self) -> "Grid":
        copied = Grid()
        copied._tiles = [row[:] for row in self._tiles]
        return copied

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._tiles == other._tiles

    def __repr__(self) -> str:
        lines = ("".join(p.symbol if p else "." for p in row) for row in self._tiles)
        return f"Grid({'/'.join(lines)})"
