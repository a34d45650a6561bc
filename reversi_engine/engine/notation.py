"""
Coordinate notation for Reversi moves and boards.

A tile is written column letter then row number, e.g. 'A1' for the top-left
corner and 'H8' for the bottom-right. Move input also accepts the reversed
'1A' form and lower-case letters. Boards are written as eight lines of
'B' (black), 'W' (white) and '.' (empty).
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .errors import ConstructionError
from .grid import Grid
from .piece import Piece
from .tile_pos import COLUMNS, GRID_SIZE, TilePos

# Written in place of a move when a player has to pass
PASS_NOTATION = '--'
EMPTY_SYMBOL = '.'


def to_notation(pos: TilePos) -> str:
    """Convert a tile position to notation (e.g. TilePos(0, 0) -> 'A1')."""
    return pos.notation


def parse_move(text: str) -> TilePos:
    """Parse 'A1', 'a1', '1A' or '1a' into a tile position."""
    move = text.strip().upper()
    if len(move) != 2:
        raise ConstructionError(f"Invalid move: {text.strip()!r}")

    if move[0].isdigit():
        move = move[1] + move[0]
    col_char, row_char = move

    col = COLUMNS.find(col_char)
    if col < 0 or not row_char.isdigit():
        raise ConstructionError(f"Invalid move: {text.strip()!r}")

    pos = TilePos.new(int(row_char) - 1, col)
    if pos is None:
        raise ConstructionError(f"Invalid move: {text.strip()!r}")
    return pos


def moves_to_string(moves: Iterable[Optional[TilePos]]) -> str:
    """Join moves into one string, writing passes (None) as '--'."""
    return ''.join(PASS_NOTATION if move is None else to_notation(move) for move in moves)


def string_to_moves(moves_str: str) -> List[Optional[TilePos]]:
    """Split a string like 'D3C3--C4' into moves, with None for each pass."""
    if len(moves_str) % 2:
        raise ConstructionError(f"Incomplete move list: {moves_str!r}")
    moves: List[Optional[TilePos]] = []
    for i in range(0, len(moves_str), 2):
        chunk = moves_str[i:i + 2]
        moves.append(None if chunk == PASS_NOTATION else parse_move(chunk))
    return moves


def grid_from_text(text: str) -> Grid:
    """Build a grid from eight lines of 'B', 'W' and '.'; blank lines and spaces are ignored."""
    lines = [line.replace(' ', '') for line in text.strip().splitlines() if line.strip()]
    if len(lines) != GRID_SIZE or any(len(line) != GRID_SIZE for line in lines):
        raise ConstructionError(f"Board text must be {GRID_SIZE} lines of {GRID_SIZE} tiles")

    grid = Grid()
    for row, line in enumerate(lines):
        for col, char in enumerate(line):
            if char == EMPTY_SYMBOL:
                continue
            try:
                piece = Piece.from_symbol(char)
            except ValueError:
                raise ConstructionError(f"Unknown tile {char!r} at row {row + 1}") from None
            grid.set(TilePos(row, col), piece)
    return grid


def grid_to_text(grid: Grid) -> str:
    return '\n'.join(
        ''.join(EMPTY_SYMBOL if piece is None else piece.symbol for piece in cells)
        for _, cells in grid.rows()
    )
