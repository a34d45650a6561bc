from __future__ import annotations

from typing import Optional

from .settings import DisplayConfig
from .engine.piece import Piece
from .engine.reversi import Reversi
from .engine.tile_pos import COLUMNS, TilePos

CELL_WIDTH = 4


def _cell(value: str) -> str:
    return f" {value} │"


def _row_separator(cols: int) -> str:
    return "─" * (CELL_WIDTH * (cols + 1))


def render(game: Reversi, style: Optional[DisplayConfig] = None) -> str:
    """Draw the board with column letters, row numbers and, optionally, move hints."""
    style = style or DisplayConfig()
    symbols = {Piece.BLACK: style.black_symbol, Piece.WHITE: style.white_symbol}
    hints = set(game.valid_moves()) if style.show_moves else set()

    lines = [_cell(" ") + "".join(_cell(letter) for letter in COLUMNS), _row_separator(len(COLUMNS))]
    for row, cells in game.rows():
        line = _cell(str(row + 1))
        for col, piece in enumerate(cells):
            if piece is not None:
                line += _cell(symbols[piece])
            elif TilePos(row, col) in hints:
                line += _cell(style.hint_symbol)
            else:
                line += _cell(style.empty_symbol)
        lines.append(line)
        lines.append(_row_separator(len(COLUMNS)))
    return "\n".join(lines)


def render_scores(game: Reversi, style: Optional[DisplayConfig] = None) -> str:
    style = style or DisplayConfig()
    scores = game.scores()
    return (
        f"Score: {style.black_symbol} {scores[Piece.BLACK]} | "
        f"{style.white_symbol} {scores[Piece.WHITE]}"
    )


def render_result(game: Reversi, style: Optional[DisplayConfig] = None) -> str:
    style = style or DisplayConfig()
    winner = game.winner()
    if winner is None:
        return "The game ended with a tie"
    symbol = style.black_symbol if winner is Piece.BLACK else style.white_symbol
    return f"The winner is: {symbol} ({winner.name.lower()})"
