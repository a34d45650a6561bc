from __future__ import annotations

import pytest

from reversi_engine.engine.notation import grid_from_text
from reversi_engine.engine.piece import Piece
from reversi_engine.engine.reversi import Reversi


# After Black takes C1 White has no reply, so Black moves again and can take C8
EDGE_PASS_BOARD = """
BW......
........
........
........
........
........
........
BW......
"""

# Black everywhere except the A1 corner: nobody can move
NEAR_FULL_BOARD = "\n".join(["." + "B" * 7] + ["B" * 8] * 7)


@pytest.fixture
def start() -> Reversi:
    return Reversi()


@pytest.fixture
def edge_pass_game() -> Reversi:
    return Reversi.from_grid(grid_from_text(EDGE_PASS_BOARD), Piece.BLACK)


@pytest.fixture
def near_full_game() -> Reversi:
    return Reversi.from_grid(grid_from_text(NEAR_FULL_BOARD), Piece.BLACK)
