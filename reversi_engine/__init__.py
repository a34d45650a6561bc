"""Reversi rules engine with a negamax player"""

from .engine import (
    GRID_SIZE,
    ConstructionError,
    Direction,
    Grid,
    InvalidMove,
    Piece,
    Reversi,
    ReversiError,
    SearchResult,
    TerminalStateViolation,
    TilePos,
    best_move,
    negamax_score,
)

__all__ = [
    'GRID_SIZE',
    'ConstructionError',
    'Direction',
    'Grid',
    'InvalidMove',
    'Piece',
    'Reversi',
    'ReversiError',
    'SearchResult',
    'TerminalStateViolation',
    'TilePos',
    'best_move',
    'negamax_score',
]
