"""Board representation, move rules and search"""

from .errors import ReversiError, ConstructionError, InvalidMove, TerminalStateViolation
from .tile_pos import GRID_SIZE, Direction, TilePos
from .piece import Piece
from .grid import Grid
from .reversi import Reversi
from .search import SearchLimits, SearchResult, Searcher, best_move, negamax_score

__all__ = [
    'ReversiError',
    'ConstructionError',
    'InvalidMove',
    'TerminalStateViolation',
    'GRID_SIZE',
    'Direction',
    'TilePos',
    'Piece',
    'Grid',
    'Reversi',
    'SearchLimits',
    'SearchResult',
    'Searcher',
    'best_move',
    'negamax_score',
]
