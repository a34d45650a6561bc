from __future__ import annotations

from enum import Enum


class Piece(Enum):
    BLACK = "B"
    WHITE = "W"

    @property
    def symbol(self) -> str:
        return self.value

    def opposite(self) -> "Piece":
        return Piece.WHITE if self is Piece.BLACK else Piece.BLACK

    @classmethod
    def from_symbol(cls, symbol: str) -> "Piece":
        return cls(symbol.upper())
