"""
Puzzle Module - Complete puzzle definition consumed by the solver.
"""

from dataclasses import dataclass
from typing import Optional

from .board import Board
from .pieces import Pieces

SECRET_FLAG = "secret"


@dataclass(frozen=True)
class Puzzle:
    """
    A puzzle as produced by the parser.

    Attributes:
        number: Puzzle identifier line, e.g. "#12"
        board: Static board
        pieces: Raw starting pieces (may exceed the engine limits)
        optimal: Declared optimal step count, used as the search bound
        fixed: True when the bound is known to be exact
        flag: Optional named mechanic flag (e.g. "secret")
    """
    number: str
    board: Board
    pieces: Pieces
    optimal: int
    fixed: bool = False
    flag: Optional[str] = None

    @property
    def secret(self) -> bool:
        """True if the secret wall-ignoring jump mechanic is enabled."""
        return self.flag == SECRET_FLAG

    def with_pieces(self, pieces: Pieces) -> "Puzzle":
        """Copy of this puzzle with another starting configuration."""
        return Puzzle(
            number=self.number,
            board=self.board,
            pieces=pieces,
            optimal=self.optimal,
            fixed=self.fixed,
            flag=self.flag,
        )
