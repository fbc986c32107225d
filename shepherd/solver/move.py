"""
Move Module - Directions and applied moves.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .pieces import Pieces, pieces_above, pieces_under


class Direction(Enum):
    """
    Cardinal directions in enumeration order.

    Each value is (dx, dy, slide glyph, jump glyph).
    """
    RIGHT = (1, 0, "▶", "↠")
    DOWN = (0, 1, "▼", "↡")
    LEFT = (-1, 0, "◀", "↞")
    UP = (0, -1, "▲", "↟")

    @property
    def vector(self) -> Tuple[int, int]:
        return (self.value[0], self.value[1])

    @property
    def slide_glyph(self) -> str:
        return self.value[2]

    @property
    def jump_glyph(self) -> str:
        return self.value[3]


DIRECTIONS = tuple(Direction)


@dataclass(frozen=True)
class Move:
    """
    A move that was successfully applied to a configuration.

    Attributes:
        piece_id: Id of the shepherd that initiated the move
        direction: Direction of the move
        is_jump: True for a jump, False for a slide
        vector: Net displacement (unwrapped)
        on_command: True if the slide crossed a command tile
    """
    piece_id: str
    direction: Direction
    is_jump: bool
    vector: Tuple[int, int]
    on_command: bool = False

    @property
    def glyph(self) -> str:
        return self.direction.jump_glyph if self.is_jump else self.direction.slide_glyph

    def describe(self, pieces: Pieces) -> str:
        """
        Render the move descriptor against the resulting pieces.

        Jumps name the pieces carried on top ``(& ...)`` or the pieces
        landed on ``(to ...)``; slides name every piece carried along
        and are marked ``(cmd)`` when they triggered a chain reaction.

        Args:
            pieces: Configuration after the move

        Returns:
            Descriptor such as ``"A▶(& WhiteA)(cmd)"``
        """
        moved = pieces[self.piece_id]
        under = [p.id for p in pieces_under(moved, pieces)]
        above = [p.id for p in pieces_above(moved, pieces)]
        suffix = ""
        if self.is_jump:
            if above:
                suffix = f"(& {' & '.join(above)})"
            if under:
                suffix = f"(to {' & '.join(under)})"
        else:
            carried = under + above
            if carried:
                suffix = f"(& {' & '.join(carried)})"
            if self.on_command:
                suffix += "(cmd)"
        return f"{moved.letter}{self.glyph}{suffix}"
