"""
Board Module - Immutable board representation for the shepherd puzzle.

The board is the static part of a puzzle: a grid of tile characters,
a set of walls between adjacent cells and an optional page height
that makes the vertical axis wrap around.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

Position = Tuple[int, int]
Wall = Tuple[Position, Position]

# Tile kinds
VOID = " "
EMPTY = "."
SHEPHERD_END = "b"
SHEEP_END = "w"
BUMP = "o"
HOLE = "u"
COMMAND = "+"
DEATH = "x"

TILE_KINDS = frozenset(
    (VOID, EMPTY, SHEPHERD_END, SHEEP_END, BUMP, HOLE, COMMAND, DEATH)
)
END_TILES = frozenset((SHEPHERD_END, SHEEP_END))


def to_str(pos: Optional[Position]) -> str:
    """Render a position as ``"x,y"`` (empty string for None)."""
    if pos is None:
        return ""
    return f"{pos[0]},{pos[1]}"


@dataclass(frozen=True)
class EndTile:
    """A designated end tile and the piece kind letter it expects."""
    kind: str
    pos: Position

    @property
    def piece_letter(self) -> str:
        """Kind letter of pieces that satisfy this tile ("B" or "W")."""
        return self.kind.upper()


@dataclass(frozen=True)
class Board:
    """
    Immutable board representation.

    Attributes:
        plan: Tuple of row strings, indexed ``plan[y][x]``
        walls: Set of blocked transitions, stored in both directions
        page_height: Vertical wrap height, or None for no wrap
    """
    plan: Tuple[str, ...]
    walls: FrozenSet[Wall] = frozenset()
    page_height: Optional[int] = None
    end_tiles: Tuple[EndTile, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        ends = []
        for y, row in enumerate(self.plan):
            for x, tile in enumerate(row):
                if tile in END_TILES:
                    ends.append(EndTile(kind=tile, pos=(x, y)))
        object.__setattr__(self, "end_tiles", tuple(ends))

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        walls: Iterable[Wall] = (),
        page_height: Optional[int] = None
    ) -> 'Board':
        """
        Create a Board from plan rows and an unordered wall list.

        Args:
            rows: Plan rows, one character per cell
            walls: Pairs of adjacent positions that are separated by a wall
            page_height: Vertical wrap height (None disables wrapping)

        Returns:
            Board instance

        Raises:
            ValueError: If a row contains an unknown tile character or the
                page height is not positive
        """
        if page_height is not None and page_height < 1:
            raise ValueError(f"Page height must be positive, got {page_height}")
        for y, row in enumerate(rows):
            unknown = set(row) - TILE_KINDS
            if unknown:
                raise ValueError(
                    f"Unknown tile kind(s) {sorted(unknown)} in row {y}: {row!r}"
                )
        wall_set = set()
        for a, b in walls:
            a = (int(a[0]), int(a[1]))
            b = (int(b[0]), int(b[1]))
            wall_set.add((a, b))
            wall_set.add((b, a))
        return cls(plan=tuple(rows), walls=frozenset(wall_set), page_height=page_height)

    # -- queries --------------------------------------------------------------

    @property
    def rows(self) -> int:
        """Number of plan rows."""
        return len(self.plan)

    @property
    def cols(self) -> int:
        """Width of the widest plan row."""
        return max((len(row) for row in self.plan), default=0)

    def tile_at(self, pos: Position) -> str:
        """
        Get the tile kind at a position.

        Cells outside the plan (including short rows) are void.
        """
        x, y = pos
        if 0 <= y < len(self.plan):
            row = self.plan[y]
            if 0 <= x < len(row):
                return row[x]
        return VOID

    def is_wall(self, a: Position, b: Position) -> bool:
        """Check if a wall separates two positions (either direction)."""
        return (a, b) in self.walls

    def wrap(self, pos: Position) -> Position:
        """Apply vertical wrap; x is never altered."""
        if self.page_height is None:
            return pos
        x, y = pos
        return (x, y % self.page_height)

    def add(self, pos: Position, vector: Tuple[int, int], dont_wrap: bool = False) -> Position:
        """
        Offset a position by a vector.

        Args:
            pos: Starting position
            vector: (dx, dy) offset
            dont_wrap: Skip vertical wrapping (used for herd checks and vectors)

        Returns:
            Resulting position
        """
        result = (pos[0] + vector[0], pos[1] + vector[1])
        return result if dont_wrap else self.wrap(result)

    def unique_walls(self) -> List[Wall]:
        """Walls listed once each, in a stable order."""
        seen = set()
        result = []
        for a, b in sorted(self.walls):
            if (b, a) in seen:
                continue
            seen.add((a, b))
            result.append((a, b))
        return result
