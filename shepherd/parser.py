"""
Parser Module - Reads puzzles from their line-oriented text format.

Format (puzzles separated by blank lines):

    #12
    ..b.
    .+..
    pieces: B@0,0 W@2,1 WW@0,1+1,1
    walls: 1,0|1,1
    page: 2
    flag: secret
    optimal: 4        (or "fixed: 4" when the bound is exact)

A single piece placed on an occupied cell is stacked on top of the
piece already there.
"""

import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from shepherd.solver import Board, Piece, Puzzle
from shepherd.solver.board import END_TILES, VOID, Position, Wall
from shepherd.solver.pieces import PIECE_KINDS, SHEPHERD, stacking_errors, top_piece_at

logger = logging.getLogger(__name__)

PLAN_ROW = re.compile(r"^[ .bwoux+]+$")


class PuzzleParseError(ValueError):
    """Raised when a puzzle line cannot be parsed."""
    pass


def parse_pos(text: str) -> Position:
    """Parse ``"x,y"`` into a position."""
    parts = text.split(",")
    try:
        if len(parts) != 2:
            raise ValueError
        return (int(parts[0]), int(parts[1]))
    except ValueError:
        raise PuzzleParseError(f"Cannot parse position string: {text}") from None


def parse_wall(text: str) -> Wall:
    """Parse ``"x,y|x,y"`` into a wall."""
    parts = text.split("|")
    if len(parts) != 2:
        raise PuzzleParseError(f"Cannot parse wall string: {text}")
    return (parse_pos(parts[0]), parse_pos(parts[1]))


def parse_plan_row(text: str) -> str:
    if not PLAN_ROW.match(text):
        raise PuzzleParseError(f"Cannot parse plan row string: {text}")
    return text


def _segment_id(base_id: str, part: int, total: int) -> str:
    return f"{base_id}:{part + 1}/{total}" if total > 1 else base_id


def _is_connected(positions: Sequence[Position]) -> bool:
    """True if distinct positions form one orthogonally connected group."""
    remaining = set(positions)
    if len(remaining) != len(positions):
        return False
    frontier = [positions[0]]
    remaining.discard(positions[0])
    while frontier:
        x, y = frontier.pop()
        for neighbour in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if neighbour in remaining:
                remaining.discard(neighbour)
                frontier.append(neighbour)
    return not remaining


def parse_pieces(text: str) -> Dict[str, Piece]:
    """
    Parse the tokens of a ``pieces:`` line.

    Args:
        text: Space separated tokens such as ``B@0,0 WW@1,1+2,1``

    Returns:
        Piece mapping in listing order

    Raises:
        PuzzleParseError: On unknown kinds, bad positions or illegal stacks
    """
    pieces: Dict[str, Piece] = {}
    shepherd_count = 0
    sheep_count = 0

    for token in text.split():
        kind, sep, positions_str = token.partition("@")
        if not sep:
            raise PuzzleParseError(f"Cannot parse piece string: {token}")
        positions = [parse_pos(p) for p in positions_str.split("+")]
        if kind not in PIECE_KINDS or len(kind) != len(positions):
            raise PuzzleParseError(f"Invalid piece kind string: {kind}")
        if not _is_connected(positions):
            raise PuzzleParseError(f"Herd segments are not adjacent: {token}")

        if kind == SHEPHERD:
            letter = chr(65 + shepherd_count)
            shepherd_count += 1
            base_id = f"Black{letter}"
        else:
            letter = chr(65 + sheep_count)
            sheep_count += 1
            base_id = f"White{letter}"

        ids = [_segment_id(base_id, i, len(positions)) for i in range(len(positions))]
        herd_ids = tuple(ids) if len(ids) > 1 else None

        for piece_id, pos in zip(ids, positions):
            below = top_piece_at(pos, pieces)
            if below is not None and herd_ids is not None:
                raise PuzzleParseError(
                    f"Herd {base_id} cannot be placed on {below.id} at {pos[0]},{pos[1]}"
                )
            piece = Piece(
                id=piece_id,
                letter=letter,
                kind=kind,
                pos=pos,
                covers_id=below.id if below is not None else None,
                herd_ids=herd_ids,
            )
            if below is not None:
                pieces[below.id] = replace(below, covered_by_id=piece_id)
            pieces[piece_id] = piece

    return pieces


class _PuzzleBuilder:
    """Accumulates the lines of one puzzle."""

    def __init__(self):
        self.number = ""
        self.plan: List[str] = []
        self.pieces: Dict[str, Piece] = {}
        self.walls: List[Wall] = []
        self.page_height: Optional[int] = None
        self.flag: Optional[str] = None
        self.optimal = 0
        self.fixed = False
        self.failed = False

    def validate(self) -> Optional[str]:
        """Return a problem description, or None if the puzzle is usable."""
        if not self.plan:
            return f"Puzzle {self.number} has no plan"
        if not self.pieces:
            return f"Puzzle {self.number} has no pieces"
        if self.optimal < 1:
            return f"Puzzle {self.number} has no optimal moves count"
        if not any(tile in END_TILES for row in self.plan for tile in row):
            return f"Puzzle {self.number} has no end tiles"
        plan = Board(plan=tuple(self.plan))
        off_plan = [p.id for p in self.pieces.values() if plan.tile_at(p.pos) == VOID]
        if off_plan:
            return f"Puzzle {self.number} has pieces outside the plan: {', '.join(off_plan)}"
        errors = stacking_errors(self.pieces)
        if errors:
            return f"Puzzle {self.number} has invalid stacks: {'; '.join(errors)}"
        return None

    def build(self) -> Puzzle:
        board = Board.from_rows(self.plan, self.walls, self.page_height)
        return Puzzle(
            number=self.number,
            board=board,
            pieces=self.pieces,
            optimal=self.optimal,
            fixed=self.fixed,
            flag=self.flag,
        )


def _value(line: str) -> str:
    return line.split(":", 1)[1].strip()


def _parse_int(line: str) -> int:
    try:
        return int(_value(line))
    except ValueError:
        raise PuzzleParseError(f"Cannot parse number: {line}") from None


def parse_puzzles(lines: Sequence[str], strict: bool = False) -> List[Puzzle]:
    """
    Parse every puzzle in a sequence of lines.

    Invalid puzzles are logged and skipped; with ``strict`` the first
    error is raised instead.

    Args:
        lines: Lines of the puzzle file (trailing newlines allowed)
        strict: Raise PuzzleParseError instead of skipping

    Returns:
        Parsed puzzles in file order
    """
    puzzles: List[Puzzle] = []
    builder = _PuzzleBuilder()

    def finish():
        nonlocal builder
        current = builder
        builder = _PuzzleBuilder()
        if not current.number:
            return
        if current.failed:
            logger.warning(f"Skipping puzzle {current.number} after parse errors")
            return
        problem = current.validate()
        if problem is not None:
            if strict:
                raise PuzzleParseError(problem)
            logger.warning(f"Parsing error: {problem}")
            return
        puzzles.append(current.build())

    for index, raw in enumerate(lines):
        line = raw.rstrip("\r\n")
        try:
            if line.startswith("#"):
                builder.number = line.strip()
            elif line.startswith("pieces:"):
                builder.pieces = parse_pieces(_value(line))
            elif line.startswith("walls:"):
                builder.walls = [parse_wall(w) for w in _value(line).split()]
            elif line.startswith("optimal:"):
                builder.optimal = _parse_int(line)
            elif line.startswith("fixed:"):
                builder.optimal = _parse_int(line)
                builder.fixed = True
            elif line.startswith("page:"):
                builder.page_height = _parse_int(line)
                if builder.page_height < 1:
                    raise PuzzleParseError(f"Page height must be positive: {line}")
            elif line.startswith("flag:"):
                builder.flag = _value(line) or None
            elif not line.strip():
                finish()
            else:
                builder.plan.append(parse_plan_row(line))
        except PuzzleParseError as e:
            if strict:
                raise PuzzleParseError(f"line {index + 1}: {e}") from e
            logger.warning(f"Parsing error (line {index + 1}): {e}")
            builder.failed = True

    finish()
    return puzzles


def load_puzzles(path: Union[str, Path], strict: bool = False) -> List[Puzzle]:
    """
    Load puzzles from a file.

    Args:
        path: Puzzle file path
        strict: Raise on the first parse error

    Returns:
        Parsed puzzles
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        lines = f.read().split("\n")
    puzzles = parse_puzzles(lines, strict=strict)
    logger.debug(f"Loaded {len(puzzles)} puzzle(s) from {path}")
    return puzzles
