"""
Text Renderer - Box-drawn terminal view of board states.

Each cell is drawn four characters wide and two lines high: a top
border line and a content line. Walls are drawn as double red lines,
joints between herd segments are marked on the shared border, stacked
pieces are underlined and end tiles get a coloured background.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from shepherd.solver import Configuration, Puzzle, Solution
from shepherd.solver.board import (
    BUMP, COMMAND, DEATH, EMPTY, HOLE, SHEEP_END, SHEPHERD_END, VOID, Position,
)
from shepherd.solver.pieces import SHEPHERD, Piece, Pieces

MIN_STATE_WIDTH = 20
LINE_WIDTH = 120

# One visible character, possibly wrapped in ANSI escape codes
Glyph = str


def _ansi(*codes: str) -> Callable[[str], str]:
    prefix = "".join(f"\x1b[{code}m" for code in codes)
    return lambda ch: f"{prefix}{ch}\x1b[0m"


class Palette:
    """ANSI styling helpers; a plain palette returns characters untouched."""

    def __init__(self, color: bool = True):
        plain = lambda ch: ch  # noqa: E731
        self.stack = _ansi("4") if color else plain
        self.black = _ansi("30") if color else plain
        self.shepherd = _ansi("1", "32") if color else plain
        self.shepherd_bg = _ansi("42") if color else plain
        self.sheep = _ansi("37") if color else plain
        self.sheep_bg = _ansi("47") if color else plain
        self.red = _ansi("31") if color else plain
        self.blue = _ansi("34") if color else plain
        self.grey = _ansi("90") if color else plain


@dataclass
class _CellContext:
    has_center: bool
    has_left_top: bool
    has_left: bool
    has_left_wall: bool
    has_left_herd: bool
    has_top: bool
    has_top_wall: bool
    has_top_herd: bool


def _is_void(tile: Optional[str]) -> bool:
    return not tile or tile == VOID


def _corner(ctx: _CellContext) -> str:
    north = ctx.has_top or ctx.has_left_top
    south = ctx.has_left or ctx.has_center
    west = ctx.has_left or ctx.has_left_top
    east = ctx.has_top or ctx.has_center
    if not (north or south or west or east):
        return " "
    if north and south and west and east:
        return "┼"
    if north:
        if west:
            if east:
                return "┴"
            if south:
                return "┤"
            return "┘"
        if east:
            if south:
                return "├"
            return "└"
    if west:
        if east:
            return "┬"
        return "┐"
    return "┌"


def _top(ctx: _CellContext, palette: Palette, is_side: bool = False) -> Glyph:
    if not ctx.has_center and not ctx.has_top:
        return " "
    joined = ctx.has_top_herd and not is_side
    if ctx.has_top_wall:
        return palette.red("╪" if joined else "═")
    return "╂" if joined else "─"


def _left(ctx: _CellContext, palette: Palette) -> Glyph:
    if not ctx.has_center and not ctx.has_left:
        return " "
    if ctx.has_left_wall:
        return palette.red("╫" if ctx.has_left_herd else "║")
    return "┿" if ctx.has_left_herd else "│"


def _tile_content(tile: str, palette: Palette) -> Glyph:
    if tile in (VOID, EMPTY):
        return " "
    if tile == COMMAND:
        return palette.blue("+")
    if tile == SHEPHERD_END:
        return palette.shepherd_bg(" ")
    if tile == SHEEP_END:
        return palette.sheep_bg(" ")
    if tile == BUMP:
        return palette.grey("▲")
    if tile == HOLE:
        return palette.red("×")
    if tile == DEATH:
        return palette.red("☠")
    return tile


def _tile_side(tile: str, palette: Palette) -> Glyph:
    if tile == SHEPHERD_END:
        return palette.shepherd_bg(" ")
    if tile == SHEEP_END:
        return palette.sheep_bg(" ")
    return " "


def _pieces_content(stack: Sequence[Piece], tile: str, palette: Palette) -> Optional[Glyph]:
    if not stack:
        return None
    first = stack[0]
    is_shepherd = first.kind == SHEPHERD
    ch = palette.shepherd(first.letter) if is_shepherd else palette.sheep("S")
    if len(stack) > 1:
        ch = palette.stack(ch)

    if tile == SHEPHERD_END:
        return palette.shepherd_bg(palette.black(first.letter) if is_shepherd else ch)
    if tile == SHEEP_END:
        return palette.sheep_bg(ch if is_shepherd else palette.black("S"))
    return ch


def _herd_joins(stack: Sequence[Piece], pieces: Pieces, offset: Position) -> bool:
    """True if a herd on this cell continues into the neighbouring cell."""
    segment = next((p for p in stack if p.herd_ids is not None), None)
    if segment is None:
        return False
    target = (segment.pos[0] + offset[0], segment.pos[1] + offset[1])
    return any(pieces[herd_id].pos == target for herd_id in segment.herd_ids)


def render_state(puzzle: Puzzle, pieces: Pieces, color: bool = True) -> List[List[Glyph]]:
    """
    Render one configuration.

    Args:
        puzzle: Puzzle whose board is drawn
        pieces: Configuration to draw on the board
        color: Emit ANSI colours

    Returns:
        Lines of glyphs (each list element is one visible character)
    """
    palette = Palette(color)
    board = puzzle.board
    width = board.cols + 1
    plan = [row + VOID * (width - len(row)) for row in board.plan]
    plan.append(VOID * width)

    lines: List[List[Glyph]] = []
    for y, row in enumerate(plan):
        border: List[Glyph] = []
        content: List[Glyph] = []
        for x, tile in enumerate(row):
            stack = [p for p in pieces.values() if p.pos == (x, y)]
            ctx = _CellContext(
                has_center=not _is_void(tile),
                has_left_top=x > 0 and y > 0 and not _is_void(plan[y - 1][x - 1]),
                has_left=x > 0 and not _is_void(row[x - 1]),
                has_left_wall=board.is_wall((x, y), board.wrap((x - 1, y))),
                has_left_herd=_herd_joins(stack, pieces, (-1, 0)),
                has_top=y > 0 and not _is_void(plan[y - 1][x]),
                has_top_wall=board.is_wall((x, y), board.wrap((x, y - 1))),
                has_top_herd=_herd_joins(stack, pieces, (0, -1)),
            )
            top_side = _top(ctx, palette, is_side=True)
            border.extend([_corner(ctx), top_side, _top(ctx, palette), top_side])

            center = _pieces_content(stack, tile, palette) or _tile_content(tile, palette)
            side = _tile_side(tile, palette)
            content.extend([_left(ctx, palette), side, center, side])

        lines.append(border)
        if y < len(plan) - 1:
            lines.append(content)
    return lines


def _header(state: Configuration) -> str:
    if state.step == 0:
        return "Start"
    return f"{state.step}. {state.last_action}"


def render_path(
    puzzle: Puzzle,
    final: Optional[Configuration] = None,
    color: bool = True,
    line_width: int = LINE_WIDTH
) -> str:
    """
    Render every configuration from the start to ``final`` side by side.

    Args:
        puzzle: Puzzle being shown
        final: Last configuration of the path (start only if None)
        color: Emit ANSI colours
        line_width: Maximum visible width before wrapping to a new block

    Returns:
        Multi-line string, blocks separated by blank lines
    """
    states = final.path() if final is not None else [Configuration.initial(puzzle.pieces)]
    renders = [(state, render_state(puzzle, state.pieces, color)) for state in states]

    state_width = max(MIN_STATE_WIDTH, len(renders[0][1][0]) + 1)
    per_row = max(1, line_width // state_width)

    blocks: List[str] = []
    for start in range(0, len(renders), per_row):
        chunk = renders[start:start + per_row]
        out = ["".join(_header(state).ljust(state_width) for state, _ in chunk).rstrip()]
        for i in range(len(chunk[0][1])):
            parts = []
            for _, lines in chunk:
                glyphs = lines[i]
                parts.append("".join(glyphs) + " " * (state_width - len(glyphs)))
            out.append("".join(parts).rstrip())
        blocks.append("\n".join(out))
    return "\n\n".join(blocks)


def render_solution(puzzle: Puzzle, solution: Solution, color: bool = True) -> str:
    """Render a solution's path, or the starting board if unsolved."""
    if solution.is_solved:
        return render_path(puzzle, solution.final, color)
    start = Configuration.initial(solution.pieces or puzzle.pieces)
    return render_path(puzzle, start, color)
