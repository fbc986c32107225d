"""
Image Renderer

Saves a PNG strip showing every configuration of a solution path.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PIL import Image, ImageDraw, ImageFont

from shepherd.solver import Configuration, Puzzle, Solution
from shepherd.solver.board import (
    BUMP, COMMAND, DEATH, HOLE, SHEEP_END, SHEPHERD_END, VOID,
)
from shepherd.solver.pieces import SHEPHERD

logger = logging.getLogger(__name__)

# Output settings
IMAGE_DIR = Path("./renders")
MAX_IMAGES = 10

CELL_SIZE = 28
MARGIN = 12
CAPTION_HEIGHT = 18

TILE_COLORS = {
    VOID: None,
    SHEPHERD_END: "#A5D6A7",
    SHEEP_END: "#E0E0E0",
    BUMP: "#BDBDBD",
    HOLE: "#5D4037",
    COMMAND: "#90CAF9",
    DEATH: "#EF9A9A",
}
FLOOR_COLOR = "#FFFDE7"
GRID_COLOR = "#9E9E9E"
WALL_COLOR = "#d32f2f"
SHEPHERD_COLOR = "#2E7D32"
SHEEP_COLOR = "#FAFAFA"
HERD_COLOR = "#757575"


def _load_font():
    try:
        return ImageFont.truetype("DejaVuSans.ttf", 12)
    except OSError:
        return ImageFont.load_default()


def _draw_state(
    draw: ImageDraw.ImageDraw,
    puzzle: Puzzle,
    state: Configuration,
    origin_x: int,
    origin_y: int,
    font
) -> None:
    """Draw one configuration with its caption at the given origin."""
    board = puzzle.board
    caption = "Start" if state.step == 0 else f"{state.step}. {state.last_action}"
    draw.text((origin_x, origin_y), caption, fill="black", font=font)
    top = origin_y + CAPTION_HEIGHT

    def cell_box(x: int, y: int):
        left = origin_x + x * CELL_SIZE
        upper = top + y * CELL_SIZE
        return [left, upper, left + CELL_SIZE, upper + CELL_SIZE]

    for y, row in enumerate(board.plan):
        for x, tile in enumerate(row):
            if tile == VOID:
                continue
            fill = TILE_COLORS.get(tile) or FLOOR_COLOR
            draw.rectangle(cell_box(x, y), fill=fill, outline=GRID_COLOR)

    for a, b in board.unique_walls():
        if abs(a[0] - b[0]) + abs(a[1] - b[1]) != 1:
            # seam wall across the vertical wrap
            continue
        if a[0] != b[0]:
            x = max(a[0], b[0])
            y = a[1]
            left = origin_x + x * CELL_SIZE
            draw.line([left, top + y * CELL_SIZE, left, top + (y + 1) * CELL_SIZE],
                      fill=WALL_COLOR, width=3)
        else:
            x = a[0]
            y = max(a[1], b[1])
            upper = top + y * CELL_SIZE
            draw.line([origin_x + x * CELL_SIZE, upper, origin_x + (x + 1) * CELL_SIZE, upper],
                      fill=WALL_COLOR, width=3)

    for piece in state.pieces.values():
        if piece.covered_by_id is not None:
            continue
        left, upper, right, lower = cell_box(*piece.pos)
        inset = 4
        shape = [left + inset, upper + inset, right - inset, lower - inset]
        if piece.kind == SHEPHERD:
            draw.ellipse(shape, fill=SHEPHERD_COLOR, outline="black")
            draw.text((left + 10, upper + 7), piece.letter, fill="white", font=font)
        else:
            outline = HERD_COLOR if piece.herd_ids else "black"
            draw.ellipse(shape, fill=SHEEP_COLOR, outline=outline, width=2)
        if piece.covers_id is not None:
            # stacked: mark with a small dot
            draw.ellipse([right - 9, upper + 3, right - 3, upper + 9], fill="black")


def render_image(puzzle: Puzzle, final: Optional[Configuration] = None) -> Image.Image:
    """
    Draw a solution path as a horizontal strip.

    Args:
        puzzle: Puzzle being shown
        final: Last configuration (only the start is drawn if None)

    Returns:
        PIL Image
    """
    states = final.path() if final is not None else [Configuration.initial(puzzle.pieces)]
    board = puzzle.board
    state_w = max(board.cols * CELL_SIZE, 90) + MARGIN
    state_h = board.rows * CELL_SIZE + CAPTION_HEIGHT
    width = MARGIN + state_w * len(states)
    height = 2 * MARGIN + state_h

    image = Image.new("RGB", (width, height), "white")
    draw = ImageDraw.Draw(image)
    font = _load_font()
    for index, state in enumerate(states):
        _draw_state(draw, puzzle, state, MARGIN + index * state_w, MARGIN, font)
    return image


def save_solution_image(
    puzzle: Puzzle,
    solution: Solution,
    path: Optional[Union[str, Path]] = None,
    output_dir: Path = IMAGE_DIR
) -> Path:
    """
    Save a PNG of a solution path.

    Args:
        puzzle: Puzzle being shown
        solution: Search result (the start board is drawn if unsolved)
        path: Output file (defaults to a name derived from the puzzle number)
        output_dir: Directory used when no path is given

    Returns:
        Path of the written image
    """
    if path is None:
        output_dir.mkdir(parents=True, exist_ok=True)
        name = "".join(ch for ch in puzzle.number if ch.isalnum()) or "puzzle"
        path = output_dir / f"solution_{name}.png"
    path = Path(path)

    final = solution.final
    if final is None:
        final = Configuration.initial(solution.pieces or puzzle.pieces)
    render_image(puzzle, final).save(path, "PNG")
    logger.debug(f"Saved solution image: {path}")

    _cleanup_images(path.parent)
    return path


def _cleanup_images(output_dir: Path) -> None:
    """Remove old images, keeping only the most recent MAX_IMAGES."""
    if not output_dir.exists():
        return

    image_files = sorted(
        output_dir.glob("solution_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    for old_file in image_files[MAX_IMAGES:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.warning(f"Could not remove old image {old_file}: {e}")
