"""
Display Package - Terminal and image rendering of puzzle states.

Usage:
    from shepherd.display import render_solution, save_solution_image

    print(render_solution(puzzle, solution))
    save_solution_image(puzzle, solution)
"""

from .text import render_path, render_solution, render_state
from .image import IMAGE_DIR, render_image, save_solution_image

__all__ = [
    "render_state",
    "render_path",
    "render_solution",
    "render_image",
    "save_solution_image",
    "IMAGE_DIR",
]
