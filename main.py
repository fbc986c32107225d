"""
Shepherd Puzzle Solver - Entry Point

Loads puzzles from a text file, solves each one and prints the result.

Example:
    python main.py
    python main.py 12 14            # Only puzzles #12 and #14
    python main.py --solution 12    # Always print the move list
    python main.py --render --strategy bfs
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

from shepherd.display import render_solution, save_solution_image
from shepherd.parser import load_puzzles
from shepherd.settings import load_settings, save_settings
from shepherd.solution_manager import SolutionManager
from shepherd.solver import Puzzle, Solution, get_strategy_names


logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    """Log to both console and solver.log."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("solver.log", mode='w', encoding='utf-8')  # File output
        ]
    )


def format_result(puzzle: Puzzle, solution: Solution, always_show: bool = False) -> str:
    """
    Format one puzzle's result line.

    Args:
        puzzle: Puzzle that was solved
        solution: Search result
        always_show: Print the move list even when the bound was met

    Returns:
        Result text, possibly spanning two lines
    """
    if not solution.is_solved:
        return f"{puzzle.number}: NOT solved"

    better_found = solution.step < puzzle.optimal
    if better_found:
        verdict = f"expected {puzzle.optimal}"
    else:
        verdict = "OK (fixed)" if puzzle.fixed else "OK"
    text = f"{puzzle.number}: solved in {solution.step}, {verdict}"
    if better_found or always_show:
        text += f"\n  steps: {', '.join(solution.actions)}"
    return text


def select_puzzles(puzzles: List[Puzzle], wanted: List[str]) -> List[Puzzle]:
    """Keep puzzles named on the command line ("12" and "#12" both match)."""
    if not wanted:
        return puzzles
    names = {w if w.startswith("#") else f"#{w}" for w in wanted}
    return [p for p in puzzles if p.number in names]


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Shepherd Puzzle Solver - finds the shortest move sequence for each puzzle"
    )
    parser.add_argument(
        "puzzles",
        nargs="*",
        help="Puzzle numbers to solve (default: all)"
    )
    parser.add_argument(
        "--solution", "-s",
        action="store_true",
        help="Always print the move list"
    )
    parser.add_argument(
        "--file", "-f",
        default=None,
        help="Puzzle file (default: puzzles_file setting)"
    )
    parser.add_argument(
        "--strategy",
        default=None,
        help=f"Search strategy: {', '.join(get_strategy_names())} (default: strategy_name setting)"
    )
    parser.add_argument(
        "--render", "-r",
        action="store_true",
        help="Draw every state of each solution in the terminal"
    )
    parser.add_argument(
        "--images", "-i",
        action="store_true",
        help="Save a PNG of each solution"
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Time limit in seconds per starting configuration"
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colours in rendered boards"
    )
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Write the effective settings back to config.json"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(argv)


def apply_overrides(settings: Dict[str, Any], args) -> Dict[str, Any]:
    """Merge command line flags over loaded settings."""
    result = dict(settings)
    if args.file:
        result["puzzles_file"] = args.file
    if args.strategy:
        result["strategy_name"] = args.strategy
    if args.timeout is not None:
        result["timeout_sec"] = args.timeout
    if args.no_color:
        result["color"] = False
    if args.images:
        result["save_images"] = True
    if args.debug:
        result["debug_enabled"] = True
    return result


def main(argv: Optional[List[str]] = None) -> int:
    """Solve the selected puzzles and print one result per puzzle."""
    args = parse_args(argv)
    settings = apply_overrides(load_settings(), args)
    configure_logging(settings["debug_enabled"])
    if args.save_settings:
        save_settings(settings)

    try:
        puzzles = load_puzzles(settings["puzzles_file"])
    except OSError as e:
        logger.error(f"Cannot read puzzle file: {e}")
        return 1

    try:
        manager = SolutionManager(
            strategy_name=settings["strategy_name"],
            piece_limits=settings["piece_limits"],
            timeout_sec=settings["timeout_sec"],
        )
    except ValueError as e:
        logger.error(str(e))
        return 2
    image_dir = Path(settings["image_dir"])

    for puzzle in select_puzzles(puzzles, args.puzzles):
        solution = manager.solve(puzzle)
        metrics = solution.metrics
        logger.info(
            f"{puzzle.number}: {metrics.states_explored} states, "
            f"{metrics.alternatives_tried} start(s), {metrics.computation_time_ms:.1f}ms"
        )
        if solution.was_cancelled:
            logger.warning(f"{puzzle.number}: search stopped early, result may not be optimal")

        print(format_result(puzzle, solution, args.solution))
        if args.render:
            print(render_solution(puzzle, solution, color=settings["color"]))
        if settings["save_images"]:
            path = save_solution_image(puzzle, solution, output_dir=image_dir)
            logger.info(f"Image saved: {path}")

    print("DONE")
    return 0


if __name__ == "__main__":
    sys.exit(main())
