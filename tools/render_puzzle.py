"""
Render a puzzle's starting board, and every alternative starting
configuration when it has more pieces than the solver supports.

Usage:
    python tools/render_puzzle.py 12
    python tools/render_puzzle.py 12 --file puzzles.txt --image start.png
"""

import sys
import argparse
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from shepherd.display import render_path, render_image
from shepherd.parser import load_puzzles
from shepherd.solver import PIECE_LIMITS, generate_alternatives, needs_alternatives


def main():
    parser = argparse.ArgumentParser(description="Render a puzzle's starting board")
    parser.add_argument("number", help="Puzzle number (with or without #)")
    parser.add_argument("--file", "-f", default="puzzles.txt", help="Puzzle file")
    parser.add_argument("--image", default=None, help="Also save the start board as PNG")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours")
    args = parser.parse_args()

    number = args.number if args.number.startswith("#") else f"#{args.number}"
    puzzle = next((p for p in load_puzzles(args.file) if p.number == number), None)
    if puzzle is None:
        print(f"Puzzle {number} not found in {args.file}")
        return 1

    color = not args.no_color
    print(f"{puzzle.number} (optimal {puzzle.optimal}, {len(puzzle.pieces)} pieces)")
    print(render_path(puzzle, color=color))

    if needs_alternatives(puzzle.pieces, PIECE_LIMITS):
        alternatives = generate_alternatives(puzzle.pieces, PIECE_LIMITS)
        print(f"\n{len(alternatives)} alternative starting configuration(s):")
        for index, pieces in enumerate(alternatives, 1):
            print(f"\n--- Alternative {index}: {', '.join(pieces)}")
            print(render_path(puzzle.with_pieces(pieces), color=color))

    if args.image:
        render_image(puzzle).save(args.image, "PNG")
        print(f"\nSaved {args.image}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
