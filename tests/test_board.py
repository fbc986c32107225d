"""
Test script for the board and piece model

Covers:
1. Tile lookup, walls and vertical wrap
2. Stacking queries and invariants
3. Canonical configuration hashing

Usage:
    python tests/test_board.py
    pytest tests/test_board.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shepherd.parser import parse_pieces
from shepherd.solver import Board, canonical_hash
from shepherd.solver.board import VOID
from shepherd.solver.pieces import (
    herd_under,
    pieces_above,
    pieces_under,
    stacking_errors,
    top_piece_at,
)


def test_tile_lookup():
    """Tiles inside the plan, short rows and outside cells."""
    print("\n" + "="*60)
    print("TEST: Tile Lookup")
    print("="*60)

    board = Board.from_rows(["..b.", ".o", "u+x"])
    print(f"  Board: {board.rows}x{board.cols}, end tiles: {board.end_tiles}")

    assert board.rows == 3
    assert board.cols == 4
    assert board.tile_at((2, 0)) == "b"
    assert board.tile_at((1, 1)) == "o"
    assert board.tile_at((3, 1)) == VOID  # short row
    assert board.tile_at((-1, 0)) == VOID
    assert board.tile_at((0, 5)) == VOID
    assert [t.pos for t in board.end_tiles] == [(2, 0)]
    assert board.end_tiles[0].piece_letter == "B"

    with pytest.raises(ValueError):
        Board.from_rows(["..?."])
    print("  [PASS] Tile lookup")


def test_walls_both_directions():
    """A wall listed once blocks both directions."""
    board = Board.from_rows(["...."], walls=[((0, 0), (1, 0))])

    assert board.is_wall((0, 0), (1, 0))
    assert board.is_wall((1, 0), (0, 0))
    assert not board.is_wall((1, 0), (2, 0))
    assert board.unique_walls() == [((0, 0), (1, 0))]


def test_vertical_wrap():
    """y = -1 maps to the last row, y = page height maps to 0, x never changes."""
    board = Board.from_rows([".", ".", "."], page_height=3)

    assert board.wrap((0, -1)) == (0, 2)
    assert board.wrap((0, 3)) == (0, 0)
    assert board.wrap((5, 1)) == (5, 1)
    assert board.add((0, 2), (0, 1)) == (0, 0)
    assert board.add((0, 2), (0, 1), dont_wrap=True) == (0, 3)

    flat = Board.from_rows([".", "."])
    assert flat.wrap((0, -1)) == (0, -1)


def test_stacking_queries():
    """Stacks resolve to the exposed piece; links are mutual."""
    print("\n" + "="*60)
    print("TEST: Stacking Queries")
    print("="*60)

    pieces = parse_pieces("W@0,0 B@0,0 B@0,0 W@2,0")
    sheep = pieces["WhiteA"]
    middle = pieces["BlackA"]
    top = pieces["BlackB"]

    print(f"  Stack at 0,0: {[p.id for p in pieces_above(sheep, pieces)]}")
    assert top_piece_at((0, 0), pieces).id == "BlackB"
    assert top_piece_at((0, 0), pieces, ignore_ids=["BlackB"]).id == "BlackA"
    assert top_piece_at((1, 0), pieces) is None
    assert [p.id for p in pieces_above(sheep, pieces)] == ["BlackA", "BlackB"]
    assert [p.id for p in pieces_under(top, pieces)] == ["BlackA", "WhiteA"]
    assert middle.covers_id == "WhiteA" and middle.covered_by_id == "BlackB"
    assert not middle.is_exposed
    assert pieces["WhiteB"].is_exposed
    assert stacking_errors(pieces) == []
    print("  [PASS] Stacking queries")


def test_herd_under():
    pieces = parse_pieces("WW@0,0+1,0 B@1,0")
    herd = herd_under(pieces["BlackA"], pieces)

    assert [p.id for p in herd] == ["WhiteA:1/2", "WhiteA:2/2"]
    assert herd_under(pieces["WhiteA:1/2"], pieces) is None


def test_stacking_errors_detects_broken_links():
    pieces = dict(parse_pieces("W@0,0 B@0,0"))
    del pieces["WhiteA"]

    errors = stacking_errors(pieces)
    assert len(errors) == 1
    assert "missing" in errors[0]


def test_canonical_hash():
    """Hash ignores listing order and piece identity but not stacking."""
    print("\n" + "="*60)
    print("TEST: Canonical Hash")
    print("="*60)

    first = parse_pieces("B@0,0 B@2,0 W@1,1")
    second = parse_pieces("W@1,1 B@2,0 B@0,0")
    stacked = parse_pieces("B@0,0 W@1,1 B@1,1")

    print(f"  Hash: {canonical_hash(first)}")
    assert canonical_hash(first) == canonical_hash(second)
    assert canonical_hash(first) == "B::0,0,B::2,0,W::1,1"
    assert canonical_hash(stacked) == "B::0,0,B::1,1,W:BlackB:1,1"
    print("  [PASS] Canonical hash")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# BOARD MODEL TESTS")
    print("#"*60)

    tests = [
        ("Tile Lookup", test_tile_lookup),
        ("Walls", test_walls_both_directions),
        ("Vertical Wrap", test_vertical_wrap),
        ("Stacking Queries", test_stacking_queries),
        ("Herd Under", test_herd_under),
        ("Stacking Errors", test_stacking_errors_detects_broken_links),
        ("Canonical Hash", test_canonical_hash),
    ]

    all_passed = True
    for name, test in tests:
        try:
            test()
            print(f"  {name}: [PASS]")
        except AssertionError as e:
            print(f"  {name}: [FAIL] {e}")
            all_passed = False

    print()
    print("All tests PASSED!" if all_passed else "Some tests FAILED!")
    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
