"""
Test script for the puzzle file parser and the settings layer

Usage:
    python tests/test_parser.py
    pytest tests/test_parser.py
"""

import json
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shepherd.parser import (
    PuzzleParseError,
    load_puzzles,
    parse_pieces,
    parse_pos,
    parse_puzzles,
    parse_wall,
)
from shepherd.settings import DEFAULT_SETTINGS, load_settings, save_settings
from shepherd.solver import Board


SAMPLE = """\
#1
..b.
pieces: B@0,0 W@1,0
optimal: 1

#2
.+..
.w..
pieces: B@0,0 WW@0,1+1,1 B@0,0
walls: 1,0|1,1 2,0|3,0
page: 2
flag: secret
fixed: 3
"""


def test_positions_and_walls():
    assert parse_pos("3,-1") == (3, -1)
    assert parse_wall("1,0|1,1") == ((1, 0), (1, 1))

    with pytest.raises(PuzzleParseError):
        parse_pos("3")
    with pytest.raises(PuzzleParseError):
        parse_pos("a,b")
    with pytest.raises(PuzzleParseError):
        parse_wall("1,0")


def test_piece_ids_and_letters():
    """Shepherds and sheep are lettered separately; herds get segment ids."""
    print("\n" + "="*60)
    print("TEST: Piece Ids")
    print("="*60)

    pieces = parse_pieces("B@0,0 W@1,0 WWW@0,1+1,1+2,1 B@3,0")
    print(f"  Ids: {list(pieces)}")

    assert list(pieces) == [
        "BlackA", "WhiteA", "WhiteB:1/3", "WhiteB:2/3", "WhiteB:3/3", "BlackB",
    ]
    assert pieces["BlackB"].letter == "B"
    assert pieces["WhiteB:2/3"].herd_ids == ("WhiteB:1/3", "WhiteB:2/3", "WhiteB:3/3")
    assert pieces["WhiteB:2/3"].kind == "WWW"
    assert pieces["WhiteA"].herd_ids is None
    print("  [PASS] Piece ids")


def test_piece_errors():
    with pytest.raises(PuzzleParseError):
        parse_pieces("X@0,0")
    with pytest.raises(PuzzleParseError):
        parse_pieces("WW@0,0")  # one position for a two-segment herd
    with pytest.raises(PuzzleParseError):
        parse_pieces("B0,0")
    with pytest.raises(PuzzleParseError):
        parse_pieces("B@0,0 WW@0,0+1,0")  # herd on an occupied cell
    with pytest.raises(PuzzleParseError, match="not adjacent"):
        parse_pieces("WW@0,0+2,0")
    with pytest.raises(PuzzleParseError, match="not adjacent"):
        parse_pieces("WW@1,1+1,1")
    with pytest.raises(PuzzleParseError, match="not adjacent"):
        parse_pieces("WWW@0,0+1,0+3,0")

    # any listing order is fine as long as the segments touch
    bent = parse_pieces("WWW@0,0+1,1+1,0")
    assert [p.pos for p in bent.values()] == [(0, 0), (1, 1), (1, 0)]


def test_page_height_must_be_positive():
    """A zero or negative page height rejects the puzzle instead of breaking the solver."""
    for page in ("0", "-1"):
        lines = [
            "#1", "b.", "pieces: B@1,0", f"page: {page}", "optimal: 1", "",
            "#2", "b.", "pieces: B@1,0", "page: 2", "optimal: 1",
        ]
        puzzles = parse_puzzles(lines)
        assert [p.number for p in puzzles] == ["#2"]
        assert puzzles[0].board.page_height == 2

        with pytest.raises(PuzzleParseError, match="line 4"):
            parse_puzzles(lines, strict=True)

    with pytest.raises(ValueError):
        Board.from_rows(["b."], page_height=0)


def test_pieces_outside_plan_rejected():
    lines = [
        "#1", "b.", "pieces: B@2,0", "optimal: 1", "",          # past the row end
        "#2", "b. ", "pieces: B@2,0", "optimal: 1", "",         # on a void tile
        "#3", "b.", "pieces: B@0,-1", "optimal: 1", "",         # above the plan
        "#4", "b.", "pieces: B@1,0", "optimal: 1",
    ]
    assert [p.number for p in parse_puzzles(lines)] == ["#4"]

    with pytest.raises(PuzzleParseError, match="outside the plan: BlackA"):
        parse_puzzles(lines[:4], strict=True)


def test_parse_puzzles():
    """Every line kind is read into the puzzle."""
    print("\n" + "="*60)
    print("TEST: Parse Puzzles")
    print("="*60)

    first, second = parse_puzzles(SAMPLE.split("\n"))
    print(f"  Parsed: {first.number}, {second.number}")

    assert first.number == "#1"
    assert first.optimal == 1 and not first.fixed
    assert first.board.plan == ("..b.",)
    assert first.flag is None and not first.secret

    assert second.number == "#2"
    assert second.optimal == 3 and second.fixed
    assert second.board.page_height == 2
    assert second.secret
    assert second.board.is_wall((1, 1), (1, 0))
    assert second.board.is_wall((3, 0), (2, 0))
    assert second.pieces["BlackB"].covers_id == "BlackA"
    assert second.pieces["BlackA"].covered_by_id == "BlackB"
    print("  [PASS] Parse puzzles")


def test_invalid_puzzles_skipped():
    lines = [
        "#1", "....", "pieces: B@0,0", "optimal: 1", "",        # no end tile
        "#2", "..b.", "pieces: B@0,0", "",                      # no bound
        "#3", "..b.", "pieces: Q@0,0", "optimal: 1", "",        # bad piece
        "#4", "..b?", "pieces: B@0,0", "optimal: 1", "",        # bad plan row
        "#5", "..b.", "pieces: B@0,0", "optimal: 1",
    ]
    puzzles = parse_puzzles(lines)
    assert [p.number for p in puzzles] == ["#5"]


def test_strict_mode_raises():
    with pytest.raises(PuzzleParseError, match="line 3"):
        parse_puzzles(["#1", "..b.", "pieces: Q@0,0", "optimal: 1"], strict=True)
    with pytest.raises(PuzzleParseError, match="no end tiles"):
        parse_puzzles(["#1", "....", "pieces: B@0,0", "optimal: 1"], strict=True)


def test_load_puzzles_from_file():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "puzzles.txt"
        path.write_text(SAMPLE, encoding="utf-8")
        puzzles = load_puzzles(path)

    assert [p.number for p in puzzles] == ["#1", "#2"]


def test_settings_defaults_and_round_trip():
    """Missing or broken files give defaults; saved values are merged back."""
    print("\n" + "="*60)
    print("TEST: Settings")
    print("="*60)

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.json"
        assert load_settings(path) == DEFAULT_SETTINGS

        path.write_text("{not json", encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS

        settings = load_settings(path)
        settings["strategy_name"] = "bfs"
        settings["piece_limits"] = {"B": 3}
        save_settings(settings, path)

        stored = json.loads(path.read_text(encoding="utf-8"))
        assert stored["strategy_name"] == "bfs"

        loaded = load_settings(path)
        print(f"  Loaded: {loaded}")
        assert loaded["strategy_name"] == "bfs"
        assert loaded["piece_limits"]["B"] == 3
        assert loaded["piece_limits"]["WW"] == 1
        assert loaded["color"] is True

        path.write_text(json.dumps({"unknown": 1, "color": False}), encoding="utf-8")
        partial = load_settings(path)
        assert "unknown" not in partial
        assert partial["color"] is False
        assert partial["strategy_name"] == DEFAULT_SETTINGS["strategy_name"]

    # defaults are never mutated by callers
    assert DEFAULT_SETTINGS["piece_limits"]["B"] == 2
    print("  [PASS] Settings")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# PARSER AND SETTINGS TESTS")
    print("#"*60)

    tests = [
        ("Positions", test_positions_and_walls),
        ("Piece Ids", test_piece_ids_and_letters),
        ("Piece Errors", test_piece_errors),
        ("Page Height", test_page_height_must_be_positive),
        ("Off Plan", test_pieces_outside_plan_rejected),
        ("Parse Puzzles", test_parse_puzzles),
        ("Invalid Skipped", test_invalid_puzzles_skipped),
        ("Strict Mode", test_strict_mode_raises),
        ("Load File", test_load_puzzles_from_file),
        ("Settings", test_settings_defaults_and_round_trip),
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
