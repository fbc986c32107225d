"""
Test script for alternative starting configurations

Usage:
    python tests/test_alternatives.py
    pytest tests/test_alternatives.py
"""

import sys
from math import comb
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shepherd.parser import parse_pieces
from shepherd.solver import PIECE_LIMITS, generate_alternatives, needs_alternatives
from shepherd.solver.alternatives import is_consistent


def test_within_limits():
    pieces = parse_pieces("B@0,0 B@1,0 W@2,0 WW@0,1+1,1")

    assert not needs_alternatives(pieces)
    assert generate_alternatives(pieces) == [dict(pieces)]


def test_pairs_of_shepherds():
    """n shepherds over a limit of two give C(n, 2) candidates."""
    print("\n" + "="*60)
    print("TEST: Shepherd Pairs")
    print("="*60)

    pieces = parse_pieces("B@0,0 B@1,0 B@2,0 B@3,0 W@0,1")
    alternatives = generate_alternatives(pieces)

    print(f"  Candidates: {[list(a) for a in alternatives]}")
    assert needs_alternatives(pieces)
    assert len(alternatives) == comb(4, 2)
    assert list(alternatives[0]) == ["BlackA", "BlackB", "WhiteA"]
    assert list(alternatives[-1]) == ["BlackC", "BlackD", "WhiteA"]
    for candidate in alternatives:
        assert "WhiteA" in candidate
    print("  [PASS] Shepherd pairs")


def test_one_herd_per_size():
    """Only one two-segment herd is kept; its segments stay together."""
    pieces = parse_pieces("WW@0,0+1,0 WW@0,1+1,1 B@3,3")
    alternatives = generate_alternatives(pieces)

    assert len(alternatives) == 2
    assert set(alternatives[0]) == {"WhiteA:1/2", "WhiteA:2/2", "BlackA"}
    assert set(alternatives[1]) == {"WhiteB:1/2", "WhiteB:2/2", "BlackA"}


def test_product_across_kinds():
    pieces = parse_pieces("B@0,0 B@1,0 B@2,0 W@0,1 W@1,1 W@2,1")
    assert len(generate_alternatives(pieces)) == comb(3, 2) * comb(3, 2)


def test_broken_stacks_rejected():
    """A kept piece whose stacking partner was dropped is not a valid start."""
    print("\n" + "="*60)
    print("TEST: Broken Stacks")
    print("="*60)

    pieces = parse_pieces("B@0,0 B@0,0 B@2,0")
    alternatives = generate_alternatives(pieces)

    print(f"  Candidates: {[list(a) for a in alternatives]}")
    assert len(alternatives) == 1
    assert set(alternatives[0]) == {"BlackA", "BlackB"}
    print("  [PASS] Broken stacks")


def test_herd_overlap_rejected():
    pieces = dict(parse_pieces("WW@0,0+1,0 B@5,5"))
    assert is_consistent(pieces)

    # a loose sheep sharing a cell with a herd segment without stacking on it
    loose = parse_pieces("W@1,0")["WhiteA"]
    pieces["Loose"] = loose
    assert not is_consistent(pieces)


def test_custom_limits():
    pieces = parse_pieces("B@0,0 B@1,0 B@2,0")
    limits = dict(PIECE_LIMITS, B=3)

    assert not needs_alternatives(pieces, limits)
    assert len(generate_alternatives(pieces, dict(PIECE_LIMITS, B=1))) == 3


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# ALTERNATIVE CONFIGURATION TESTS")
    print("#"*60)

    tests = [
        ("Within Limits", test_within_limits),
        ("Shepherd Pairs", test_pairs_of_shepherds),
        ("Herds", test_one_herd_per_size),
        ("Product", test_product_across_kinds),
        ("Broken Stacks", test_broken_stacks_rejected),
        ("Herd Overlap", test_herd_overlap_rejected),
        ("Custom Limits", test_custom_limits),
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
