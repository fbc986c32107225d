"""
Alternatives Module - Reduced starting configurations for over-supplied puzzles.

The engine supports at most two single shepherds, two single sheep, one
two-segment herd and one three-segment herd. When a puzzle lists more
pieces of a kind, every valid way of keeping the allowed number is
generated and solved separately.
"""

import itertools
import logging
from typing import Dict, List, Mapping, Optional, Tuple

from .pieces import HERD_THREE, HERD_TWO, PIECE_KINDS, SHEEP, SHEPHERD, Piece, Pieces

logger = logging.getLogger(__name__)

PIECE_LIMITS: Dict[str, int] = {
    SHEPHERD: 2,
    SHEEP: 2,
    HERD_TWO: 1,
    HERD_THREE: 1,
}

# A unit is what gets kept or dropped as a whole: one piece, or one herd
Unit = Tuple[str, ...]


def _units_by_kind(pieces: Pieces) -> Dict[str, List[Unit]]:
    """Group piece ids into units, keyed by kind, in input order."""
    units: Dict[str, List[Unit]] = {kind: [] for kind in PIECE_KINDS}
    seen = set()
    for piece in pieces.values():
        if piece.id in seen:
            continue
        unit = tuple(piece.herd_ids) if piece.herd_ids else (piece.id,)
        seen.update(unit)
        units.setdefault(piece.kind, []).append(unit)
    return units


def needs_alternatives(
    pieces: Pieces,
    limits: Optional[Mapping[str, int]] = None
) -> bool:
    """
    Check whether any kind exceeds its limit.

    Args:
        pieces: Raw starting pieces
        limits: Per-kind unit limits (defaults to PIECE_LIMITS)

    Returns:
        True if alternatives must be generated
    """
    limits = PIECE_LIMITS if limits is None else limits
    for kind, units in _units_by_kind(pieces).items():
        limit = limits.get(kind)
        if limit is not None and len(units) > limit:
            return True
    return False


def is_consistent(pieces: Pieces) -> bool:
    """
    Check that a reduced configuration is still physically valid.

    A candidate is rejected when a kept piece's stacking partner was
    dropped, or when a kept herd segment shares a cell with a kept
    piece that is not stacked on it.

    Args:
        pieces: Candidate configuration

    Returns:
        True if the candidate can be searched
    """
    for piece in pieces.values():
        if piece.covers_id is not None and piece.covers_id not in pieces:
            return False
        if piece.covered_by_id is not None and piece.covered_by_id not in pieces:
            return False

    for segment in pieces.values():
        if segment.herd_ids is None:
            continue
        stacked = _stack_ids(segment, pieces)
        for other in pieces.values():
            if other.pos == segment.pos and other.id not in stacked:
                return False
    return True


def _stack_ids(piece: Piece, pieces: Pieces) -> set:
    """Ids of every piece in the same stack as a piece, itself included."""
    ids = {piece.id}
    current = piece
    while current.covered_by_id is not None and current.covered_by_id in pieces:
        current = pieces[current.covered_by_id]
        ids.add(current.id)
    current = piece
    while current.covers_id is not None and current.covers_id in pieces:
        current = pieces[current.covers_id]
        ids.add(current.id)
    return ids


def generate_alternatives(
    pieces: Pieces,
    limits: Optional[Mapping[str, int]] = None
) -> List[Dict[str, Piece]]:
    """
    Generate every valid reduced starting configuration.

    For each kind over its limit, every combination of ``limit`` units
    is considered; combinations are multiplied across kinds. Kinds within
    their limit are always kept whole. Input order is preserved inside
    each candidate.

    Args:
        pieces: Raw starting pieces
        limits: Per-kind unit limits (defaults to PIECE_LIMITS)

    Returns:
        Candidate configurations, in combination order. A puzzle within
        the limits yields a single candidate equal to its pieces.
    """
    limits = PIECE_LIMITS if limits is None else limits
    units = _units_by_kind(pieces)

    choices: List[List[Tuple[Unit, ...]]] = []
    for kind, kind_units in units.items():
        limit = limits.get(kind)
        if limit is not None and len(kind_units) > limit:
            choices.append(list(itertools.combinations(kind_units, limit)))
        else:
            choices.append([tuple(kind_units)])

    candidates: List[Dict[str, Piece]] = []
    rejected = 0
    for selection in itertools.product(*choices):
        kept = {piece_id for group in selection for unit in group for piece_id in unit}
        candidate = {
            piece_id: piece for piece_id, piece in pieces.items() if piece_id in kept
        }
        if is_consistent(candidate):
            candidates.append(candidate)
        else:
            rejected += 1

    if rejected:
        logger.debug(f"Rejected {rejected} inconsistent alternative configuration(s)")
    logger.debug(f"Generated {len(candidates)} alternative configuration(s)")
    return candidates
