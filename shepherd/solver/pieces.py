"""
Pieces Module - Piece records, stacking helpers and canonical hashing.

A configuration is a plain mapping of piece id to Piece. Pieces are
immutable; every move builds a new mapping that shares the pieces it
did not touch. Stacks and herds are expressed through id links, so
nothing in a mapping refers to another Piece object directly.
"""

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Tuple

from .board import Position, to_str

Pieces = Mapping[str, "Piece"]

# Piece kinds
SHEPHERD = "B"
SHEEP = "W"
HERD_TWO = "WW"
HERD_THREE = "WWW"

PIECE_KINDS = (SHEPHERD, SHEEP, HERD_TWO, HERD_THREE)


@dataclass(frozen=True)
class Piece:
    """
    A single piece (or one segment of a herd).

    Attributes:
        id: Stable identifier, e.g. "BlackA" or "WhiteB:1/2"
        letter: Display letter
        kind: One of "B", "W", "WW", "WWW"
        pos: Current (x, y) position
        covers_id: Id of the piece directly beneath, if any
        covered_by_id: Id of the piece directly above, if any
        herd_ids: Ordered ids of all segments of this piece's herd
    """
    id: str
    letter: str
    kind: str
    pos: Position
    covers_id: Optional[str] = None
    covered_by_id: Optional[str] = None
    herd_ids: Optional[Tuple[str, ...]] = None

    @property
    def kind_letter(self) -> str:
        """Kind letter seen by board queries ("B" or "W")."""
        return self.kind[0]

    @property
    def is_shepherd(self) -> bool:
        return self.kind == SHEPHERD

    @property
    def is_exposed(self) -> bool:
        """Neither covered nor covering anything."""
        return self.covered_by_id is None and self.covers_id is None


def top_piece_at(
    pos: Position,
    pieces: Pieces,
    ignore_ids: Optional[Iterable[str]] = None
) -> Optional[Piece]:
    """
    Find the topmost uncovered piece on a position.

    Args:
        pos: Position to look at
        pieces: Configuration mapping
        ignore_ids: Ids treated as absent; a piece whose cover is
            ignored counts as uncovered

    Returns:
        The exposed piece, or None if the position is free
    """
    ignore = ignore_ids or ()
    for piece in pieces.values():
        if piece.pos != pos:
            continue
        if piece.id in ignore:
            continue
        if piece.covered_by_id is None or piece.covered_by_id in ignore:
            return piece
    return None


def pieces_under(piece: Piece, pieces: Pieces) -> List[Piece]:
    """All pieces below a piece, nearest first."""
    result = []
    current = piece
    while current.covers_id is not None:
        current = pieces[current.covers_id]
        result.append(current)
    return result


def pieces_above(piece: Piece, pieces: Pieces) -> List[Piece]:
    """All pieces above a piece, nearest first."""
    result = []
    current = piece
    while current.covered_by_id is not None:
        current = pieces[current.covered_by_id]
        result.append(current)
    return result


def herd_under(piece: Piece, pieces: Pieces) -> Optional[List[Piece]]:
    """
    Get the herd a piece rests on.

    Returns:
        All segments of the first herd found below the piece, or None
    """
    for below in pieces_under(piece, pieces):
        if below.herd_ids is not None:
            return [pieces[herd_id] for herd_id in below.herd_ids]
    return None


def canonical_hash(pieces: Pieces) -> str:
    """
    Build the order-independent identity string of a configuration.

    Pieces are sorted by kind, then by position string, and rendered
    as ``kind:coveredById:x,y``. Piece identity and herd membership are
    not part of the string.
    """
    entries = []
    for piece in pieces.values():
        pos_str = to_str(piece.pos)
        token = f"{piece.kind}:{piece.covered_by_id or ''}:{pos_str}"
        entries.append((piece.kind, pos_str, token))
    entries.sort()
    return ",".join(token for _, _, token in entries)


def stacking_errors(pieces: Pieces) -> List[str]:
    """
    Check the stacking invariants of a configuration.

    Returns:
        Human-readable problems; empty when the configuration is consistent
    """
    errors = []
    for piece in pieces.values():
        if piece.covers_id is not None:
            below = pieces.get(piece.covers_id)
            if below is None:
                errors.append(f"{piece.id} covers missing piece {piece.covers_id}")
            elif below.covered_by_id != piece.id:
                errors.append(f"{piece.id} covers {below.id} but link is not mutual")
            elif below.pos != piece.pos:
                errors.append(f"{piece.id} covers {below.id} on another position")
        if piece.covered_by_id is not None:
            above = pieces.get(piece.covered_by_id)
            if above is None:
                errors.append(f"{piece.id} covered by missing piece {piece.covered_by_id}")
            elif above.covers_id != piece.id:
                errors.append(f"{piece.id} covered by {above.id} but link is not mutual")
        if piece.herd_ids is not None and piece.covers_id is not None:
            errors.append(f"herd segment {piece.id} covers {piece.covers_id}")
    return errors

